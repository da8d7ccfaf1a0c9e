"""Helpers for formatting dates, durations and sizes as strings."""

from datetime import datetime
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Optional, Union

Number = Union[int, float]

_BYTE_LABELS = ("b", "KB", "MB", "GB", "TB")

_ROUNDING = Context(prec=100, rounding=ROUND_HALF_UP)


def round_number(n: Number, places: int = 0) -> str:
    """
    Round a number to at most ``places`` decimals, with thousands separators.

    Halves round away from zero and trailing zeros are dropped:
    round_number(2.5) == "3", round_number(1.50, 2) == "1.5".
    """
    value = Decimal(str(n))
    if not value.is_finite():
        return str(n)
    rounded = value.quantize(Decimal(1).scaleb(-places), context=_ROUNDING)
    text = f"{rounded:,.{places}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_ms(ms: Number) -> str:
    """Readable duration, e.g. "123ms", "3.56s", "1m 34s", "3h 24m", "2d 4h"."""
    if ms < 1000:
        return f"{round_number(ms)}ms"
    s = ms / 1000
    if s < 60:
        return f"{round_number(s, 2)}s"
    m = int(s // 60)
    if m < 60:
        return f"{m}m {int(s) % 60}s"
    h = m // 60
    if h < 24:
        return f"{h}h {m % 60}m"
    d = h // 24
    return f"{d}d {h % 24}h"


def format_bytes(b: Number) -> str:
    factor = 0
    while b >= 1024 and factor + 1 < len(_BYTE_LABELS):
        b = b / 1024
        factor += 1
    return f"{round_number(b, 2)} {_BYTE_LABELS[factor]}"


def format_date(fmt: str = "iso", d: Optional[datetime] = None) -> str:
    """
    Format a datetime.

    Args:
        fmt: "iso" for ISO 8601, "ymd" for YYYY-MM-DD, or any strftime format
        d: Datetime to format, defaults to now (local time, timezone-aware)
    """
    if d is None:
        d = datetime.now().astimezone()
    if fmt == "iso":
        return d.isoformat(timespec="seconds")
    if fmt == "ymd":
        return d.strftime("%Y-%m-%d")
    return d.strftime(fmt)
