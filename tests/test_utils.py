"""
tests/test_utils.py
Unit tests for formatting helpers and logging setup.
"""
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

from dirkit.utils.format import format_bytes, format_date, format_ms, round_number
from dirkit.utils.logging_config import LOGGER_NAME, setup_logging


def test_round_number() -> None:
    assert round_number(1234.5678, 2) == "1,234.57"
    assert round_number(1.5, 2) == "1.5"
    assert round_number(3) == "3"


def test_round_number_rounds_halves_away_from_zero() -> None:
    assert round_number(2.5) == "3"
    assert round_number(0.5) == "1"
    assert round_number(-2.5) == "-3"
    assert round_number(0.125, 2) == "0.13"
    assert round_number(1234567.5) == "1,234,568"


def test_format_ms() -> None:
    assert format_ms(123) == "123ms"
    assert format_ms(3560) == "3.56s"
    assert format_ms(94_000) == "1m 34s"
    assert format_ms((3 * 60 + 24) * 60_000) == "3h 24m"
    assert format_ms((2 * 24 + 4) * 3_600_000) == "2d 4h"


def test_format_bytes() -> None:
    assert format_bytes(512) == "512 b"
    assert format_bytes(1536) == "1.5 KB"
    assert format_bytes(5 * 1024 ** 3) == "5 GB"


def test_format_date() -> None:
    moment = datetime(2024, 1, 15, 10, 30, tzinfo=timezone(timedelta(hours=2)))
    assert format_date("iso", moment) == "2024-01-15T10:30:00+02:00"
    assert format_date("ymd", moment) == "2024-01-15"
    assert format_date("%H:%M", moment) == "10:30"
    assert len(format_date("ymd")) == 10


def test_setup_logging_is_idempotent(tmp_path: Path) -> None:
    log_file = tmp_path / "dirkit.log"
    setup_logging("DEBUG")
    logger = setup_logging("DEBUG", log_file=str(log_file))

    assert logger.name == LOGGER_NAME
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    logging.getLogger("dirkit.storage.dir").debug("materialized")
    for handler in logger.handlers:
        handler.flush()
    assert "materialized" in log_file.read_text(encoding="utf-8")

    setup_logging("WARNING")
    assert len(logger.handlers) == 1
