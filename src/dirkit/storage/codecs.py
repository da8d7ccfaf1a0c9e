"""
Format adaptors for dirkit files.

Each adaptor wraps a ``File`` and pins its extension: the canonical extension
is appended to the path once, unless the path already ends with it. Reads and
writes are always a fresh round trip to the filesystem; nothing is cached.

- JsonFile:   whole-file JSON, 2-space indented
- NdjsonFile: newline-delimited JSON, one value per line, append-only growth
- CsvFile:    header row plus rows of records, with type coercion on read
"""

import csv
import io
import json
import logging
import re
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

import aiofiles
import aiofiles.os

from dirkit.snapshot import snapshot
from dirkit.storage.file import File, PathLike

logger = logging.getLogger(__name__)

JSON_INDENT = 2

_NUMBER_PATTERN = re.compile(r"[0-9]+\.?[0-9]*|\.[0-9]+")


def with_extension(filepath: PathLike, ext: str) -> str:
    """Append ``ext`` to ``filepath`` unless it already ends with it."""
    path = str(filepath)
    return path if path.endswith(ext) else path + ext


class FileAdaptor:
    """
    Base class for format adaptors.

    Subclasses set ``extension`` to the canonical extension they enforce; the
    base class itself leaves the path untouched.
    """

    extension = ""

    def __init__(self, filepath: PathLike):
        if self.extension:
            filepath = with_extension(filepath, self.extension)
        self.file = File(filepath)

    def __repr__(self) -> str:
        return f"{type(self).__name__}('{self.path}')"

    def __fspath__(self) -> str:
        return str(self.file.path)

    @property
    def exists(self) -> bool:
        return self.file.exists

    @property
    def path(self):
        return self.file.path

    def delete(self) -> None:
        self.file.delete()


class JsonFile(FileAdaptor):
    """
    A ".json" file holding one JSON value.

    Values are passed through ``snapshot`` before encoding, so exceptions,
    sets, dates and similar objects can be written directly.

    Example:
        settings = JsonFile("./settings", {"debug": True})
        settings.path   # /cwd/settings.json
        settings.read() # {"debug": True}
    """

    extension = ".json"

    def __init__(self, filepath: PathLike, contents: Any = None):
        super().__init__(filepath)
        if contents is not None:
            self.write(contents)

    def read(self) -> Any:
        """
        Decode the stored value.

        Returns:
            Any: The decoded value, or None if the file doesn't exist or is empty

        Raises:
            json.JSONDecodeError: If the stored text isn't valid JSON
        """
        contents = self.file.read()
        if not contents:
            return None
        return json.loads(contents)

    def write(self, contents: Any) -> None:
        self.file.write(json.dumps(snapshot(contents), indent=JSON_INDENT, ensure_ascii=False))


class NdjsonFile(FileAdaptor):
    """
    A newline-delimited JSON file (".ndjson").

    Every appended value becomes one line; existing lines are never rewritten.
    """

    extension = ".ndjson"

    def __init__(self, filepath: PathLike, lines: Any = None):
        super().__init__(filepath)
        if lines is not None:
            self.append(lines)

    def append(self, lines: Any) -> None:
        """
        Append one value, or each value of a list, as its own line.

        Args:
            lines: A single value or a list of values
        """
        if isinstance(lines, list):
            if not lines:
                return
            self.file.append([self._encode(line) for line in lines])
        else:
            self.file.append(self._encode(lines))

    def iter_lines(self) -> Iterator[Any]:
        """
        Decode stored lines one at a time.

        Lines are decoded independently: values before a malformed line are
        yielded before its json.JSONDecodeError is raised.
        """
        for line in self.file.lines():
            yield json.loads(line)

    def lines(self) -> List[Any]:
        return list(self.iter_lines())

    @staticmethod
    def _encode(value: Any) -> str:
        return json.dumps(snapshot(value), ensure_ascii=False)


class CsvFile(FileAdaptor):
    """
    Comma separated values (".csv").

    Rows are dicts; their keys are used as the column headers. Reading coerces
    cells back into Python values:

    - ""                  -> None
    - "true" / "false"    -> bool (case-insensitive)
    - digits, one "."     -> int or float
    - anything else       -> str

    The coercion can't tell a stored "true" string from a boolean; values are
    read back the same way regardless of how they were written.
    """

    extension = ".csv"

    async def write(self, rows: Sequence[Dict[str, Any]], keys: Optional[Sequence[str]] = None) -> None:
        """
        Write rows to the file, replacing existing contents.

        Args:
            rows: Records to write
            keys: Explicit column order. Defaults to every key seen across
                ``rows``, in first-seen order.
        """
        headers = list(dict.fromkeys(keys)) if keys is not None else self._collect_headers(rows)

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(headers)
        for row in rows:
            writer.writerow([self._format_cell(row.get(key)) for key in headers])

        await aiofiles.os.makedirs(self.file.dir, exist_ok=True)
        async with aiofiles.open(self.path, "w", encoding="utf-8", newline="") as f:
            await f.write(buffer.getvalue())
        logger.debug(f"Wrote {len(rows)} rows to {self.path}")

    async def read(self) -> List[Dict[str, Any]]:
        """
        Parse the file into a list of records.

        Returns:
            List[Dict[str, Any]]: One dict per row, or [] if the file doesn't exist

        Raises:
            csv.Error: If the CSV is malformed or a row has the wrong column count
        """
        if not await aiofiles.os.path.exists(self.path):
            return []
        async with aiofiles.open(self.path, "r", encoding="utf-8", newline="") as f:
            text = await f.read()

        reader = csv.reader(io.StringIO(text))
        headers = next(reader, None)
        if headers is None:
            return []

        parsed: List[Dict[str, Any]] = []
        for raw in reader:
            if not raw:
                continue
            if len(raw) != len(headers):
                raise csv.Error(
                    f"Column header mismatch on line {reader.line_num}: "
                    f"expected {len(headers)} columns, got {len(raw)}"
                )
            parsed.append({key: parse_cell(val) for key, val in zip(headers, raw)})
        return parsed

    @staticmethod
    def _collect_headers(rows: Sequence[Dict[str, Any]]) -> List[str]:
        headers: Dict[str, None] = {}
        for row in rows:
            for key in row:
                headers.setdefault(key, None)
        return list(headers)

    @staticmethod
    def _format_cell(value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (dict, list, tuple)):
            return json.dumps(snapshot(value), ensure_ascii=False)
        return str(value)


def parse_cell(val: str) -> Union[str, int, float, bool, None]:
    """Coerce one CSV cell into None, bool, int/float, or leave it as text."""
    lowered = val.lower()
    if lowered == "false":
        return False
    if lowered == "true":
        return True
    if not val:
        return None
    if _NUMBER_PATTERN.fullmatch(val):
        return float(val) if "." in val else int(val)
    return val
