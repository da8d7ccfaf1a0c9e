"""
File handle for dirkit.

A ``File`` is a thin wrapper around one absolute filesystem path. It makes no
assumptions about the file's format: it reads and writes text or bytes,
appends lines, and hands out streams for large payloads. Format-aware
behaviour lives in the adaptors from ``dirkit.storage.codecs`` which can be
obtained through ``File.json()``, ``File.ndjson()`` and ``File.csv()``.

The file itself is created the first time it is written to; every write
creates the missing parent directories first.
"""

import io
import logging
import mimetypes
import os
import shutil
from pathlib import Path
from typing import (
    IO,
    TYPE_CHECKING,
    Any,
    AsyncIterable,
    AsyncIterator,
    Iterable,
    List,
    Optional,
    Sequence,
    Union,
)

import aiofiles
import aiofiles.os

if TYPE_CHECKING:
    from dirkit.storage.codecs import CsvFile, JsonFile, NdjsonFile

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024

PathLike = Union[str, "os.PathLike[str]"]


class File:
    """
    Reference to a single file on disk.

    Attributes:
        path: Absolute path of the file
        root: Filesystem anchor of the path (e.g. "/" or "C:\\")
        dir: Parent directory
        base: File name with extension
        stem: File name without extension
        ext: Extension including the leading dot, or "" if there is none
        type: MIME type guessed from the extension, None if unknown
    """

    def __init__(self, filepath: PathLike):
        self.path = Path(os.path.abspath(os.fspath(filepath)))
        self.root = self.path.anchor
        self.dir = self.path.parent
        self.base = self.path.name
        self.stem = self.path.stem
        self.ext = self.path.suffix
        self.type: Optional[str] = mimetypes.guess_type(self.base)[0] if self.ext else None

    def __fspath__(self) -> str:
        return str(self.path)

    def __repr__(self) -> str:
        return f"File('{self.path}')"

    @property
    def exists(self) -> bool:
        return self.path.exists()

    @property
    def stats(self) -> Optional[os.stat_result]:
        """os.stat_result for the file, or None if it doesn't exist."""
        return self.path.stat() if self.exists else None

    def delete(self) -> None:
        """Delete the file if it exists. Missing files are not an error."""
        self.path.unlink(missing_ok=True)
        logger.debug(f"Deleted file: {self.path}")

    def read(self) -> Optional[str]:
        """
        Read the whole file as UTF-8 text.

        Returns:
            Optional[str]: File contents, or None if the file doesn't exist
        """
        if not self.exists:
            return None
        return self.path.read_text(encoding="utf-8")

    def lines(self) -> List[str]:
        """
        Read the file as a list of lines with the trailing newline removed.

        A file ending in "\\n" does not produce an empty final entry, and a
        missing file yields an empty list.
        """
        contents = (self.read() or "").split("\n")
        if contents[-1]:
            return contents
        return contents[:-1]

    def write(self, contents: Union[str, bytes, IO[bytes]]) -> None:
        """
        Replace the file contents, creating parent directories as needed.

        Args:
            contents: Text, bytes, or a readable binary stream which is copied
                in chunks

        Raises:
            TypeError: If contents is none of the supported types
        """
        if isinstance(contents, str):
            self._ensure_dir()
            self.path.write_text(contents, encoding="utf-8")
        elif isinstance(contents, (bytes, bytearray)):
            self._ensure_dir()
            self.path.write_bytes(bytes(contents))
        elif callable(getattr(contents, "read", None)):
            # The first chunk is read before the file is truncated
            first = contents.read(DEFAULT_CHUNK_SIZE)
            if not isinstance(first, (bytes, bytearray)):
                raise TypeError(f"Expected a binary stream, got {type(contents).__name__}")
            with self.writer() as out:
                out.write(first)
                shutil.copyfileobj(contents, out, DEFAULT_CHUNK_SIZE)
        else:
            raise TypeError(f"Invalid content type: {type(contents).__name__}")

    def append(self, lines: Union[str, Sequence[str]]) -> None:
        """
        Append one line or several lines to the file, creating it if needed.

        The file always ends with "\\n", so the existing contents never have to
        be read before appending. An empty sequence leaves the file untouched.
        """
        if not isinstance(lines, str):
            if not lines:
                return
            lines = "\n".join(lines)
        if not self.exists:
            self.write("")
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(lines + "\n")

    # ------------------------------------------------------------------
    # Streams
    # ------------------------------------------------------------------

    def reader(self) -> IO[bytes]:
        """Open the file for binary reading, or an empty stream if it doesn't exist."""
        if not self.exists:
            return io.BytesIO(b"")
        return open(self.path, "rb")

    def writer(self) -> IO[bytes]:
        """Open the file for binary writing, creating parent directories first."""
        self._ensure_dir()
        return open(self.path, "wb")

    async def iter_chunks(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> AsyncIterator[bytes]:
        """Yield the file contents in binary chunks. Yields nothing if the file doesn't exist."""
        if not await aiofiles.os.path.exists(self.path):
            return
        async with aiofiles.open(self.path, "rb") as f:
            while True:
                chunk = await f.read(chunk_size)
                if not chunk:
                    break
                yield chunk

    async def write_stream(self, chunks: Union[AsyncIterable[bytes], Iterable[bytes]]) -> int:
        """
        Write a stream of byte chunks to the file.

        Completes only once every chunk has been written and the file has been
        closed.

        Args:
            chunks: Sync or async iterable of bytes

        Returns:
            int: Number of bytes written
        """
        await aiofiles.os.makedirs(self.dir, exist_ok=True)
        written = 0
        async with aiofiles.open(self.path, "wb") as f:
            if hasattr(chunks, "__aiter__"):
                async for chunk in chunks:
                    written += await f.write(chunk)
            else:
                for chunk in chunks:
                    written += await f.write(chunk)
        logger.debug(f"Streamed {written} bytes to {self.path}")
        return written

    # ------------------------------------------------------------------
    # Format adaptors
    # ------------------------------------------------------------------

    def json(self, contents: Any = None) -> "JsonFile":
        """
        Get a JsonFile adaptor for this file, adding ".json" if not present.

        Args:
            contents: Optional value written immediately
        """
        from dirkit.storage.codecs import JsonFile

        return JsonFile(self.path, contents)

    def ndjson(self, lines: Any = None) -> "NdjsonFile":
        """Get an NdjsonFile adaptor for this file, adding ".ndjson" if not present."""
        from dirkit.storage.codecs import NdjsonFile

        return NdjsonFile(self.path, lines)

    def csv(self) -> "CsvFile":
        """Get a CsvFile adaptor for this file, adding ".csv" if not present."""
        from dirkit.storage.codecs import CsvFile

        return CsvFile(self.path)

    def _ensure_dir(self) -> None:
        self.dir.mkdir(parents=True, exist_ok=True)
