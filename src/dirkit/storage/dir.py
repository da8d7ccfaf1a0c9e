"""
Directory namespaces for dirkit.

A ``Dir`` describes a directory and hands out ``File`` handles and child
``Dir`` namespaces beneath it. Creating a ``Dir`` touches nothing on disk:
the directory is created (recursively, idempotently) the first time its
``path`` is needed.

Dirs carry an ``is_temp`` flag. Only temp dirs may be wiped with ``clear()``,
and children inherit the flag from their parent unless told otherwise.

Subclasses keep their type through ``dir()`` and ``temp_dir()``, so a
namespace extended with extra accessors keeps them at any nesting depth:

    class ReportDir(Dir):
        @property
        def reports(self):
            return [f for f in self.files if f.ext == ".json"]

    ReportDir("out").dir("2024/01").reports  # still a ReportDir
"""

import logging
import os
import re
import shutil
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, TypeVar, Union

from dirkit.models.settings import StorageSettings
from dirkit.storage.file import File, PathLike
from dirkit.utils.format import format_bytes

logger = logging.getLogger(__name__)

MAX_FILENAME_LENGTH = 200

_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")
_WWW = re.compile(r"^www\.", re.IGNORECASE)
_ILLEGAL = re.compile(r'[/?<>\\:*|"]')
_CONTROL = re.compile(r"[\x00-\x1f\x80-\x9f]")
_RESERVED = re.compile(r"^\.+$")
_WINDOWS_RESERVED = re.compile(r"^(con|prn|aux|nul|com[0-9]|lpt[0-9])(\..*)?$", re.IGNORECASE)
_WINDOWS_TRAILING = re.compile(r"[. ]+$")

D = TypeVar("D", bound="Dir")


class NotTempDirError(RuntimeError):
    """Raised when a destructive operation is attempted on a non-temp Dir."""


@dataclass
class StorageStats:
    """Usage statistics for a Dir tree"""
    total_files: int = 0
    total_dirs: int = 0
    total_size_bytes: int = 0
    last_updated: datetime = field(default_factory=datetime.now)

    @property
    def summary(self) -> str:
        return f"{self.total_files} files in {self.total_dirs} dirs, {format_bytes(self.total_size_bytes)}"


class Dir:
    """
    Reference to a directory with helpers for resolving, sanitizing and
    creating the files inside it.

    Example:
        folder = Dir("example")          # nothing created yet
        child = folder.dir("path/to")    # ./example/path/to, still nothing created
        child.file("data").json({"a": 1})
    """

    def __init__(self, path: PathLike = "./", temp: bool = False):
        """
        Args:
            path: Relative (to the working directory) or absolute location
            temp: Allow ``clear()`` on this Dir and, by default, its children
        """
        self._input_path = os.fspath(path)
        self._resolved: Optional[Path] = None
        self.is_temp = temp

    def __fspath__(self) -> str:
        return str(self.path)

    def __repr__(self) -> str:
        kind = "temp" if self.is_temp else "dir"
        return f"{type(self).__name__}('{self._resolved or self._input_path}', {kind})"

    @property
    def path(self) -> Path:
        """Absolute path of the directory. The first access creates it on disk."""
        if self._resolved is None:
            resolved = Path(self._input_path).expanduser().resolve()
            resolved.mkdir(parents=True, exist_ok=True)
            logger.debug(f"Materialized directory: {resolved}")
            self._resolved = resolved
        return self._resolved

    def create(self) -> None:
        self.path.mkdir(parents=True, exist_ok=True)

    def dir(self: D, sub_path: PathLike, temp: Optional[bool] = None) -> D:
        """
        Create a child Dir of the same type as this one.

        Args:
            sub_path: Location relative to this Dir
            temp: Override the temp flag; inherited from this Dir if None

        Raises:
            ValueError: If sub_path is absolute
        """
        sub = os.fspath(sub_path)
        if os.path.isabs(sub) or Path(sub).anchor:
            raise ValueError(f"Sub path must be relative: {sub}")
        return self._spawn(os.path.join(self._base_path(), sub), self.is_temp if temp is None else temp)

    def temp_dir(self: D, sub_path: PathLike) -> D:
        """Create a child Dir that can be cleared."""
        return self.dir(sub_path, temp=True)

    def _spawn(self: D, path: str, temp: bool) -> D:
        """
        Construct a Dir of this Dir's concrete type.

        Subclasses whose constructor takes extra arguments override this to
        pass them through.
        """
        return type(self)(path, temp=temp)

    def _base_path(self) -> str:
        if self._resolved is not None:
            return str(self._resolved)
        return os.path.abspath(os.path.expanduser(self._input_path))

    def sanitize(self, name: str) -> str:
        """
        Turn an arbitrary string (e.g. a URL) into a safe file name.

        Strips a leading scheme and "www.", replaces characters that aren't
        allowed in file names with "_", and keeps at most the last 200
        characters.
        """
        cleaned = _WWW.sub("", _SCHEME.sub("", name))
        cleaned = _ILLEGAL.sub("_", cleaned)
        cleaned = _CONTROL.sub("_", cleaned)
        if _RESERVED.match(cleaned):
            cleaned = "_"
        cleaned = _WINDOWS_RESERVED.sub("_", cleaned)
        cleaned = _WINDOWS_TRAILING.sub("_", cleaned)
        return cleaned[-MAX_FILENAME_LENGTH:]

    def filepath(self, base: str) -> Path:
        """
        Resolve a file name inside this Dir.

        Example:
            Dir("example").filepath("file.json")  # /cwd/example/file.json
        """
        return self.path / self.sanitize(base)

    def file(self, base: str) -> File:
        return File(self.filepath(base))

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    @property
    def contents(self: D) -> List[Union[D, File]]:
        """Child dirs and files, sorted by name. Read from disk on every access."""
        entries: List[Union[D, File]] = []
        for entry in sorted(self.path.iterdir(), key=lambda p: p.name):
            if entry.is_dir():
                entries.append(self._spawn(str(entry), self.is_temp))
            elif entry.is_file():
                entries.append(File(entry))
        return entries

    @property
    def dirs(self: D) -> List[D]:
        return [entry for entry in self.contents if isinstance(entry, Dir)]

    @property
    def files(self) -> List[File]:
        return [entry for entry in self.contents if isinstance(entry, File)]

    def stats(self) -> StorageStats:
        """Count files, dirs and bytes below this Dir."""
        stats = StorageStats()
        for entry in self.path.rglob("*"):
            if entry.is_dir():
                stats.total_dirs += 1
            elif entry.is_file():
                stats.total_files += 1
                stats.total_size_bytes += entry.stat().st_size
        return stats

    def clear(self) -> None:
        """
        Delete everything in this Dir, leaving the (empty) directory in place.

        Raises:
            NotTempDirError: If this Dir isn't a temp dir
        """
        if not self.is_temp:
            raise NotTempDirError(f"Refusing to clear non-temp directory: {self._base_path()}")
        try:
            shutil.rmtree(self.path)
        except FileNotFoundError:
            logger.debug(f"Temp directory already removed: {self.path}")
        self.create()
        logger.info(f"Cleared temp directory: {self.path}")


# Common temp dir location
temp = Dir(StorageSettings.temp_root_from_env(), temp=True)
