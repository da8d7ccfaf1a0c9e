"""
dirkit - local file-backed storage

dirkit gives byte-oriented files and directories a small, typed surface:

- Dir: directory namespaces that are created on first use
- File: raw text/bytes access, line appends and streams
- JsonFile / NdjsonFile / CsvFile: format adaptors over a File
- snapshot: turns arbitrary values (errors, sets, mappings, cyclic graphs)
  into JSON-safe data
- Cache: a TTL cache stored as a JSON file

Version: 0.1.0
"""

__version__ = "0.1.0"

from dirkit.snapshot import snapshot
from dirkit.storage import (
    Cache,
    CsvFile,
    Dir,
    File,
    FileAdaptor,
    JsonFile,
    NdjsonFile,
    NotTempDirError,
    StoragePaths,
    StorageStats,
    temp,
)
from dirkit.models import CacheEntry, StorageSettings
from dirkit.utils.logging_config import setup_logging

__all__ = [
    "__version__",
    "snapshot",
    "Dir",
    "File",
    "FileAdaptor",
    "JsonFile",
    "NdjsonFile",
    "CsvFile",
    "NotTempDirError",
    "StoragePaths",
    "StorageStats",
    "Cache",
    "CacheEntry",
    "StorageSettings",
    "setup_logging",
    "temp",
]
