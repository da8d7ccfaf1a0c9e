"""
dirkit storage system

This package contains the file-backed storage components:
- file: File handle with raw read/write/append/stream access
- dir: Lazily created directory namespaces and the default temp root
- codecs: JSON, NDJSON and CSV adaptors over a File
- paths: Cross-platform per-user storage roots using platformdirs
- cache: TTL cache stored in a JSON file
"""

from dirkit.storage.file import File
from dirkit.storage.dir import Dir, NotTempDirError, StorageStats, temp
from dirkit.storage.codecs import CsvFile, FileAdaptor, JsonFile, NdjsonFile
from dirkit.storage.paths import StoragePaths
from dirkit.storage.cache import Cache

__all__ = [
    "File",
    "Dir",
    "NotTempDirError",
    "StorageStats",
    "temp",
    "FileAdaptor",
    "JsonFile",
    "NdjsonFile",
    "CsvFile",
    "StoragePaths",
    "Cache",
]
