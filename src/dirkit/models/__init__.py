"""
dirkit data models

Pydantic models used for validation and serialization:
- StorageSettings: library configuration (environment or JSON file)
- CacheEntry: the stored shape of a Cache file
"""

from .settings import StorageSettings
from .cache import CacheEntry

__all__ = ["StorageSettings", "CacheEntry"]
