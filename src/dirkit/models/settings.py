"""
Configuration model for dirkit.

Settings come from three places, in order of precedence: explicit arguments,
``DIRKIT_*`` environment variables, and a JSON config file. All of them are
validated by the same pydantic model.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, Field, field_validator

from dirkit.utils.logging_config import setup_logging

ENV_PREFIX = "DIRKIT_"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class StorageSettings(BaseModel):
    """
    dirkit settings

    Attributes:
        temp_root: Location of the default temp Dir, relative to the working directory
        app_name: Application name used for platform-specific user directories
        app_author: Application author used for platform-specific user directories
        log_level: Level applied by configure_logging
        log_file: Optional log file applied by configure_logging
    """

    temp_root: str = Field(default=".temp", min_length=1, description="Default temp root")
    app_name: str = Field(default="dirkit", min_length=1)
    app_author: str = Field(default="dirkit", min_length=1)
    log_level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default=None)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        level = str(v).strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)

    def configure_logging(self) -> logging.Logger:
        """Apply log_level and log_file to the "dirkit" logger."""
        return setup_logging(level=self.log_level, log_file=self.log_file)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> "StorageSettings":
        """
        Build settings from ``DIRKIT_*`` environment variables.

        Args:
            environ: Mapping to read instead of os.environ
            **overrides: Values that take precedence over the environment
        """
        environ = os.environ if environ is None else environ
        data: Dict[str, Any] = {}
        for name in cls.model_fields:
            value = environ.get(ENV_PREFIX + name.upper())
            if value:
                data[name] = value
        data.update(overrides)
        return cls(**data)

    @classmethod
    def temp_root_from_env(cls, environ: Optional[Mapping[str, str]] = None) -> str:
        """
        Read only DIRKIT_TEMP_ROOT, falling back to the default temp root.

        Unlike from_env, other DIRKIT_* variables are not validated here.
        """
        environ = os.environ if environ is None else environ
        return environ.get(ENV_PREFIX + "TEMP_ROOT") or cls.model_fields["temp_root"].default

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "StorageSettings":
        """
        Load settings from a JSON config file.

        A missing file yields the defaults; invalid JSON or invalid values raise.
        """
        from dirkit.storage.codecs import JsonFile

        data = JsonFile(path).read()
        return cls(**(data or {}))

    def save(self, path: Union[str, Path]) -> None:
        from dirkit.storage.codecs import JsonFile

        JsonFile(path, self.model_dump())
