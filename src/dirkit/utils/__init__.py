"""Logging and formatting helpers for dirkit."""

from .format import format_bytes, format_date, format_ms, round_number
from .logging_config import setup_logging

__all__ = ["format_bytes", "format_date", "format_ms", "round_number", "setup_logging"]
