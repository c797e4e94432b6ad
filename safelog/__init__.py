"""Safelog: redact structured data, cap message size, and tail logs safely."""

from __future__ import annotations

from pathlib import Path
from typing import IO

from .capping import DEFAULT_MAX_MESSAGE_SIZE, CappingFormatter, cap
from .config import LoggerSettings, load_settings, load_settings_from_path, settings_from_env
from .logger import SafeLogger
from .matching import (
    ENCRYPTED_VALUE_PATTERN,
    FILTERED,
    SENSITIVE_KEY_FRAGMENTS,
    is_sensitive_key,
    key_to_text,
    looks_encrypted,
)
from .sanitizer import HashSanitizer, SupportsItems, redact, sanitize
from .tail import contents, tail_lines


def configure_from_env(target: str | Path | IO[str] | None = None) -> SafeLogger:
    """Build a SafeLogger from the ``SAFELOG_*`` environment variables."""

    return SafeLogger.from_settings(settings_from_env(), target=target)


__all__ = [
    "CappingFormatter",
    "DEFAULT_MAX_MESSAGE_SIZE",
    "ENCRYPTED_VALUE_PATTERN",
    "FILTERED",
    "HashSanitizer",
    "LoggerSettings",
    "SENSITIVE_KEY_FRAGMENTS",
    "SafeLogger",
    "SupportsItems",
    "cap",
    "configure_from_env",
    "contents",
    "is_sensitive_key",
    "key_to_text",
    "load_settings",
    "load_settings_from_path",
    "looks_encrypted",
    "redact",
    "sanitize",
    "settings_from_env",
    "tail_lines",
]
