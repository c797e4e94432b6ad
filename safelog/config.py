"""Pydantic settings for building a SafeLogger from env or YAML."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml
from pydantic import BaseModel, Field, PositiveInt, ValidationError, field_validator

from .capping import DEFAULT_MAX_MESSAGE_SIZE

LEVELS = {
    "debug": 10,
    "info": 20,
    "warn": 30,
    "warning": 30,
    "error": 40,
    "critical": 50,
}
DEFAULT_TAIL_LINES = 1000


class LoggerSettings(BaseModel):
    """Settings for a file or stream backed SafeLogger."""

    path: Optional[str] = None
    level: str = "info"
    max_message_size: PositiveInt = DEFAULT_MAX_MESSAGE_SIZE
    tail_lines: PositiveInt = DEFAULT_TAIL_LINES
    tail_width: Optional[PositiveInt] = None
    filter_keys: List[str] = Field(default_factory=list)

    @field_validator("level")
    @classmethod
    def validate_level(cls, value: str) -> str:
        lowered = value.strip().lower()
        if lowered not in LEVELS:
            raise ValueError(f"unknown log level '{value}'")
        return lowered

    @field_validator("filter_keys", mode="before")
    @classmethod
    def split_filter_keys(cls, value: Any) -> Any:
        if isinstance(value, str):
            return list(_parse_csv(value))
        return value


def load_settings(data: Dict[str, Any] | None) -> LoggerSettings:
    """Parse a raw dict (typically loaded from YAML) into LoggerSettings."""

    try:
        return LoggerSettings.model_validate(data or {})
    except ValidationError as exc:
        raise ValueError(str(exc)) from exc


def load_settings_from_path(path: str | Path) -> LoggerSettings:
    path = Path(path)
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    if data is not None and not isinstance(data, dict):
        raise ValueError(f"logger settings in '{path}' must be a mapping")
    return load_settings(data)


def settings_from_env() -> LoggerSettings:
    data: Dict[str, Any] = {}
    for field_name, env_name in (
        ("path", "SAFELOG_PATH"),
        ("level", "SAFELOG_LEVEL"),
        ("max_message_size", "SAFELOG_MAX_MESSAGE_SIZE"),
        ("tail_lines", "SAFELOG_TAIL_LINES"),
        ("tail_width", "SAFELOG_TAIL_WIDTH"),
        ("filter_keys", "SAFELOG_FILTER_KEYS"),
    ):
        value = os.getenv(env_name)
        if value is not None and value.strip():
            data[field_name] = value.strip()
    return load_settings(data)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _parse_csv(value: str) -> Iterable[str]:
    return [item.strip() for item in value.split(",") if item.strip()]
