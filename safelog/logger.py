"""Logger facade that filters hashes, caps messages and tails its own file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Any, Optional

from .capping import DEFAULT_DATEFMT, DEFAULT_FORMAT, DEFAULT_MAX_MESSAGE_SIZE, CappingFormatter
from .config import DEFAULT_TAIL_LINES, LEVELS, LoggerSettings
from .matching import normalize_filter
from .sanitizer import HashSanitizer
from .tail import contents as tail_contents

_UNSET = object()


class SafeLogger:
    """Write to a file or stream through a stdlib logger with redaction helpers."""

    def __init__(
        self,
        target: str | Path | IO[str],
        *,
        name: Optional[str] = None,
        level: str = "info",
        max_message_size: Optional[int] = DEFAULT_MAX_MESSAGE_SIZE,
        fmt: Optional[str] = DEFAULT_FORMAT,
        datefmt: Optional[str] = DEFAULT_DATEFMT,
        filter_keys: Any = None,
        tail_lines: Optional[int] = DEFAULT_TAIL_LINES,
        tail_width: Optional[int] = None,
    ) -> None:
        self._path: Optional[Path] = None
        if isinstance(target, (str, Path)):
            self._path = Path(target)
            self._path.parent.mkdir(parents=True, exist_ok=True)
            handler: logging.Handler = logging.FileHandler(self._path, encoding="utf-8")
        else:
            handler = logging.StreamHandler(target)
        self.formatter = CappingFormatter(fmt=fmt, datefmt=datefmt, max_message_size=max_message_size)
        handler.setFormatter(self.formatter)

        # Not registered with the logging manager: every instance owns its
        # logger and handler outright.
        self._logger = logging.Logger(name or _default_name(self._path))
        self._logger.addHandler(handler)
        self._logger.setLevel(_level_value(level))
        self._logger.propagate = False
        self._handler = handler
        self._filter_keys = normalize_filter(filter_keys)
        self._tail_lines = tail_lines
        self._tail_width = tail_width

    @classmethod
    def from_settings(
        cls,
        settings: LoggerSettings,
        target: str | Path | IO[str] | None = None,
        **kwargs: Any,
    ) -> "SafeLogger":
        target = target if target is not None else settings.path
        if target is None:
            raise ValueError("SafeLogger requires a target path or stream")
        return cls(
            target,
            level=settings.level,
            max_message_size=settings.max_message_size,
            filter_keys=settings.filter_keys,
            tail_lines=settings.tail_lines,
            tail_width=settings.tail_width,
            **kwargs,
        )

    @property
    def path(self) -> Optional[Path]:
        return self._path

    # ------------------------------------------------------------------
    # Logging helpers
    # ------------------------------------------------------------------

    def log_hashes(self, node: Any, *, filter: Any = None, level: str = "info") -> None:
        """Log ``node`` as a YAML document with sensitive values filtered.

        ``filter`` adds key names (a single key or a set of keys) to redact for
        this call only.
        """

        sanitizer = HashSanitizer(self._filter_keys | normalize_filter(filter))
        self._logger.log(_level_value(level), "\n%s", sanitizer.dump(node))

    def debug(self, msg: Any, *args: Any) -> None:
        self._logger.debug(msg, *args)

    def info(self, msg: Any, *args: Any) -> None:
        self._logger.info(msg, *args)

    def warning(self, msg: Any, *args: Any) -> None:
        self._logger.warning(msg, *args)

    warn = warning

    def error(self, msg: Any, *args: Any) -> None:
        self._logger.error(msg, *args)

    def critical(self, msg: Any, *args: Any) -> None:
        self._logger.critical(msg, *args)

    # ------------------------------------------------------------------
    # Retrieval
    # ------------------------------------------------------------------

    def contents(self, width: Any = _UNSET, last: Any = _UNSET) -> str:
        """Return the tail of this logger's file.

        Omitted arguments fall back to the configured tail settings; ``None``
        means unbounded, so ``last=None`` reads the whole file.
        """

        if self._path is None:
            return ""
        if last is _UNSET:
            last = self._tail_lines
        if width is _UNSET:
            width = self._tail_width
        self._handler.flush()
        return tail_contents(self._path, width=width, last=last)

    # ------------------------------------------------------------------
    # Cleanup
    # ------------------------------------------------------------------

    def close(self) -> None:
        self._logger.removeHandler(self._handler)
        self._handler.close()

    def __enter__(self) -> "SafeLogger":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def _level_value(level: str) -> int:
    return LEVELS.get(str(level).lower(), logging.INFO)


def _default_name(path: Optional[Path]) -> str:
    return f"safelog.{path.stem}" if path is not None else "safelog"
