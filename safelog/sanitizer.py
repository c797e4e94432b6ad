"""Recursive redaction of hash-like structures before they reach a log."""

from __future__ import annotations

import datetime
import enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Tuple

import yaml

from .matching import FILTERED, is_sensitive_key, key_to_text, looks_encrypted, normalize_filter

_YAML_SCALARS = (str, int, float, bool, type(None), datetime.date, datetime.datetime)


class SupportsItems(Protocol):
    """Anything that can hand out its key/value pairs."""

    def items(self) -> Iterable[Tuple[Any, Any]]:
        ...


class HashSanitizer:
    """Replace sensitive values with a marker and dump the result as YAML."""

    def __init__(self, extra_filters: Any = None) -> None:
        self._filters = normalize_filter(extra_filters)

    def redact(self, node: Any) -> Any:
        return self._redact(node)

    def dump(self, node: Any) -> str:
        """Render ``node`` as a block-style YAML document with sensitive values filtered."""

        return yaml.safe_dump(
            self._redact(node),
            explicit_start=True,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _redact(self, value: Any) -> Any:
        pairs = _hash_pairs(value)
        if pairs is not None:
            return self._redact_pairs(pairs)
        if isinstance(value, (list, tuple)):
            return [self._redact(item) for item in value]
        if isinstance(value, (set, frozenset)):
            return [self._redact(item) for item in sorted(value, key=repr)]
        return self._redact_leaf(value)

    def _redact_pairs(self, pairs: List[Tuple[Any, Any]]) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for key, value in pairs:
            text = key_to_text(key)
            slot = _free_slot(result, text, key)
            if is_sensitive_key(text, self._filters):
                result[slot] = FILTERED
                continue
            result[slot] = self._redact(value)
        return result

    def _redact_leaf(self, value: Any) -> Any:
        if isinstance(value, bytes):
            value = value.decode("utf-8", errors="replace")
        if looks_encrypted(value):
            return FILTERED
        if type(value) in _YAML_SCALARS:
            return value
        if isinstance(value, enum.Enum):
            return key_to_text(value)
        return str(value)


def sanitize(node: Any, filter: Any = None) -> str:
    """Dump ``node`` as YAML, filtering sensitive keys plus ``filter`` for this call only."""

    return HashSanitizer(filter).dump(node)


def redact(node: Any, filter: Any = None) -> Any:
    return HashSanitizer(filter).redact(node)


def _hash_pairs(value: Any) -> Optional[List[Tuple[Any, Any]]]:
    """Return the key/value pairs of a hash-like value, or None for anything else."""

    if isinstance(value, Mapping):
        return list(value.items())
    if isinstance(value, (str, bytes, list, tuple, set, frozenset, type)):
        return None
    items = getattr(value, "items", None)
    if not callable(items):
        return None
    holder: SupportsItems = value
    try:
        return [(key, item) for key, item in holder.items()]
    except (TypeError, ValueError):
        # items() that takes arguments or does not yield pairs
        return None


def _free_slot(result: Dict[str, Any], text: str, key: Any) -> str:
    """Pick an output key for ``text`` that does not overwrite an earlier entry."""

    if text not in result:
        return text
    slot = repr(key)
    counter = 2
    while slot in result:
        slot = f"{text} ({counter})"
        counter += 1
    return slot
