"""Key and value predicates used to decide what gets filtered."""

from __future__ import annotations

import enum
import re
from typing import Any, FrozenSet, Iterable, Pattern

FILTERED = "[FILTERED]"
SENSITIVE_KEY_FRAGMENTS: FrozenSet[str] = frozenset(
    {
        "password",
        "pwd",
        "secret",
        "token",
        "crypt",
    }
)
ENCRYPTED_VALUE_PATTERN: Pattern[str] = re.compile(r"v\d+:\{[^}]*\}")


def key_to_text(key: Any) -> str:
    """Return the text form of a mapping key."""

    if isinstance(key, str):
        return str(key)
    if isinstance(key, enum.Enum):
        value = key.value
        return value if isinstance(value, str) else key.name
    if isinstance(key, bytes):
        return key.decode("utf-8", errors="replace")
    return str(key)


def normalize_filter(filter: Any = None) -> FrozenSet[str]:
    """Turn a single key or a collection of keys into lowercased text forms."""

    if filter is None:
        return frozenset()
    if isinstance(filter, (str, bytes, enum.Enum)):
        items: Iterable[Any] = [filter]
    else:
        items = filter
    texts = (key_to_text(item).lower() for item in items)
    return frozenset(text for text in texts if text)


def is_sensitive_key(key: Any, extra_filters: Any = ()) -> bool:
    lowered = key_to_text(key).lower()
    if any(fragment in lowered for fragment in SENSITIVE_KEY_FRAGMENTS):
        return True
    return any(entry in lowered for entry in normalize_filter(extra_filters))


def looks_encrypted(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    return ENCRYPTED_VALUE_PATTERN.search(value) is not None
