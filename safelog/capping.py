"""Bound the size of a single formatted log message."""

from __future__ import annotations

import logging
from typing import Optional

DEFAULT_MAX_MESSAGE_SIZE = 1_048_576
DEFAULT_FORMAT = "[%(asctime)s #%(process)d] %(levelname)s -- : %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def cap(message: str, max_bytes: Optional[int] = DEFAULT_MAX_MESSAGE_SIZE) -> str:
    """Return the longest prefix of ``message`` whose UTF-8 encoding fits in ``max_bytes``.

    Messages that already fit are returned unchanged. A multi-byte character is
    never split, so the result is always valid text.
    """

    if max_bytes is None:
        return message
    if max_bytes < 0:
        raise ValueError("max_bytes must be >= 0")
    # Every character encodes to at most 4 bytes.
    if len(message) * 4 <= max_bytes:
        return message
    encoded = message.encode("utf-8", errors="surrogatepass")
    if len(encoded) <= max_bytes:
        return message
    return encoded[:max_bytes].decode("utf-8", errors="ignore")


class CappingFormatter(logging.Formatter):
    """Formatter that caps the message body of each record before adding the prefix."""

    def __init__(
        self,
        fmt: Optional[str] = DEFAULT_FORMAT,
        datefmt: Optional[str] = DEFAULT_DATEFMT,
        max_message_size: Optional[int] = DEFAULT_MAX_MESSAGE_SIZE,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.max_message_size = max_message_size

    def formatMessage(self, record: logging.LogRecord) -> str:
        record.message = cap(record.message, self.max_message_size)
        return super().formatMessage(record)
