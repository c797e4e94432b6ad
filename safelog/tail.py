"""Read the end of a log file as text that is guaranteed to be valid UTF-8."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional, Tuple

LOGGER = logging.getLogger(__name__)

ENCODING = "utf-8"
_BLOCK_SIZE = 8192


def tail_lines(path: str | Path, count: int) -> bytes:
    """Return the last ``count`` lines of ``path`` as raw bytes, like ``tail -n``."""

    if count <= 0:
        return b""

    chunks: List[bytes] = []
    breaks = 0
    with open(path, "rb") as fh:
        fh.seek(0, os.SEEK_END)
        position = fh.tell()
        # count + 1 separators mark the start of the first wanted line, plus
        # one for a newline terminating the file.
        while position > 0 and breaks < count + 2:
            step = min(_BLOCK_SIZE, position)
            position -= step
            fh.seek(position)
            chunk = fh.read(step)
            chunks.append(chunk)
            breaks += chunk.count(b"\n")

    data = b"".join(reversed(chunks))
    terminated = data.endswith(b"\n")
    body = data[:-1] if terminated else data
    tail = b"\n".join(body.split(b"\n")[-count:])
    return tail + b"\n" if terminated else tail


def contents(path: str | Path, width: Optional[int] = None, last: Optional[int] = None) -> str:
    """Return the trailing lines of a log file for display.

    Missing files and empty tails give ``""``. Lines that are not valid UTF-8
    are dropped whole; with ``width`` every kept line is clipped to that many
    characters. At most ``last`` lines are returned when it is given,
    otherwise the whole file is read.
    """

    if width is not None and width <= 0:
        raise ValueError("width must be a positive integer")
    if last is not None and last <= 0:
        raise ValueError("last must be a positive integer")

    path = Path(path)
    if not path.is_file():
        return ""

    try:
        if last is None:
            with path.open("rb") as fh:
                raw = fh.read()
        else:
            raw = tail_lines(path, last)
    except FileNotFoundError:
        # rotated away after the is_file check
        return ""
    if not raw:
        return ""

    lines, dropped = decode_lines(raw)
    if dropped:
        LOGGER.debug("Dropped %d line(s) with invalid %s from %s", dropped, ENCODING, path)
    if width is not None:
        lines = [line[:width] for line in lines]
    if last is not None:
        lines = lines[-last:]
    return "\n".join(lines)


def decode_lines(raw: bytes) -> Tuple[List[str], int]:
    """Decode ``raw`` line by line, skipping lines that fail to decode.

    Returns the decoded lines and the number of lines skipped.
    """

    if raw.endswith(b"\n"):
        raw = raw[:-1]
    lines: List[str] = []
    dropped = 0
    for chunk in raw.split(b"\n"):
        if chunk.endswith(b"\r"):
            chunk = chunk[:-1]
        try:
            lines.append(chunk.decode(ENCODING))
        except UnicodeDecodeError:
            dropped += 1
    return lines, dropped
