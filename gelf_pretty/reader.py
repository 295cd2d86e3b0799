"""Generator-based input reading — stdin, files, glob expansion, and follow."""

import glob
import logging
import os
import sys
import time
from typing import BinaryIO, Generator

logger = logging.getLogger(__name__)

STDIN = "-"


def read_file(filepath: str) -> Generator[bytes, None, None]:
    """Yield each raw line of a single file ('-' reads stdin), terminator included."""
    if filepath == STDIN:
        yield from sys.stdin.buffer
        return
    with open(filepath, "rb") as f:
        yield from f


def read_multiple(paths: list[str]) -> Generator[bytes, None, None]:
    """Yield lines from multiple files, sequentially."""
    for path in paths:
        yield from read_file(path)


def expand_paths(raw_paths: list[str]) -> list[str]:
    """Expand globs, deduplicate, and validate that files exist.

    An empty list, or a lone '-', means stdin and expands to ['-'].
    Raises FileNotFoundError if a non-glob path doesn't exist.
    Raises FileNotFoundError if a glob matches nothing at all.
    """
    if not raw_paths:
        return [STDIN]

    expanded = []
    seen = set()

    for raw in raw_paths:
        if raw == STDIN:
            candidates = [STDIN]
        elif any(c in raw for c in ("*", "?", "[")):
            candidates = sorted(glob.glob(raw))
        else:
            if not os.path.isfile(raw):
                raise FileNotFoundError(f"File not found: {raw}")
            candidates = [raw]

        for c in candidates:
            if c not in seen:
                seen.add(c)
                expanded.append(c)

    if not expanded:
        raise FileNotFoundError("No log files found matching the given paths")

    return expanded


def _was_truncated(f: BinaryIO) -> bool:
    return os.fstat(f.fileno()).st_size < f.tell()


def _was_replaced(f: BinaryIO, filepath: str) -> bool:
    """True once ``filepath`` names a different file than the one held open."""
    try:
        current = os.stat(filepath)
    except FileNotFoundError:
        # mid-rotation: the new file isn't there yet
        return False
    held = os.fstat(f.fileno())
    return (current.st_dev, current.st_ino) != (held.st_dev, held.st_ino)


def tail_file(filepath: str, poll_interval: float = 0.1) -> Generator[bytes, None, None]:
    """Yield lines appended to ``filepath`` from now on, polling until interrupted.

    A truncated file is re-read from its start. A file replaced under the same
    name (log rotation) is reopened and read from its start. A partial line
    left over at either point is yielded as it stands.
    """
    f = open(filepath, "rb")
    try:
        f.seek(0, os.SEEK_END)
        pending = b""
        while True:
            chunk = f.read()
            if chunk:
                *complete, pending = (pending + chunk).split(b"\n")
                for line in complete:
                    yield line + b"\n"
                continue

            if _was_truncated(f):
                logger.info("%s was truncated, reading from the start", filepath)
                f.seek(0)
            elif _was_replaced(f, filepath):
                logger.info("%s was replaced, reopening", filepath)
                f.close()
                f = open(filepath, "rb")
            else:
                time.sleep(poll_interval)
                continue

            if pending:
                yield pending
                pending = b""
    finally:
        f.close()
