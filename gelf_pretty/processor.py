"""Stream processor — one line in, one rendered (or raw) line out, in order."""

import logging
from dataclasses import dataclass
from datetime import tzinfo
from typing import BinaryIO, Iterable

from gelf_pretty.colors import Colorizer
from gelf_pretty.errors import ParseError
from gelf_pretty.record import ZERO_LEVEL_ALERT, parse_record
from gelf_pretty.render import render

logger = logging.getLogger(__name__)


@dataclass
class RunStats:
    rendered: int = 0
    passed_through: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.rendered + self.passed_through + self.skipped


def strip_terminator(line: bytes) -> bytes:
    """Drop a trailing ``\\n`` (and a ``\\r`` before it)."""
    if line.endswith(b"\n"):
        line = line[:-1]
        if line.endswith(b"\r"):
            line = line[:-1]
    return line


class PrettyPrinter:
    """Render GELF lines from an iterable of byte lines to a binary writer.

    Lines that fail to parse are written back unchanged unless ``strict`` is
    set, in which case the ParseError propagates and the run stops. Read and
    write errors always propagate.
    """

    def __init__(
        self,
        writer: BinaryIO,
        tz: tzinfo | None = None,
        colorizer: Colorizer | None = None,
        zero_level: str = ZERO_LEVEL_ALERT,
        strict: bool = False,
    ):
        self.writer = writer
        self.tz = tz
        self.colorizer = colorizer
        self.zero_level = zero_level
        self.strict = strict

    def process_line(self, line: bytes) -> bytes:
        """Parse and render one terminator-free line. Raises ParseError."""
        record = parse_record(line, zero_level=self.zero_level)
        return render(record, tz=self.tz, colorizer=self.colorizer).encode("utf-8")

    def _emit(self, data: bytes) -> None:
        self.writer.write(data + b"\n")
        self.writer.flush()

    def run(self, lines: Iterable[bytes]) -> RunStats:
        stats = RunStats()
        for lineno, raw in enumerate(lines, start=1):
            line = strip_terminator(raw)
            if not line:
                stats.skipped += 1
                continue

            try:
                out = self.process_line(line)
            except ParseError as exc:
                if self.strict:
                    logger.error("Line %d is not a GELF record: %s", lineno, exc)
                    raise
                logger.debug("Line %d passed through: %s", lineno, exc)
                self._emit(line)
                stats.passed_through += 1
                continue

            self._emit(out)
            stats.rendered += 1
        return stats


def run(
    reader: Iterable[bytes],
    writer: BinaryIO,
    tz: tzinfo | None = None,
    colorizer: Colorizer | None = None,
    zero_level: str = ZERO_LEVEL_ALERT,
    strict: bool = False,
) -> RunStats:
    """Process every line of ``reader`` into ``writer``; see PrettyPrinter."""
    printer = PrettyPrinter(writer, tz=tz, colorizer=colorizer,
                            zero_level=zero_level, strict=strict)
    return printer.run(reader)
