"""Render a LogRecord as a one-line summary plus an optional indented detail block."""

import json
from datetime import datetime, tzinfo
from typing import Any

from gelf_pretty.colors import FIELD, MESSAGE, Colorizer
from gelf_pretty.record import (
    APP_FIELD,
    LEVEL_NAMES,
    LOGGER_FIELD,
    SPECIAL_FIELDS,
    LogRecord,
    epoch_to_datetime,
)


def format_value(value: Any) -> str:
    """Text for an additional-field value: strings as-is, anything else as compact JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def format_timestamp(epoch: float, tz: tzinfo | None = None) -> str:
    """``[YYYY-MM-DD HH:MM:SS.mmm]`` in ``tz`` (local zone when None), millis truncated."""
    m: datetime = epoch_to_datetime(epoch, tz)
    return (
        f"[{m.year:04d}-{m.month:02d}-{m.day:02d} "
        f"{m.hour:02d}:{m.minute:02d}:{m.second:02d}.{m.microsecond // 1000:03d}]"
    )


def level_name(level: int) -> str:
    """Syslog name for ``level``; empty string outside 0-7."""
    return LEVEL_NAMES.get(level, "")


def _special_field(record: LogRecord, key: str) -> str:
    value = record.get_field(key)
    return "" if value is None else format_value(value)


def format_identity(record: LogRecord) -> str:
    """``app/logger on host``, dropping whichever parts are empty."""
    app = _special_field(record, APP_FIELD)
    logger_name = _special_field(record, LOGGER_FIELD)

    parts = []
    if app:
        parts.append(app)
    if logger_name:
        if app:
            parts.append("/")
        parts.append(logger_name)
    if record.host:
        if app or logger_name:
            parts.append(" on ")
        parts.append(record.host)
    return "".join(parts)


def format_fields(record: LogRecord, colorizer: Colorizer | None = None) -> str:
    """Space-separated ``key=value`` for non-special fields, sorted by key."""
    pairs = []
    for key, value in record.additional_fields:
        if key in SPECIAL_FIELDS:
            continue
        name = key[1:] if key.startswith("_") else key
        if colorizer:
            name = colorizer.decorate(name, FIELD)
        pairs.append(f"{name}={format_value(value)}")
    return " ".join(pairs)


def format_full_message(full_message: str) -> str:
    if not full_message:
        return ""
    return "\n\t" + full_message.replace("\n", "\n\t")


def render(record: LogRecord, tz: tzinfo | None = None, colorizer: Colorizer | None = None) -> str:
    """Render ``record`` as display text.

    ``tz`` selects the zone for the timestamp (local zone when None).
    ``colorizer`` adds ANSI styling; without one the output is plain text.
    """
    level = level_name(record.level)
    message = record.short_message
    if colorizer:
        level = colorizer.level(level, record.level)
        message = colorizer.decorate(message, MESSAGE)

    out = [f"{format_timestamp(record.timestamp, tz)} {level}: "]
    out.append(format_identity(record))
    out.append(f": {message}")

    fields = format_fields(record, colorizer)
    if fields:
        out.append(f" {fields}")

    out.append(format_full_message(record.full_message))
    return "".join(out)
