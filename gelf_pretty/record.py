"""GELF record model — frozen dataclass + field-contract parsing."""

import json
import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any

from gelf_pretty.errors import InvalidFieldType, MalformedJSON, MissingField

# Syslog severities, as carried in the GELF "level" field
LEVEL_NAMES = {
    0: "EMERGENCY",
    1: "ALERT",
    2: "CRITICAL",
    3: "ERROR",
    4: "WARNING",
    5: "NOTICE",
    6: "INFO",
    7: "DEBUG",
}

DEFAULT_LEVEL = 1

# What a present "level": 0 means
ZERO_LEVEL_ALERT = "alert"
ZERO_LEVEL_EMERGENCY = "emergency"
ZERO_LEVEL_POLICIES = (ZERO_LEVEL_ALERT, ZERO_LEVEL_EMERGENCY)

# Additional fields rendered in the identity clause instead of the field list
APP_FIELD = "_app"
LOGGER_FIELD = "_logger"
SPECIAL_FIELDS = frozenset({APP_FIELD, LOGGER_FIELD})

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MISSING = object()


@dataclass(frozen=True)
class LogRecord:
    version: str
    host: str
    short_message: str
    timestamp: float
    full_message: str = ""
    level: int = DEFAULT_LEVEL
    additional_fields: tuple[tuple[str, Any], ...] = field(default_factory=tuple)

    def get_field(self, key: str, default: Any = None) -> Any:
        for k, v in self.additional_fields:
            if k == key:
                return v
        return default

    def __post_init__(self):
        # key order is part of the record, not of rendering
        object.__setattr__(self, "additional_fields",
                           tuple(sorted(self.additional_fields, key=lambda kv: kv[0])))


def epoch_to_datetime(epoch: float, tz: tzinfo | None = None) -> datetime:
    """Convert fractional epoch seconds to an aware datetime in ``tz``.

    ``tz=None`` converts to the local zone of the process.
    """
    frac, whole = math.modf(epoch)
    nanos = int(frac * 1e9)
    moment = _EPOCH + timedelta(seconds=int(whole), microseconds=nanos // 1000)
    return moment.astimezone(tz)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _pop(data: dict, key: str, required: bool) -> Any:
    if key not in data:
        if required:
            raise MissingField(key)
        return _MISSING
    return data.pop(key)


def _pop_string(data: dict, key: str, required: bool = True) -> str | None:
    val = _pop(data, key, required)
    if val is _MISSING or (val is None and not required):
        return None
    if not isinstance(val, str):
        raise InvalidFieldType(key, "string")
    return val


def _pop_number(data: dict, key: str, required: bool = True) -> float | int | None:
    val = _pop(data, key, required)
    if val is _MISSING or (val is None and not required):
        return None
    # bool is an int subclass but not a JSON number
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        raise InvalidFieldType(key, "number")
    return val


def _check_timestamp(raw: float | int) -> float:
    try:
        epoch = float(raw)
    except OverflowError:
        raise InvalidFieldType("timestamp", "number") from None
    if not math.isfinite(epoch):
        raise InvalidFieldType("timestamp", "number")
    try:
        moment = epoch_to_datetime(epoch, timezone.utc)
    except (OverflowError, ValueError, OSError):
        raise InvalidFieldType("timestamp", "number") from None
    # keep a year of headroom so any zone offset still fits in a datetime
    if not (datetime.min.year < moment.year < datetime.max.year):
        raise InvalidFieldType("timestamp", "number")
    return epoch


def _resolve_level(raw: float | int | None, zero_level: str) -> int:
    if raw is None:
        return DEFAULT_LEVEL
    if raw == 0:
        return DEFAULT_LEVEL if zero_level == ZERO_LEVEL_ALERT else 0
    if isinstance(raw, float) and not math.isfinite(raw):
        raise InvalidFieldType("level", "number")
    return int(raw)


def parse_record(raw: bytes | str, zero_level: str = ZERO_LEVEL_ALERT) -> LogRecord:
    """Parse one JSON-encoded GELF object into a LogRecord.

    Raises:
        MalformedJSON: the input is not a JSON object.
        MissingField: a required field is absent.
        InvalidFieldType: a field holds the wrong JSON type.
    """
    try:
        data = json.loads(raw, parse_constant=_reject_constant)
    except ValueError as exc:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise MalformedJSON(f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise MalformedJSON(f"expected a JSON object, got {type(data).__name__}")

    version = _pop_string(data, "version")
    host = _pop_string(data, "host")
    short_message = _pop_string(data, "short_message")
    full_message = _pop_string(data, "full_message", required=False)
    timestamp = _check_timestamp(_pop_number(data, "timestamp"))
    level = _resolve_level(_pop_number(data, "level", required=False), zero_level)

    additional = tuple((k, v) for k, v in data.items() if k.startswith("_"))

    return LogRecord(
        version=version,
        host=host,
        short_message=short_message,
        timestamp=timestamp,
        full_message=full_message or "",
        level=level,
        additional_fields=additional,
    )
