"""Error taxonomy for record parsing and configuration.

Stream read/write failures are not wrapped: the underlying OSError reaches
the caller as-is.
"""


class GelfPrettyError(Exception):
    """Base error for this package."""


class ParseError(GelfPrettyError):
    """Raised when an input line cannot be turned into a LogRecord."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class MalformedJSON(ParseError):
    """The line is not a valid JSON object."""


class MissingField(ParseError):
    """A required GELF field is absent."""

    def __init__(self, field: str):
        super().__init__(f"{field} not found", field=field)


class InvalidFieldType(ParseError):
    """A GELF field is present but holds the wrong JSON type."""

    def __init__(self, field: str, expected: str):
        super().__init__(f"{field} is not a valid {expected}", field=field)
        self.expected = expected


class ConfigError(GelfPrettyError):
    """Raised for unusable configuration values."""
