"""Error taxonomy for PriceClock.

Row-level parse errors abort a build; ``BuildFailed`` wraps the first one
with its location. ``ValidationFailed`` is raised at the transport boundary
for malformed query input. Absence of price data is never an error.
"""

from __future__ import annotations

from typing import Any


class PriceClockError(Exception):
    """Base class for all PriceClock errors."""
    pass


class ParseError(PriceClockError):
    """A single offer row could not be parsed.

    Attributes:
        text: The offending text (field value or whole row)
    """

    kind = "parse_error"

    def __init__(self, message: str, text: str):
        super().__init__(message)
        self.text = text


class MalformedRow(ParseError):
    """Wrong field count, or an empty identifier."""

    kind = "malformed_row"

    def __init__(self, message: str, text: str, field_count: int | None = None):
        super().__init__(message, text)
        self.field_count = field_count


class InvalidTime(ParseError):
    """A time field is not ``HH:mm`` in 00:00-23:59, or start is after end."""

    kind = "invalid_time"


class InvalidPrice(ParseError):
    """The price field is not a non-negative decimal."""

    kind = "invalid_price"


class BuildFailed(PriceClockError):
    """An ingestion batch was rejected in full.

    Attributes:
        cause: The first ParseError encountered
        line_number: 1-based line number of the offending row
        raw_line: The offending row as received
    """

    def __init__(self, cause: ParseError, line_number: int, raw_line: str):
        super().__init__(f"Line {line_number}: {cause}")
        self.cause = cause
        self.line_number = line_number
        self.raw_line = raw_line

    def to_dict(self) -> dict[str, Any]:
        """Structured diagnostics for transports."""
        return {
            "error_type": self.cause.kind,
            "error_message": str(self.cause),
            "line_number": self.line_number,
            "raw_line": self.raw_line,
            "text": self.cause.text,
        }


class ValidationFailed(PriceClockError):
    """Query input rejected before reaching the query engine."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
