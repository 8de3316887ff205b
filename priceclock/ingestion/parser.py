"""Record parser for pipe-delimited price offer rows.

Row format:
    identifier|startTime|endTime|price
    u00006541|10:00|10:15|101

Times are zero-padded 24-hour ``HH:mm`` values (00:00-23:59). Prices are
non-negative decimal literals; integers are accepted.
"""

from __future__ import annotations

import re
from datetime import time
from decimal import Decimal

from priceclock.errors import InvalidPrice, InvalidTime, MalformedRow
from priceclock.models import Offer

FIELD_DELIMITER = "|"
FIELD_COUNT = 4

_TIME_PATTERN = re.compile(r"([01][0-9]|2[0-3]):([0-5][0-9])")
_PRICE_PATTERN = re.compile(r"[0-9]+(\.[0-9]+)?([eE][+-]?[0-9]+)?")


def parse_time(text: str) -> time:
    """Parse an ``HH:mm`` clock value.

    Args:
        text: Time text, already trimmed

    Returns:
        time with minute granularity

    Raises:
        InvalidTime: If text does not match the grammar or is out of range
    """
    match = _TIME_PATTERN.fullmatch(text)
    if not match:
        raise InvalidTime(f"Invalid time format. Expected HH:mm, got: {text!r}", text)
    return time(int(match.group(1)), int(match.group(2)))


def parse_price(text: str) -> Decimal:
    """Parse a non-negative decimal literal such as ``101``, ``99.95`` or ``1e2``.

    Raises:
        InvalidPrice: If text is not an unsigned ASCII decimal literal
    """
    if text.startswith("-"):
        raise InvalidPrice(f"Negative price: {text!r}", text)
    if not _PRICE_PATTERN.fullmatch(text):
        raise InvalidPrice(f"Invalid price format. Expected number, got: {text!r}", text)

    return Decimal(text)


def parse_record(raw_line: str, delimiter: str = FIELD_DELIMITER) -> Offer:
    """Parse one data row into an Offer.

    Blank lines and the batch header never reach this function; the index
    builder filters them out.

    Args:
        raw_line: One raw data row
        delimiter: Single-character field delimiter

    Returns:
        Validated Offer

    Raises:
        MalformedRow: Wrong field count or empty identifier
        InvalidTime: Bad time field, or start after end
        InvalidPrice: Bad price field
    """
    line = raw_line.strip()
    parts = [part.strip() for part in line.split(delimiter)]

    if len(parts) != FIELD_COUNT:
        raise MalformedRow(
            f"Expected {FIELD_COUNT} columns separated by {delimiter!r}, got: {len(parts)}",
            line,
            field_count=len(parts),
        )

    identifier, start_text, end_text, price_text = parts

    if not identifier:
        raise MalformedRow("Missing identifier", line, field_count=len(parts))

    start = parse_time(start_text)
    end = parse_time(end_text)
    if start > end:
        raise InvalidTime(
            f"Start time {start_text} is after end time {end_text}",
            f"{start_text}{delimiter}{end_text}",
        )

    return Offer(
        identifier=identifier,
        start=start,
        end=end,
        price=parse_price(price_text),
    )
