"""Index builder: raw batch -> OfferIndex.

The whole batch is all-or-nothing. The first non-blank line is a header and
is skipped without validation; blank lines are skipped anywhere. The first
bad row aborts the build and nothing built so far is ever exposed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from priceclock.catalog.index import OfferIndex
from priceclock.errors import BuildFailed, ParseError
from priceclock.ingestion.parser import FIELD_DELIMITER, parse_record
from priceclock.models import Offer

logger = logging.getLogger(__name__)


def build_index(lines: Iterable[str], delimiter: str = FIELD_DELIMITER) -> OfferIndex:
    """Build a complete OfferIndex from one ingestion batch.

    Args:
        lines: Raw lines of the batch, header included
        delimiter: Field delimiter passed to the record parser

    Returns:
        Immutable OfferIndex (empty if the batch has no data rows)

    Raises:
        BuildFailed: On the first row that fails to parse
    """
    offers: list[Offer] = []
    header_seen = False

    for line_number, raw_line in enumerate(lines, start=1):
        if not raw_line.strip():
            continue

        if not header_seen:
            header_seen = True
            continue

        try:
            offers.append(parse_record(raw_line, delimiter))
        except ParseError as e:
            logger.warning(f"Offer batch rejected at line {line_number}: {e}")
            raise BuildFailed(e, line_number, raw_line) from e

    index = OfferIndex.from_offers(offers)
    logger.info(f"Built offer index: {index.offer_count} offers for {len(index)} identifiers")
    return index
