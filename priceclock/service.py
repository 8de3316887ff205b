"""Price service facade: Replace and GetPrice.

Transports (HTTP, CLI) go through this module. It owns input validation for
queries and the build-then-publish sequence for ingestion; the catalog is
only touched after a batch has been fully built.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import time as clock_time
from enum import Enum
from typing import Any

from priceclock.catalog.holder import Catalog, get_catalog
from priceclock.config import get_config
from priceclock.errors import BuildFailed, InvalidTime, ValidationFailed
from priceclock.ingestion.builder import build_index
from priceclock.ingestion.parser import parse_time
from priceclock.models import PriceResult
from priceclock.pricing.engine import LookupStrategy, price_at

logger = logging.getLogger(__name__)


class ReplaceStatus(str, Enum):
    """Status of a replace operation."""

    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


@dataclass
class ReplaceResult:
    """Result of a replace operation."""

    status: ReplaceStatus
    offers_loaded: int = 0
    identifiers_loaded: int = 0
    generation: int | None = None
    message: str = ""
    error_details: dict[str, Any] | None = field(default=None)
    duration_seconds: float = 0.0

    @property
    def success(self) -> bool:
        return self.status is ReplaceStatus.SUCCESS

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "offers_loaded": self.offers_loaded,
            "identifiers_loaded": self.identifiers_loaded,
            "generation": self.generation,
            "message": self.message,
            "error_details": self.error_details,
            "duration_seconds": round(self.duration_seconds, 6),
        }


def validate_query_time(text: str | None) -> clock_time | None:
    """Validate the optional query time.

    A missing or blank value means "no time supplied" and yields None.

    Raises:
        ValidationFailed: If a value is present but not HH:mm
    """
    if text is None or not text.strip():
        return None
    try:
        return parse_time(text.strip())
    except InvalidTime as e:
        raise ValidationFailed("time", str(e)) from e


def validate_identifier(identifier: str | None) -> str:
    """Validate the required identifier.

    Raises:
        ValidationFailed: If the identifier is missing or blank
    """
    if identifier is None or not identifier.strip():
        raise ValidationFailed("skuid", "identifier is required")
    return identifier


class PriceService:
    """Replace/GetPrice over one Catalog."""

    def __init__(
        self,
        catalog: Catalog | None = None,
        strategy: LookupStrategy | None = None,
    ) -> None:
        self.catalog = catalog if catalog is not None else get_catalog()
        self.strategy = strategy if strategy is not None else get_config().query.strategy

    def replace(self, lines: Iterable[str]) -> ReplaceResult:
        """Build a new index from a full batch and publish it.

        A failed build leaves the active index untouched and is reported in
        the result rather than raised.

        Args:
            lines: Raw batch lines, header first

        Returns:
            ReplaceResult with status and statistics
        """
        start_time = time.time()

        try:
            index = build_index(lines)
        except BuildFailed as e:
            logger.warning(f"Replace rejected, catalog generation {self.catalog.generation} kept: {e}")
            return ReplaceResult(
                status=ReplaceStatus.FAILED,
                message=f"Build failed: {e}",
                error_details=e.to_dict(),
                generation=self.catalog.generation,
                duration_seconds=time.time() - start_time,
            )

        state = self.catalog.replace(index)
        return ReplaceResult(
            status=ReplaceStatus.SUCCESS,
            offers_loaded=index.offer_count,
            identifiers_loaded=len(index),
            generation=state.generation,
            message=f"Loaded {index.offer_count} offers for {len(index)} identifiers",
            duration_seconds=time.time() - start_time,
        )

    def price_at(self, identifier: str | None, instant: clock_time | None) -> PriceResult:
        """Query the current index with already-validated input."""
        return price_at(self.catalog, identifier, instant, self.strategy)

    def get_price(self, identifier: str | None, time_text: str | None) -> PriceResult:
        """Validate raw query input, then look the price up.

        Raises:
            ValidationFailed: Blank identifier or malformed time text
        """
        identifier = validate_identifier(identifier)
        instant = validate_query_time(time_text)
        return self.price_at(identifier, instant)
