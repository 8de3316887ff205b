"""Point-in-time query engine.

Overlap policy: the earliest-starting offer whose interval contains the
instant wins; equal starts resolve in input order. Containment is inclusive
on both ends.
"""

from __future__ import annotations

from datetime import time
from enum import Enum

from priceclock.catalog.holder import Catalog
from priceclock.models import UNSET, Priced, PriceResult


class LookupStrategy(str, Enum):
    """How an identifier's offers are searched. Results are identical."""

    LINEAR = "linear"
    BISECT = "bisect"


def price_at(
    catalog: Catalog,
    identifier: str | None,
    instant: time | None,
    strategy: LookupStrategy = LookupStrategy.BISECT,
) -> PriceResult:
    """Return the price active for identifier at instant.

    Never raises for missing data: an empty identifier, a missing instant,
    an unknown identifier, or an uncovered instant all yield ``Unset``.
    There is no default "now"; offer times have no date.

    Args:
        catalog: Catalog whose current index is consulted (read once)
        identifier: Case-sensitive offer identifier
        instant: Query clock time, or None if the caller supplied none
        strategy: Search strategy for the identifier's offers

    Returns:
        Priced(value) or Unset
    """
    if not identifier or instant is None:
        return UNSET

    series = catalog.current().series_for(identifier)
    if series is None or len(series) == 0:
        return UNSET

    if strategy is LookupStrategy.LINEAR:
        offer = series.first_match_linear(instant)
    else:
        offer = series.first_match_bisect(instant)

    if offer is None:
        return UNSET
    return Priced(offer.price)
