"""Core data shapes for PriceClock.

``Offer`` is the unit of ingestion; ``Priced`` / ``Unset`` form the tagged
result of a point query. Every consumer must handle both result variants.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from decimal import Decimal
from typing import Union


@dataclass(frozen=True)
class Offer:
    """One priced interval for one identifier.

    Bounds are clock-of-day values with minute granularity and are both
    inclusive. ``start <= end`` always holds; the parser rejects rows that
    violate it.
    """

    identifier: str
    start: time
    end: time
    price: Decimal

    def contains(self, instant: time) -> bool:
        """Check if this offer is active at the given instant."""
        return self.start <= instant <= self.end

    def overlaps(self, other: Offer) -> bool:
        """Check if this offer shares at least one instant with another."""
        if self.identifier != other.identifier:
            return False
        return self.start <= other.end and other.start <= self.end


@dataclass(frozen=True)
class Priced:
    """A point query matched an offer."""

    value: Decimal

    @property
    def is_set(self) -> bool:
        return True


@dataclass(frozen=True)
class Unset:
    """A point query matched nothing (unknown identifier, no time, no cover)."""

    @property
    def is_set(self) -> bool:
        return False


PriceResult = Union[Priced, Unset]

UNSET = Unset()
