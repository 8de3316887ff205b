"""Immutable per-identifier offer index.

An ``OfferIndex`` is built once from a complete ingestion batch and never
mutated afterwards, so any number of readers may share it without locks.
Each identifier maps to an ``OfferSeries``: its offers sorted ascending by
start time, ties kept in input order.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from datetime import time
from itertools import accumulate
from types import MappingProxyType

from priceclock.models import Offer


@dataclass(frozen=True)
class OfferSeries:
    """Sorted offers for one identifier, with search keys.

    ``starts[i]`` is the start of ``offers[i]``; ``reach[i]`` is the latest
    end among ``offers[0..i]``. Both are non-decreasing.
    """

    offers: tuple[Offer, ...]
    starts: tuple[time, ...]
    reach: tuple[time, ...]

    @classmethod
    def from_offers(cls, offers: Iterable[Offer]) -> OfferSeries:
        # sorted() is stable: equal starts keep input order
        ordered = tuple(sorted(offers, key=lambda o: o.start))
        return cls(
            offers=ordered,
            starts=tuple(o.start for o in ordered),
            reach=tuple(accumulate((o.end for o in ordered), max)),
        )

    def __len__(self) -> int:
        return len(self.offers)

    def __iter__(self) -> Iterator[Offer]:
        return iter(self.offers)

    def first_match_linear(self, instant: time) -> Offer | None:
        """Earliest offer in stored order whose interval contains instant."""
        for offer in self.offers:
            if offer.contains(instant):
                return offer
        return None

    def first_match_bisect(self, instant: time) -> Offer | None:
        """Same result as first_match_linear in O(log n).

        Candidates are the prefix with ``start <= instant``. The first index
        whose running reach is ``>= instant`` is the first offer that ends at
        or after instant; if it lies inside the prefix it is the match.
        """
        limit = bisect_right(self.starts, instant)
        if limit == 0:
            return None
        pos = bisect_left(self.reach, instant, 0, limit)
        if pos < limit:
            return self.offers[pos]
        return None

    def overlapping_pairs(self) -> int:
        """Count pairs of offers in this series that share an instant."""
        count = 0
        for i, offer in enumerate(self.offers):
            for other in self.offers[i + 1:]:
                if other.start > offer.end:
                    break
                count += 1
        return count


class OfferIndex:
    """Read-only mapping of identifier -> OfferSeries."""

    __slots__ = ("_series", "_offer_count")

    def __init__(self, series: Mapping[str, OfferSeries]) -> None:
        self._series = MappingProxyType(dict(series))
        self._offer_count = sum(len(s) for s in self._series.values())

    @classmethod
    def empty(cls) -> OfferIndex:
        return cls({})

    @classmethod
    def from_offers(cls, offers: Iterable[Offer]) -> OfferIndex:
        """Group offers by identifier and sort each group by start time."""
        grouped: dict[str, list[Offer]] = {}
        for offer in offers:
            grouped.setdefault(offer.identifier, []).append(offer)
        return cls({ident: OfferSeries.from_offers(group) for ident, group in grouped.items()})

    # ------------------------------------------------------------------
    # Public accessors
    # ------------------------------------------------------------------

    def series_for(self, identifier: str) -> OfferSeries | None:
        return self._series.get(identifier)

    def offers_for(self, identifier: str) -> tuple[Offer, ...]:
        """Offers for an identifier in stored order (empty if unknown)."""
        series = self._series.get(identifier)
        return series.offers if series else ()

    @property
    def identifiers(self) -> tuple[str, ...]:
        return tuple(self._series.keys())

    @property
    def offer_count(self) -> int:
        return self._offer_count

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._series

    def __len__(self) -> int:
        return len(self._series)

    def __repr__(self) -> str:
        return f"OfferIndex(identifiers={len(self)}, offers={self._offer_count})"

    def summary(self) -> dict:
        """Inventory and quick health checks for operators.

        Overlapping pairs are legal; a high count flags data worth a look
        because the earliest-starting offer silently wins.
        """
        return {
            "identifiers_total": len(self._series),
            "offers_total": self._offer_count,
            "max_offers_per_identifier": max((len(s) for s in self._series.values()), default=0),
            "overlapping_pairs": sum(s.overlapping_pairs() for s in self._series.values()),
        }
