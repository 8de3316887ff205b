"""Process-wide holder of the active OfferIndex.

Readers take ``current()`` without locking: it is a single attribute read of
an immutable snapshot, so a reader sees either the old index or the new one
in full. Writers publish fully built indexes through ``replace()``, which
only serializes the swap itself.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone

from priceclock.catalog.index import OfferIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogState:
    """One published snapshot plus its provenance."""

    index: OfferIndex
    generation: int
    replaced_at: datetime | None = None


class Catalog:
    """Atomic swap-on-replace cell for the current OfferIndex."""

    def __init__(self, index: OfferIndex | None = None) -> None:
        self._state = CatalogState(index=index or OfferIndex.empty(), generation=0)
        self._write_lock = threading.Lock()

    def current(self) -> OfferIndex:
        """Return the active index. Never blocks, never fails."""
        return self._state.index

    @property
    def state(self) -> CatalogState:
        return self._state

    @property
    def generation(self) -> int:
        return self._state.generation

    def replace(self, new_index: OfferIndex) -> CatalogState:
        """Install new_index as current; last writer wins.

        Args:
            new_index: A completely built index

        Returns:
            The published CatalogState
        """
        with self._write_lock:
            state = CatalogState(
                index=new_index,
                generation=self._state.generation + 1,
                replaced_at=datetime.now(timezone.utc),
            )
            self._state = state

        logger.info(
            f"Catalog generation {state.generation} published "
            f"({new_index.offer_count} offers, {len(new_index)} identifiers)"
        )
        return state


# Singleton instance (lazy-loaded)
_catalog: Catalog | None = None
_catalog_lock = threading.Lock()


def get_catalog() -> Catalog:
    """Get or create the process-wide Catalog."""
    global _catalog
    if _catalog is None:
        with _catalog_lock:
            if _catalog is None:
                _catalog = Catalog()
    return _catalog


def reset_catalog() -> Catalog:
    """Discard the process-wide Catalog and start from an empty one."""
    global _catalog
    with _catalog_lock:
        _catalog = Catalog()
    return _catalog
