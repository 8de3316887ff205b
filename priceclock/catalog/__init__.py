"""Offer index and the process-wide catalog that publishes it."""

from priceclock.catalog.holder import Catalog, get_catalog, reset_catalog
from priceclock.catalog.index import OfferIndex, OfferSeries

__all__ = ["Catalog", "OfferIndex", "OfferSeries", "get_catalog", "reset_catalog"]
