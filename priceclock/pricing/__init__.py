"""Point-in-time price lookups."""

from priceclock.pricing.engine import LookupStrategy, price_at

__all__ = ["LookupStrategy", "price_at"]
