"""PriceClock - point-in-time price lookups over time-bounded offers."""

__version__ = "0.1.0"
