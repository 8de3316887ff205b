"""Shared dependencies for PriceClock web routes.

Dependencies are injected using FastAPI's Depends() system, so tests can
swap them through ``app.dependency_overrides``.

Usage:
    from fastapi import Depends
    from priceclock.web.dependencies import get_price_service

    @router.get("/price")
    def get_price(service: PriceService = Depends(get_price_service)):
        ...
"""

from __future__ import annotations

from priceclock.config import AppConfig, get_config
from priceclock.service import PriceService

# Global singleton for the service
_service: PriceService | None = None


def get_price_service() -> PriceService:
    """Get the PriceService bound to the process-wide catalog.

    This is a singleton: every request reads and replaces the same catalog.
    """
    global _service
    if _service is None:
        _service = PriceService()
    return _service


def get_app_config() -> AppConfig:
    return get_config()
