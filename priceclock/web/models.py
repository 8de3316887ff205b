"""Shared Pydantic models for the PriceClock web API.

Usage:
    from priceclock.web.models import PriceResponse

    @router.get("/price", response_model=PriceResponse)
    async def get_price(...):
        ...
"""

from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel

from priceclock.models import Priced, PriceResult

NOT_SET = "NOT SET"


# ============================================================================
# Price Query Models
# ============================================================================


class PriceResponse(BaseModel):
    """Response for GET /price.

    - If price found: {"price": 101.0}
    - If price not found: {"price": "NOT SET"}
    """

    price: Union[float, Literal["NOT SET"]]

    @classmethod
    def from_result(cls, result: PriceResult) -> PriceResponse:
        if isinstance(result, Priced):
            return cls(price=float(result.value))
        return cls(price=NOT_SET)


# ============================================================================
# Upload Models
# ============================================================================


class UploadResponse(BaseModel):
    """Response for a successful POST /price/upload."""

    status: Literal["ok"] = "ok"
    offers_loaded: int
    identifiers_loaded: int
    generation: int
    message: str


class HealthResponse(BaseModel):
    """Response for GET /health."""

    status: str
    generation: int
    identifiers: int
    offers: int
    replaced_at: Optional[str] = None
