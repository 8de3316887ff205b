"""Health check API routes.

Reports which catalog generation is being served.
"""

from fastapi import APIRouter, Depends, status

from priceclock.service import PriceService
from priceclock.web.dependencies import get_price_service
from priceclock.web.models import HealthResponse

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("", status_code=status.HTTP_200_OK, response_model=HealthResponse)
def health_check(service: PriceService = Depends(get_price_service)):
    """Check application health."""
    state = service.catalog.state
    return HealthResponse(
        status="ok",
        generation=state.generation,
        identifiers=len(state.index),
        offers=state.index.offer_count,
        replaced_at=state.replaced_at.isoformat() if state.replaced_at else None,
    )
