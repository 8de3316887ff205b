"""Price routes for the PriceClock API.

Routes:
- GET  /price         - Price for a SKU at a time ({"price": ...})
- POST /price/upload  - Replace the whole offer table from an uploaded file

Handlers are plain ``def`` so FastAPI runs them in its thread pool; a long
upload build never blocks concurrent price queries, which keep reading the
previous index until the new one is published.
"""

from __future__ import annotations

from pathlib import PurePath

import structlog
from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile

from priceclock.config import AppConfig
from priceclock.errors import ValidationFailed
from priceclock.ingestion.sources import split_payload
from priceclock.service import PriceService
from priceclock.web.dependencies import get_app_config, get_price_service
from priceclock.web.models import PriceResponse, UploadResponse

logger = structlog.get_logger()

# Create router with prices tag
router = APIRouter(prefix="/price", tags=["prices"])


# ============================================================================
# Price Routes
# ============================================================================


@router.get("", response_model=PriceResponse)
def get_price(
    skuid: str = Query(..., description="SKU identifier"),
    time: str | None = Query(default=None, description="Time in HH:mm format"),
    service: PriceService = Depends(get_price_service),
):
    """Get the price for a SKU at a specific time.

    A missing time yields "NOT SET"; a malformed one is rejected with 400.
    """
    try:
        result = service.get_price(skuid, time)
    except ValidationFailed as e:
        logger.info("price_query_rejected", field=e.field, reason=e.message)
        raise HTTPException(status_code=400, detail=str(e))

    return PriceResponse.from_result(result)


@router.post("/upload", response_model=UploadResponse)
def upload_prices(
    file: UploadFile = File(...),
    service: PriceService = Depends(get_price_service),
    config: AppConfig = Depends(get_app_config),
):
    """Replace all price offers from an uploaded pipe-delimited file.

    The batch is all-or-nothing: any bad row rejects the upload and the
    previously active offers stay in place.
    """
    filename = file.filename or ""
    suffix = PurePath(filename).suffix.lower()
    if filename and suffix not in config.ingestion.allowed_suffixes:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid file type. Expected one of {list(config.ingestion.allowed_suffixes)}",
        )

    limit = config.ingestion.max_upload_bytes
    payload = file.file.read(limit + 1)
    if not payload:
        raise HTTPException(status_code=400, detail="File is required")
    if len(payload) > limit:
        raise HTTPException(status_code=400, detail=f"File exceeds {limit} bytes")

    try:
        lines = split_payload(payload)
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="File must be UTF-8 text")

    result = service.replace(lines)
    if not result.success:
        logger.warning("price_upload_rejected", filename=filename, **(result.error_details or {}))
        raise HTTPException(
            status_code=400,
            detail={"message": result.message, **(result.error_details or {})},
        )

    logger.info(
        "price_upload_published",
        filename=filename,
        offers=result.offers_loaded,
        identifiers=result.identifiers_loaded,
        generation=result.generation,
    )
    return UploadResponse(
        offers_loaded=result.offers_loaded,
        identifiers_loaded=result.identifiers_loaded,
        generation=result.generation,
        message=result.message,
    )
