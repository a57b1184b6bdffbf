import logging
from datetime import date as Date
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from ..schemas import AlmanacResponse
from ..services import fortune_service
from ..services.almanac_feed import AlmanacSourceError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/almanac", tags=["almanac"])


@router.get("/today", response_model=AlmanacResponse)
async def get_almanac_today(
    date: Optional[Date] = Query(None, description="Defaults to the server's local date"),
) -> AlmanacResponse:
    try:
        payload = await fortune_service.daily_almanac(date)
    except AlmanacSourceError as exc:
        logger.error("Almanac fetch failed: %s", exc)
        raise HTTPException(status_code=502, detail="ALMANAC_SOURCE_UNAVAILABLE") from exc
    return AlmanacResponse(**payload)
