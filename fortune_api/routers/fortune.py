import logging

from fastapi import APIRouter, Body, HTTPException, Query

from ..schemas import (
    AdviceRequest,
    AdviceResponse,
    DailyFortuneResponse,
    LuckySummaryRequest,
    LuckySummaryResponse,
)
from ..services import fortune_service
from ..services.fortune_feed import FortuneSourceError
from ..services.llm_client import LLMUnavailableError
from ..services.lucky_attributes import direction_code, lucky_time_range
from ..services.lucky_colors import resolve_lucky_color

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/fortune", tags=["fortune"])


@router.get("", response_model=DailyFortuneResponse)
async def get_daily_fortune(astro_id: int = Query(5, ge=0, le=11)) -> DailyFortuneResponse:
    try:
        payload = await fortune_service.daily_fortune(astro_id)
    except FortuneSourceError as exc:
        logger.error("Daily fortune fetch failed for sign %s: %s", astro_id, exc)
        raise HTTPException(status_code=502, detail="FORTUNE_SOURCE_UNAVAILABLE") from exc

    daily = dict(payload["daily"])
    daily["lucky_direction_code"] = direction_code(daily.get("lucky_direction"))
    daily["lucky_time_range"] = list(lucky_time_range(daily.get("lucky_time")))
    daily["lucky_hex"] = resolve_lucky_color(daily.get("lucky_color"))
    return DailyFortuneResponse(date=payload["date"], sign=payload["sign"], daily=daily)


@router.post("/advice", response_model=AdviceResponse)
async def post_advice(req: AdviceRequest = Body(...)) -> AdviceResponse:
    try:
        text = await fortune_service.advice(
            req.overall.model_dump(),
            req.love.model_dump(),
            req.work.model_dump(),
            req.wealth.model_dump(),
            req.health,
        )
    except LLMUnavailableError as exc:
        logger.error("Advice generation failed: %s", exc)
        raise HTTPException(status_code=502, detail="ADVICE_UNAVAILABLE") from exc
    return AdviceResponse(advice=text)


@router.post("/lucky-summary", response_model=LuckySummaryResponse)
async def post_lucky_summary(req: LuckySummaryRequest = Body(...)) -> LuckySummaryResponse:
    try:
        text = await fortune_service.lucky_summary(req.name, req.match_score, req.aspects)
    except LLMUnavailableError as exc:
        logger.error("Lucky summary generation failed: %s", exc)
        raise HTTPException(status_code=502, detail="SUMMARY_UNAVAILABLE") from exc
    return LuckySummaryResponse(summary=text)
