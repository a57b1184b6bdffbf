from datetime import date

from fastapi import APIRouter, Body

from ..schemas import (
    DailyColorsRequest,
    DailyColorsResponse,
    DailyProfileRequest,
    DailyProfileResponse,
    SignOut,
)
from ..services.constants import sign_label
from ..services.daily_profile import compute_daily_profile
from ..services.lucky_colors import DailyColorProfile, daily_colors
from .compatibility import match_out, to_person

router = APIRouter(prefix="/v1", tags=["daily"])


def colors_out(colors: DailyColorProfile) -> DailyColorsResponse:
    return DailyColorsResponse(
        lucky_label=colors.lucky_label,
        lucky_hex=colors.lucky_hex,
        lucky_name=colors.lucky_name,
        avoid_hex=colors.avoid_hex,
        avoid_name=colors.avoid_name,
    )


@router.post("/colors/daily", response_model=DailyColorsResponse)
def post_daily_colors(
    req: DailyColorsRequest = Body(..., example={"lucky_label": "紫色", "date": "2024-01-01"})
) -> DailyColorsResponse:
    return colors_out(daily_colors(req.lucky_label, req.date or date.today(), req.aux_key))


@router.post("/daily/profile", response_model=DailyProfileResponse)
def post_daily_profile(
    req: DailyProfileRequest = Body(
        ...,
        example={
            "self": {"id": "me", "display_name": "我", "birth_date": "1990-04-15"},
            "candidates": [
                {"id": 1, "display_name": "阿明", "birth_date": "2000-11-30"},
                {"id": 2, "display_name": "小美", "birth_date": "1995-06-01"},
            ],
            "lucky_label": "紫色",
            "date": "2024-01-01",
        },
    )
) -> DailyProfileResponse:
    day = req.date or date.today()
    profile = compute_daily_profile(
        to_person(req.me),
        [to_person(c) for c in req.candidates],
        req.lucky_label,
        day,
        req.aux_key,
    )
    return DailyProfileResponse(
        date=day,
        me=req.me,
        sign=SignOut(**sign_label(profile.sign_id)),
        best_match=match_out(profile.best_match) if profile.best_match else None,
        colors=colors_out(profile.colors),
    )
