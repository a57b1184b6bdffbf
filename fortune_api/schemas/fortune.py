from pydantic import BaseModel, Field
from typing import Dict, List
from .people import SignOut


class AreaFortune(BaseModel):
    score: int = 3
    stars: str = ""
    text: str = ""


class DailyFortune(BaseModel):
    lucky_number: str = ""
    lucky_direction: str = ""
    lucky_direction_code: str = "NE"
    lucky_time: str = ""
    lucky_time_range: List[float] = Field(default_factory=lambda: [0.0, 0.0])
    lucky_color: str = ""
    lucky_hex: str = ""
    lucky_constellation: str = ""
    lucky_items: List[str] = Field(default_factory=list)
    fortune: Dict[str, AreaFortune] = Field(default_factory=dict)


class DailyFortuneResponse(BaseModel):
    date: str
    sign: SignOut
    daily: DailyFortune


class AdviceRequest(BaseModel):
    overall: AreaFortune
    love: AreaFortune
    work: AreaFortune
    wealth: AreaFortune
    health: str = "良好"


class AdviceResponse(BaseModel):
    advice: str


class LuckySummaryRequest(BaseModel):
    name: str = Field(min_length=1)
    match_score: int = Field(gt=0, le=100)
    aspects: List[str] = Field(min_length=1)


class LuckySummaryResponse(BaseModel):
    summary: str
