from datetime import date as Date
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from .people import PersonIn, SignOut
from .compatibility import MatchOut


class DailyColorsRequest(BaseModel):
    lucky_label: Optional[str] = None
    date: Optional[Date] = None
    aux_key: Optional[str] = None


class DailyColorsResponse(BaseModel):
    lucky_label: str
    lucky_hex: str
    lucky_name: Optional[str] = None
    avoid_hex: str
    avoid_name: Optional[str] = None


class DailyProfileRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    me: PersonIn = Field(alias="self")
    candidates: List[PersonIn] = Field(default_factory=list)
    lucky_label: Optional[str] = None
    date: Optional[Date] = None
    aux_key: Optional[str] = None


class DailyProfileResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: Date
    me: PersonIn = Field(alias="self")
    sign: SignOut
    best_match: Optional[MatchOut] = None
    colors: DailyColorsResponse
