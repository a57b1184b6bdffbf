from pydantic import BaseModel, Field
from typing import List, Optional
from .people import PersonIn, SignOut


class CompatibilityScoreResponse(BaseModel):
    self_sign: SignOut
    other_sign: SignOut
    score: int


class BestMatchRequest(BaseModel):
    self_birth_date: Optional[str] = None
    candidates: List[PersonIn] = Field(default_factory=list)


class MatchOut(BaseModel):
    person: PersonIn
    sign: SignOut
    score: int


class BestMatchResponse(BaseModel):
    self_sign: SignOut
    best_match: Optional[MatchOut] = None
