from fastapi import APIRouter, Body, Query

from ..schemas import (
    CompatibilityScoreResponse,
    BestMatchRequest,
    BestMatchResponse,
    MatchOut,
    PersonIn,
    SignOut,
)
from ..services.compatibility_engine import BestMatch, Person, best_match, score_of
from ..services.constants import sign_label
from ..services.zodiac import resolve_sign

router = APIRouter(prefix="/v1/compatibility", tags=["compatibility"])


def to_person(p: PersonIn) -> Person:
    return Person(id=p.id, display_name=p.display_name, birth_date=p.birth_date)


def match_out(match: BestMatch) -> MatchOut:
    person = match.person
    return MatchOut(
        person=PersonIn(id=person.id, display_name=person.display_name, birth_date=person.birth_date),
        sign=SignOut(**sign_label(match.sign_id)),
        score=match.score,
    )


@router.get("/score", response_model=CompatibilityScoreResponse)
def get_score(
    self_sign: int = Query(..., ge=0, le=11),
    other_sign: int = Query(..., ge=0, le=11),
) -> CompatibilityScoreResponse:
    return CompatibilityScoreResponse(
        self_sign=SignOut(**sign_label(self_sign)),
        other_sign=SignOut(**sign_label(other_sign)),
        score=score_of(self_sign, other_sign),
    )


@router.post("/best-match", response_model=BestMatchResponse)
def post_best_match(
    req: BestMatchRequest = Body(
        ...,
        example={
            "self_birth_date": "1990-04-15",
            "candidates": [
                {"id": 1, "display_name": "阿明", "birth_date": "2000-11-30"},
                {"id": 2, "display_name": "小美", "birth_date": "1995-06-01"},
            ],
        },
    )
) -> BestMatchResponse:
    my_sign = resolve_sign(req.self_birth_date)
    match = best_match(my_sign, [to_person(c) for c in req.candidates])
    return BestMatchResponse(
        self_sign=SignOut(**sign_label(my_sign)),
        best_match=match_out(match) if match else None,
    )
