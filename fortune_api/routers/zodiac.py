from typing import Optional

from fastapi import APIRouter, Query

from ..schemas import SignOut
from ..services.constants import sign_label
from ..services.zodiac import resolve_sign

router = APIRouter(prefix="/v1/zodiac", tags=["zodiac"])


@router.get("/sign", response_model=SignOut)
def get_sign(date: Optional[str] = Query(None, description="Birth date, YYYY-MM-DD")) -> SignOut:
    return SignOut(**sign_label(resolve_sign(date)))
