from pydantic import BaseModel
from typing import Optional, Union


class PersonIn(BaseModel):
    id: Union[int, str]
    display_name: str = ""
    birth_date: Optional[str] = None  # YYYY-MM-DD


class SignOut(BaseModel):
    sign_id: int
    name: str
    name_zh: str
    glyph: str
