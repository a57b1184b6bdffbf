from pydantic import BaseModel, Field


class AlmanacResponse(BaseModel):
    date: str
    solar: str = ""
    lunar: str = ""
    solar_term: str = ""
    yi: str = Field("", description="Suitable activities (宜), joined with 、")
    ji: str = Field("", description="Activities to avoid (忌), joined with 、")
    chong: str = ""  # 沖
    sha: str = ""  # 煞
    lucky_hours: str = ""  # 吉時
    bad_gods: str = ""  # 凶煞
    direction: str = ""
    source: str = ""
