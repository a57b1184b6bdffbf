"""Daily horoscope feed: fetch the sign page and pull out the daily values.

The page marks every value with a stable element id, so parsing only needs
the text (and, for the star ratings, the style attribute) of those elements.
"""

from __future__ import annotations

import logging
import os
import re
from typing import Optional, Tuple

import requests

from .constants import source_sign_number
from .page_tree import Element, parse_html

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_URL = "https://m.click108.com.tw/astro/index.php"

NO_VALUE = "無"
DEFAULT_STARS = 3
MAX_STARS = 5

# area -> (score element id, text element id, label prefix to strip)
FORTUNE_AREAS = {
    "overall": ("astroDailyScore_all", "astroDailyData_all", "整體運"),
    "love": ("astroDailyScore_love", "astroDailyData_love", "愛情運"),
    "work": ("astroDailyScore_career", "astroDailyData_career", "事業運"),
    "wealth": ("astroDailyScore_money", "astroDailyData_money", "財運"),
}

_LUCKY_FIELDS = {
    "lucky_number": ("astroDailyData_luckyNum", "幸運數字："),
    "lucky_direction": ("astroDailyData_luckyDir", "開運方位："),
    "lucky_constellation": ("astroDailyData_vip", "貴人星座："),
}
_LUCKY_TC = ("astroDailyData_luckyTC", "吉時吉色：")

_SCORE_IMAGE = re.compile(r"score_\w+(\d+)\.png")
_TRAILING_CJK = re.compile(r"[\u4e00-\u9fa5]+$")


class FortuneSourceError(RuntimeError):
    """Raised when the horoscope page cannot be fetched."""


def _text_of(page: Element, el_id: str) -> str:
    el = page.find_id(el_id)
    return el.text() if el is not None else ""


def _style_of(page: Element, el_id: str) -> str:
    el = page.find_id(el_id)
    return el.get("style") if el is not None else ""


def score_from_style(style: Optional[str]) -> int:
    """Star count encoded in a ``score_xxxN.png`` background image."""
    match = _SCORE_IMAGE.search(style or "")
    score = int(match.group(1)) if match else DEFAULT_STARS
    return min(score, MAX_STARS)


def star_string(score: int) -> str:
    """Filled stars only; clients draw the empty ones."""
    return "★" * max(0, min(int(score), MAX_STARS))


def split_time_and_color(text: Optional[str]) -> Tuple[str, str]:
    """Split the '吉時吉色' value into (lucky time, lucky color).

    A value that is only a color name leaves the lucky time empty.
    """
    cleaned = (text or "").replace("\u00a0", " ").strip()
    if not cleaned:
        return NO_VALUE, NO_VALUE
    parts = cleaned.split()
    if len(parts) >= 2:
        return parts[0], parts[1]
    match = _TRAILING_CJK.search(cleaned)
    if match:
        return cleaned[: match.start()].strip(), match.group(0)
    return NO_VALUE, NO_VALUE


def parse_fortune_page(html: str) -> dict:
    page = parse_html(html)

    data = {}
    for field, (el_id, label) in _LUCKY_FIELDS.items():
        data[field] = _text_of(page, el_id).replace(label, "", 1).strip()

    tc_id, tc_label = _LUCKY_TC
    data["lucky_time"], data["lucky_color"] = split_time_and_color(
        _text_of(page, tc_id).replace(tc_label, "", 1)
    )

    fortune = {}
    for area, (score_id, text_id, label) in FORTUNE_AREAS.items():
        score = score_from_style(_style_of(page, score_id))
        fortune[area] = {
            "score": score,
            "stars": star_string(score),
            "text": _text_of(page, text_id).replace(label, "", 1).strip(),
        }
    data["fortune"] = fortune
    return data


def fetch_fortune_page(sign_id: int) -> str:
    base = os.getenv("FORTUNE_SOURCE_URL", DEFAULT_SOURCE_URL)
    timeout = float(os.getenv("FORTUNE_FETCH_TIMEOUT", "15"))
    params = {"astroNum": source_sign_number(sign_id)}
    logger.info("Fetching daily horoscope page for sign %s", sign_id)
    try:
        resp = requests.get(base, params=params, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise FortuneSourceError(f"Horoscope page unavailable: {exc}") from exc
    if not resp.encoding or resp.encoding.lower() == "iso-8859-1":
        resp.encoding = resp.apparent_encoding
    return resp.text
