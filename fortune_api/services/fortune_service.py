"""
Daily horoscope service.

Fetches the feed page for a sign, parses it, asks the text generator for
lucky items and keeps the result for the rest of the day. The farmer's
almanac page is cached per day the same way. Advice and benefactor
summaries are generated on demand.
"""

import asyncio
import logging
import os
from datetime import date
from typing import Any, Dict, Iterable, MutableMapping, Optional, Tuple

from .almanac_feed import almanac_url, fetch_almanac_page, parse_almanac_page
from .constants import FALLBACK_SIGN, is_sign_id, sign_label
from .fortune_feed import fetch_fortune_page, parse_fortune_page
from .llm_client import LLMUnavailableError, generate_text
from .prompts import (
    FALLBACK_LUCKY_ITEMS,
    advice_prompt,
    lucky_items_prompt,
    lucky_summary_prompt,
    parse_lucky_items,
)

logger = logging.getLogger(__name__)

# (ISO date, sign id) -> payload; entries from earlier days are dropped on write.
_DAILY_CACHE: MutableMapping[Tuple[str, int], Dict[str, Any]] = {}
_ALMANAC_CACHE: MutableMapping[str, Dict[str, Any]] = {}


def _cache_enabled() -> bool:
    return os.getenv("FORTUNE_CACHE_ENABLED", "true").lower() == "true"


def clear_cache() -> None:
    _DAILY_CACHE.clear()
    _ALMANAC_CACHE.clear()


def _store(key: Tuple[str, int], payload: Dict[str, Any]) -> None:
    for stale in [k for k in _DAILY_CACHE if k[0] != key[0]]:
        del _DAILY_CACHE[stale]
    _DAILY_CACHE[key] = payload


async def lucky_items(color: str, direction: str, constellation: str) -> list:
    try:
        text = await generate_text(lucky_items_prompt(color, direction, constellation), max_tokens=120)
    except LLMUnavailableError as exc:
        logger.warning("Lucky items generation failed: %s", exc)
        return list(FALLBACK_LUCKY_ITEMS)
    return parse_lucky_items(text)


async def daily_fortune(sign_id: Optional[int], today: Optional[date] = None) -> Dict[str, Any]:
    """Today's horoscope for one sign, including generated lucky items.

    Raises FortuneSourceError when the feed page cannot be fetched.
    """
    if not is_sign_id(sign_id):
        logger.warning("Unknown sign id %r; using the fallback sign", sign_id)
        sign_id = FALLBACK_SIGN
    today = today or date.today()
    key = (today.isoformat(), sign_id)

    if _cache_enabled() and key in _DAILY_CACHE:
        logger.info("Daily fortune cache hit for sign %s", sign_id)
        return _DAILY_CACHE[key]

    html = await asyncio.to_thread(fetch_fortune_page, sign_id)
    daily = parse_fortune_page(html)
    daily["lucky_items"] = await lucky_items(
        daily["lucky_color"], daily["lucky_direction"], daily["lucky_constellation"]
    )

    payload = {"date": today.isoformat(), "sign": sign_label(sign_id), "daily": daily}
    if _cache_enabled():
        _store(key, payload)
    return payload


async def advice(overall, love, work, wealth, health: str = "良好") -> str:
    return await generate_text(advice_prompt(overall, love, work, wealth, health), max_tokens=300)


async def lucky_summary(name: str, match_score: int, aspects: Iterable[str]) -> str:
    return await generate_text(lucky_summary_prompt(name, match_score, aspects), max_tokens=200)


async def daily_almanac(today: Optional[date] = None) -> Dict[str, Any]:
    """The farmer's almanac entries for one day.

    Raises AlmanacSourceError when the almanac page cannot be fetched.
    """
    today = today or date.today()
    key = today.isoformat()
    if _cache_enabled() and key in _ALMANAC_CACHE:
        logger.info("Almanac cache hit for %s", key)
        return _ALMANAC_CACHE[key]

    html = await asyncio.to_thread(fetch_almanac_page, today)
    payload = {"date": key, **parse_almanac_page(html), "source": almanac_url(today)}
    if _cache_enabled():
        _ALMANAC_CACHE.clear()
        _ALMANAC_CACHE[key] = payload
    return payload
