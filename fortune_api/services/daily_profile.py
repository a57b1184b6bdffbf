"""Daily profile: sign, today's benefactor and the day's color pair."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from .compatibility_engine import BestMatch, Person, best_match
from .lucky_colors import DailyColorProfile, daily_colors
from .zodiac import resolve_sign

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DailyProfile:
    self: Person
    sign_id: int
    best_match: Optional[BestMatch]
    colors: DailyColorProfile


def compute_daily_profile(
    me: Person,
    candidates: Iterable[Person],
    lucky_label: Optional[str],
    day: date,
    aux_key: Optional[str] = None,
) -> DailyProfile:
    if not me.birth_date:
        logger.warning("No birth date for %s; using the fallback sign", me.id)
    sign_id = resolve_sign(me.birth_date)
    return DailyProfile(
        self=me,
        sign_id=sign_id,
        best_match=best_match(sign_id, candidates),
        colors=daily_colors(lucky_label, day, aux_key),
    )
