"""Sun-sign resolution from a birth date.

Only the month and day take part; the year is ignored. The resolver never
raises: a missing date falls back to Virgo and anything that cannot be read
as a month/day pair drops through every rule and lands on Aries.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Optional, Tuple, Union

from .constants import FALLBACK_SIGN, SIGN_BOUNDARIES, UNMATCHED_SIGN

logger = logging.getLogger(__name__)

BirthDate = Union[date, datetime, str, Tuple[int, int]]

_ISO_DATE = re.compile(r"^\s*(\d{1,4})-(\d{1,2})-(\d{1,2})")


def month_day(value: BirthDate) -> Optional[Tuple[int, int]]:
    """Extract ``(month, day)`` from the accepted birth date forms.

    No calendar validation happens here: ``(2, 31)`` comes back unchanged.
    """
    if isinstance(value, (date, datetime)):
        return value.month, value.day
    if isinstance(value, str):
        match = _ISO_DATE.match(value)
        if not match:
            return None
        return int(match.group(2)), int(match.group(3))
    if isinstance(value, (tuple, list)) and len(value) == 2:
        try:
            return int(value[0]), int(value[1])
        except (TypeError, ValueError):
            return None
    return None


def sign_from_month_day(month: int, day: int) -> int:
    for sign_id, (start_m, start_d, end_m, end_d) in enumerate(SIGN_BOUNDARIES):
        if (month == start_m and day >= start_d) or (month == end_m and day <= end_d):
            return sign_id
    return UNMATCHED_SIGN


def resolve_sign(value: Optional[BirthDate]) -> int:
    """Return the sign id (0=Aries … 11=Pisces) for a birth date."""
    if value is None or value == "":
        return FALLBACK_SIGN
    md = month_day(value)
    if md is None:
        logger.warning("Unreadable birth date %r; no sign rule applies", value)
        return UNMATCHED_SIGN
    return sign_from_month_day(*md)
