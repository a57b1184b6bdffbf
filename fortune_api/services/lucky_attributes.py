import re
from typing import Optional, Tuple

DIRECTION_NAMES = {
    "N": "北方",
    "NE": "東北方",
    "E": "東方",
    "SE": "東南方",
    "S": "南方",
    "SW": "西南方",
    "W": "西方",
    "NW": "西北方",
}

# Two-character directions must be tested before the single ones they contain.
_DIRECTION_KEYWORDS = (
    ("東北", "NE"),
    ("東南", "SE"),
    ("西北", "NW"),
    ("西南", "SW"),
    ("北", "N"),
    ("南", "S"),
    ("東", "E"),
    ("西", "W"),
)

DEFAULT_DIRECTION = "NE"


def direction_code(label: Optional[str]) -> str:
    """Compass code for a lucky direction label such as '開運方位：東南方'."""
    text = label or ""
    for keyword, code in _DIRECTION_KEYWORDS:
        if keyword in text:
            return code
    return DEFAULT_DIRECTION


def _time_to_ratio(text: str) -> Optional[float]:
    match = re.fullmatch(r"\s*(\d{1,2})(?::(\d{1,2}))?\s*", text)
    if not match:
        return None
    hours = int(match.group(1))
    minutes = int(match.group(2) or 0)
    return (hours * 60 + minutes) / (24 * 60)


def lucky_time_range(lucky_time: Optional[str]) -> Tuple[float, float]:
    """Parse 'HH:MM-HH:MM' into start/end fractions of the day.

    Anything that is not exactly two parseable times gives (0.0, 0.0).
    """
    if not lucky_time:
        return (0.0, 0.0)
    parts = re.split(r"[-–]", lucky_time)
    if len(parts) != 2:
        return (0.0, 0.0)
    start = _time_to_ratio(parts[0])
    end = _time_to_ratio(parts[1])
    if start is None or end is None:
        return (0.0, 0.0)
    return (start, end)
