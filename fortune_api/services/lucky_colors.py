"""Lucky and avoid colors for a day.

The lucky color comes from a free-text label published by the horoscope
feed (usually a Chinese color name). The avoid color is drawn from a fixed
palette, minus the lucky color, with an index derived from the calendar day
so that it stays the same all day without any stored state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

logger = logging.getLogger(__name__)

NEUTRAL_GRAY = "#E0E0E0"

LUCKY_COLOR_BY_NAME = {
    "黃色": "#FDBA22",
    "橘色": "#FFA726",
    "淺藍": "#CDE7FF",
    "檸檬黃": "#F5D44B",
    "紫色": "#9C7CFF",
    "綠色": "#2E7D32",
    "粉紅": "#F8BBD0",
}

# Checked in order; the first keyword contained in the label wins.
LUCKY_COLOR_KEYWORDS = (
    ("黃", "#FDBA22"),
    ("橘", "#FFA726"),
    ("藍", "#CDE7FF"),
    ("紫", "#9C7CFF"),
    ("綠", "#2E7D32"),
    ("紅", "#E57373"),
    ("粉", "#F8BBD0"),
)

AVOID_PALETTE = (
    "#FFA726",
    "#CDE7FF",
    "#F5D44B",
    "#9C7CFF",
    "#2E7D32",
    "#F8BBD0",
    "#E57373",
)

COLOR_NAME_BY_HEX = {v: k for k, v in LUCKY_COLOR_BY_NAME.items()}
COLOR_NAME_BY_HEX["#E57373"] = "紅色"

_INT32 = 1 << 32


def _to_int32(n: int) -> int:
    n &= _INT32 - 1
    return n - _INT32 if n >= 1 << 31 else n


def daily_hash(text: str) -> int:
    """Rolling ``h = c + ((h << 5) - h)`` hash with signed 32-bit wrap.

    Characters are consumed as UTF-16 code units so labels outside the BMP
    hash the same way a browser would hash them.
    """
    h = 0
    raw = text.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(raw), 2):
        code = raw[i] | (raw[i + 1] << 8)
        h = _to_int32(code + ((h << 5) - h))
    return h


def day_key(day: date, aux_key: Optional[str] = None) -> str:
    key = f"{day.year}-{day.month}-{day.day}"
    if aux_key:
        key = f"{key}-{aux_key}"
    return key


def _fallback_color(label: str) -> str:
    palette = list(LUCKY_COLOR_BY_NAME.values())
    return palette[abs(daily_hash(label)) % len(palette)]


def resolve_lucky_color(label: Optional[str]) -> str:
    """Map a lucky color label to a hex color.

    Empty labels give neutral gray, canonical names map exactly, then the
    keyword table is tried in order. Unrecognized labels get a canonical
    color picked by hashing the label, so the same label always renders the
    same color.
    """
    if not label:
        return NEUTRAL_GRAY
    if label in LUCKY_COLOR_BY_NAME:
        return LUCKY_COLOR_BY_NAME[label]
    for keyword, hex_value in LUCKY_COLOR_KEYWORDS:
        if keyword in label:
            return hex_value
    color = _fallback_color(label)
    logger.debug("Unmapped lucky color label %r; using %s", label, color)
    return color


def resolve_avoid_color(
    lucky_label: Optional[str],
    day: date,
    aux_key: Optional[str] = None,
    palette: Sequence[str] = AVOID_PALETTE,
) -> str:
    lucky_hex = resolve_lucky_color(lucky_label)
    candidates = [c for c in palette if c != lucky_hex]
    if not candidates:
        return NEUTRAL_GRAY
    index = abs(daily_hash(day_key(day, aux_key))) % len(candidates)
    return candidates[index]


def color_name(hex_value: str) -> Optional[str]:
    return COLOR_NAME_BY_HEX.get((hex_value or "").upper())


@dataclass(frozen=True)
class DailyColorProfile:
    lucky_label: str
    lucky_hex: str
    avoid_hex: str

    @property
    def lucky_name(self) -> Optional[str]:
        return color_name(self.lucky_hex)

    @property
    def avoid_name(self) -> Optional[str]:
        return color_name(self.avoid_hex)


def daily_colors(lucky_label: Optional[str], day: date, aux_key: Optional[str] = None) -> DailyColorProfile:
    return DailyColorProfile(
        lucky_label=lucky_label or "",
        lucky_hex=resolve_lucky_color(lucky_label),
        avoid_hex=resolve_avoid_color(lucky_label, day, aux_key),
    )
