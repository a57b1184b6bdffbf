SIGN_NAMES = ["Aries","Taurus","Gemini","Cancer","Leo","Virgo","Libra","Scorpio","Sagittarius","Capricorn","Aquarius","Pisces"]

SIGN_NAMES_ZH = ["牡羊座","金牛座","雙子座","巨蟹座","獅子座","處女座","天秤座","天蠍座","射手座","魔羯座","水瓶座","雙魚座"]

SIGN_GLYPHS = ["♈","♉","♊","♋","♌","♍","♎","♏","♐","♑","♒","♓"]

# Used whenever a birth date is missing entirely.
FALLBACK_SIGN = 5  # Virgo

# Last resort when no boundary rule matches.
UNMATCHED_SIGN = 0

# (start_month, start_day, end_month, end_day), indexed by sign id.
# Capricorn wraps the year end.
SIGN_BOUNDARIES = [
    (3, 21, 4, 19),
    (4, 20, 5, 20),
    (5, 21, 6, 21),
    (6, 22, 7, 22),
    (7, 23, 8, 22),
    (8, 23, 9, 22),
    (9, 23, 10, 23),
    (10, 24, 11, 22),
    (11, 23, 12, 21),
    (12, 22, 1, 19),
    (1, 20, 2, 18),
    (2, 19, 3, 20),
]


def is_sign_id(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < 12


def sign_label(sign_id: int) -> dict:
    """English name, Chinese name and glyph for a sign id (Virgo for unknown ids)."""
    idx = sign_id if is_sign_id(sign_id) else FALLBACK_SIGN
    return {
        "sign_id": idx,
        "name": SIGN_NAMES[idx],
        "name_zh": SIGN_NAMES_ZH[idx],
        "glyph": SIGN_GLYPHS[idx],
    }


def source_sign_number(sign_id: int) -> int:
    # The horoscope feed numbers its signs one ahead of ours.
    return (sign_id + 1) % 12
