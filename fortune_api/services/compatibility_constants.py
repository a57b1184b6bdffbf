"""
Compatibility Constants - Shared Data

Sign-to-sign affinity scores used by the compatibility engine. Rows are the
person asking, columns the other person; the matrix is deliberately not
symmetric, so always look up ``COMPATIBILITY_TABLE[self][other]``.
"""

from typing import Tuple

# Score used when a pair is missing from the table.
DEFAULT_SCORE = 70

COMPATIBILITY_TABLE: Tuple[Tuple[int, ...], ...] = (
    (90, 85, 95, 70, 80, 75, 60, 65, 88, 92, 77, 85),  # Aries
    (80, 90, 75, 85, 95, 88, 77, 70, 65, 82, 68, 78),  # Taurus
    (95, 80, 90, 88, 70, 60, 85, 75, 95, 77, 92, 85),  # Gemini
    (65, 88, 70, 90, 80, 95, 60, 85, 75, 78, 68, 92),  # Cancer
    (82, 95, 70, 88, 90, 80, 85, 60, 75, 65, 95, 77),  # Leo
    (75, 88, 95, 90, 65, 92, 80, 85, 60, 78, 68, 95),  # Virgo
    (60, 70, 85, 75, 88, 95, 90, 65, 82, 68, 95, 77),  # Libra
    (85, 65, 60, 95, 75, 85, 77, 90, 95, 80, 68, 78),  # Scorpio
    (88, 75, 95, 70, 65, 60, 85, 95, 90, 77, 82, 92),  # Sagittarius
    (92, 82, 77, 78, 65, 70, 95, 90, 75, 88, 85, 80),  # Capricorn
    (95, 88, 92, 85, 78, 80, 90, 70, 75, 82, 77, 95),  # Aquarius
    (85, 80, 95, 92, 88, 77, 75, 70, 95, 65, 90, 85),  # Pisces
)
