from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional

from .compatibility_constants import COMPATIBILITY_TABLE, DEFAULT_SCORE
from .zodiac import BirthDate, resolve_sign


@dataclass(frozen=True)
class Person:
    id: Any
    display_name: str
    birth_date: Optional[BirthDate] = None


@dataclass(frozen=True)
class BestMatch:
    person: Person
    sign_id: int
    score: int


def score_of(self_sign: int, other_sign: int) -> int:
    """Affinity of ``self_sign`` towards ``other_sign`` (direction matters)."""
    try:
        if self_sign < 0 or other_sign < 0:
            return DEFAULT_SCORE
        return COMPATIBILITY_TABLE[self_sign][other_sign]
    except (IndexError, TypeError):
        return DEFAULT_SCORE


def score_candidates(self_sign: int, candidates: Iterable[Person]) -> list[dict]:
    """Score every candidate that has a birth date, preserving input order."""
    res = []
    for person in candidates:
        if not person.birth_date:
            continue
        their_sign = resolve_sign(person.birth_date)
        res.append(
            {
                "person": person,
                "sign_id": their_sign,
                "score": score_of(self_sign, their_sign),
            }
        )
    return res


def best_match(self_sign: int, candidates: Iterable[Person]) -> Optional[BestMatch]:
    """Pick today's benefactor: the highest scoring candidate.

    Only a strictly greater score replaces the current best, so the earliest
    candidate wins a tie. Candidates without a birth date are skipped; when
    nobody is left the result is ``None``.
    """
    best: Optional[BestMatch] = None
    for row in score_candidates(self_sign, candidates):
        if best is None or row["score"] > best.score:
            best = BestMatch(person=row["person"], sign_id=row["sign_id"], score=row["score"])
    return best
