from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .candidates import Candidate

NEUTRAL_RANK = 1
WORD_BOUNDARY_CHARS = "/_- ."

MATCH_POINTS = 16
ADJACENT_BONUS = 12
WORD_START_BONUS = 30
NAME_START_BONUS = 25
PREFIX_BONUS = 40
GAP_PENALTY = 3
MAX_GAP_PENALTY = 30
LENGTH_PENALTY_DIVISOR = 8


@dataclass(frozen=True)
class RankedCandidate:
    candidate: Candidate
    rank: int


def _starts_word(name: str, idx: int) -> bool:
    return idx == 0 or name[idx - 1] in WORD_BOUNDARY_CHARS


def fuzzy_score(query: str, name: str) -> int | None:
    """Score ``query`` as a case-insensitive subsequence of a bookmark name.

    Returns ``None`` when some query character cannot be matched in order.
    Typing the start of a name ranks highest, then hits on word starts and
    adjacent letters; skipped characters and long names cost points.
    """
    if not query:
        return 0
    needles = query.casefold()
    folded = name.casefold()

    score = 0
    last = -1
    for needle in needles:
        idx = folded.find(needle, last + 1)
        if idx < 0:
            return None
        score += MATCH_POINTS
        skipped = idx - last - 1
        if skipped:
            score -= min(MAX_GAP_PENALTY, skipped * GAP_PENALTY)
        elif last >= 0:
            score += ADJACENT_BONUS
        if _starts_word(folded, idx):
            score += WORD_START_BONUS
        last = idx

    if folded[0] == needles[0]:
        score += NAME_START_BONUS
    if folded.startswith(needles):
        score += PREFIX_BONUS
    return score - len(folded) // LENGTH_PENALTY_DIVISOR


def filter_candidates(candidates: Sequence[Candidate], query: str) -> list[RankedCandidate]:
    """Rank ``candidates`` by how well their names match ``query``.

    An empty query keeps every candidate in source order with a neutral rank.
    Otherwise non-matches are dropped and the rest sorted best-first; the sort
    is stable so equal ranks keep source order.
    """
    if not query:
        return [RankedCandidate(candidate=c, rank=NEUTRAL_RANK) for c in candidates]

    ranked: list[RankedCandidate] = []
    for candidate in candidates:
        rank = fuzzy_score(query, candidate.name)
        if rank is None:
            continue
        ranked.append(RankedCandidate(candidate=candidate, rank=rank))
    ranked.sort(key=lambda item: item.rank, reverse=True)
    return ranked
