"""Heuristic fit score between extracted keywords and an investment thesis."""

from __future__ import annotations

from typing import List, Optional, Sequence

from vcscout.core.models import ThesisMatch

POINTS_PER_MATCH = 20
MAX_SCORE = 100
MIN_TOKEN_LENGTH = 3


def thesis_tokens(thesis: Optional[str]) -> List[str]:
    """Lowercased whitespace tokens of the thesis, dropping tokens of two chars or fewer."""
    if not thesis:
        return []
    return [token for token in thesis.lower().split() if len(token) >= MIN_TOKEN_LENGTH]


def _keyword_matches(keyword: str, tokens: Sequence[str]) -> bool:
    keyword = keyword.lower()
    if not keyword:
        return False
    return any(token in keyword or keyword in token for token in tokens)


def score_thesis_match(keywords: Sequence[str], thesis: Optional[str]) -> ThesisMatch:
    """
    Score how well ``keywords`` line up with ``thesis``.

    A keyword counts when it contains a thesis token or a thesis token
    contains it (case-insensitive). Each hit is worth 20 points, capped
    at 100. Reasons are the matching keywords in their original order.
    """
    tokens = thesis_tokens(thesis)
    if not tokens:
        return ThesisMatch(score=0, reasons=[])

    reasons = [keyword for keyword in keywords if _keyword_matches(keyword, tokens)]
    return ThesisMatch(score=min(MAX_SCORE, POINTS_PER_MATCH * len(reasons)), reasons=reasons)
