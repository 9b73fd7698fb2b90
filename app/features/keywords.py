from __future__ import annotations

from typing import Sequence

from app.schemas.analysis import KeywordMatchResult
from app.scoring.rounding import round_half_up


def match_keywords(lowered_text: str, keywords: Sequence[str] | None) -> KeywordMatchResult:
    """Partition keywords by case-insensitive substring presence, keeping input order and casing.

    No stemming or synonym handling: "Node.js" does not match "NodeJS".
    """
    if not keywords:
        return KeywordMatchResult()

    matched: list[str] = []
    missing: list[str] = []
    for keyword in keywords:
        if keyword.lower() in lowered_text:
            matched.append(keyword)
        else:
            missing.append(keyword)

    match_percentage = round_half_up(100 * len(matched) / len(keywords))
    return KeywordMatchResult(matched=matched, missing=missing, match_percentage=match_percentage)
