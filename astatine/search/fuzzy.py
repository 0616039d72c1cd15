from __future__ import annotations

from collections.abc import Sequence

from ..catalog.types import Candidate

WORD_BOUNDARY_CHARS = "/_- ."


def fuzzy_score(query: str, candidate: str) -> int | None:
    if not query:
        return 0
    query_folded = query.casefold()
    candidate_folded = candidate.casefold()

    score = 0
    prev_idx = -1
    run = 0
    for needle in query_folded:
        idx = candidate_folded.find(needle, prev_idx + 1)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            gap = idx - prev_idx - 1
            run = 0
            score -= min(40, gap * 2)
        if idx == 0 or candidate_folded[idx - 1] in WORD_BOUNDARY_CHARS:
            score += 35
        prev_idx = idx

    score -= len(candidate_folded) // 5
    return score


def ranked_matches(catalog: Sequence[Candidate], query: str) -> list[tuple[Candidate, int]]:
    if not query:
        return [(candidate, 0) for candidate in catalog]

    scored: list[tuple[Candidate, int]] = []
    for candidate in catalog:
        score = fuzzy_score(query, candidate.name)
        if score is None:
            continue
        scored.append((candidate, score))
    # sorted() is stable: equal scores keep catalog order.
    return sorted(scored, key=lambda item: -item[1])


def rank(catalog: Sequence[Candidate], query: str) -> list[Candidate]:
    if not query:
        return list(catalog)
    return [candidate for candidate, _score in ranked_matches(catalog, query)]
