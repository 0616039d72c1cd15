"""Ranking exports for the launcher's fuzzy search."""

from __future__ import annotations

from .fuzzy import fuzzy_score, rank, ranked_matches

__all__ = [
    "fuzzy_score",
    "rank",
    "ranked_matches",
]
