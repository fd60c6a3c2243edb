"""Tail-anchored fuzzy matching and ranking of project paths.

Queries are matched against the leaf directory name, scanned from the end,
with a score that grows as matched characters spread apart.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

GAP_PENALTY_CAP = 3


@dataclass(frozen=True)
class ScoredMatch:
    project: str
    score: int


def fuzzy_match(query: str, candidate: str) -> tuple[bool, int]:
    """Tail-anchored subsequence match of ``query`` inside ``candidate``.

    Both strings are scanned from the end. Each matched character after the
    first adds the number of skipped candidate characters since the previous
    match, capped at ``GAP_PENALTY_CAP``; adjacent matches add nothing.
    """
    query_folded = query.casefold()
    candidate_folded = candidate.casefold()

    q_idx = len(query_folded) - 1
    c_idx = len(candidate_folded) - 1
    score = 0
    last_idx = -1
    while q_idx >= 0 and c_idx >= 0:
        if query_folded[q_idx] == candidate_folded[c_idx]:
            if last_idx >= 0:
                score += min(last_idx - c_idx - 1, GAP_PENALTY_CAP)
            last_idx = c_idx
            q_idx -= 1
        c_idx -= 1

    if q_idx >= 0:
        return False, 0
    return True, score


def leaf_segment(path: str) -> str:
    return os.path.basename(path.rstrip("/")) or path


def score_project(query: str, project: str, full_path_fallback: bool = False) -> int | None:
    """Score ``project`` by its leaf directory name, or ``None`` when excluded."""
    matched, score = fuzzy_match(query, leaf_segment(project))
    if matched:
        return score
    if full_path_fallback:
        matched, score = fuzzy_match(query, project)
        if matched:
            return score
    return None


def filter_projects(
    projects: list[str],
    query: str,
    full_path_fallback: bool = False,
) -> tuple[list[str], list[ScoredMatch]]:
    """Return ``(ordered_paths, scored_matches)`` for one query.

    An empty query keeps every project in its original order with no
    scores. Otherwise matches are sorted by ascending score, so tighter
    clusters rank first; ties keep the input order.
    """
    if not query:
        return list(projects), []

    matches: list[ScoredMatch] = []
    for project in projects:
        score = score_project(query, project, full_path_fallback)
        if score is None:
            continue
        matches.append(ScoredMatch(project=project, score=score))
    matches.sort(key=lambda item: item.score)
    return [match.project for match in matches], matches


__all__ = [
    "GAP_PENALTY_CAP",
    "ScoredMatch",
    "filter_projects",
    "fuzzy_match",
    "leaf_segment",
    "score_project",
]
