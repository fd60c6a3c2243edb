"""Public package surface for fuzzyfind.

Re-exports the discovery, matching, and cache helpers. ``main`` imports the
CLI lazily so library use does not pull in terminal handling.
"""

from __future__ import annotations

from .cache import load_cache, save_cache
from .detector import ProjectRules, find_projects
from .fuzzy import ScoredMatch, filter_projects, fuzzy_match


def main(argv: list[str] | None = None) -> int:
    """Run the command-line interface and return its exit status."""
    from .cli import main as _main

    return _main(argv)


__all__ = [
    "ProjectRules",
    "ScoredMatch",
    "filter_projects",
    "find_projects",
    "fuzzy_match",
    "load_cache",
    "main",
    "save_cache",
]
