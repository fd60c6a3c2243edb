"""Project-root discovery on top of the signal-driven walker."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from .traversal import Signal, walk

logger = structlog.get_logger(__name__)

DEFAULT_PROJECT_MARKERS = frozenset(
    {
        "pom.xml",
        "go.mod",
        "package.json",
        "Cargo.toml",
        "Makefile",
        ".git",
        "main.js",
        "index.js",
    }
)
DEFAULT_SKIP_DIRS = frozenset({"node_modules"})
DEFAULT_OVERRIDE_MARKER = "go.work"


@dataclass(frozen=True)
class ProjectRules:
    """Names that mark, prune, or force descent during discovery."""

    markers: frozenset[str] = DEFAULT_PROJECT_MARKERS
    skip_names: frozenset[str] = DEFAULT_SKIP_DIRS
    override_marker: str = DEFAULT_OVERRIDE_MARKER


class ProjectCollector:
    """Traversal visitor that records directories holding a marker.

    Paths are kept in first-visit order and recorded at most once, so one
    collector can be reused across several base directories.
    """

    def __init__(self, rules: ProjectRules) -> None:
        self.rules = rules
        self.projects: list[str] = []
        self._seen: set[str] = set()

    def __call__(self, directory: str, name: str, is_dir: bool) -> Signal:
        if name in self.rules.skip_names:
            return Signal.STOP_FORCED
        if name in self.rules.markers:
            if directory not in self._seen:
                self._seen.add(directory)
                self.projects.append(directory)
            return Signal.STOP_DEFAULT
        if name == self.rules.override_marker:
            return Signal.CONTINUE_FORCED
        return Signal.CONTINUE_DEFAULT


def normalize_base_dir(raw: str) -> str:
    """Expand ``~`` and make ``raw`` absolute without resolving symlinks."""
    return os.path.abspath(os.path.expanduser(raw))


def find_projects(base_dirs: Iterable[str], rules: ProjectRules | None = None) -> list[str]:
    """Scan every base directory and return project roots in visit order."""
    collector = ProjectCollector(rules or ProjectRules())
    for raw in base_dirs:
        base = normalize_base_dir(raw)
        if not os.path.isdir(base):
            logger.debug("base_dir_missing", base_dir=base)
            continue
        walk(base, collector)
    logger.debug("scan_finished", projects=len(collector.projects))
    return collector.projects


__all__ = [
    "DEFAULT_OVERRIDE_MARKER",
    "DEFAULT_PROJECT_MARKERS",
    "DEFAULT_SKIP_DIRS",
    "ProjectCollector",
    "ProjectRules",
    "find_projects",
    "normalize_base_dir",
]
