"""Startup policy and the project index handed to the picker.

A non-empty cache is shown immediately while a full rescan refreshes the
cache in the background for the next run. With no cache the scan runs in
the foreground first, since there is nothing useful to show yet.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from .cache import load_cache, remove_stale_temp_files
from .config import FinderConfig
from .detector import find_projects
from .fuzzy import ScoredMatch, filter_projects
from .rescan import RescanJob

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class FilterResult:
    paths: list[str]
    matches: list[ScoredMatch] = field(default_factory=list)

    def score_for_row(self, row: int) -> int | None:
        if 0 <= row < len(self.matches):
            return self.matches[row].score
        return None


class ProjectIndex:
    """In-memory project list plus per-query filtering."""

    def __init__(self, projects: list[str], full_path_fallback: bool = False) -> None:
        self._projects = list(projects)
        self._full_path_fallback = full_path_fallback

    def __len__(self) -> int:
        return len(self._projects)

    def all_projects(self) -> list[str]:
        return list(self._projects)

    def filter(self, query: str) -> FilterResult:
        paths, matches = filter_projects(self._projects, query, self._full_path_fallback)
        return FilterResult(paths=paths, matches=matches)


@dataclass
class ProjectSession:
    """One invocation's project data and its optional background rescan."""

    index: ProjectIndex
    rescan_job: RescanJob | None
    wait_for_rescan: bool = False
    from_cache: bool = False

    def finish(self, timeout: float | None = None) -> None:
        """Await the background rescan when configured to, otherwise detach."""
        if self.rescan_job is None or not self.wait_for_rescan:
            return
        if not self.rescan_job.wait(timeout):
            logger.warning("rescan_still_running", timeout=timeout)


def make_rescan_job(config: FinderConfig) -> RescanJob:
    rules = config.rules()
    return RescanJob(lambda: find_projects(config.base_dirs, rules), config.cache_file_path)


def open_session(config: FinderConfig, force_rescan: bool = False) -> ProjectSession:
    """Load cached projects and decide between background and foreground scan."""
    remove_stale_temp_files(config.cache_file_path)
    cached = [] if force_rescan else load_cache(config.cache_file_path)
    job = make_rescan_job(config)

    if cached:
        job.start()
        return ProjectSession(
            index=ProjectIndex(cached, config.full_path_fallback),
            rescan_job=job,
            wait_for_rescan=config.wait_for_rescan,
            from_cache=True,
        )

    projects = job.run_sync()
    return ProjectSession(
        index=ProjectIndex(projects, config.full_path_fallback),
        rescan_job=None,
        wait_for_rescan=config.wait_for_rescan,
    )


def display_label(path: str, prefix: str) -> str:
    """Strip ``prefix`` from the front of ``path`` for display only."""
    if prefix and path.startswith(prefix) and path != prefix:
        return path[len(prefix):]
    return path


__all__ = [
    "FilterResult",
    "ProjectIndex",
    "ProjectSession",
    "display_label",
    "make_rescan_job",
    "open_session",
]
