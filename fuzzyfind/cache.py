"""Persistent project-list cache.

The cache is one JSON object ``{"projects": [...]}``. Reads are defensive:
missing or malformed files load as an empty list. Writes replace the file
atomically so a concurrent reader sees either the old or the new list.
"""

from __future__ import annotations

import json
import os
import tempfile
import time
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

PROJECTS_KEY = "projects"
STALE_TEMP_SECONDS = 3600.0


def load_cache(path: Path) -> list[str]:
    """Load cached project paths.

    Returns an empty list when the file is missing, unreadable, malformed,
    or does not hold a ``projects`` list. Non-string entries are dropped;
    strings, including empty ones, are kept as written.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.debug("cache_unavailable", path=str(path), reason=type(exc).__name__)
        return []
    if not isinstance(data, dict):
        return []
    raw = data.get(PROJECTS_KEY)
    if not isinstance(raw, list):
        return []
    projects = [item for item in raw if isinstance(item, str)]
    logger.debug("cache_loaded", path=str(path), projects=len(projects))
    return projects


def save_cache(path: Path, projects: list[str]) -> None:
    """Persist ``projects`` as pretty-printed JSON.

    Writes to a sibling temp file and renames it over ``path``. Raises
    ``OSError`` when the directory or file cannot be written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps({PROJECTS_KEY: list(projects)}, indent=2) + "\n"

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(payload)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise


def remove_stale_temp_files(path: Path, max_age: float = STALE_TEMP_SECONDS) -> int:
    """Delete temp files left behind by writers that died before renaming.

    A background rescan killed at process exit never reaches its cleanup, so
    its temp file stays next to the cache. Only files older than ``max_age``
    seconds are removed; younger ones may belong to a live writer. Returns
    the number of files deleted.
    """
    path = Path(path)
    cutoff = time.time() - max_age
    prefix = f".{path.name}."
    try:
        candidates = [
            entry for entry in path.parent.iterdir() if entry.name.startswith(prefix) and entry.name.endswith(".tmp")
        ]
    except OSError:
        return 0

    removed = 0
    for candidate in candidates:
        try:
            if candidate.stat().st_mtime > cutoff:
                continue
            candidate.unlink()
        except OSError:
            continue
        removed += 1
    if removed:
        logger.debug("stale_temp_files_removed", path=str(path), removed=removed)
    return removed


__all__ = ["PROJECTS_KEY", "STALE_TEMP_SECONDS", "load_cache", "remove_stale_temp_files", "save_cache"]
