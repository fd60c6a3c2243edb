"""Finder configuration loaded from a JSON file.

Recognized keys map onto ``FinderConfig`` fields. All access is defensive:
a missing or malformed file yields defaults, and invalid values are ignored
one key at a time.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path

from platformdirs import user_cache_dir, user_config_dir

from .detector import DEFAULT_OVERRIDE_MARKER, DEFAULT_PROJECT_MARKERS, DEFAULT_SKIP_DIRS, ProjectRules

APP_NAME = "fuzzyfind"
CONFIG_FILENAME = "config.json"
CACHE_FILENAME = "projects.json"
CONFIG_ENV_VAR = "FUZZYFIND_CONFIG"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_CACHE_PATH = Path(user_cache_dir(APP_NAME, appauthor=False)) / CACHE_FILENAME
DEFAULT_BASE_DIRS = ("~/Projects",)


@dataclass(frozen=True)
class FinderConfig:
    """Everything the core needs, passed in explicitly at construction."""

    base_dirs: tuple[str, ...] = DEFAULT_BASE_DIRS
    project_markers: frozenset[str] = DEFAULT_PROJECT_MARKERS
    skip_dirs: frozenset[str] = DEFAULT_SKIP_DIRS
    override_marker: str = DEFAULT_OVERRIDE_MARKER
    cache_file_path: Path = field(default_factory=lambda: DEFAULT_CACHE_PATH)
    display_prefix_to_strip: str = ""
    full_path_fallback: bool = False
    wait_for_rescan: bool = False

    def rules(self) -> ProjectRules:
        return ProjectRules(
            markers=self.project_markers,
            skip_names=self.skip_dirs,
            override_marker=self.override_marker,
        )


def resolve_config_path(explicit: Path | None = None) -> Path:
    """Pick the config file: explicit argument, then env var, then default."""
    if explicit is not None:
        return explicit
    from_env = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if from_env:
        return Path(from_env).expanduser()
    return DEFAULT_CONFIG_PATH


def load_config_data(path: Path) -> dict[str, object]:
    """Load the raw JSON object, or ``{}`` when missing/malformed/not an object."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _string_list(value: object) -> list[str] | None:
    """Accept a non-empty list of non-empty strings; anything else is invalid."""
    if not isinstance(value, list):
        return None
    items = [item.strip() for item in value if isinstance(item, str) and item.strip()]
    return items or None


def _non_empty_string(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def config_from_data(data: dict[str, object]) -> FinderConfig:
    """Build a ``FinderConfig`` from a decoded JSON object."""
    config = FinderConfig()
    updates: dict[str, object] = {}

    base_dirs = _string_list(data.get("base_dirs"))
    if base_dirs is not None:
        updates["base_dirs"] = tuple(base_dirs)

    markers = _string_list(data.get("project_markers"))
    if markers is not None:
        updates["project_markers"] = frozenset(markers)

    # An explicit empty list disables pruning.
    raw_skip = data.get("skip_dirs")
    if isinstance(raw_skip, list):
        updates["skip_dirs"] = frozenset(item for item in raw_skip if isinstance(item, str) and item)

    override = _non_empty_string(data.get("override_marker"))
    if override is not None:
        updates["override_marker"] = override

    cache_path = _non_empty_string(data.get("cache_file_path"))
    if cache_path is not None:
        updates["cache_file_path"] = Path(cache_path).expanduser()

    prefix = data.get("display_prefix_to_strip")
    if isinstance(prefix, str):
        updates["display_prefix_to_strip"] = os.path.expanduser(prefix)

    for key in ("full_path_fallback", "wait_for_rescan"):
        value = data.get(key)
        if isinstance(value, bool):
            updates[key] = value

    return replace(config, **updates)


def load_finder_config(path: Path | None = None) -> FinderConfig:
    """Load configuration from ``path`` (or the resolved default location)."""
    return config_from_data(load_config_data(resolve_config_path(path)))


__all__ = [
    "APP_NAME",
    "CONFIG_ENV_VAR",
    "DEFAULT_CACHE_PATH",
    "DEFAULT_CONFIG_PATH",
    "FinderConfig",
    "config_from_data",
    "load_config_data",
    "load_finder_config",
    "resolve_config_path",
]
