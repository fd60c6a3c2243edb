"""Background project rescan with an explicit job handle."""

from __future__ import annotations

import threading
from collections.abc import Callable
from pathlib import Path

import structlog

from .cache import save_cache

logger = structlog.get_logger(__name__)


class RescanJob:
    """Run one full scan and write the cache exactly once when it completes.

    The job has no cancellation. ``start`` runs it on a daemon thread, so a
    host that exits without calling ``wait`` abandons it and the previous
    cache file stays in place.
    """

    def __init__(self, scan: Callable[[], list[str]], cache_path: Path) -> None:
        self._scan = scan
        self._cache_path = cache_path
        self._lock = threading.Lock()
        self._finished = threading.Event()
        self._thread: threading.Thread | None = None
        self.projects: list[str] | None = None
        self.error: Exception | None = None

    @property
    def done(self) -> bool:
        return self._finished.is_set()

    @property
    def started(self) -> bool:
        return self._thread is not None

    def _run(self) -> None:
        try:
            logger.debug("scan_started", cache_path=str(self._cache_path))
            projects = self._scan()
            self.projects = projects
            try:
                save_cache(self._cache_path, projects)
            except OSError as exc:
                self.error = exc
                logger.warning("cache_write_failed", cache_path=str(self._cache_path), error=str(exc))
        except Exception as exc:
            self.error = exc
            logger.warning("rescan_failed", error=str(exc))
        finally:
            self._finished.set()

    def start(self) -> None:
        """Launch the scan on a background thread. Starting twice is an error."""
        with self._lock:
            if self._thread is not None:
                raise RuntimeError("rescan job already started")
            self._thread = threading.Thread(target=self._run, name="fuzzyfind-rescan", daemon=True)
        self._thread.start()

    def run_sync(self) -> list[str]:
        """Run the scan on the calling thread and return the projects found.

        Cache write failures are reported as warnings, not raised.
        """
        with self._lock:
            if self._thread is not None:
                raise RuntimeError("rescan job already started")
        self._run()
        if self.projects is None and self.error is not None:
            raise self.error
        return list(self.projects or [])

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the job finishes; return whether it did."""
        if self._thread is None and not self.done:
            return False
        return self._finished.wait(timeout)


__all__ = ["RescanJob"]
