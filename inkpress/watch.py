"""Watch mode for inkpress.

Observes the input tree and rebuilds the whole site whenever a Markdown
file changes. Rebuilds never overlap: a change that arrives while a rebuild
is running is folded into one follow-up rebuild.

Key classes:
- SiteWatcher: Owns the observer and the rebuild guard.
- _ChangeHandler: File system event handler that filters for .md changes.
"""

from __future__ import annotations

import logging
import os
import threading
import time
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from .utils import is_markdown

if TYPE_CHECKING:
    from .build import BuildOptions

logger = logging.getLogger(__name__)

_CONTENT_EVENTS = {
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
}


class SiteWatcher:
    """Rebuilds a site when its Markdown sources change.

    Attributes:
        input_dir: Directory being watched.
        output_dir: Directory the site is written to.
        options: Build options used for every rebuild (watch is forced off).
        _observer: File system observer for changes.
        _worker: Thread running the current batch of rebuilds.
    """

    def __init__(self, input_dir: Path, output_dir: Path, options: BuildOptions):
        self.input_dir = Path(input_dir)
        self.output_dir = Path(output_dir)
        self.options = replace(options, watch=False)
        self._observer: Observer | None = None
        self._worker: threading.Thread | None = None
        self._lock = threading.Lock()
        self._rebuilding = False
        self._pending = False

    def start(self) -> None:  # pragma: no cover - integration path
        """Watch until the process is interrupted."""
        self._start_observer()
        logger.info("Watching %s for changes... Press Ctrl+C to stop", self.input_dir)
        try:
            while True:
                time.sleep(1)
        except KeyboardInterrupt:
            self.stop()

    def stop(self) -> None:
        if self._observer:
            self._observer.stop()
            self._observer.join()
            self._observer = None
        self.wait()

    def wait(self, timeout: float | None = None) -> None:
        """Block until the running rebuild worker, if any, has finished."""
        worker = self._worker
        if worker is not None:
            worker.join(timeout)

    def _start_observer(self) -> None:
        observer = Observer()
        observer.schedule(_ChangeHandler(self), str(self.input_dir), recursive=True)
        observer.start()
        self._observer = observer

    def request_rebuild(self, changed: Path) -> None:
        """Schedule a rebuild on the worker thread.

        Returns immediately. Requests that arrive while a rebuild is running
        are folded into a single follow-up rebuild.
        """
        logger.info("File changed: %s", changed)
        with self._lock:
            self._pending = True
            if self._rebuilding:
                return
            self._rebuilding = True
            worker = threading.Thread(
                target=self._run_rebuilds, name="inkpress-rebuild", daemon=True
            )
            self._worker = worker
        worker.start()

    def _run_rebuilds(self) -> None:
        try:
            while True:
                with self._lock:
                    if not self._pending:
                        self._rebuilding = False
                        return
                    self._pending = False
                self._rebuild_once()
        except BaseException:
            with self._lock:
                self._rebuilding = False
                self._pending = False
            raise

    def _rebuild_once(self) -> None:
        from .build import build_site

        logger.info("Rebuilding...")
        try:
            build_site(self.input_dir, self.output_dir, self.options)
        except Exception as exc:
            logger.error("Rebuild failed: %s", exc)


class _ChangeHandler(FileSystemEventHandler):
    def __init__(self, watcher: SiteWatcher):
        super().__init__()
        self.watcher = watcher

    def on_any_event(self, event):
        # Opened/closed events fire while a rebuild reads the sources.
        if event.is_directory or event.event_type not in _CONTENT_EVENTS:
            return
        for raw in (event.src_path, getattr(event, "dest_path", "")):
            if not raw:
                continue
            path = Path(os.fsdecode(raw))
            if is_markdown(path):
                self.watcher.request_rebuild(path)
                return
