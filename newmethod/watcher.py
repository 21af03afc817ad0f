"""
Watcher Layer - Editor request queue monitoring.

Monitors the request queue directory using watchdog and runs the
generation pipeline for every request an editor integration drops there.
"""

from __future__ import annotations

import os
import threading
import time
import traceback
from typing import Callable, Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .core import paths


class QueueEventHandler(FileSystemEventHandler):
    """Debounces queue events and hands the queue to a processor."""

    def __init__(self, process: Callable[[], object], settle: float = 0.2, log_path: Optional[str] = None):
        super().__init__()
        self.process = process
        self.settle = settle
        self.log_path = log_path
        self.timer: Optional[threading.Timer] = None
        self.lock = threading.Lock()

    def on_any_event(self, event: FileSystemEvent) -> None:
        """Handle any filesystem event."""
        if event.is_directory:
            return
        src = os.fsdecode(event.src_path)
        dest = os.fsdecode(getattr(event, "dest_path", "") or "")
        if not (src.endswith(".json") or dest.endswith(".json")):
            return
        self._schedule()

    def _schedule(self) -> None:
        with self.lock:
            if self.timer is not None:
                self.timer.cancel()
            # Editors write request files in more than one step
            self.timer = threading.Timer(self.settle, self._run)
            self.timer.daemon = True
            self.timer.start()

    def _run(self) -> None:
        with self.lock:
            self.timer = None
        try:
            self.process()
        except Exception:
            self._log_failure()

    def _log_failure(self) -> None:
        if not self.log_path:
            traceback.print_exc()
            return
        with open(self.log_path, "a", encoding="utf-8") as f:
            f.write(traceback.format_exc() + "\n")


def start_watching(process: Callable[[], object], queue_dir: Optional[str] = None, settle: float = 0.2) -> None:
    """Watch the request queue until interrupted.

    Args:
        process: Called after queue changes settle
        queue_dir: Directory to monitor, defaults to the settings queue
        settle: Seconds without events before the queue is processed
    """
    qdir = queue_dir or paths.queue_dir()
    os.makedirs(qdir, exist_ok=True)

    handler = QueueEventHandler(process, settle=settle, log_path=os.path.join(qdir, "watch.log"))
    observer = Observer()
    observer.schedule(handler, qdir, recursive=False)
    observer.start()

    # Requests queued while nothing was watching
    process()
    try:
        while observer.is_alive():
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        observer.stop()
        observer.join()
