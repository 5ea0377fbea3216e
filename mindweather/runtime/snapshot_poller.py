"""Background poller that pulls snapshots into a `LiveMergeController`.

One daemon thread calls the injected ``load_snapshot`` once at start and
then every ``interval_seconds``. Each successful pull replaces the working
set. A failed pull is logged and skipped; the controller keeps serving its
last-known observations until the next pull or live event.
"""

from __future__ import annotations

import threading
from typing import Callable, Iterable

from mindweather.clustering.live_merge import LiveMergeController
from mindweather.config import DEFAULT_SNAPSHOT_POLL_INTERVAL_SECONDS
from mindweather.observations import Observation
from mindweather.shared.structured_logging import emit_structured_log

SnapshotLoader = Callable[[], Iterable[Observation]]

_COMPONENT = "runtime.snapshot_poller"


class SnapshotPoller:
    def __init__(
        self,
        *,
        load_snapshot: SnapshotLoader,
        controller: LiveMergeController,
        interval_seconds: float = DEFAULT_SNAPSHOT_POLL_INTERVAL_SECONDS,
    ) -> None:
        self._load_snapshot = load_snapshot
        self._controller = controller
        self._interval_seconds = max(0.0, float(interval_seconds))
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._thread_lock = threading.Lock()

    def start(self) -> None:
        with self._thread_lock:
            if self._thread is not None and self._thread.is_alive():
                return
            self._stop_event.clear()
            self._thread = threading.Thread(
                target=self._run,
                name="snapshot-poller",
                daemon=True,
            )
            self._thread.start()

    def stop(self, *, timeout: float = 2.0) -> None:
        self._stop_event.set()
        thread = self._thread
        if thread is not None:
            thread.join(timeout=max(0.0, timeout))

    @property
    def running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive()

    def poll_once(self) -> bool:
        """Pull one snapshot and apply it; returns False when either step failed."""
        stage = "load"
        try:
            snapshot = list(self._load_snapshot())
            stage = "apply"
            self._controller.replace(snapshot)
        except Exception as exc:
            emit_structured_log(
                event="snapshot.poll.failed",
                level="warn",
                component=_COMPONENT,
                stage=stage,
                error_type=type(exc).__name__,
                error=str(exc),
                kept_observation_count=len(self._controller.observations),
            )
            return False
        return True

    def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.poll_once()
            except Exception as exc:
                emit_structured_log(
                    event="snapshot.poll.failed",
                    level="error",
                    component=_COMPONENT,
                    stage="loop",
                    error_type=type(exc).__name__,
                    error=str(exc),
                )
            if self._stop_event.wait(timeout=self._interval_seconds):
                return
