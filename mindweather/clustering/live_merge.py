"""Owner of the working observation set and the published cluster list.

Three transitions change what the map shows:

- ``replace``  a new snapshot replaces the working set wholesale
- ``append``   one live observation is added at the end
- ``set_zoom`` / ``set_granularity``  the granularity changes, data does not

Each one ends in a full rebuild from the whole working set followed by a
publish to every subscriber, even when the new cluster list equals the old
one. There is no delta path, so any interleaving of snapshot, live and
viewport events converges on the same map.

A single re-entrant lock covers the working set, the granularity and the
rebuild + publish, so a renderer on another thread never sees a half-built
list. Published lists are tuples. A rebuild that raises rolls the working set
back to what it was before the transition.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Iterable, List, Optional, Tuple

from mindweather.clustering.aggregation import DominantEmotion, national_dominant_emotion
from mindweather.clustering.builder import Cluster, build_clusters_with_report
from mindweather.clustering.zoom import Granularity, resolve_granularity
from mindweather.observations import Observation
from mindweather.shared.structured_logging import emit_structured_log

ClustersHandler = Callable[[Tuple[Cluster, ...]], None]

_COMPONENT = "clustering.live_merge"


class LiveMergeController:
    def __init__(
        self,
        *,
        initial_zoom: float = 1.0,
        observations: Iterable[Observation] = (),
        session_id: str = "",
    ) -> None:
        self._lock = threading.RLock()
        self._observations: List[Observation] = list(observations)
        self._zoom = float(initial_zoom)
        self._granularity = resolve_granularity(self._zoom)
        self._clusters: Tuple[Cluster, ...] = ()
        self._handlers: List[ClustersHandler] = []
        self._session_id = session_id
        self._recompute_count = 0
        if self._observations:
            self._recompute(trigger="seed")

    # ------------------------------------------------------------ read side
    @property
    def observations(self) -> Tuple[Observation, ...]:
        with self._lock:
            return tuple(self._observations)

    @property
    def clusters(self) -> Tuple[Cluster, ...]:
        with self._lock:
            return self._clusters

    @property
    def granularity(self) -> Granularity:
        with self._lock:
            return self._granularity

    @property
    def zoom(self) -> float:
        with self._lock:
            return self._zoom

    @property
    def recompute_count(self) -> int:
        with self._lock:
            return self._recompute_count

    def national_dominant(self) -> Optional[DominantEmotion]:
        with self._lock:
            return national_dominant_emotion(self._observations)

    def on_clusters_changed(self, handler: ClustersHandler) -> Callable[[], None]:
        """Subscribe to published cluster lists; returns an unsubscribe callable."""
        with self._lock:
            self._handlers.append(handler)

        def _unsubscribe() -> None:
            with self._lock:
                if handler in self._handlers:
                    self._handlers.remove(handler)

        return _unsubscribe

    # ---------------------------------------------------------- transitions
    def replace(self, snapshot: Iterable[Observation]) -> Tuple[Cluster, ...]:
        with self._lock:
            previous = self._observations
            self._observations = list(snapshot)
            try:
                return self._recompute(trigger="replace")
            except Exception:
                self._observations = previous
                raise

    def append(self, observation: Observation) -> Tuple[Cluster, ...]:
        with self._lock:
            self._observations.append(observation)
            try:
                return self._recompute(trigger="append")
            except Exception:
                self._observations.pop()
                raise

    def set_zoom(self, zoom: float) -> Tuple[Cluster, ...]:
        """Track the viewport zoom; rebuilds only when the granularity moves."""
        with self._lock:
            self._zoom = float(zoom)
            return self._apply_granularity(resolve_granularity(self._zoom))

    def set_granularity(self, granularity: int) -> Tuple[Cluster, ...]:
        with self._lock:
            return self._apply_granularity(Granularity(granularity))

    def refresh(self) -> Tuple[Cluster, ...]:
        """Rebuild against the current state without any transition."""
        with self._lock:
            return self._recompute(trigger="refresh")

    # ------------------------------------------------------------- internals
    def _apply_granularity(self, granularity: Granularity) -> Tuple[Cluster, ...]:
        if granularity == self._granularity:
            return self._clusters
        self._granularity = granularity
        return self._recompute(trigger="regranularity")

    def _recompute(self, *, trigger: str) -> Tuple[Cluster, ...]:
        started = time.perf_counter()
        report = build_clusters_with_report(self._observations, self._granularity)
        self._clusters = tuple(report.clusters)
        self._recompute_count += 1

        if report.dropped_keys:
            emit_structured_log(
                event="clusters.groups_dropped",
                level="debug",
                component=_COMPONENT,
                session_id=self._session_id,
                granularity=int(self._granularity),
                cluster_keys=list(report.dropped_keys),
            )
        emit_structured_log(
            event="clusters.recomputed",
            component=_COMPONENT,
            session_id=self._session_id,
            trigger=trigger,
            granularity=int(self._granularity),
            observation_count=len(self._observations),
            cluster_count=len(self._clusters),
            dropped_group_count=len(report.dropped_keys),
            duration_ms=round((time.perf_counter() - started) * 1000.0, 3),
        )

        self._publish(self._clusters)
        return self._clusters

    def _publish(self, clusters: Tuple[Cluster, ...]) -> None:
        for handler in list(self._handlers):
            try:
                handler(clusters)
            except Exception as exc:
                emit_structured_log(
                    event="clusters.handler.failed",
                    level="error",
                    component=_COMPONENT,
                    session_id=self._session_id,
                    error_type=type(exc).__name__,
                    error=str(exc),
                )
