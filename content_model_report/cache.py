"""Single-slot cache for the computed report graph."""

import threading
from typing import Callable

from content_model_report.domain.models import ReportGraph


class ReportCache:
    """Holds the report graph for the lifetime of its owner.

    Starts empty, is filled by the first `get_or_compute` call, and is only
    cleared by `reset`. The check-compute-store sequence runs under a lock
    so concurrent first reads compute the graph once.
    """

    def __init__(self) -> None:
        self._graph: ReportGraph | None = None
        self._lock = threading.Lock()

    @property
    def is_populated(self) -> bool:
        return self._graph is not None

    def get_or_compute(self, factory: Callable[[], ReportGraph]) -> ReportGraph:
        with self._lock:
            if self._graph is None:
                self._graph = factory()
            return self._graph

    def reset(self) -> None:
        with self._lock:
            self._graph = None
