"""
recorder.py — Run Recorder & Analytics
======================================
Runs the trace generator once, keeps the Trace, and computes the
summary numbers a viewer shows next to the playback controls.

Usage:
    rec = Recorder()
    rec.run(graph, start=0)           # generates the whole trace
    rec.metrics.reachable             # 7 on the sample graph
    rec.export()                      # JSON-ready snapshot of the run
"""

import logging
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from graph import Graph
from algorithms import Trace, generate_trace

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    start:         Optional[int] = None
    vertex_count:  int   = 0
    edge_count:    int   = 0
    total_steps:   int   = 0          # number of Steps in the trace
    processed:     int   = 0          # vertices marked processed by the end
    reachable:     int   = 0          # vertices with a finite final distance
    unreachable:   int   = 0
    stale_skips:   int   = 0
    wall_time_ms:  float = 0.0        # wall-clock time to generate the trace


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        trace   : The Trace from the last run (None before run()).
        metrics : RunMetrics for that trace.
    """

    def __init__(self):
        self.trace:   Optional[Trace]      = None
        self.metrics: Optional[RunMetrics] = None
        self._graph:  Optional[Graph]      = None

    def run(self, graph: Graph, start: Optional[int]) -> RunMetrics:
        """Generate the full trace and compute its metrics."""
        t0 = time.monotonic()
        trace = generate_trace(graph, start)
        wall_ms = (time.monotonic() - t0) * 1000

        self._graph  = graph.copy()
        self.trace   = trace
        self.metrics = self._compute_metrics(trace, wall_ms)
        logger.debug("recorded run: %s", self.metrics)
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        if self.trace is None:
            raise RuntimeError("Call run() first.")
        data = self.trace.to_dict()
        data["graph"]   = self._graph.to_dict() if self._graph else {}
        data["metrics"] = asdict(self.metrics) if self.metrics else {}
        return data

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, trace: Trace, wall_ms: float) -> RunMetrics:
        final = trace.final
        reachable = sum(1 for d in final.dist_to.values() if d is not None)
        return RunMetrics(
            start=trace.start,
            vertex_count=len(final.vertices),
            edge_count=len(final.edges),
            total_steps=len(trace),
            processed=len(final.processed_ids()),
            reachable=reachable,
            unreachable=len(final.dist_to) - reachable,
            stale_skips=trace.stale_skips,
            wall_time_ms=round(wall_ms, 2),
        )
