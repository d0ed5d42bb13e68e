"""
dijkstra.py — Dijkstra's Shortest-Path Trace
============================================
Runs single-source Dijkstra over a Graph and records a Step after every
vertex it finalises.

    trace = generate_trace(Graph.sample(), start=0)
    trace.final.dist_to        # {0: 0, 1: 2, 2: 1, 3: 11, 4: 5, 5: 9, 6: 10}

Emits a Step at:
  0. Initial state: every vertex on the fringe, start = 0, others = ∞
  1. Each non-stale extraction, after its outgoing edges are relaxed

The fringe is a MinHeap holding every unfinished vertex exactly once;
relaxation lowers keys in place with decrease_key.  An extracted entry
whose key is above dist_to is stale and is dropped without a Step.

Correctness note: Dijkstra requires non-negative weights.  The editor
(Graph.validate) rejects negative edges before a run; this module does
not re-check.
"""

import logging
import math
from typing import Dict, Iterator, List, Optional, Sequence

from graph import Edge, Graph, Vertex
from algorithms.min_heap import MinHeap
from algorithms.step import Step, StepBuilder
from algorithms.trace import Trace

logger = logging.getLogger(__name__)

INF = math.inf


class InvalidStartVertexError(ValueError):
    """The start vertex id is not a vertex of the graph."""

    def __init__(self, start: Optional[int]):
        super().__init__(f"Start vertex {start!r} is not in the graph")
        self.start = start


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------
def generate_trace(graph: Graph, start: Optional[int]) -> Trace:
    """
    Run Dijkstra from `start` and return every Step, eagerly.

    An empty graph gives a one-step trace when called with start=None.
    Any start id that is not a vertex raises InvalidStartVertexError
    before a single Step is built.
    """
    stats = {"stale_skips": 0}
    steps = list(dijkstra(graph, start, stats=stats))
    trace = Trace(steps, start=start, stale_skips=stats["stale_skips"])

    logger.info(
        "dijkstra from %s: %d vertices, %d edges, %d steps, %d stale skips",
        start, graph.vertex_count(), graph.edge_count(), len(trace), trace.stale_skips,
    )
    return trace


def dijkstra(graph: Graph, start: Optional[int], stats: Optional[Dict[str, int]] = None) -> Iterator[Step]:
    """
    Same run as generate_trace, yielded one Step at a time.

    The start vertex is checked here, before the iterator is handed back,
    and the graph's vertices and edges are captured at call time.  Edits
    made to `graph` afterwards do not reach the run.
    """
    _check_start(graph, start)
    return _search(tuple(graph.vertices), tuple(graph.edges), start, stats)


def _check_start(graph: Graph, start: Optional[int]) -> None:
    if start is None and graph.vertex_count() == 0:
        return
    if not graph.has_vertex(start):
        raise InvalidStartVertexError(start)


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def _search(
    vertices: Sequence[Vertex],
    edges: Sequence[Edge],
    start: Optional[int],
    stats: Optional[Dict[str, int]],
) -> Iterator[Step]:

    outgoing: Dict[int, List[Edge]] = {v.id: [] for v in vertices}
    for e in edges:
        outgoing.setdefault(e.source, []).append(e)

    # initialise
    dist_to: Dict[int, float]         = {v.id: (0 if v.id == start else INF) for v in vertices}
    edge_to: Dict[int, Optional[int]] = {v.id: None for v in vertices}

    fringe = MinHeap()
    for v in vertices:
        fringe.insert(v.id, dist_to[v.id])

    sb = StepBuilder(vertices, edges)
    step_no = 0

    # --- initial step ---
    yield sb.build(step_no, fringe.snapshot(), dist_to, edge_to)
    step_no += 1

    # --- main loop ---
    while not fringe.is_empty():
        v, dist = fringe.extract_min()

        if dist > dist_to[v]:
            logger.debug("pop %s (key=%s): stale, best is %s", v, dist, dist_to[v])
            if stats is not None:
                stats["stale_skips"] = stats.get("stale_skips", 0) + 1
            continue

        logger.debug("pop %s (key=%s)", v, dist)
        sb.process(v)

        # -- relax outgoing edges --
        for e in outgoing.get(v, []):
            candidate = dist_to[v] + e.weight
            if candidate < dist_to.get(e.target, INF):
                logger.debug("relax %s→%s: %s < %s", v, e.target, candidate, dist_to.get(e.target, INF))
                dist_to[e.target] = candidate
                edge_to[e.target] = v
                fringe.decrease_key(e.target, candidate)

        sb.activate_edges_from(v)
        yield sb.build(step_no, fringe.snapshot(), dist_to, edge_to)
        step_no += 1
