"""
step.py — Search Step Snapshot
==============================
The trace generator emits one Step for the initial state and one per
vertex it finalises.  A Step is a frozen-in-time picture of everything
a viewer needs to render one frame:

    • Every vertex, with its `processed` flag as of this step
    • Every edge, with `active` set on the edges leaving `current_vertex`
    • The fringe contents (unordered (vertex_id, key) pairs)
    • dist_to / edge_to as of this step

Design decisions:
  - Step is a frozen dataclass.  It is a SNAPSHOT.  The generator is the
    only writer; steppers and viewers are pure readers.
  - Nothing in a Step is shared with the live search state.  Vertices
    and edges are frozen objects held in tuples; the two maps are fresh
    dicts behind a read-only proxy.
  - "Infinite distance" and "no predecessor" are both None.  There is
    no numeric sentinel to confuse with a real (large) distance.
"""

import math
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from graph import Edge, Vertex

FringeEntry = Tuple[int, Optional[int]]


def _finite_or_none(value: float) -> Optional[int]:
    return None if value == math.inf else value


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number    : 0-based index of this step in the trace.
        current_vertex : ID of the vertex just extracted, None for step 0.
        vertices       : All vertices, in graph order.
        edges          : All edges, in graph order.
        fringe         : (vertex_id, key) pairs still queued; key None = ∞.
        dist_to        : {vertex_id: best known distance or None}
        edge_to        : {vertex_id: predecessor vertex_id or None}
        is_final       : True when nothing is left on the fringe.
    """

    step_number:    int                           = 0
    current_vertex: Optional[int]                 = None
    vertices:       Tuple[Vertex, ...]            = ()
    edges:          Tuple[Edge, ...]              = ()
    fringe:         Tuple[FringeEntry, ...]       = ()
    dist_to:        Mapping[int, Optional[int]]   = field(default_factory=lambda: MappingProxyType({}))
    edge_to:        Mapping[int, Optional[int]]   = field(default_factory=lambda: MappingProxyType({}))
    is_final:       bool                          = False

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def is_initial(self) -> bool:
        return self.current_vertex is None

    def vertex(self, vertex_id: int) -> Optional[Vertex]:
        for v in self.vertices:
            if v.id == vertex_id:
                return v
        return None

    def processed_ids(self) -> List[int]:
        return [v.id for v in self.vertices if v.processed]

    def active_edges(self) -> List[Edge]:
        return [e for e in self.edges if e.active]

    def sorted_fringe(self) -> List[FringeEntry]:
        """Fringe ordered by key (∞ last), then id — the order a fringe panel shows."""
        return sorted(
            self.fringe,
            key=lambda entry: (entry[1] is None, entry[1] if entry[1] is not None else 0, entry[0]),
        )

    def is_tree_edge(self, edge: Edge) -> bool:
        """True if `edge` is on the current shortest-path tree."""
        return self.edge_to.get(edge.target) == edge.source

    def tree_edges(self) -> List[Edge]:
        return [e for e in self.edges if self.is_tree_edge(e)]

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        # JSON object keys are strings, so the maps go out as lists
        return {
            "step_number":    self.step_number,
            "current_vertex": self.current_vertex,
            "vertices":       [v.to_dict() for v in self.vertices],
            "edges":          [e.to_dict() for e in self.edges],
            "fringe":         [list(entry) for entry in self.fringe],
            "dist_to":        [[vid, d] for vid, d in self.dist_to.items()],
            "edge_to":        [[vid, p] for vid, p in self.edge_to.items()],
            "is_final":       self.is_final,
        }


# ---------------------------------------------------------------------------
# Builder the generator uses to assemble Steps
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Mutable scratch-pad carrying vertex / edge flags from one step to the next.

    Usage inside the generator:
        sb = StepBuilder(graph.vertices, graph.edges)
        sb.process(v)
        sb.activate_edges_from(v)
        steps.append(sb.build(step_number, fringe, dist_to, edge_to))
    """

    def __init__(self, vertices: Iterable[Vertex], edges: Iterable[Edge]):
        # inputs may arrive with stale flags; a run starts clean
        self.vertices:       List[Vertex]  = [replace(v, processed=False) for v in vertices]
        self.edges:          List[Edge]    = [e.with_active(False) for e in edges]
        self.current_vertex: Optional[int] = None

    def process(self, vertex_id: int) -> None:
        self.current_vertex = vertex_id
        self.vertices = [
            v.mark_processed() if v.id == vertex_id else v for v in self.vertices
        ]

    def activate_edges_from(self, vertex_id: int) -> None:
        self.edges = [e.with_active(e.source == vertex_id) for e in self.edges]

    def build(
        self,
        step_number: int,
        fringe: Iterable[Tuple[int, float]],
        dist_to: Mapping[int, float],
        edge_to: Mapping[int, Optional[int]],
    ) -> Step:
        fringe_copy = tuple((vid, _finite_or_none(key)) for vid, key in fringe)
        return Step(
            step_number=step_number,
            current_vertex=self.current_vertex,
            vertices=tuple(self.vertices),
            edges=tuple(self.edges),
            fringe=fringe_copy,
            dist_to=MappingProxyType({vid: _finite_or_none(d) for vid, d in dist_to.items()}),
            edge_to=MappingProxyType(dict(edge_to)),
            is_final=not fringe_copy,
        )
