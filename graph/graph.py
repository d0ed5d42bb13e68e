"""
graph.py — Graph Container & Editor Model
=========================================
Single source of truth for the graph being edited.  The trace generator
reads it; the HTTP layer edits it.

Responsibilities:
  1. CRUD on vertices & edges               (add / remove / move / reweight)
  2. Adjacency queries                      (edges_from, has_edge, …)
  3. Validation of the editor invariants    (no self-loops, no duplicates,
                                             no negative weights)
  4. The built-in sample graph
  5. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Vertices & edges are kept in insertion-ordered lists.  Order matters:
    Steps report vertices and edges in the order the editor created them,
    and the fringe is seeded in vertex order.
  - Vertex and Edge are frozen, so every edit swaps in a new object.
    A Step that captured the old object is unaffected.
  - Validation is explicit (`validate()`), not enforced on every edit.
    The editor lets the user pass through invalid states and checks on save.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from graph.vertex import Vertex
from graph.edge import Edge

logger = logging.getLogger(__name__)


class GraphValidationError(ValueError):
    """Raised by Graph.validate() when an editor invariant is broken."""


# canvas positions of the built-in sample, 900 × 400 viewBox
_SAMPLE_VERTICES = [
    (0, 100, 200),
    (1, 300, 100),
    (2, 300, 300),
    (3, 500, 50),
    (4, 500, 200),
    (5, 500, 350),
    (6, 700, 200),
]

_SAMPLE_EDGES = [
    (0, 1, 2),
    (0, 2, 1),
    (1, 3, 11),
    (1, 4, 3),
    (1, 2, 5),
    (2, 5, 15),
    (3, 4, 2),
    (4, 2, 1),
    (4, 5, 4),
    (4, 6, 5),
    (6, 3, 1),
    (6, 5, 1),
]


class Graph:
    """
    Attributes:
        vertices : [Vertex, …] in creation order
        edges    : [Edge, …]   in creation order
    """

    def __init__(
        self,
        vertices: Optional[Iterable[Vertex]] = None,
        edges: Optional[Iterable[Edge]] = None,
    ):
        self.vertices: List[Vertex] = list(vertices or [])
        self.edges:    List[Edge]   = list(edges or [])

    # ==================================================================
    # VERTEX CRUD
    # ==================================================================
    def add_vertex(self, x: float = 0.0, y: float = 0.0, vertex_id: Optional[int] = None) -> Vertex:
        """Append a vertex.  Without an explicit id, the smallest unused one is taken."""
        if vertex_id is None:
            vertex_id = self.next_vertex_id()
        vertex = Vertex(id=vertex_id, x=x, y=y)
        self.vertices.append(vertex)
        return vertex

    def next_vertex_id(self) -> int:
        used = {v.id for v in self.vertices}
        new_id = 0
        while new_id in used:
            new_id += 1
        return new_id

    def remove_vertex(self, vertex_id: int) -> bool:
        """Drop a vertex and every edge touching it.  Returns False if absent."""
        if not self.has_vertex(vertex_id):
            return False
        self.vertices = [v for v in self.vertices if v.id != vertex_id]
        self.edges = [e for e in self.edges if e.source != vertex_id and e.target != vertex_id]
        return True

    def move_vertex(self, vertex_id: int, x: float, y: float) -> Vertex:
        idx = self._vertex_index(vertex_id)
        moved = self.vertices[idx].moved_to(x, y)
        self.vertices[idx] = moved
        return moved

    def get_vertex(self, vertex_id: int) -> Optional[Vertex]:
        for v in self.vertices:
            if v.id == vertex_id:
                return v
        return None

    def has_vertex(self, vertex_id: Optional[int]) -> bool:
        return vertex_id is not None and any(v.id == vertex_id for v in self.vertices)

    def vertex_ids(self) -> List[int]:
        return [v.id for v in self.vertices]

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(self, source: int, target: int, weight: int = 1) -> Edge:
        edge = Edge(source=source, target=target, weight=weight)
        self.edges.append(edge)
        return edge

    def remove_edge(self, source: int, target: int) -> bool:
        before = len(self.edges)
        self.edges = [e for e in self.edges if e.key != (source, target)]
        return len(self.edges) != before

    def set_weight(self, source: int, target: int, weight: int) -> Edge:
        """Reweight an existing edge.  Negative weights are refused outright."""
        if weight < 0:
            raise GraphValidationError("Edge values cannot be negative.")
        for i, e in enumerate(self.edges):
            if e.key == (source, target):
                self.edges[i] = e.with_weight(weight)
                return self.edges[i]
        raise KeyError(f"No edge {source} to {target}")

    def get_edge(self, source: int, target: int) -> Optional[Edge]:
        for e in self.edges:
            if e.key == (source, target):
                return e
        return None

    def has_edge(self, source: int, target: int) -> bool:
        return self.get_edge(source, target) is not None

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def edges_from(self, vertex_id: int) -> List[Edge]:
        """Outgoing edges of `vertex_id`, in creation order."""
        return [e for e in self.edges if e.source == vertex_id]

    def out_degree(self, vertex_id: int) -> int:
        return len(self.edges_from(vertex_id))

    # ==================================================================
    # VALIDATION
    # ==================================================================
    def validate(self) -> None:
        """Check the invariants the trace generator relies on."""
        ids = set()
        for v in self.vertices:
            if v.id < 0:
                raise GraphValidationError(f"Vertex ids must be non-negative: {v.id}")
            if v.id in ids:
                raise GraphValidationError(f"Duplicate vertex id: {v.id}")
            ids.add(v.id)

        seen = set()
        for e in self.edges:
            if e.source not in ids or e.target not in ids:
                raise GraphValidationError(f"Edge refers to a missing vertex: {e.source} to {e.target}")
            if e.source == e.target:
                raise GraphValidationError(f"Self-loops are not allowed: {e.source} to {e.target}")
            if e.weight < 0:
                raise GraphValidationError(f"Negative edge weights are not allowed: {e.source} to {e.target}")
            if e.key in seen:
                raise GraphValidationError(f"Duplicate edge detected: {e.source} to {e.target}")
            seen.add(e.key)

    def is_valid(self) -> bool:
        try:
            self.validate()
        except GraphValidationError as exc:
            logger.debug("graph rejected: %s", exc)
            return False
        return True

    # ==================================================================
    # SAMPLE
    # ==================================================================
    @classmethod
    def sample(cls) -> "Graph":
        """The seven-vertex demo graph the viewer opens with (start vertex 0)."""
        g = cls()
        for vid, x, y in _SAMPLE_VERTICES:
            g.add_vertex(x, y, vertex_id=vid)
        for src, tgt, w in _SAMPLE_EDGES:
            g.add_edge(src, tgt, w)
        return g

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> Dict[str, Any]:
        return {
            "vertices": [v.to_dict() for v in self.vertices],
            "edges":    [e.to_dict() for e in self.edges],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Graph":
        return cls(
            vertices=[Vertex.from_dict(vd) for vd in data.get("vertices", [])],
            edges=[Edge.from_dict(ed) for ed in data.get("edges", [])],
        )

    def copy(self) -> "Graph":
        return Graph(self.vertices, self.edges)

    # ==================================================================
    # UTILITY
    # ==================================================================
    def _vertex_index(self, vertex_id: int) -> int:
        for i, v in enumerate(self.vertices):
            if v.id == vertex_id:
                return i
        raise KeyError(f"No vertex {vertex_id}")

    def vertex_count(self) -> int:
        return len(self.vertices)

    def edge_count(self) -> int:
        return len(self.edges)

    def __repr__(self) -> str:
        return f"Graph(vertices={self.vertex_count()}, edges={self.edge_count()})"
