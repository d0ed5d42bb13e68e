"""
vertex.py — Graph Vertex
========================
A vertex is a small integer id plus a canvas position.  The position
belongs to the editor and the algorithm passes it through untouched;
`processed` belongs to the algorithm and is only ever flipped on the
copies that go into a Step.

Design decisions:
  - Frozen dataclass.  Steps hold vertices directly, so a vertex must
    never change after it has been captured.  "Mutation" is
    `dataclasses.replace`, which hands back a new object.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict


@dataclass(frozen=True)
class Vertex:
    """
    Attributes:
        id        : Unique non-negative integer within a graph.
        x, y      : Canvas coordinates (opaque to the algorithm).
        processed : True once the vertex has been extracted from the fringe.
    """

    id:        int
    x:         float = 0.0
    y:         float = 0.0
    processed: bool  = False

    def mark_processed(self) -> "Vertex":
        return replace(self, processed=True)

    def moved_to(self, x: float, y: float) -> "Vertex":
        return replace(self, x=x, y=y)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id":        self.id,
            "x":         self.x,
            "y":         self.y,
            "processed": self.processed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Vertex":
        return cls(
            id=int(data["id"]),
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            processed=bool(data.get("processed", False)),
        )

    def __repr__(self) -> str:
        flag = ", processed" if self.processed else ""
        return f"Vertex({self.id}, pos=({self.x:.1f},{self.y:.1f}){flag})"
