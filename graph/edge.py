"""
edge.py — Directed Weighted Edge
================================
Connects two vertices by id.  Carries an `active` flag so a Step can
record which edges leave the vertex that was just extracted.

Design decisions:
  - `source` and `target` are vertex ids, NOT Vertex references.
    This keeps edges serialisable and avoids circular references.
  - Always directed.  `(source, target)` is the edge's identity; the
    editor guarantees there is at most one edge per ordered pair.
  - Frozen for the same reason as Vertex: Steps keep edges verbatim.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Edge:
    """
    Attributes:
        source : ID of the tail vertex.
        target : ID of the head vertex.
        weight : Non-negative integer cost.
        active : True only in the Step whose current vertex is `source`.
    """

    source: int
    target: int
    weight: int  = 1
    active: bool = False

    @property
    def key(self) -> Tuple[int, int]:
        return (self.source, self.target)

    def with_active(self, active: bool) -> "Edge":
        if active == self.active:
            return self
        return replace(self, active=active)

    def with_weight(self, weight: int) -> "Edge":
        return replace(self, weight=weight)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
            "active": self.active,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Edge":
        return cls(
            source=int(data["source"]),
            target=int(data["target"]),
            weight=int(data.get("weight", 1)),
            active=bool(data.get("active", False)),
        )

    def __repr__(self) -> str:
        star = "*" if self.active else ""
        return f"Edge({self.source} → {self.target}, w={self.weight}{star})"
