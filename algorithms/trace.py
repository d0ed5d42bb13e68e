"""
trace.py — A Complete Run
=========================
Trace is the ordered, read-only list of Steps one Dijkstra run produced,
plus a few questions a viewer asks about the finished run.
"""

from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence

from algorithms.step import Step


class Trace(Sequence[Step]):
    """
    Attributes:
        start       : Start vertex id (None only for the empty-graph trace).
        stale_skips : Extractions discarded because their key was out of date.
    """

    def __init__(self, steps: Iterable[Step], start: Optional[int], stale_skips: int = 0):
        self._steps: tuple = tuple(steps)
        self.start: Optional[int] = start
        self.stale_skips: int = stale_skips

    def __getitem__(self, index):
        return self._steps[index]

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self._steps)

    @property
    def initial(self) -> Step:
        return self._steps[0]

    @property
    def final(self) -> Step:
        return self._steps[-1]

    def distance_to(self, vertex_id: int) -> Optional[int]:
        """Final shortest distance, or None if unreachable / unknown."""
        return self.final.dist_to.get(vertex_id)

    def path_to(self, vertex_id: int) -> List[int]:
        """Start → … → vertex_id along edge_to; [] if unreachable."""
        edge_to = self.final.edge_to
        if vertex_id not in edge_to or self.distance_to(vertex_id) is None:
            return []
        path, cur = [], vertex_id
        while cur is not None:
            path.append(cur)
            cur = edge_to.get(cur)
        path.reverse()
        return path

    def processing_order(self) -> List[int]:
        return [s.current_vertex for s in self._steps if s.current_vertex is not None]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start":       self.start,
            "stale_skips": self.stale_skips,
            "steps":       [s.to_dict() for s in self._steps],
        }

    def __repr__(self) -> str:
        return f"Trace(start={self.start}, steps={len(self)})"
