"""
min_heap.py — Fringe Priority Queue
===================================
Array-backed binary min-heap over (vertex_id, key) pairs.

    heap = MinHeap()
    heap.insert(0, 0)
    heap.insert(1, INF)
    heap.decrease_key(1, 4)
    heap.extract_min()        # → (0, 0)

heapq has no decrease-key.  The fringe keeps exactly one entry per
unfinished vertex, so each Step snapshot shows the queue as it is.

Costs:
  insert / extract_min : O(log n)
  decrease_key         : O(n) scan to find the entry, then O(log n) sift.
                         Fine for editor-sized graphs; a position map
                         would make it O(log n).

Ties are broken by heap shape, so identical insertion sequences always
produce identical snapshots.
"""

from typing import List, Optional, Tuple

Entry = Tuple[int, float]


class MinHeap:

    def __init__(self):
        # [vertex_id, key] — lists so decrease_key can edit in place
        self._heap: List[List] = []

    # ------------------------------------------------------------------
    # Index arithmetic
    # ------------------------------------------------------------------
    @staticmethod
    def _parent(i: int) -> int:
        return (i - 1) // 2

    @staticmethod
    def _left(i: int) -> int:
        return 2 * i + 1

    @staticmethod
    def _right(i: int) -> int:
        return 2 * i + 2

    def _swap(self, i: int, j: int) -> None:
        self._heap[i], self._heap[j] = self._heap[j], self._heap[i]

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def insert(self, vertex_id: int, key: float) -> None:
        self._heap.append([vertex_id, key])
        self._sift_up(len(self._heap) - 1)

    def extract_min(self) -> Optional[Entry]:
        """Remove and return the entry with the smallest key, or None if empty."""
        if not self._heap:
            return None
        if len(self._heap) == 1:
            vid, key = self._heap.pop()
            return (vid, key)

        vid, key = self._heap[0]
        self._heap[0] = self._heap.pop()
        self._sift_down(0)
        return (vid, key)

    def decrease_key(self, vertex_id: int, new_key: float) -> bool:
        """
        Lower the key of `vertex_id` and restore heap order.
        Returns False (and changes nothing) if the id is not in the heap.
        """
        for i, entry in enumerate(self._heap):
            if entry[0] == vertex_id:
                entry[1] = new_key
                self._sift_up(i)
                return True
        return False

    def peek(self) -> Optional[Entry]:
        if not self._heap:
            return None
        vid, key = self._heap[0]
        return (vid, key)

    def is_empty(self) -> bool:
        return not self._heap

    def snapshot(self) -> Tuple[Entry, ...]:
        """Independent copy of the contents, in heap-array order."""
        return tuple((vid, key) for vid, key in self._heap)

    def __contains__(self, vertex_id: int) -> bool:
        return any(entry[0] == vertex_id for entry in self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def __repr__(self) -> str:
        return f"MinHeap({self.snapshot()})"

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _sift_up(self, i: int) -> None:
        while i > 0 and self._heap[i][1] < self._heap[self._parent(i)][1]:
            self._swap(i, self._parent(i))
            i = self._parent(i)

    def _sift_down(self, i: int) -> None:
        size = len(self._heap)
        while True:
            smallest = i
            left, right = self._left(i), self._right(i)

            if left < size and self._heap[left][1] < self._heap[smallest][1]:
                smallest = left
            if right < size and self._heap[right][1] < self._heap[smallest][1]:
                smallest = right

            if smallest == i:
                break
            self._swap(i, smallest)
            i = smallest
