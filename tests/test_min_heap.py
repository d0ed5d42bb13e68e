"""Tests for the fringe priority queue."""

import math
import random

from algorithms import MinHeap


def drain(heap):
    out = []
    while not heap.is_empty():
        out.append(heap.extract_min())
    return out


class TestMinHeap:

    def test_extract_min_on_empty_heap_returns_none(self):
        heap = MinHeap()
        assert heap.is_empty()
        assert heap.extract_min() is None
        assert heap.peek() is None

    def test_extracts_in_key_order(self):
        heap = MinHeap()
        for vid, key in [(0, 5), (1, 3), (2, 8), (3, 1), (4, 4)]:
            heap.insert(vid, key)
        assert [key for _, key in drain(heap)] == [1, 3, 4, 5, 8]

    def test_random_keys_come_out_sorted(self):
        rng = random.Random(7)
        heap = MinHeap()
        keys = [rng.randint(0, 100) for _ in range(60)]
        for vid, key in enumerate(keys):
            heap.insert(vid, key)
        assert [key for _, key in drain(heap)] == sorted(keys)

    def test_infinite_keys_sort_last(self):
        heap = MinHeap()
        heap.insert(0, math.inf)
        heap.insert(1, 3)
        heap.insert(2, math.inf)
        first = heap.extract_min()
        assert first == (1, 3)
        assert {vid for vid, _ in drain(heap)} == {0, 2}

    def test_decrease_key_moves_entry_to_top(self):
        heap = MinHeap()
        for vid in range(5):
            heap.insert(vid, math.inf if vid else 0)
        heap.extract_min()
        assert heap.decrease_key(3, 2) is True
        assert heap.peek() == (3, 2)
        assert len(heap) == 4

    def test_decrease_key_on_missing_id_is_noop(self):
        heap = MinHeap()
        heap.insert(0, 1)
        before = heap.snapshot()
        assert heap.decrease_key(42, 0) is False
        assert heap.snapshot() == before

    def test_decrease_key_keeps_single_entry_per_vertex(self):
        heap = MinHeap()
        heap.insert(0, 10)
        heap.insert(1, 20)
        heap.decrease_key(1, 5)
        heap.decrease_key(1, 2)
        assert sorted(heap.snapshot()) == [(0, 10), (1, 2)]
        assert 1 in heap
        assert 7 not in heap

    def test_snapshot_is_independent_of_later_mutation(self):
        heap = MinHeap()
        heap.insert(0, 4)
        heap.insert(1, 9)
        snap = heap.snapshot()
        heap.decrease_key(1, 1)
        heap.extract_min()
        heap.insert(2, 0)
        assert isinstance(snap, tuple)
        assert sorted(snap) == [(0, 4), (1, 9)]

    def test_same_insertions_give_same_snapshot(self):
        def build():
            heap = MinHeap()
            for vid, key in [(0, 2), (1, 2), (2, 1), (3, 2), (4, 1)]:
                heap.insert(vid, key)
            heap.decrease_key(3, 1)
            return heap

        a, b = build(), build()
        assert a.snapshot() == b.snapshot()
        assert drain(a) == drain(b)
