"""
algorithms/
-----------
Shortest-path trace generation.

    from algorithms import generate_trace, Trace, Step

generate_trace(graph, start) runs Dijkstra and returns a Trace: the
ordered, immutable Steps of the run.  MinHeap is the fringe it uses.
"""

from algorithms.min_heap import MinHeap
from algorithms.step     import Step, StepBuilder
from algorithms.trace    import Trace
from algorithms.dijkstra import dijkstra, generate_trace, InvalidStartVertexError

__all__ = [
    "MinHeap",
    "Step",
    "StepBuilder",
    "Trace",
    "dijkstra",
    "generate_trace",
    "InvalidStartVertexError",
]
