from .node import LayoutNode
from .graph import Graph
from .generators import build_ring, build_grid, build_random, build_from_edges, build_graph

__all__ = [
    "LayoutNode",
    "Graph",
    "build_ring",
    "build_grid",
    "build_random",
    "build_from_edges",
    "build_graph",
]
