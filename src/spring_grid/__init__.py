"""
spring_grid - force-directed spring embedder layout on grid-encoded graphs.

A graph is packed into fixed-stride square arrays (positions, node index,
adjacency) so each layout tick is a uniform numeric kernel over those
arrays. Results are written back onto the graph's nodes.
"""

__version__ = "0.1.0"

from .core import ForceLayoutEngine, GraphGridEncoder, GridEncoding, SimulationProperties, create_backend
from .graph import Graph, LayoutNode

__all__ = [
    "__version__",
    "ForceLayoutEngine",
    "GraphGridEncoder",
    "GridEncoding",
    "SimulationProperties",
    "create_backend",
    "Graph",
    "LayoutNode",
]
