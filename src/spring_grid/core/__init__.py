"""
Layout core: grid encoding, force laws, compute backends and the engine.

Usage:
    from spring_grid.core import ForceLayoutEngine, GraphGridEncoder
"""

from .grid_encoder import GraphGridEncoder, GridEncoding, grid_side, index_to_coordinates
from .layout_engine import ForceLayoutEngine, PROPERTY_ALIASES
from .force_laws import SimulationProperties
from .compute import (
    ComputeBackend,
    SerialBackend,
    NumpyBackend,
    ThreadPoolBackend,
    create_backend,
)

__all__ = [
    "GraphGridEncoder",
    "GridEncoding",
    "grid_side",
    "index_to_coordinates",
    "ForceLayoutEngine",
    "PROPERTY_ALIASES",
    "SimulationProperties",
    "ComputeBackend",
    "SerialBackend",
    "NumpyBackend",
    "ThreadPoolBackend",
    "create_backend",
]
