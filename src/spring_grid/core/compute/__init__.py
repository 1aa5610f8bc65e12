"""
Compute backends for the layout engine.

The engine receives a backend at construction instead of reaching for a
shared global device. SerialBackend is the per-element reference,
NumpyBackend the default, ThreadPoolBackend spreads row blocks over
worker threads.
"""

from typing import Optional

from spring_grid.utils.logger.logger import Logger
from .backend_strategy import ComputeBackend, VectorisedBackend
from .kernel import compute_cell, integrate_points, limit_step
from .serial_backend import SerialBackend
from .numpy_backend import NumpyBackend
from .thread_pool_backend import ThreadPoolBackend

BACKENDS = {
    "serial": SerialBackend,
    "numpy": NumpyBackend,
    "threads": ThreadPoolBackend,
}


def create_backend(name: str, workers: Optional[int] = None) -> ComputeBackend:
    """Create a backend by key (case-insensitive)."""
    Logger.log(f"start create_backend({name}, workers={workers})")
    if not name:
        raise ValueError("Backend name must not be empty")

    key = name.lower()
    if key not in BACKENDS:
        raise ValueError(f"Unknown compute backend: '{name}' (expected one of {sorted(BACKENDS)})")

    if key == "threads":
        return ThreadPoolBackend(workers=workers)
    return BACKENDS[key]()


__all__ = [
    "ComputeBackend",
    "VectorisedBackend",
    "SerialBackend",
    "NumpyBackend",
    "ThreadPoolBackend",
    "BACKENDS",
    "create_backend",
    "compute_cell",
    "integrate_points",
    "limit_step",
]
