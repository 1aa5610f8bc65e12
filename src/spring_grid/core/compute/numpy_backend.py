import numpy as np

from spring_grid.core.force_laws.charge import charge_forces
from .backend_strategy import VectorisedBackend


class NumpyBackend(VectorisedBackend):
    """
    Vectorised in-process backend.

    All-pairs repulsion is evaluated in row blocks so peak memory stays
    at block_size * N pair entries instead of N * N.
    """

    name = "numpy"

    DEFAULT_BLOCK_SIZE = 512

    def __init__(self, block_size: int = DEFAULT_BLOCK_SIZE):
        if block_size < 1:
            raise ValueError("block_size must be >= 1")
        self.block_size = block_size
        super().__init__()

    def compute_repulsion(self, points: np.ndarray, charge: float) -> np.ndarray:
        n = points.shape[0]
        forces = np.zeros((n, 2), dtype=np.float64)
        for start in range(0, n, self.block_size):
            stop = min(start + self.block_size, n)
            forces[start:stop] = charge_forces(points, start, stop, charge)
        return forces

    def __repr__(self):
        return f"NumpyBackend(block_size={self.block_size})"
