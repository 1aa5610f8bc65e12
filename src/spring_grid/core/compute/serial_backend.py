import numpy as np

from .backend_strategy import ComputeBackend
from .kernel import compute_cell


class SerialBackend(ComputeBackend):
    """
    Reference backend: evaluates compute_cell() for every grid cell in turn.

    Slow (pure Python), but it is the literal per-element formulation and
    the baseline the vectorised backends are checked against.
    """

    name = "serial"

    def compute_next_positions(self, encoding, positions, fixed_mask, properties) -> np.ndarray:
        next_positions = positions.copy()
        side_p = positions.shape[0]
        for row in range(side_p):
            for col in range(side_p):
                next_positions[row, col] = compute_cell(
                    row, col,
                    positions,
                    encoding.node_index,
                    encoding.adjacency,
                    fixed_mask,
                    encoding.node_count,
                    properties,
                )
        return next_positions
