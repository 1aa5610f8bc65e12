import numpy as np

from spring_grid.utils.logger.logger import Logger
from spring_grid.core.force_laws.spring import spring_forces
from .kernel import integrate_points


class ComputeBackend:
    """
    Interface for layout compute backends.

    A backend turns the pre-tick positions grid into a new grid. It must
    never write into the grid it is given: the engine swaps the returned
    buffer in only after the call returns.
    """

    name = "base"

    def __init__(self):
        Logger.log(f"{type(self).__name__} created")

    def compute_next_positions(self, encoding, positions, fixed_mask, properties) -> np.ndarray:
        """
        Args:
            encoding: GridEncoding with node_index, adjacency and node_count.
            positions: (P, P, 2) pre-tick positions (read only).
            fixed_mask: (P, P) bool grid of fixed nodes.
            properties: SimulationProperties for this tick.

        Returns:
            A new (P, P, 2) positions grid.
        """
        raise NotImplementedError()

    def close(self):
        """Release worker resources, if any."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __repr__(self):
        return f"{type(self).__name__}()"


class VectorisedBackend(ComputeBackend):
    """
    Shared tick skeleton for numpy-based backends.

    Subclasses supply compute_repulsion(); spring attraction, step
    limiting and the padding/fixed handling are common.
    """

    def compute_next_positions(self, encoding, positions, fixed_mask, properties) -> np.ndarray:
        next_positions = positions.copy()
        n = encoding.node_count
        if n == 0:
            return next_positions

        points = encoding.valid_points(positions)
        src, dst = encoding.link_table
        forces = self.compute_repulsion(points, properties.charge)
        forces += spring_forces(points, src, dst,
                                properties.spring_rest_length, properties.spring_dampening)

        movable = ~fixed_mask.reshape(-1)[:n]
        next_positions.reshape(-1, 2)[:n] = integrate_points(points, forces, movable, properties)
        return next_positions

    def compute_repulsion(self, points: np.ndarray, charge: float) -> np.ndarray:
        """(N, 2) net charge repulsion on every node."""
        raise NotImplementedError()
