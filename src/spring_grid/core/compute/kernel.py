"""
Per-element layout kernel.

compute_cell() is the pure function evaluated for one grid cell: it
reads only the pre-tick grids and returns that cell's next position.
Any number of cells may be evaluated concurrently; the vectorised
backends compute the same quantities for many cells at once.
"""

import math

import numpy as np

from spring_grid.core.force_laws.charge import charge_force
from spring_grid.core.force_laws.spring import spring_force
from spring_grid.core.force_laws.types import SimulationProperties


def limit_step(dx: float, dy: float, max_displacement: float) -> tuple[float, float]:
    """Scale (dx, dy) down to max_displacement if it is longer; inf never scales."""
    length = math.hypot(dx, dy)
    if length > max_displacement:
        scale = max_displacement / length
        return dx * scale, dy * scale
    return dx, dy


def compute_cell(
    row: int,
    col: int,
    positions: np.ndarray,
    node_index: np.ndarray,
    adjacency: np.ndarray,
    fixed_mask: np.ndarray,
    node_count: int,
    properties: SimulationProperties,
) -> tuple[float, float]:
    """
    Next position of the cell at (row, col).

    Padding cells and fixed nodes return their current value unchanged.
    Otherwise: repulsion from every other valid node, spring attraction
    from each neighbour in the adjacency run (self-loops skipped), then a
    speed-scaled move, limited only when max_displacement is finite.
    """
    side_p = positions.shape[0]
    i = row * side_p + col
    x = float(positions[row, col, 0])
    y = float(positions[row, col, 1])
    if i >= node_count or fixed_mask[row, col]:
        return x, y

    fx = 0.0
    fy = 0.0

    for j in range(node_count):
        if j == i:
            continue
        other = positions[j // side_p, j % side_p]
        f = charge_force(x - float(other[0]), y - float(other[1]), properties.charge, i, j)
        fx += f.fx
        fy += f.fy

    adj_row, adj_col, degree = (int(v) for v in node_index[row, col])
    side_a = adjacency.shape[0]
    if degree > 0 and adj_row >= 0 and adj_col >= 0 and side_a > 0:
        start = adj_row * side_a + adj_col
        for k in range(start, min(start + degree, side_a * side_a)):
            n_row, n_col = (int(v) for v in adjacency[k // side_a, k % side_a])
            if n_row < 0 or n_col < 0:
                continue
            j = n_row * side_p + n_col
            if j == i or j >= node_count:
                continue
            other = positions[n_row, n_col]
            f = spring_force(float(other[0]) - x, float(other[1]) - y,
                             properties.spring_rest_length, properties.spring_dampening)
            fx += f.fx
            fy += f.fy

    dx, dy = limit_step(properties.speed * fx, properties.speed * fy, properties.max_displacement)
    return x + dx, y + dy


def integrate_points(
    points: np.ndarray,
    forces: np.ndarray,
    movable: np.ndarray,
    properties: SimulationProperties,
) -> np.ndarray:
    """
    Vectorised counterpart of the final step of compute_cell().

    Args:
        points: (N, 2) pre-tick positions.
        forces: (N, 2) net forces.
        movable: (N,) bool, False for fixed nodes.
        properties: Simulation parameters.

    Returns:
        (N, 2) next positions (new array).
    """
    step = forces * properties.speed
    length = np.hypot(step[:, 0], step[:, 1])
    too_long = length > properties.max_displacement
    if too_long.any():
        scale = np.ones_like(length)
        scale[too_long] = properties.max_displacement / length[too_long]
        step = step * scale[:, None]
    step[~movable] = 0.0
    return points + step
