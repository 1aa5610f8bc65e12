"""
Charge repulsion between every pair of distinct nodes.

Physics:
    F = Q / max(d, d_min)^2   directed from node j toward node i

Coincident distinct nodes (d == 0) get a deterministic unit direction
that is antisymmetric in the pair, so the two nodes are pushed apart
by equal and opposite forces instead of staying stuck together.
"""

import math

import numpy as np

from .constants import GOLDEN_ANGLE, MIN_DISTANCE, ZERO_LENGTH
from .types import ForceVector, ZERO_FORCE


def coincident_direction(i: int, j: int) -> tuple[float, float]:
    """Unit direction used for node i when it sits exactly on node j."""
    theta = (i + j + 1) * GOLDEN_ANGLE
    sign = 1.0 if i > j else -1.0
    return sign * math.cos(theta), sign * math.sin(theta)


def charge_force(dx: float, dy: float, charge: float, i: int, j: int) -> ForceVector:
    """
    Repulsive force on node i from node j.

    Args:
        dx, dy: Vector from node j to node i (p_i - p_j).
        charge: Repulsion strength Q.
        i, j: Linear node indices; i == j yields no force.

    Returns:
        ForceVector acting on node i.
    """
    if i == j:
        return ZERO_FORCE
    d = math.hypot(dx, dy)
    if d < ZERO_LENGTH:
        ux, uy = coincident_direction(i, j)
    else:
        ux, uy = dx / d, dy / d
    clamped = max(d, MIN_DISTANCE)
    magnitude = charge / (clamped * clamped)
    return ForceVector(magnitude * ux, magnitude * uy)


def charge_forces(points: np.ndarray, start: int, stop: int, charge: float) -> np.ndarray:
    """
    Net repulsion on nodes start..stop-1 from all nodes in `points`.

    Rows are independent, so callers may split [0, N) into blocks and
    evaluate them in any order or in parallel.

    Args:
        points: Node positions, shape (N, 2). Padding must already be excluded.
        start, stop: Row block of target nodes.
        charge: Repulsion strength Q.

    Returns:
        Forces on the block, shape (stop - start, 2).
    """
    n = points.shape[0]
    rows = np.arange(start, stop)
    if rows.size == 0 or n == 0:
        return np.zeros((rows.size, 2), dtype=np.float64)

    delta = points[rows, None, :] - points[None, :, :]
    d = np.hypot(delta[..., 0], delta[..., 1])
    cols = np.arange(n)
    self_pair = rows[:, None] == cols[None, :]

    coincident = (d < ZERO_LENGTH) & ~self_pair
    safe_d = np.where(d < ZERO_LENGTH, 1.0, d)
    unit = delta / safe_d[..., None]

    if coincident.any():
        theta = (rows[:, None] + cols[None, :] + 1) * GOLDEN_ANGLE
        sign = np.where(rows[:, None] > cols[None, :], 1.0, -1.0)
        fallback = np.stack([sign * np.cos(theta), sign * np.sin(theta)], axis=-1)
        unit = np.where(coincident[..., None], fallback, unit)

    clamped = np.maximum(d, MIN_DISTANCE)
    magnitude = np.where(self_pair, 0.0, charge / (clamped * clamped))
    return (unit * magnitude[..., None]).sum(axis=1)
