"""
Hooke-type spring attraction along graph edges.

Physics:
    F = (d - L0) * c   directed from node i toward its neighbour j

    d > L0: pulls the pair together
    d = L0: no force
    d < L0: pushes the pair apart

Parameters:
    - L0: spring_rest_length
    - c:  spring_dampening (stiffness coefficient)

A link of zero length (a self-loop, or two coincident endpoints) has no
direction and contributes nothing; charge repulsion separates coincident
distinct nodes.
"""

import math

import numpy as np

from .constants import ZERO_LENGTH
from .types import ForceVector, ZERO_FORCE


def spring_force(dx: float, dy: float, rest_length: float, dampening: float) -> ForceVector:
    """
    Spring force on node i from one neighbour.

    Args:
        dx, dy: Vector from node i to the neighbour (p_j - p_i).
        rest_length: Spring rest length.
        dampening: Stiffness coefficient.

    Returns:
        ForceVector acting on node i.

    Example:
        >>> f = spring_force(20.0, 0.0, rest_length=10.0, dampening=0.1)
        >>> f.fx, f.fy
        (1.0, 0.0)
    """
    d = math.hypot(dx, dy)
    if d < ZERO_LENGTH:
        return ZERO_FORCE
    magnitude = (d - rest_length) * dampening
    return ForceVector(magnitude * dx / d, magnitude * dy / d)


def spring_forces(points: np.ndarray, src: np.ndarray, dst: np.ndarray,
                  rest_length: float, dampening: float) -> np.ndarray:
    """
    Net spring force on every node from a directed link table.

    Each undirected edge appears twice in (src, dst), once per direction,
    so every node accumulates the pull of each of its own links.

    Args:
        points: Node positions, shape (N, 2).
        src: Link source indices into points, shape (E,).
        dst: Link target indices into points, shape (E,).
        rest_length: Spring rest length.
        dampening: Stiffness coefficient.

    Returns:
        Forces, shape (N, 2).
    """
    forces = np.zeros_like(points, dtype=np.float64)
    if src.size == 0:
        return forces

    delta = points[dst] - points[src]
    d = np.hypot(delta[:, 0], delta[:, 1])
    usable = (d >= ZERO_LENGTH) & (src != dst)
    safe_d = np.where(usable, d, 1.0)
    scale = np.where(usable, (d - rest_length) * dampening / safe_d, 0.0)

    np.add.at(forces, src, delta * scale[:, None])
    return forces
