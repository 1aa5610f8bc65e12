"""
Force laws for the spring embedder.

Provides Hooke-type spring attraction along edges and inverse-square
charge repulsion between all node pairs, each as a scalar function
(one pair) and a vectorised numpy function (many pairs).

Usage:
    from spring_grid.core.force_laws import spring_force, charge_force
    from spring_grid.core.force_laws import SimulationProperties
"""

from .constants import (
    UNUSED_POSITION,
    UNUSED_INDEX,
    MIN_DISTANCE,
    ZERO_LENGTH,
    GOLDEN_ANGLE,
    SCATTER_HALF_WIDTH,
)
from .types import ForceVector, ZERO_FORCE, SimulationProperties
from .spring import spring_force, spring_forces
from .charge import charge_force, charge_forces, coincident_direction

__all__ = [
    # Constants
    'UNUSED_POSITION',
    'UNUSED_INDEX',
    'MIN_DISTANCE',
    'ZERO_LENGTH',
    'GOLDEN_ANGLE',
    'SCATTER_HALF_WIDTH',
    # Types
    'ForceVector',
    'ZERO_FORCE',
    'SimulationProperties',
    # Spring
    'spring_force',
    'spring_forces',
    # Charge
    'charge_force',
    'charge_forces',
    'coincident_direction',
]
