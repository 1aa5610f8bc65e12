"""
Numeric constants shared by the encoder, the force laws and the engine.

Layout units are abstract; screen hosts treat them as pixels.
"""

import math
from typing import Final

# Sentinels for grid padding (positions beyond N, adjacency cells beyond E)
UNUSED_POSITION: Final[float] = -1.0
UNUSED_INDEX: Final[int] = -1

# Distance floor for the charge law; closer pairs are treated as this far apart
MIN_DISTANCE: Final[float] = 0.01

# Below this a vector has no usable direction
ZERO_LENGTH: Final[float] = 1e-12

# Fixed angular increment for separating coincident node pairs
GOLDEN_ANGLE: Final[float] = math.pi * (3.0 - math.sqrt(5.0))

# Engine defaults
DEFAULT_SPEED: Final[float] = 0.01
DEFAULT_SPRING_REST_LENGTH: Final[float] = 10.0
DEFAULT_SPRING_DAMPENING: Final[float] = 1.0 / 10.0
DEFAULT_CHARGE: Final[float] = 150.0 * 150.0
# No step limit unless a host sets one
DEFAULT_MAX_DISPLACEMENT: Final[float] = math.inf

# Initial scatter: nodes start within +/- this of the canvas centre
SCATTER_HALF_WIDTH: Final[float] = 50.0
