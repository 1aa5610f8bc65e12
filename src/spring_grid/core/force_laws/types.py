"""
Parameter and result types for the layout force laws.
"""

import math
import numbers
from dataclasses import dataclass, fields, replace
from typing import Optional

from .constants import (
    DEFAULT_SPEED,
    DEFAULT_SPRING_REST_LENGTH,
    DEFAULT_SPRING_DAMPENING,
    DEFAULT_CHARGE,
    DEFAULT_MAX_DISPLACEMENT,
)


@dataclass(frozen=True)
class ForceVector:
    """
    Force acting on one node.

    Attributes:
        fx, fy: Components in layout units.
        magnitude: Euclidean length, derived.
    """
    fx: float
    fy: float

    @property
    def magnitude(self) -> float:
        return (self.fx * self.fx + self.fy * self.fy) ** 0.5

    def __add__(self, other: "ForceVector") -> "ForceVector":
        return ForceVector(self.fx + other.fx, self.fy + other.fy)


ZERO_FORCE = ForceVector(0.0, 0.0)


@dataclass
class SimulationProperties:
    """
    Tunable parameters of the spring embedder.

    Attributes:
        speed: Displacement per unit force per tick (> 0).
        spring_rest_length: Target edge length (> 0).
        spring_dampening: Spring stiffness coefficient (>= 0).
        charge: Repulsion strength between every node pair (> 0).
        max_displacement: Largest step a node may take in one tick (> 0).
            Defaults to inf, i.e. the step is exactly speed * F.
    """
    speed: float = DEFAULT_SPEED
    spring_rest_length: float = DEFAULT_SPRING_REST_LENGTH
    spring_dampening: float = DEFAULT_SPRING_DAMPENING
    charge: float = DEFAULT_CHARGE
    max_displacement: float = DEFAULT_MAX_DISPLACEMENT

    @staticmethod
    def check_field(name: str, value) -> Optional[str]:
        """
        Validate a single field value.

        Returns:
            None if acceptable, otherwise the reason it is rejected.
        """
        if name not in SimulationProperties.field_names():
            return f"unknown property '{name}'"
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            return f"{name} must be a number"
        if math.isnan(value):
            return f"{name} must be a number"
        if math.isinf(value) and not (name == "max_displacement" and value > 0):
            return f"{name} must be finite"
        if name == "spring_dampening":
            if value < 0:
                return "spring_dampening must be non-negative"
        elif value <= 0:
            return f"{name} must be positive"
        return None

    @staticmethod
    def field_names():
        return tuple(f.name for f in fields(SimulationProperties))

    def validate(self) -> tuple[bool, Optional[str]]:
        for name in self.field_names():
            error = self.check_field(name, getattr(self, name))
            if error:
                return False, error
        return True, None

    def copy(self) -> "SimulationProperties":
        return replace(self)

    def as_dict(self) -> dict:
        return {name: getattr(self, name) for name in self.field_names()}
