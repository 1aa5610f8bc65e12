from .exceptions import (
    StructuralMismatchError,
    AsymmetricNeighbourError,
    NodeNotFoundError,
    DuplicateNodeError,
)

__all__ = [
    "StructuralMismatchError",
    "AsymmetricNeighbourError",
    "NodeNotFoundError",
    "DuplicateNodeError",
]
