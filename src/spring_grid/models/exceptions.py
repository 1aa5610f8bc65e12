class StructuralMismatchError(Exception):
    """Cached grid encoding no longer matches the live graph."""
    def __init__(self, message="Graph structure changed since it was encoded; call rebuild() before the next tick."):
        super().__init__(message)

class AsymmetricNeighbourError(Exception):
    """A neighbour link is not mirrored on the other node."""
    def __init__(self, message="Neighbour relation is not symmetric."):
        super().__init__(message)

class NodeNotFoundError(Exception):
    """Node not found in the graph."""
    def __init__(self, message="Node not found in graph."):
        super().__init__(message)

class DuplicateNodeError(Exception):
    """Node ID already present in the graph."""
    def __init__(self, message="Node ID already exists in graph."):
        super().__init__(message)
