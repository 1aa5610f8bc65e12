from typing import Hashable, List


class LayoutNode:
    """
    Graph node as seen by the layout core.

    Attributes:
        node_id: Stable identity within one graph.
        x, y: Current position in layout units (pixels for screen hosts).
        is_fixed: Excluded from force updates; position owned by the host.
        neighbours: Mirrored neighbour references (not ownership).
    """

    __slots__ = ("node_id", "x", "y", "is_fixed", "neighbours", "label")

    def __init__(self, node_id: Hashable, x: float = 0.0, y: float = 0.0,
                 is_fixed: bool = False, label: str = None):
        self.node_id = node_id
        self.x = float(x)
        self.y = float(y)
        self.is_fixed = bool(is_fixed)
        self.neighbours: List["LayoutNode"] = []
        self.label = label

    def get_id(self):
        """Return node ID."""
        return self.node_id

    @property
    def degree(self) -> int:
        """Number of neighbour links, self-loop counted once."""
        return len(self.neighbours)

    @property
    def position(self):
        return (self.x, self.y)

    def move_to(self, x: float, y: float) -> None:
        """Set position, e.g. when the host drags a fixed node."""
        self.x = float(x)
        self.y = float(y)

    def is_neighbour(self, other: "LayoutNode") -> bool:
        return any(n is other for n in self.neighbours)

    def __repr__(self):
        fixed = ", fixed" if self.is_fixed else ""
        return f"LayoutNode({self.node_id!r}, x={self.x:.3f}, y={self.y:.3f}, degree={self.degree}{fixed})"
