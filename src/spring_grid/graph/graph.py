from typing import Dict, Hashable, Iterator, List, Tuple

from spring_grid.utils.logger.logger import Logger
from spring_grid.models.exceptions import DuplicateNodeError, NodeNotFoundError
from .node import LayoutNode


class Graph:
    """
    Undirected graph with insertion-ordered nodes and mirrored neighbour links.

    `revision` increases on every structural change so that cached
    encodings can tell they are stale.
    """

    def __init__(self, nodes=None):
        """Initialize with an optional iterable of LayoutNode (links are kept as given)."""
        self.nodes: List[LayoutNode] = []
        self._by_id: Dict[Hashable, LayoutNode] = {}
        self.revision = 0
        for node in nodes or []:
            self.add_node(node)

    def __len__(self):
        return len(self.nodes)

    def __iter__(self) -> Iterator[LayoutNode]:
        return iter(self.nodes)

    def __contains__(self, node):
        return self._by_id.get(getattr(node, "node_id", None)) is node

    def get_nodes(self) -> List[LayoutNode]:
        """Return nodes list in insertion order."""
        return self.nodes

    def get_node_by_id(self, node_id):
        """Return node by ID or None."""
        return self._by_id.get(node_id)

    def require_node(self, node_id) -> LayoutNode:
        """Return node by ID or raise NodeNotFoundError."""
        node = self._by_id.get(node_id)
        if node is None:
            raise NodeNotFoundError(f"Node '{node_id}' not found in graph.")
        return node

    def add_node(self, node) -> LayoutNode:
        """
        Add a node (LayoutNode or bare ID). IDs must be unique.

        Returns:
            The added LayoutNode.
        """
        if not isinstance(node, LayoutNode):
            node = LayoutNode(node)
        if node.node_id in self._by_id:
            raise DuplicateNodeError(f"Node with ID '{node.node_id}' already exists in the graph.")
        self.nodes.append(node)
        self._by_id[node.node_id] = node
        self.revision += 1
        return node

    def remove_node(self, node_id) -> None:
        """Remove a node and every link pointing at it."""
        node = self.require_node(node_id)
        for neighbour in list(node.neighbours):
            if neighbour is not node:
                neighbour.neighbours = [n for n in neighbour.neighbours if n is not node]
        node.neighbours = []
        self.nodes = [n for n in self.nodes if n is not node]
        del self._by_id[node_id]
        self.revision += 1
        Logger.log(f"Node removed: {node_id}")

    def add_edge(self, from_id, to_id) -> bool:
        """
        Link two nodes in both directions.

        A self-loop (from_id == to_id) is listed once in the node's own
        neighbour list.

        Returns:
            False if the link already existed, True otherwise.
        """
        a = self.require_node(from_id)
        b = self.require_node(to_id)
        if a.is_neighbour(b):
            Logger.log(f"Edge {from_id} -> {to_id} already present; ignored")
            return False
        a.neighbours.append(b)
        if b is not a:
            b.neighbours.append(a)
        self.revision += 1
        return True

    def remove_edge(self, from_id, to_id) -> None:
        a = self.require_node(from_id)
        b = self.require_node(to_id)
        if not a.is_neighbour(b):
            raise NodeNotFoundError(f"No edge between '{from_id}' and '{to_id}'.")
        a.neighbours = [n for n in a.neighbours if n is not b]
        b.neighbours = [n for n in b.neighbours if n is not a]
        self.revision += 1

    def edges(self) -> List[Tuple[Hashable, Hashable]]:
        """Undirected edges as (id, id) pairs, each listed once in node order."""
        seen = set()
        result = []
        for node in self.nodes:
            for neighbour in node.neighbours:
                key = frozenset((id(node), id(neighbour)))
                if key in seen:
                    continue
                seen.add(key)
                result.append((node.node_id, neighbour.node_id))
        return result

    @property
    def link_count(self) -> int:
        """Directed neighbour-link count (sum of degrees)."""
        return sum(node.degree for node in self.nodes)

    def positions(self) -> Dict[Hashable, Tuple[float, float]]:
        """Current positions keyed by node ID."""
        return {node.node_id: (node.x, node.y) for node in self.nodes}

    def __repr__(self):
        return f"Graph(nodes={len(self.nodes)}, edges={len(self.edges())}, revision={self.revision})"
