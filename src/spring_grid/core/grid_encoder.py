"""
Graph Grid Encoder - irregular graph to fixed-shape dense grids

Maps a graph with arbitrary node degrees onto three square numpy arrays
so that a node's position update can be evaluated per grid cell with
uniform-stride reads only.

Grids:
------
- positions   (P, P, 2) float64: (x, y) of node i at (i // P, i % P)
- node_index  (P, P, 3) int64:   (adj_row, adj_col, degree) of node i
- adjacency   (A, A, 2) int64:   neighbour grid coordinates (row, col)

with P = ceil(sqrt(N)) and A = ceil(sqrt(E)), E = sum of degrees (each
undirected edge is stored once per direction, a self-loop once).

Node i's neighbours occupy `degree` consecutive adjacency cells starting
at linear cell adj_row * A + adj_col, wrapping row-major across the grid.
A single cursor hands out these runs in node order, so runs never overlap
and the used cells form the prefix [0, E).

Padding:
--------
Cells past N (node grids) or past E (adjacency grid) hold the sentinel
-1 in every component. Degree-0 nodes hold (-1, -1, 0). Reading a
sentinel yields no neighbours and contributes no force.

Algorithm:
----------
1. Phase 1: assign each node its linear index, record degree and the
   start of its adjacency run, copy its position.
2. Phase 2: resolve every neighbour reference to its grid coordinate.
   This needs all indices from phase 1, since a neighbour may come later
   in iteration order than the node listing it.
"""

import math
from dataclasses import dataclass, field
from functools import cached_property
from typing import Dict, List, Optional, Tuple

import numpy as np

from spring_grid.utils.logger.logger import Logger
from spring_grid.config.feature_flags import FeatureFlags
from spring_grid.models.exceptions import (
    AsymmetricNeighbourError,
    NodeNotFoundError,
    StructuralMismatchError,
)
from .force_laws.constants import UNUSED_INDEX, UNUSED_POSITION


def grid_side(count: int) -> int:
    """Smallest side s with s * s >= count."""
    if count <= 0:
        return 0
    return math.isqrt(count - 1) + 1


def index_to_coordinates(index: int, side: int) -> Tuple[int, int]:
    """Row-major linear index to (row, col) on a square grid of the given side."""
    return index // side, index % side


def graph_nodes(graph) -> list:
    """Node list of a graph collaborator, in its stable iteration order."""
    if graph is None:
        raise ValueError("graph must not be None")
    return list(graph.nodes)


@dataclass
class GridEncoding:
    """
    Dense encoding of one graph, valid until the graph changes structurally.

    Attributes:
        positions: (P, P, 2) initial positions grid.
        node_index: (P, P, 3) adjacency run start and degree per node.
        adjacency: (A, A, 2) neighbour coordinates.
        nodes: Node objects in linear index order.
        revision: Graph revision at encode time, None if the graph has none.
    """
    positions: np.ndarray
    node_index: np.ndarray
    adjacency: np.ndarray
    nodes: List
    revision: Optional[int] = None
    _index_by_identity: Dict[int, int] = field(default_factory=dict, repr=False)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def node_grid_size(self) -> int:
        """P, the side of the positions and node_index grids."""
        return self.node_index.shape[0]

    @property
    def adjacency_grid_size(self) -> int:
        """A, the side of the adjacency grid."""
        return self.adjacency.shape[0]

    @property
    def link_count(self) -> int:
        """E, the number of populated adjacency cells."""
        if self.node_count == 0:
            return 0
        degrees = self.node_index.reshape(-1, 3)[: self.node_count, 2]
        return int(degrees.sum())

    @property
    def is_empty(self) -> bool:
        return self.node_count == 0

    def index_of(self, node) -> int:
        """Linear index assigned to a node object."""
        try:
            return self._index_by_identity[id(node)]
        except KeyError:
            raise NodeNotFoundError(f"Node {node!r} is not part of this encoding.") from None

    def coordinate_of(self, node) -> Tuple[int, int]:
        """Grid coordinate assigned to a node object."""
        return index_to_coordinates(self.index_of(node), self.node_grid_size)

    def node_at(self, row: int, col: int):
        """Node stored at a grid cell, or None for padding."""
        i = row * self.node_grid_size + col
        if 0 <= i < self.node_count:
            return self.nodes[i]
        return None

    def neighbour_coordinates(self, row: int, col: int) -> List[Tuple[int, int]]:
        """
        Read the adjacency run of the node at (row, col).

        Padding cells, degree-0 nodes and sentinel adjacency cells yield
        nothing.
        """
        side_p = self.node_grid_size
        side_a = self.adjacency_grid_size
        if not (0 <= row < side_p and 0 <= col < side_p) or side_a == 0:
            return []
        adj_row, adj_col, degree = (int(v) for v in self.node_index[row, col])
        if degree <= 0 or adj_row < 0 or adj_col < 0:
            return []

        start = adj_row * side_a + adj_col
        result = []
        for k in range(start, min(start + degree, side_a * side_a)):
            n_row, n_col = (int(v) for v in self.adjacency[k // side_a, k % side_a])
            if n_row < 0 or n_col < 0:
                continue
            result.append((n_row, n_col))
        return result

    @cached_property
    def link_table(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Directed links as flat (src, dst) node index arrays.

        Built from the grids themselves: every node's run is expanded
        and each adjacency cell's coordinate mapped back to a linear
        node index.
        """
        n = self.node_count
        side_p = self.node_grid_size
        side_a = self.adjacency_grid_size
        empty = np.zeros(0, dtype=np.int64)
        if n == 0 or side_a == 0:
            return empty, empty

        flat_index = self.node_index.reshape(-1, 3)[:n]
        degrees = np.maximum(flat_index[:, 2], 0)
        total = int(degrees.sum())
        if total == 0:
            return empty, empty

        starts = flat_index[:, 0] * side_a + flat_index[:, 1]
        src = np.repeat(np.arange(n, dtype=np.int64), degrees)
        run_offsets = np.arange(total) - np.repeat(np.cumsum(degrees) - degrees, degrees)
        cells = np.repeat(starts, degrees) + run_offsets

        targets = self.adjacency.reshape(-1, 2)[cells]
        valid = (targets[:, 0] >= 0) & (targets[:, 1] >= 0)
        dst = targets[:, 0] * side_p + targets[:, 1]
        return src[valid], dst[valid].astype(np.int64)

    def valid_points(self, positions: np.ndarray) -> np.ndarray:
        """First N cells of a positions grid as an (N, 2) view."""
        return positions.reshape(-1, 2)[: self.node_count]


class GraphGridEncoder:
    """
    Bidirectional mapping between a graph and its dense grid encoding.

    The encoder keeps the most recent encoding; rebuild() must be called
    after any node or edge membership change.
    """

    def __init__(self):
        self.encoding: Optional[GridEncoding] = None

    def encode(self, graph) -> GridEncoding:
        """
        Encode a graph into positions, node_index and adjacency grids.

        Args:
            graph: Graph collaborator exposing `nodes`; each node exposes
                `x`, `y`, `is_fixed` and `neighbours`.

        Returns:
            The new GridEncoding (also cached on the encoder).

        Raises:
            ValueError: graph is None.
            NodeNotFoundError: a neighbour is not a node of the graph.
            AsymmetricNeighbourError: a link is not mirrored (when checked).
        """
        nodes = graph_nodes(graph)
        n = len(nodes)
        Logger.log(f"start encode(nodes={n})")

        index_by_identity = {id(node): i for i, node in enumerate(nodes)}
        if len(index_by_identity) != n:
            raise ValueError("graph lists the same node object more than once")

        if FeatureFlags.CHECK_NEIGHBOUR_SYMMETRY:
            self._check_symmetry(nodes, index_by_identity)

        degrees = [len(node.neighbours) for node in nodes]
        total_links = sum(degrees)
        side_p = grid_side(n)
        side_a = grid_side(total_links)

        positions = np.full((side_p, side_p, 2), UNUSED_POSITION, dtype=np.float64)
        node_index = np.full((side_p, side_p, 3), UNUSED_INDEX, dtype=np.int64)
        adjacency = np.full((side_a, side_a, 2), UNUSED_INDEX, dtype=np.int64)

        # PHASE 1: INDICES, DEGREES AND RUN STARTS
        run_starts = []
        cursor = 0
        for i, node in enumerate(nodes):
            row, col = index_to_coordinates(i, side_p)
            degree = degrees[i]
            if degree > 0:
                adj_row, adj_col = index_to_coordinates(cursor, side_a)
            else:
                adj_row, adj_col = UNUSED_INDEX, UNUSED_INDEX
            node_index[row, col] = (adj_row, adj_col, degree)
            positions[row, col] = (float(node.x), float(node.y))
            run_starts.append(cursor)
            cursor += degree

        # PHASE 2: RESOLVE NEIGHBOUR COORDINATES
        for i, node in enumerate(nodes):
            k = run_starts[i]
            for neighbour in node.neighbours:
                j = index_by_identity.get(id(neighbour))
                if j is None:
                    raise NodeNotFoundError(
                        f"Neighbour {neighbour!r} of node {node!r} is not in the graph."
                    )
                adjacency[k // side_a, k % side_a] = index_to_coordinates(j, side_p)
                k += 1

        encoding = GridEncoding(
            positions=positions,
            node_index=node_index,
            adjacency=adjacency,
            nodes=nodes,
            revision=getattr(graph, "revision", None),
            _index_by_identity=index_by_identity,
        )
        self.encoding = encoding
        Logger.log(f"end encode: P={side_p}, A={side_a}, links={total_links}")
        return encoding

    def rebuild(self, graph) -> GridEncoding:
        """Discard the cached encoding and encode the graph from scratch."""
        Logger.log("rebuild: re-encoding graph")
        self.encoding = None
        return self.encode(graph)

    def decode(self, positions: np.ndarray, graph) -> None:
        """
        Write positions back onto the graph's nodes, skipping fixed nodes.

        Raises:
            StructuralMismatchError: nothing encoded yet, or the graph's
                node set differs from the encoded one.
        """
        encoding = self._require_encoding()
        nodes = graph_nodes(graph)
        if len(nodes) != encoding.node_count or any(a is not b for a, b in zip(nodes, encoding.nodes)):
            raise StructuralMismatchError("Graph nodes differ from the encoded node set; rebuild first.")
        self.apply_positions(positions)

    def apply_positions(self, positions: np.ndarray) -> None:
        """
        Write positions onto the encoded node objects, skipping fixed nodes.

        Unlike decode() this does not compare against a live graph, so it
        can flush the last grid onto the old node set before a rebuild.
        """
        encoding = self._require_encoding()
        side_p = encoding.node_grid_size
        if encoding.node_count and positions.shape[:2] != (side_p, side_p):
            raise StructuralMismatchError(
                f"Positions grid shape {positions.shape[:2]} does not match encoding side {side_p}."
            )

        for i, node in enumerate(encoding.nodes):
            if node.is_fixed:
                continue
            row, col = index_to_coordinates(i, side_p)
            node.x = float(positions[row, col, 0])
            node.y = float(positions[row, col, 1])

    def fixed_mask(self) -> np.ndarray:
        """(P, P) bool grid of the nodes' current fixed flags; padding is False."""
        encoding = self._require_encoding()
        side_p = encoding.node_grid_size
        mask = np.zeros((side_p, side_p), dtype=bool)
        for i, node in enumerate(encoding.nodes):
            if node.is_fixed:
                mask[i // side_p, i % side_p] = True
        return mask

    def sync_fixed_positions(self, positions: np.ndarray) -> int:
        """
        Copy host-owned positions of fixed nodes into a positions grid.

        Returns:
            Number of fixed nodes copied.
        """
        encoding = self._require_encoding()
        side_p = encoding.node_grid_size
        copied = 0
        for i, node in enumerate(encoding.nodes):
            if node.is_fixed:
                positions[i // side_p, i % side_p] = (float(node.x), float(node.y))
                copied += 1
        return copied

    def _require_encoding(self) -> GridEncoding:
        if self.encoding is None:
            raise StructuralMismatchError("No graph has been encoded yet.")
        return self.encoding

    @staticmethod
    def _check_symmetry(nodes, index_by_identity) -> None:
        links = set()
        for node in nodes:
            for neighbour in node.neighbours:
                if id(neighbour) not in index_by_identity:
                    raise NodeNotFoundError(
                        f"Neighbour {neighbour!r} of node {node!r} is not in the graph."
                    )
                links.add((id(node), id(neighbour)))
        for node in nodes:
            for neighbour in node.neighbours:
                if (id(neighbour), id(node)) not in links:
                    raise AsymmetricNeighbourError(
                        f"{node!r} lists {neighbour!r} as neighbour but not vice versa."
                    )
