"""
Deterministic sample graphs for demos, benchmarks and the CLI.

All generators take an explicit seed where randomness is involved and
use a local random.Random so repeated runs build identical graphs.
"""

import random
from typing import Iterable, Optional, Sequence

from spring_grid.utils.logger.logger import Logger
from .graph import Graph


def build_ring(n_nodes: int) -> Graph:
    """Cycle 0-1-...-(n-1)-0. Two nodes give a single edge, one node none."""
    graph = Graph()
    for i in range(n_nodes):
        graph.add_node(i)
    if n_nodes > 1:
        for i in range(n_nodes):
            graph.add_edge(i, (i + 1) % n_nodes)
    return graph


def build_grid(rows: int, cols: int, chord_prob: float = 0.0, seed: Optional[int] = None) -> Graph:
    """Lattice with right/down neighbours plus optional random chords."""
    graph = Graph()
    for r in range(rows):
        for c in range(cols):
            graph.add_node(r * cols + c)

    for r in range(rows):
        for c in range(cols):
            u = r * cols + c
            if c + 1 < cols:
                graph.add_edge(u, u + 1)
            if r + 1 < rows:
                graph.add_edge(u, u + cols)

    n_total = rows * cols
    target_chords = int(n_total * chord_prob)
    if target_chords > 0 and n_total > 1:
        rng = random.Random(seed)
        attempts = 0
        while target_chords > 0 and attempts < target_chords * 50:
            attempts += 1
            a = rng.randrange(n_total)
            b = rng.randrange(n_total)
            if a == b:
                continue
            if graph.add_edge(a, b):
                target_chords -= 1
    return graph


def build_random(n_nodes: int, edge_probability: float, seed: Optional[int] = None) -> Graph:
    """Erdos-Renyi G(n, p) graph."""
    if not 0.0 <= edge_probability <= 1.0:
        raise ValueError("edge_probability must be in [0, 1]")
    rng = random.Random(seed)
    graph = Graph()
    for i in range(n_nodes):
        graph.add_node(i)
    for i in range(n_nodes):
        for j in range(i + 1, n_nodes):
            if rng.random() < edge_probability:
                graph.add_edge(i, j)
    return graph


def build_from_edges(edges: Iterable[Sequence], node_ids: Optional[Iterable] = None) -> Graph:
    """
    Graph from an explicit edge list.

    Nodes are created in first-seen order; `node_ids` may list extra
    (possibly isolated) nodes up front to pin the order.
    """
    graph = Graph()
    for node_id in node_ids or []:
        graph.add_node(node_id)
    for edge in edges:
        if len(edge) != 2:
            raise ValueError(f"Edge must have exactly two endpoints, got {edge!r}")
        a, b = edge
        for node_id in (a, b):
            if graph.get_node_by_id(node_id) is None:
                graph.add_node(node_id)
        graph.add_edge(a, b)
    return graph


def build_graph(graph_config) -> Graph:
    """Build a graph from a GraphConfig section."""
    kind = graph_config.kind
    Logger.log(f"start build_graph(kind={kind})")
    if kind == "ring":
        graph = build_ring(graph_config.nodes)
    elif kind == "grid":
        graph = build_grid(graph_config.rows, graph_config.cols,
                           chord_prob=graph_config.chord_prob, seed=graph_config.seed)
    elif kind == "random":
        graph = build_random(graph_config.nodes, graph_config.edge_probability, seed=graph_config.seed)
    elif kind == "edges":
        graph = build_from_edges(graph_config.edges, node_ids=graph_config.node_ids)
    else:
        raise ValueError(f"Unknown graph kind: {kind}")
    Logger.log(f"end build_graph: {graph}")
    return graph
