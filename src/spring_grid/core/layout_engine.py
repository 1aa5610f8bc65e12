"""
Force Layout Engine - spring embedder over grid-encoded graphs

Advances node positions one tick at a time:

Physical Model:
--------------
- Repulsion: every pair of distinct nodes, F = charge / max(d, d_min)^2
- Attraction: every edge, F = (d - rest_length) * dampening
- Integration: x_new = x + speed * F; an optional max_displacement caps the step
- Fixed nodes never move; their position is owned by the host

Tick Contract:
--------------
Each tick reads one immutable snapshot of the positions grid, computes a
complete new grid through the injected compute backend, and only then
swaps it in under a lock. Readers (snapshot(), decode) never see a
half-updated grid, and no node is ever updated against another node's
already-updated position.
"""

import random
import threading
from typing import Mapping, Optional

import numpy as np

from spring_grid.utils.logger.logger import Logger
from spring_grid.config.feature_flags import FeatureFlags
from spring_grid.models.exceptions import StructuralMismatchError
from .force_laws.constants import SCATTER_HALF_WIDTH
from .force_laws.types import SimulationProperties
from .grid_encoder import GraphGridEncoder, GridEncoding, graph_nodes
from .compute import ComputeBackend, NumpyBackend


# Accepted spellings for the flat configuration record
PROPERTY_ALIASES = {
    "speed": "speed",
    "spring_dampening": "spring_dampening",
    "springDampening": "spring_dampening",
    "spring_rest_length": "spring_rest_length",
    "springRestLength": "spring_rest_length",
    "charge": "charge",
    "max_displacement": "max_displacement",
    "maxDisplacement": "max_displacement",
}


class ForceLayoutEngine:
    """
    Runs the spring embedder on the grid encoding of one graph.

    Attributes:
        width, height: Canvas size used for the initial scatter.
        backend: Compute backend evaluating each tick.
        encoder: GraphGridEncoder owning the static grids.
        tick_count: Ticks completed since the graph was set.
    """

    def __init__(
        self,
        graph=None,
        width: float = 800.0,
        height: float = 600.0,
        backend: Optional[ComputeBackend] = None,
        properties: Optional[SimulationProperties] = None,
        seed: Optional[int] = None,
    ):
        Logger.log(f"start ForceLayoutEngine __init__(width={width}, height={height}, backend={backend})")
        self.width = float(width)
        self.height = float(height)
        self.backend = backend if backend is not None else NumpyBackend()
        self.encoder = GraphGridEncoder()
        self.rng = random.Random(seed)

        self._properties = SimulationProperties()
        if properties is not None:
            is_valid, error = properties.validate()
            if not is_valid:
                raise ValueError(f"Invalid simulation properties: {error}")
            self._properties = properties.copy()

        self._graph = None
        self._positions: Optional[np.ndarray] = None
        self._swap_lock = threading.Lock()
        self._step_lock = threading.Lock()
        self.tick_count = 0

        if graph is not None:
            self.set_graph(graph)
        Logger.log("end ForceLayoutEngine __init__")

    # GRAPH LIFECYCLE
    @property
    def graph(self):
        return self._graph

    @property
    def encoding(self) -> Optional[GridEncoding]:
        return self.encoder.encoding

    def set_graph(self, graph, scatter: bool = True) -> GridEncoding:
        """
        Attach a graph and encode it.

        With scatter=True every node is placed uniformly at random within
        SCATTER_HALF_WIDTH of the canvas centre and unfixed first.
        """
        Logger.log(f"start set_graph(scatter={scatter})")
        nodes = graph_nodes(graph)
        if scatter:
            cx = self.width / 2.0
            cy = self.height / 2.0
            for node in nodes:
                node.x = cx + self.rng.uniform(-SCATTER_HALF_WIDTH, SCATTER_HALF_WIDTH)
                node.y = cy + self.rng.uniform(-SCATTER_HALF_WIDTH, SCATTER_HALF_WIDTH)
                node.is_fixed = False

        with self._step_lock:
            self._graph = graph
            encoding = self._encode(graph)
        Logger.log(f"end set_graph: {encoding.node_count} nodes, {encoding.link_count} links")
        return encoding

    def rebuild(self) -> Optional[GridEncoding]:
        """
        Re-encode the current graph after nodes or edges changed.

        Positions are taken from the graph's nodes, so the layout
        continues from where decode() last left it.
        """
        if self._graph is None:
            Logger.log("rebuild: no graph set", Logger.LogPriority.WARNING)
            return None
        Logger.log("rebuild: graph structure changed, re-encoding")
        with self._step_lock:
            if self.encoder.encoding is not None:
                self.encoder.apply_positions(self.snapshot())
            self.encoder.encoding = None
            return self._encode(self._graph)

    def _encode(self, graph) -> GridEncoding:
        encoding = self.encoder.encode(graph)
        with self._swap_lock:
            self._positions = encoding.positions.copy()
        self.tick_count = 0
        return encoding

    def on_canvas_size_changed(self, width: float, height: float) -> None:
        Logger.log(f"on_canvas_size_changed({width}, {height})")
        self.width = float(width)
        self.height = float(height)

    # CONFIGURATION
    def get_properties(self) -> SimulationProperties:
        """Copy of the current simulation parameters."""
        return self._properties.copy()

    def set_properties(self, properties: Optional[Mapping] = None, **kwargs) -> dict:
        """
        Merge a partial parameter record into the current parameters.

        Absent or falsy values leave a parameter unchanged. Invalid values
        (non-positive speed, rest length, charge or max displacement,
        negative dampening, non-numbers) are rejected one field at a
        time; the remaining fields still apply.

        Args:
            properties: Mapping using snake_case or camelCase keys.
            **kwargs: Same keys as keyword arguments.

        Returns:
            {field: reason} for every rejected field.
        """
        record = dict(properties or {})
        record.update(kwargs)
        Logger.log(f"start set_properties({record})")

        rejected = {}
        updated = self._properties.copy()
        for key, value in record.items():
            name = PROPERTY_ALIASES.get(key)
            if name is None:
                rejected[key] = f"unknown property '{key}'"
                Logger.log(f"set_properties: ignoring unknown property '{key}'", Logger.LogPriority.WARNING)
                continue
            if not value:
                continue
            error = SimulationProperties.check_field(name, value)
            if error:
                rejected[name] = error
                Logger.log(f"set_properties: rejected {name}={value!r}: {error}", Logger.LogPriority.WARNING)
                continue
            setattr(updated, name, float(value))

        self._properties = updated
        Logger.log(f"end set_properties: {self._properties}")
        return rejected

    # SIMULATION
    def snapshot(self) -> Optional[np.ndarray]:
        """Copy of the current positions grid, or None when no graph is set."""
        with self._swap_lock:
            if self._positions is None:
                return None
            return self._positions.copy()

    def step(self) -> bool:
        """
        Advance the layout by one tick.

        Returns:
            True if a tick was applied, False for the no-op cases (no graph
            set, or an empty graph).

        Raises:
            StructuralMismatchError: the graph changed structurally since it
                was encoded and rebuild() has not been called.
        """
        with self._step_lock:
            encoding = self.encoder.encoding
            if self._graph is None or encoding is None or encoding.is_empty:
                return False
            if FeatureFlags.DETECT_STALE_ENCODING:
                self._check_structure(encoding)

            properties = self._properties.copy()
            with self._swap_lock:
                current = self._positions
                self.encoder.sync_fixed_positions(current)
            fixed_mask = self.encoder.fixed_mask()

            next_positions = self.backend.compute_next_positions(encoding, current, fixed_mask, properties)
            if next_positions is current or next_positions.shape != current.shape:
                raise RuntimeError(f"{self.backend!r} must return a new grid of shape {current.shape}")

            with self._swap_lock:
                self._positions = next_positions
            self.tick_count += 1
            return True

    def decode(self) -> None:
        """Write the current positions onto the graph's non-fixed nodes."""
        if self._graph is None or self.encoder.encoding is None:
            return
        positions = self.snapshot()
        self.encoder.decode(positions, self._graph)

    def compute_next_positions(self) -> bool:
        """Per-frame entry point: one tick, then write positions back onto the graph."""
        stepped = self.step()
        if stepped:
            self.decode()
        return stepped

    def run(self, ticks: int) -> int:
        """Run several ticks and decode once at the end. Returns ticks applied."""
        applied = 0
        for _ in range(ticks):
            if not self.step():
                break
            applied += 1
        if applied:
            self.decode()
        return applied

    # RESOURCES
    def close(self) -> None:
        """Release the backend's workers once any tick in flight has finished."""
        with self._step_lock:
            Logger.log(f"ForceLayoutEngine closing {self.backend!r}")
            self.backend.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def _check_structure(self, encoding: GridEncoding) -> None:
        revision = getattr(self._graph, "revision", None)
        if revision is not None and encoding.revision is not None:
            if revision != encoding.revision:
                raise StructuralMismatchError(
                    f"Graph revision {revision} differs from encoded revision {encoding.revision}; "
                    f"call rebuild() before the next tick."
                )
            return
        if len(self._graph.nodes) != encoding.node_count:
            raise StructuralMismatchError(
                f"Graph has {len(self._graph.nodes)} nodes but the encoding has {encoding.node_count}; "
                f"call rebuild() before the next tick."
            )
