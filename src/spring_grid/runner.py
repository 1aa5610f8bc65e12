"""
Headless layout runner.

Builds the graph and backend from a config, runs the engine for a fixed
number of ticks and records per-tick movement statistics.
"""

import time
from dataclasses import dataclass
from typing import Dict, Hashable, List, Optional, Tuple

import numpy as np

from spring_grid.utils.logger.logger import Logger
from spring_grid.config.layout_config import LayoutConfig
from spring_grid.core.compute import ComputeBackend, create_backend
from spring_grid.core.layout_engine import ForceLayoutEngine
from spring_grid.graph.generators import build_graph


@dataclass
class TickRecord:
    """
    Movement statistics of one tick.

    Attributes:
        tick: 1-based tick number.
        mean_displacement: Mean step length over valid nodes.
        max_displacement: Largest step length.
        kinetic_proxy: Sum of squared step lengths (decreases as the layout settles).
    """
    tick: int
    mean_displacement: float
    max_displacement: float
    kinetic_proxy: float

    @classmethod
    def from_grids(cls, tick: int, before: np.ndarray, after: np.ndarray, node_count: int) -> "TickRecord":
        """Create record from the positions grids either side of a tick."""
        if node_count == 0:
            return cls(tick=tick, mean_displacement=0.0, max_displacement=0.0, kinetic_proxy=0.0)
        delta = after.reshape(-1, 2)[:node_count] - before.reshape(-1, 2)[:node_count]
        step = np.hypot(delta[:, 0], delta[:, 1])
        return cls(
            tick=tick,
            mean_displacement=float(step.mean()),
            max_displacement=float(step.max()),
            kinetic_proxy=float(np.sum(step * step)),
        )


@dataclass
class LayoutResult:
    """
    Complete run results.

    Attributes:
        records: Tick records, one every `record_every` ticks.
        final_positions: node_id -> (x, y) after the last tick.
        config: Configuration used.
        backend_name: Name of the compute backend.
        node_count: Number of nodes laid out.
        link_count: Number of directed neighbour links.
        ticks_run: Ticks actually applied.
        elapsed_s: Wall time of the tick loop.
    """
    records: List[TickRecord]
    final_positions: Dict[Hashable, Tuple[float, float]]
    config: LayoutConfig
    backend_name: str
    node_count: int
    link_count: int
    ticks_run: int
    elapsed_s: float


class LayoutRunner:
    """
    Runs one configured layout from start to finish.
    """

    def __init__(self, config: LayoutConfig, graph=None, backend: Optional[ComputeBackend] = None):
        """
        Args:
            config: Complete run configuration.
            graph: Graph to lay out; built from config.graph when omitted.
            backend: Compute backend; created from config.run when omitted.
        """
        self.config = config
        self.graph = graph if graph is not None else build_graph(config.graph)
        self._owns_backend = backend is None
        self.backend = backend if backend is not None else create_backend(config.run.backend, config.run.workers)
        self.engine = ForceLayoutEngine(
            width=config.canvas.width,
            height=config.canvas.height,
            backend=self.backend,
            properties=config.properties,
            seed=config.canvas.seed,
        )
        self.engine.set_graph(self.graph, scatter=config.canvas.scatter)
        self.records: List[TickRecord] = []

    def run(self) -> LayoutResult:
        """
        Run all configured ticks.

        Returns:
            LayoutResult with records and final positions.
        """
        ticks = self.config.run.ticks
        record_every = self.config.run.record_every
        encoding = self.engine.encoding
        Logger.log(f"start LayoutRunner.run(ticks={ticks}, backend={self.backend.name}, nodes={encoding.node_count})")

        ticks_run = 0
        started = time.perf_counter()
        try:
            for tick in range(1, ticks + 1):
                recording = tick % record_every == 0 or tick == ticks
                before = self.engine.snapshot() if recording else None
                if not self.engine.step():
                    break
                ticks_run = tick
                if recording:
                    after = self.engine.snapshot()
                    self.records.append(TickRecord.from_grids(tick, before, after, encoding.node_count))
        finally:
            if self._owns_backend:
                self.engine.close()
        elapsed = time.perf_counter() - started

        self.engine.decode()
        Logger.log(f"end LayoutRunner.run: {ticks_run} ticks in {elapsed:.3f}s")

        return LayoutResult(
            records=self.records,
            final_positions=self.graph.positions(),
            config=self.config,
            backend_name=self.backend.name,
            node_count=encoding.node_count,
            link_count=encoding.link_count,
            ticks_run=ticks_run,
            elapsed_s=elapsed,
        )


def run_layout(config: LayoutConfig, graph=None) -> LayoutResult:
    """
    Convenience function to run a layout from config.

    Args:
        config: Run configuration.
        graph: Optional pre-built graph.

    Returns:
        Layout results.
    """
    runner = LayoutRunner(config, graph=graph)
    return runner.run()
