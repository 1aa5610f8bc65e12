import os
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import numpy as np

from spring_grid.utils.logger.logger import Logger
from spring_grid.core.force_laws.charge import charge_forces
from .backend_strategy import VectorisedBackend


class ThreadPoolBackend(VectorisedBackend):
    """
    Splits the all-pairs repulsion into row blocks evaluated on a thread pool.

    Every block reads the same read-only snapshot of positions and writes
    a disjoint slice of the force array, so no locking is needed during
    the compute phase. Waiting on all futures is the barrier before the
    engine swaps the new grid in. numpy releases the GIL inside its array
    kernels, so blocks run concurrently.
    """

    name = "threads"

    def __init__(self, workers: Optional[int] = None, min_block_rows: int = 16):
        self.workers = workers or min(8, os.cpu_count() or 1)
        if self.workers < 1:
            raise ValueError("workers must be >= 1")
        self.min_block_rows = max(1, min_block_rows)
        self._executor: Optional[ThreadPoolExecutor] = None
        self._executor_lock = threading.Lock()
        super().__init__()

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.workers, thread_name_prefix="spring-grid"
                )
                Logger.log(f"ThreadPoolBackend started {self.workers} workers")
            return self._executor

    def row_blocks(self, n: int) -> list[tuple[int, int]]:
        """Split [0, n) into at most `workers` contiguous blocks."""
        if n == 0:
            return []
        size = max(self.min_block_rows, -(-n // self.workers))
        return [(start, min(start + size, n)) for start in range(0, n, size)]

    def compute_repulsion(self, points: np.ndarray, charge: float) -> np.ndarray:
        n = points.shape[0]
        forces = np.zeros((n, 2), dtype=np.float64)
        blocks = self.row_blocks(n)
        if len(blocks) <= 1:
            for start, stop in blocks:
                forces[start:stop] = charge_forces(points, start, stop, charge)
            return forces

        executor = self._get_executor()
        futures = [
            (start, stop, executor.submit(charge_forces, points, start, stop, charge))
            for start, stop in blocks
        ]
        for start, stop, future in futures:
            forces[start:stop] = future.result()
        return forces

    def close(self):
        with self._executor_lock:
            if self._executor is not None:
                self._executor.shutdown(wait=True)
                self._executor = None
                Logger.log("ThreadPoolBackend workers stopped")

    def __repr__(self):
        return f"ThreadPoolBackend(workers={self.workers})"
