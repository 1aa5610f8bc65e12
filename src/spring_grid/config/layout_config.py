"""
Configuration loading and validation for headless layout runs.

Loads a YAML config and validates every section before anything runs.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional

import yaml

from spring_grid.core.force_laws.types import SimulationProperties

GRAPH_KINDS = ("ring", "grid", "random", "edges")
BACKEND_NAMES = ("serial", "numpy", "threads")


@dataclass
class CanvasConfig:
    """Canvas the initial scatter is centred on."""
    width: float = 800.0
    height: float = 600.0
    scatter: bool = True
    seed: Optional[int] = 42

    def validate(self) -> tuple[bool, Optional[str]]:
        if self.width <= 0:
            return False, "width must be positive"
        if self.height <= 0:
            return False, "height must be positive"
        return True, None


@dataclass
class GraphConfig:
    """Which sample graph to build."""
    kind: Literal["ring", "grid", "random", "edges"] = "ring"
    nodes: int = 12
    rows: int = 4
    cols: int = 4
    chord_prob: float = 0.0
    edge_probability: float = 0.1
    seed: Optional[int] = 42
    edges: list = field(default_factory=list)
    node_ids: list = field(default_factory=list)

    def validate(self) -> tuple[bool, Optional[str]]:
        if self.kind not in GRAPH_KINDS:
            return False, f"Unknown graph kind: {self.kind}"
        if self.kind in ("ring", "random") and self.nodes < 0:
            return False, "nodes must be non-negative"
        if self.kind == "grid" and (self.rows < 0 or self.cols < 0):
            return False, "rows and cols must be non-negative"
        if not 0.0 <= self.chord_prob <= 1.0:
            return False, "chord_prob must be in [0, 1]"
        if not 0.0 <= self.edge_probability <= 1.0:
            return False, "edge_probability must be in [0, 1]"
        if self.kind == "edges":
            for edge in self.edges:
                if not isinstance(edge, (list, tuple)) or len(edge) != 2:
                    return False, f"edges entries must be [a, b] pairs, got {edge!r}"
        return True, None


@dataclass
class RunConfig:
    """Tick count and compute backend."""
    ticks: int = 200
    backend: Literal["serial", "numpy", "threads"] = "numpy"
    workers: Optional[int] = None
    record_every: int = 1

    def validate(self) -> tuple[bool, Optional[str]]:
        if self.ticks < 1:
            return False, "ticks must be >= 1"
        if self.backend not in BACKEND_NAMES:
            return False, f"Unknown backend: {self.backend}"
        if self.workers is not None and self.workers < 1:
            return False, "workers must be >= 1"
        if self.record_every < 1:
            return False, "record_every must be >= 1"
        return True, None


@dataclass
class OutputConfig:
    """Output configuration."""
    out_dir: str = "output"
    run_name: str = "layout_run"

    def validate(self) -> tuple[bool, Optional[str]]:
        if not self.run_name:
            return False, "run_name must not be empty"
        return True, None


@dataclass
class LayoutConfig:
    """Complete run configuration."""
    properties: SimulationProperties = field(default_factory=SimulationProperties)
    canvas: CanvasConfig = field(default_factory=CanvasConfig)
    graph: GraphConfig = field(default_factory=GraphConfig)
    run: RunConfig = field(default_factory=RunConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def validate(self) -> tuple[bool, Optional[str]]:
        for section_name in ["properties", "canvas", "graph", "run", "output"]:
            section = getattr(self, section_name)
            is_valid, error = section.validate()
            if not is_valid:
                return False, f"{section_name}: {error}"
        return True, None

    def as_dict(self) -> dict:
        return {
            "properties": self.properties.as_dict(),
            "canvas": vars(self.canvas).copy(),
            "graph": vars(self.graph).copy(),
            "run": vars(self.run).copy(),
            "output": vars(self.output).copy(),
        }


def _section(raw: dict, name: str) -> dict:
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Invalid configuration: {name} must be a mapping")
    return section


def _build(section_cls, values: dict, name: str):
    try:
        return section_cls(**values)
    except TypeError as e:
        raise ValueError(f"Invalid configuration: {name}: {e}") from e


def parse_config(raw: Optional[dict]) -> LayoutConfig:
    """
    Build and validate a LayoutConfig from an already-parsed mapping.

    Raises:
        ValueError: If a section has unknown keys or an invalid value.
    """
    raw = raw or {}
    if not isinstance(raw, dict):
        raise ValueError("Invalid configuration: top level must be a mapping")

    config = LayoutConfig(
        properties=_build(SimulationProperties, _section(raw, "properties"), "properties"),
        canvas=_build(CanvasConfig, _section(raw, "canvas"), "canvas"),
        graph=_build(GraphConfig, _section(raw, "graph"), "graph"),
        run=_build(RunConfig, _section(raw, "run"), "run"),
        output=_build(OutputConfig, _section(raw, "output"), "output"),
    )

    is_valid, error = config.validate()
    if not is_valid:
        raise ValueError(f"Invalid configuration: {error}")

    return config


def load_config(path: Path) -> LayoutConfig:
    """
    Load and validate configuration from YAML file.

    Args:
        path: Path to YAML config file.

    Returns:
        Validated LayoutConfig.

    Raises:
        ValueError: If config is invalid.
        FileNotFoundError: If file doesn't exist.
    """
    with open(path, 'r') as f:
        raw = yaml.safe_load(f)

    return parse_config(raw)
