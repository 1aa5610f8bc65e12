"""
spring_grid Configuration Module

Contains feature flags and YAML run configuration.
"""

from .feature_flags import FeatureFlags
from .layout_config import (
    LayoutConfig,
    CanvasConfig,
    GraphConfig,
    RunConfig,
    OutputConfig,
    parse_config,
    load_config,
)

__all__ = [
    "FeatureFlags",
    "LayoutConfig",
    "CanvasConfig",
    "GraphConfig",
    "RunConfig",
    "OutputConfig",
    "parse_config",
    "load_config",
]
