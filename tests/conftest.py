"""
Pytest configuration for spring_grid tests.

Puts src/ on sys.path and resets global flag and logger state around
every test.
"""

import sys
import os

import pytest

# Add src/ to sys.path for imports
_src_root = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src")
if _src_root not in sys.path:
    sys.path.insert(0, _src_root)

from spring_grid.config.feature_flags import FeatureFlags
from spring_grid.utils.logger.logger import Logger
from spring_grid.utils.logger.memory_strategy import MemoryStrategy


@pytest.fixture(autouse=True)
def reset_global_state():
    FeatureFlags.legacy_mode()
    Logger.set_log_storage_strategy(None)
    Logger.is_logging_enabled = True
    Logger.set_min_priority(Logger.LogPriority.DEBUG)
    yield
    FeatureFlags.legacy_mode()
    Logger.set_log_storage_strategy(None)
    Logger.is_logging_enabled = True
    Logger.set_min_priority(Logger.LogPriority.DEBUG)


@pytest.fixture
def memory_log():
    """Capture log entries in memory for the duration of a test."""
    strategy = MemoryStrategy()
    Logger.set_log_storage_strategy(strategy)
    return strategy
