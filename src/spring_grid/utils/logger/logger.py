import os
import threading
from datetime import datetime
from enum import Enum

from .local_file_strategy import LocalFileStrategy


class Logger:
    """
    Process-wide logger used by every spring_grid component.

    All state lives on the class; there is nothing to instantiate. Entries
    are dropped until a storage strategy is installed, either directly
    with set_log_storage_strategy() or through initialize().

    Entries below `min_priority` are dropped as well, so hosts running
    many ticks per second can keep only warnings and errors.
    """

    class LogPriority(Enum):
        DEBUG = 1
        INFO = 2
        WARNING = 3
        ERROR = 4
        CRITICAL = 5
        DEFAULT = 6

    DEFAULT_LOG_PATH = "/tmp/spring_grid_logs.txt"
    LOG_PATH_ENV = "SPRING_GRID_LOG_PATH"
    LOG_LEVEL_ENV = "SPRING_GRID_LOG_LEVEL"
    TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

    is_logging_enabled = True
    log_storage_strategy = None
    min_priority = LogPriority.DEBUG
    # re-entrant: initialize() and the toggles log while holding it
    _lock = threading.RLock()

    @classmethod
    def initialize(cls):
        """
        Install file storage at $SPRING_GRID_LOG_PATH (or DEFAULT_LOG_PATH)
        unless a strategy is already set. $SPRING_GRID_LOG_LEVEL, when set
        to a priority name, becomes the minimum priority.
        """
        with cls._lock:
            if cls.log_storage_strategy is not None:
                return
            level = os.getenv(cls.LOG_LEVEL_ENV)
            if level:
                cls.set_min_priority(level)
            file_location = os.getenv(cls.LOG_PATH_ENV, cls.DEFAULT_LOG_PATH)
            cls.log_storage_strategy = LocalFileStrategy(file_location)
            cls.log(f"Logger writing to {file_location} (min priority {cls.min_priority.name})")

    @classmethod
    def log(cls, message, priority=LogPriority.DEBUG):
        """
        Store one entry.

        Args:
            message (str): Entry text.
            priority (LogPriority): Defaults to DEBUG.
        """
        with cls._lock:
            strategy = cls.log_storage_strategy
            if not cls.is_logging_enabled or strategy is None:
                return
            if priority.value < cls.min_priority.value:
                return
            strategy.store_log(message, priority.name, datetime.now().strftime(cls.TIMESTAMP_FORMAT))

    @classmethod
    def set_log_storage_strategy(cls, log_storage_strategy):
        """Swap the storage strategy; None detaches storage."""
        with cls._lock:
            cls.log_storage_strategy = log_storage_strategy

    @classmethod
    def set_min_priority(cls, priority):
        """
        Args:
            priority (LogPriority | str): Priority or its name, case-insensitive.

        Raises:
            ValueError: Unknown priority name.
        """
        if isinstance(priority, str):
            try:
                priority = cls.LogPriority[priority.upper()]
            except KeyError:
                raise ValueError(f"Unknown log priority: {priority}") from None
        with cls._lock:
            cls.min_priority = priority

    @classmethod
    def flush_logs(cls):
        """Ask the storage strategy to discard its entries."""
        with cls._lock:
            if cls.is_logging_enabled and cls.log_storage_strategy is not None:
                cls.log_storage_strategy.flush_logs()

    @classmethod
    def disable_logging(cls):
        with cls._lock:
            cls.log("Logging disabled")
            cls.is_logging_enabled = False

    @classmethod
    def enable_logging(cls):
        with cls._lock:
            cls.is_logging_enabled = True
            cls.log("Logging enabled")
