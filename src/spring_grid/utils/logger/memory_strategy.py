from .log_storage_strategy import LogStorageStrategy


class MemoryStrategy(LogStorageStrategy):
    """
    Keeps log entries in memory.

    Useful for hosts that embed the layout engine and forward entries
    elsewhere, and for asserting on log output in tests.
    """

    def __init__(self, max_entries=None):
        """
        Args:
            max_entries (int, optional): Oldest entries are dropped past this count.
        """
        self.max_entries = max_entries
        self.entries = []

    def store_log(self, message, priority, timestamp):
        """Append a (timestamp, priority, message) tuple."""
        self.entries.append((timestamp, priority, message))
        if self.max_entries is not None and len(self.entries) > self.max_entries:
            del self.entries[0]

    def flush_logs(self):
        """Drop all buffered entries."""
        self.entries.clear()

    def messages(self, priority=None):
        """Return stored messages, optionally only those of one priority name."""
        return [m for _, p, m in self.entries if priority is None or p == priority]
