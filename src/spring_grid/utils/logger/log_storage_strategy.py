class LogStorageStrategy:
    """
    Interface for log storage backends used by Logger.

    Subclasses decide where entries go (file, memory, ...). Logger
    serialises calls, so implementations need no locking of their own.
    """

    def store_log(self, message, priority, timestamp):
        """
        Persist one entry.

        Args:
            message (str): Log text.
            priority (str): Priority name, e.g. "WARNING".
            timestamp (str): Formatted "%Y-%m-%d %H:%M:%S" time.
        """
        raise NotImplementedError()

    def flush_logs(self):
        """Discard every stored entry."""
        raise NotImplementedError()
