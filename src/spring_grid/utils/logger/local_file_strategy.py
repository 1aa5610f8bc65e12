from datetime import datetime
from pathlib import Path

from .log_storage_strategy import LogStorageStrategy


class LocalFileStrategy(LogStorageStrategy):
    """
    Stores log entries as lines in a local text file.

    Line format: ``[timestamp] [PRIORITY] message``.
    """

    def __init__(self, file_location, append=False):
        """
        Args:
            file_location (str | Path): Log file; relative paths resolve against the cwd.
            append (bool): Keep existing content instead of truncating on startup.
        """
        self.file_location = self.resolve_file_path(file_location)
        self.append = append
        self.initialize_log_file()

    # RESOLVE FILE PATH TO ABSOLUTE AND CREATE PARENT DIRECTORIES
    @staticmethod
    def resolve_file_path(file_location):
        path = Path(file_location)
        if not path.is_absolute():
            path = Path.cwd() / path
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    # START A FRESH LOG UNLESS APPENDING TO AN EXISTING ONE
    def initialize_log_file(self):
        if self.append and self.file_location.exists():
            self._write_line(f"LOG RESUMED: {datetime.now()}", mode="a")
        else:
            self._write_line(f"LOG INITIALIZATION: {datetime.now()}", mode="w")

    def store_log(self, message, priority, timestamp):
        self._write_line(f"[{timestamp}] [{priority}] {message}", mode="a")

    def flush_logs(self):
        """Truncate the file, leaving only a flush marker."""
        self._write_line(f"LOG FLUSHED: {datetime.now()}", mode="w")

    def read_lines(self):
        """Return the current file content as a list of lines."""
        return self.file_location.read_text(encoding="utf-8").splitlines()

    def _write_line(self, line, mode):
        with open(self.file_location, mode, encoding="utf-8") as log_file:
            log_file.write(line + "\n")
