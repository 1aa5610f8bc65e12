"""
Tests for the static Logger and its storage strategies.
"""

import pytest

from spring_grid.utils.logger import Logger, LocalFileStrategy, LogStorageStrategy, MemoryStrategy


class TestMemoryStrategy:
    """In-memory storage."""

    def test_stores_priority_and_message(self, memory_log):
        Logger.log("hello")
        Logger.log("careful", Logger.LogPriority.WARNING)
        assert memory_log.messages() == ["hello", "careful"]
        assert memory_log.messages("WARNING") == ["careful"]
        assert memory_log.entries[0][1] == "DEBUG"

    def test_max_entries(self):
        strategy = MemoryStrategy(max_entries=2)
        Logger.set_log_storage_strategy(strategy)
        for i in range(4):
            Logger.log(f"m{i}")
        assert strategy.messages() == ["m2", "m3"]

    def test_flush(self, memory_log):
        Logger.log("gone soon")
        Logger.flush_logs()
        assert memory_log.entries == []


class TestLogger:
    """Class-level switches."""

    def test_no_strategy_is_noop(self):
        Logger.log("nowhere to go")

    def test_disable_and_enable(self, memory_log):
        Logger.disable_logging()
        Logger.log("suppressed")
        Logger.enable_logging()
        Logger.log("visible")
        assert "suppressed" not in memory_log.messages()
        assert memory_log.messages()[-1] == "visible"

    def test_initialize_uses_env_path(self, tmp_path, monkeypatch):
        log_path = tmp_path / "env.log"
        monkeypatch.setenv(Logger.LOG_PATH_ENV, str(log_path))
        Logger.initialize()
        assert isinstance(Logger.log_storage_strategy, LocalFileStrategy)
        assert "Logger writing to" in log_path.read_text()

    def test_initialize_keeps_existing_strategy(self, memory_log):
        Logger.initialize()
        assert Logger.log_storage_strategy is memory_log

    def test_min_priority_filters(self, memory_log):
        Logger.set_min_priority("warning")
        Logger.log("chatty")
        Logger.log("problem", Logger.LogPriority.ERROR)
        assert memory_log.messages() == ["problem"]

    def test_unknown_min_priority(self):
        with pytest.raises(ValueError):
            Logger.set_min_priority("loud")

    def test_initialize_reads_level(self, tmp_path, monkeypatch):
        monkeypatch.setenv(Logger.LOG_PATH_ENV, str(tmp_path / "env.log"))
        monkeypatch.setenv(Logger.LOG_LEVEL_ENV, "error")
        Logger.initialize()
        assert Logger.min_priority is Logger.LogPriority.ERROR

    def test_base_strategy_is_abstract(self):
        with pytest.raises(NotImplementedError):
            LogStorageStrategy().store_log("m", "DEBUG", "now")


class TestLocalFileStrategy:
    """File storage."""

    def test_line_format(self, tmp_path):
        strategy = LocalFileStrategy(tmp_path / "run.log")
        Logger.set_log_storage_strategy(strategy)
        Logger.log("tick done", Logger.LogPriority.INFO)
        lines = strategy.read_lines()
        assert lines[0].startswith("LOG INITIALIZATION")
        assert lines[-1].endswith("[INFO] tick done")

    def test_creates_parent_directories(self, tmp_path):
        strategy = LocalFileStrategy(tmp_path / "nested" / "dir" / "run.log")
        assert strategy.file_location.exists()

    def test_truncates_unless_appending(self, tmp_path):
        path = tmp_path / "run.log"
        first = LocalFileStrategy(path)
        first.store_log("old", "DEBUG", "t0")
        assert "old" not in "\n".join(LocalFileStrategy(path).read_lines())

        LocalFileStrategy(path).store_log("kept", "DEBUG", "t1")
        resumed = LocalFileStrategy(path, append=True)
        lines = resumed.read_lines()
        assert any("kept" in line for line in lines)
        assert lines[-1].startswith("LOG RESUMED")

    def test_flush(self, tmp_path):
        strategy = LocalFileStrategy(tmp_path / "run.log")
        strategy.store_log("x", "DEBUG", "t")
        strategy.flush_logs()
        lines = strategy.read_lines()
        assert len(lines) == 1
        assert lines[0].startswith("LOG FLUSHED")
