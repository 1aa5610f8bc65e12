from pathlib import Path
from typing import Iterable, Optional

from spring_grid.utils.logger.logger import Logger
from .export_strategy import ExportStrategy
from .csv_export_strategy import CsvExportStrategy
from .metadata_export_strategy import MetadataExportStrategy


class ExportManager:
    """Runs export strategies and writes their files under out_dir/run_name/."""

    def __init__(self, strategies: Optional[Iterable[ExportStrategy]] = None):
        if strategies is None:
            strategies = [CsvExportStrategy(), MetadataExportStrategy()]
        self.strategies = list(strategies)

    def export(self, result, out_dir, run_name: str, strategies: Optional[Iterable[ExportStrategy]] = None) -> dict:
        """
        Generate and save every strategy's files.

        Returns:
            {filename: Path} of written files.

        Raises:
            ValueError: out_dir/run_name exists and is not a directory.
        """
        folder = self._verify_folder(Path(out_dir) / run_name)
        written = {}
        for strategy in (self.strategies if strategies is None else list(strategies)):
            for filename, content in strategy.generate_export(result):
                written[filename] = self._save_file(folder, filename, content)
        Logger.log(f"ExportManager: wrote {len(written)} files to {folder}")
        return written

    def _verify_folder(self, folder: Path) -> Path:
        if folder.exists() and not folder.is_dir():
            Logger.log(f"{folder} exists but is not a directory.", Logger.LogPriority.ERROR)
            raise ValueError(f"{folder} exists but is not a directory.")
        folder.mkdir(parents=True, exist_ok=True)
        return folder

    def _save_file(self, folder: Path, filename: str, content: bytes) -> Path:
        path = folder / filename
        try:
            path.write_bytes(content)
        except OSError as e:
            Logger.log(f"Error saving file {path}: {e}", Logger.LogPriority.ERROR)
            raise
        Logger.log(f"Saved file: {path}")
        return path
