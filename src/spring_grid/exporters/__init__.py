from .export_strategy import ExportStrategy
from .csv_export_strategy import CsvExportStrategy, TICK_COLUMNS, POSITION_COLUMNS
from .metadata_export_strategy import MetadataExportStrategy
from .export_manager import ExportManager

__all__ = [
    "ExportStrategy",
    "CsvExportStrategy",
    "MetadataExportStrategy",
    "ExportManager",
    "TICK_COLUMNS",
    "POSITION_COLUMNS",
]
