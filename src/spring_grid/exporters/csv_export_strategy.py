import pandas as pd

from spring_grid.utils.logger.logger import Logger
from .export_strategy import ExportStrategy

TICK_COLUMNS = ["tick", "mean_displacement", "max_displacement", "kinetic_proxy"]
POSITION_COLUMNS = ["node_id", "x", "y"]


class CsvExportStrategy(ExportStrategy):
    """Tick metrics and final node positions as two CSV files."""

    def generate_export(self, result) -> list[tuple[str, bytes]]:
        Logger.log(f"start CsvExportStrategy.generate_export({len(result.records)} records)")

        ticks_df = pd.DataFrame(
            [[rec.tick, rec.mean_displacement, rec.max_displacement, rec.kinetic_proxy]
             for rec in result.records],
            columns=TICK_COLUMNS,
        )
        positions_df = pd.DataFrame(
            [[node_id, x, y] for node_id, (x, y) in result.final_positions.items()],
            columns=POSITION_COLUMNS,
        )

        files = [
            ("ticks.csv", ticks_df.to_csv(index=False).encode("utf-8")),
            ("positions.csv", positions_df.to_csv(index=False).encode("utf-8")),
        ]
        Logger.log(f"end CsvExportStrategy.generate_export: {len(ticks_df)} tick rows, {len(positions_df)} position rows")
        return files
