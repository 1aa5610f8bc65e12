import json
from datetime import datetime

from spring_grid.utils.logger.logger import Logger
from spring_grid.config.feature_flags import FeatureFlags
from .export_strategy import ExportStrategy


class MetadataExportStrategy(ExportStrategy):
    """
    Run metadata as metadata.json: config, backend, counts, flags and a
    short summary of the last recorded tick.
    """

    def generate_export(self, result) -> list[tuple[str, bytes]]:
        last = result.records[-1] if result.records else None
        metadata = {
            "timestamp": datetime.now().isoformat(),
            "config": result.config.as_dict(),
            "backend": result.backend_name,
            "feature_flags": FeatureFlags.snapshot(),
            "summary": {
                "node_count": result.node_count,
                "link_count": result.link_count,
                "ticks_run": result.ticks_run,
                "elapsed_s": result.elapsed_s,
                "final_mean_displacement": last.mean_displacement if last else None,
                "final_max_displacement": last.max_displacement if last else None,
            },
        }
        Logger.log(f"MetadataExportStrategy: {metadata['summary']}")
        # node ids and yaml edge lists may hold non-JSON scalars
        return [("metadata.json", json.dumps(metadata, indent=2, default=str).encode("utf-8"))]
