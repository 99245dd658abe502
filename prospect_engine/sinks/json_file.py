"""JSON file sink for exporting analyses."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from prospect_engine.exceptions import SinkError
from prospect_engine.sinks.serialization import to_dict

logger = logging.getLogger(__name__)

EXPORT_VERSION = "1.0"


class JsonFileSink:
    """Output analyses to JSON files."""

    def __init__(self, output_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print JSON output.

        Raises
        ------
        SinkError
            If the output directory cannot be created.
        """
        self.output_dir = Path(output_dir)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise SinkError(f"Cannot create output directory {self.output_dir}: {exc}") from exc
        self.pretty = pretty
        self._counts: dict[str, int] = {}

    def write_analysis(self, record: Any, exported_at: datetime | None = None) -> Path:
        """Export one analysis with export metadata.

        Parameters
        ----------
        record : SavedAnalysis | PropertyAnalysisResult
            Analysis to export.
        exported_at : datetime | None
            Export timestamp. Defaults to the current time.

        Returns
        -------
        Path
            Path of the written file.
        """
        data = to_dict(record)
        data["exported_at"] = (exported_at or datetime.now()).isoformat()
        data["export_version"] = EXPORT_VERSION

        file_path = self.output_dir / f"analysis_{record.analysis_id}.json"
        self._dump(file_path, data)
        self._counts["analysis"] = self._counts.get("analysis", 0) + 1
        logger.debug("Exported analysis %s to %s", record.analysis_id, file_path)
        return file_path

    def write_batch(self, entity_type: str, records: list[Any]) -> Path:
        """Write a batch of records to one JSON file."""
        file_path = self.output_dir / f"{entity_type}.json"
        self._dump(file_path, [to_dict(record) for record in records])
        self._counts[entity_type] = len(records)
        return file_path

    def close(self) -> None:
        """Print summary."""
        print(f"JSON files written to: {self.output_dir}")
        for entity_type, count in self._counts.items():
            print(f"  {entity_type}: {count} records")

    def _dump(self, file_path: Path, data: Any) -> None:
        try:
            with open(file_path, "w", encoding="utf-8") as f:
                if self.pretty:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                else:
                    json.dump(data, f, ensure_ascii=False)
        except (OSError, TypeError) as exc:
            raise SinkError(f"Cannot write {file_path}: {exc}") from exc
