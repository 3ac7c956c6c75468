"""JSON output generation.

Writes the resolved content model and per-bundle CSV exports to an
output directory.
"""

import json
import os
from datetime import datetime, timezone
from typing import Any

from content_model_report.domain.models import ReportGraph, graph_to_dict
from content_model_report.output.csv_exporter import CSVExporter


class ReportJSONDumper:
    """Writes the report graph to a structured output directory.

    Output structure:
        output_dir/
        ├── content_model.json
        └── exports/{type}.{bundle}.csv (only with write_exports)

    Args:
        output_dir: Root directory for output files.
        pretty: Whether to pretty-print JSON (default True).
    """

    def __init__(self, output_dir: str, pretty: bool = True) -> None:
        self._output_dir = output_dir
        self._indent = 2 if pretty else None

    def build(self, graph: ReportGraph) -> dict[str, Any]:
        """Wrap the graph with a metadata block."""
        bundle_count = sum(len(entry.bundles) for entry in graph.values())
        field_count = sum(
            len(bundle.fields)
            for entry in graph.values()
            for bundle in entry.bundles.values()
        )
        return {
            '_metadata': {
                'generated_at': datetime.now(timezone.utc).isoformat(),
                'total_entity_types': len(graph),
                'total_bundles': bundle_count,
                'total_fields': field_count,
            },
            'entity_types': graph_to_dict(graph),
        }

    def write_report(self, graph: ReportGraph) -> str:
        """Write content_model.json and return its path."""
        os.makedirs(self._output_dir, exist_ok=True)
        path = os.path.join(self._output_dir, 'content_model.json')
        self._write_json(path, self.build(graph))
        return path

    def write_exports(self, graph: ReportGraph) -> list[str]:
        """Write one CSV per bundle under exports/ and return the paths."""
        exporter = CSVExporter()
        exports_dir = os.path.join(self._output_dir, 'exports')
        os.makedirs(exports_dir, exist_ok=True)

        paths: list[str] = []
        for type_id, entry in graph.items():
            for bundle_id, bundle in entry.bundles.items():
                path = os.path.join(exports_dir, exporter.export_filename(type_id, bundle_id))
                with open(path, 'w', encoding='utf-8', newline='') as f:
                    exporter.write(bundle.fields, f)
                paths.append(path)
        return paths

    def _write_json(self, path: str, data: Any) -> None:
        """Write data as JSON to a file."""
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=self._indent, ensure_ascii=False, default=str)
