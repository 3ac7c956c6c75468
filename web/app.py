"""Simple Flask web interface for the content model report."""

import os
import threading
from pathlib import Path

from flask import Flask, Response, jsonify

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from content_model_report.cli import ReportConfigError, build_manager
from content_model_report.config.settings import load_settings
from content_model_report.domain.models import graph_to_dict
from content_model_report.domain.pair_key import anchor_id
from content_model_report.metadata.source import JsonMetadataSource
from content_model_report.output.csv_exporter import CSVExporter
from content_model_report.report_manager import ContentModelReportManager

app = Flask(__name__)

# Configuration
METADATA_PATH = os.environ.get('CONTENT_MODEL_METADATA', 'metadata.json')
SETTINGS_PATH = os.environ.get('CONTENT_MODEL_SETTINGS', 'settings.json')

_manager: ContentModelReportManager | None = None
_manager_lock = threading.Lock()


def get_manager() -> ContentModelReportManager:
    """Return the process-wide report manager, creating it on first use.

    Settings are validated before the manager is built; a ReportConfigError
    propagates to the error handler below.
    """
    global _manager
    with _manager_lock:
        if _manager is None:
            _manager = build_manager(
                load_settings(SETTINGS_PATH),
                JsonMetadataSource(METADATA_PATH),
            )
        return _manager


def set_manager(manager: ContentModelReportManager | None) -> None:
    global _manager
    with _manager_lock:
        _manager = manager


@app.errorhandler(ReportConfigError)
def invalid_settings(e: ReportConfigError):
    return jsonify({'error': 'Invalid report settings', 'errors': e.errors}), 500


@app.route('/api/report')
def report():
    """Full report graph."""
    return jsonify(graph_to_dict(get_manager().data()))


@app.route('/api/report/<entity_type>')
def report_entity_type(entity_type: str):
    """One entity type with its bundles."""
    entry = get_manager().data(entity_type)
    if entry is None:
        return jsonify({'error': f'Entity type not found: {entity_type}'}), 404
    return jsonify(entry.to_dict())


@app.route('/api/report/<entity_type>/<bundle>')
def report_bundle(entity_type: str, bundle: str):
    """One bundle, with references linked to their in-page anchors."""
    manager = get_manager()
    data = manager.data(entity_type, bundle)
    if data is None:
        return jsonify({'error': f'Bundle not found: {entity_type}.{bundle}'}), 404

    result = data.to_dict()
    result['anchor'] = anchor_id(f'{entity_type}.{bundle}')
    result['export_url'] = f'/api/export/{entity_type}/{bundle}'
    for field in result['fields'].values():
        # Dangling references stay plain text (no anchor)
        field['references'] = [
            {
                'key': key,
                'anchor': anchor_id(key) if manager.reference_exists(key) else None,
            }
            for key in field['references']
        ]
    return jsonify(result)


@app.route('/api/export/<entity_type>/<bundle>')
def export_bundle(entity_type: str, bundle: str):
    """Download one bundle's fields as CSV."""
    data = get_manager().data(entity_type, bundle)
    fields = data.fields if data is not None else {}
    exporter = CSVExporter()
    filename = exporter.export_filename(entity_type, bundle)
    return Response(
        exporter.render(fields),
        mimetype='text/csv',
        headers={
            'Content-Type': 'text/csv; charset=utf-8',
            'Content-Disposition': f'attachment; filename="{filename}"',
        },
    )


if __name__ == '__main__':
    app.run(debug=True, port=5002)
