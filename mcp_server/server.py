"""
Content Model Report — MCP Server.

Exposes the resolved content model report (entity types, bundles, fields,
and references) to LLM clients via the Model Context Protocol.

Usage:
    python -m mcp_server --metadata /path/to/metadata.json --settings /path/to/settings.json
"""

from __future__ import annotations

import sys

from mcp.server.fastmcp import FastMCP

from content_model_report.cli import ReportConfigError, build_manager
from content_model_report.config.settings import SettingsError, load_settings
from content_model_report.metadata.source import JsonMetadataSource, MetadataSourceError
from content_model_report.output.csv_exporter import CSVExporter
from content_model_report.report_manager import ContentModelReportManager

# ── Globals ─────────────────────────────────────────────────────────────

_manager: ContentModelReportManager | None = None
mcp = FastMCP("content-model-report")


def _report() -> ContentModelReportManager:
    if _manager is None:
        raise RuntimeError("Report manager not initialized")
    return _manager


# ── Tools ───────────────────────────────────────────────────────────────


@mcp.tool()
def list_entity_types() -> list[dict]:
    """List the entity types in the content model report.

    Returns each type's ID, label, and its bundles (ID, label, field count).
    Call this first to discover what's available.
    """
    types = []
    for type_id, entry in _report().data().items():
        types.append({
            "id": type_id,
            "label": entry.label,
            "bundles": [
                {"id": bundle_id, "label": bundle.label, "field_count": len(bundle.fields)}
                for bundle_id, bundle in entry.bundles.items()
            ],
        })
    return types


@mcp.tool()
def get_entity_type(entity_type: str) -> dict:
    """Get one entity type with all of its reported bundles and fields.

    Args:
        entity_type: Entity type ID (from list_entity_types).
    """
    entry = _report().data(entity_type)
    if entry is None:
        return {"error": f"Entity type '{entity_type}' not found", "entity_type": entity_type}
    return entry.to_dict()


@mcp.tool()
def get_bundle(entity_type: str, bundle: str) -> dict:
    """Get a bundle's fields, types, flags, and references.

    Args:
        entity_type: Entity type ID.
        bundle: Bundle ID.
    """
    data = _report().data(entity_type, bundle)
    if data is None:
        return {"error": f"Bundle '{entity_type}.{bundle}' not found"}
    return data.to_dict()


@mcp.tool()
def export_bundle_csv(entity_type: str, bundle: str) -> str:
    """Export a bundle's fields as CSV text (Name, Type, References, Required, Translatable, Description).

    Args:
        entity_type: Entity type ID.
        bundle: Bundle ID.
    """
    data = _report().data(entity_type, bundle)
    return CSVExporter().render(data.fields if data is not None else {})


@mcp.tool()
def search_fields(query: str, field_type: str | None = None) -> list[dict]:
    """Search reported fields by machine name or label across all bundles.

    Args:
        query: Case-insensitive substring to match against field names and labels.
        field_type: Optional field type ID filter (e.g. "entity_reference", "string").
    """
    query_lower = query.lower()
    results = []
    for type_id, entry in _report().data().items():
        for bundle_id, bundle in entry.bundles.items():
            for name, field in bundle.fields.items():
                if field_type and field.type != field_type:
                    continue
                if query_lower in name.lower() or query_lower in field.label.lower():
                    results.append({"entity_type": type_id, "bundle": bundle_id, **field.to_dict()})
    return results[:50]


# ── Entry point ─────────────────────────────────────────────────────────

def main(argv: list[str] | None = None):
    import argparse

    parser = argparse.ArgumentParser(description="Content Model Report MCP Server")
    parser.add_argument("--metadata", required=True, help="Metadata schema JSON file")
    parser.add_argument("--settings", required=True, help="Report settings JSON file")

    args = parser.parse_args(argv)

    global _manager
    try:
        _manager = build_manager(
            load_settings(args.settings),
            JsonMetadataSource(args.metadata),
        )
    except (SettingsError, MetadataSourceError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except ReportConfigError as e:
        for error in e.errors:
            print(f"Error: {error}", file=sys.stderr)
        sys.exit(1)

    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
