"""CLI for content-model-report."""

import argparse
import json
import logging
import os
import sys

from content_model_report.config.settings import ReportSettings, SettingsError, load_settings
from content_model_report.config.validator import SettingsValidator
from content_model_report.domain.models import DumpResult, graph_to_dict
from content_model_report.metadata.source import JsonMetadataSource, MetadataSource, MetadataSourceError
from content_model_report.output.csv_exporter import CSVExporter
from content_model_report.output.json_dumper import ReportJSONDumper
from content_model_report.report_manager import ContentModelReportManager


class ReportConfigError(Exception):
    """Settings that failed validation against the metadata source."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__('; '.join(errors))
        self.errors = errors


def build_manager(settings: ReportSettings, source: MetadataSource) -> ContentModelReportManager:
    """Validate settings and return a manager ready to serve the report."""
    errors = SettingsValidator(source).validate(settings)
    if errors:
        raise ReportConfigError(errors)
    return ContentModelReportManager(settings, source)


def dump_report(
    settings: ReportSettings,
    source: MetadataSource,
    output_dir: str,
    pretty: bool = True,
    include_exports: bool = True,
) -> DumpResult:
    """Main orchestration: settings + metadata -> content_model.json (+ CSVs)."""
    manager = build_manager(settings, source)
    graph = manager.data()

    dumper = ReportJSONDumper(output_dir, pretty=pretty)
    dumper.write_report(graph)
    exports = dumper.write_exports(graph) if include_exports else []

    return DumpResult(
        entity_types=len(graph),
        bundles=sum(len(entry.bundles) for entry in graph.values()),
        output_dir=output_dir,
        exports=exports,
    )


def _load_inputs(args) -> tuple[ReportSettings, MetadataSource]:
    for path in (args.metadata, args.settings):
        if not os.path.isfile(path):
            print(f"Error: {path} not found", file=sys.stderr)
            sys.exit(1)
    try:
        return load_settings(args.settings), JsonMetadataSource(args.metadata)
    except (SettingsError, MetadataSourceError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _fail_config(e: ReportConfigError) -> None:
    for error in e.errors:
        print(f"Error: {error}", file=sys.stderr)
    sys.exit(1)


def main(argv: list[str] | None = None):
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--metadata', required=True, help='Path to the metadata schema JSON file')
    common.add_argument('--settings', required=True, help='Path to the report settings JSON file')
    common.add_argument('--verbose', action='store_true', help='Enable debug logging')

    parser = argparse.ArgumentParser(prog='content-model-report', description='Content model report')
    subparsers = parser.add_subparsers(dest='command')

    # report command
    report_parser = subparsers.add_parser('report', parents=[common], help='Print the resolved report as JSON')
    report_parser.add_argument('--type', dest='type_id', help='Only this entity type')
    report_parser.add_argument('--bundle', dest='bundle_id', help='Only this bundle (requires --type)')
    report_parser.add_argument('-o', '--output', help='Output file (default: stdout)')
    report_parser.add_argument('--no-pretty', action='store_true', help='Disable pretty printing')

    # export command
    export_parser = subparsers.add_parser('export', parents=[common], help='Export one bundle as CSV')
    export_parser.add_argument('type_id', help='Entity type ID')
    export_parser.add_argument('bundle_id', help='Bundle ID')
    export_parser.add_argument('-o', '--output', help='Output file (default: stdout)')

    # dump command
    dump_parser = subparsers.add_parser('dump', parents=[common], help='Write JSON report and CSV exports')
    dump_parser.add_argument('output', help='Output directory')
    dump_parser.add_argument('--no-pretty', action='store_true', help='Disable pretty printing')
    dump_parser.add_argument('--no-exports', action='store_true', help='Skip per-bundle CSV exports')

    # validate command
    subparsers.add_parser('validate', parents=[common], help='Validate settings against the metadata')

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )
    settings, source = _load_inputs(args)

    if args.command == 'validate':
        errors = SettingsValidator(source).validate(settings)
        if errors:
            _fail_config(ReportConfigError(errors))
        print("Settings are valid.")
        return

    if args.command == 'dump':
        print(f"Resolving report from {args.settings}...")
        try:
            result = dump_report(
                settings, source, args.output,
                pretty=not args.no_pretty,
                include_exports=not args.no_exports,
            )
        except ReportConfigError as e:
            _fail_config(e)
        print(f"Done! Reported {result.bundles} bundles across {result.entity_types} entity types")
        print(f"Output: {result.output_dir}")
        return

    try:
        manager = build_manager(settings, source)
    except ReportConfigError as e:
        _fail_config(e)

    if args.command == 'report':
        if args.bundle_id and not args.type_id:
            print("Error: --bundle requires --type", file=sys.stderr)
            sys.exit(1)
        result = manager.data(args.type_id, args.bundle_id)
        if result is None:
            print(f"Error: {args.type_id}.{args.bundle_id or '*'} is not in the report", file=sys.stderr)
            sys.exit(1)
        data = graph_to_dict(result) if args.type_id is None else result.to_dict()
        text = json.dumps(data, indent=None if args.no_pretty else 2, ensure_ascii=False)
        if args.output:
            with open(args.output, 'w', encoding='utf-8') as f:
                f.write(text)
            print(f"Output: {args.output}")
        else:
            print(text)

    elif args.command == 'export':
        bundle = manager.data(args.type_id, args.bundle_id)
        if bundle is None:
            print(f"Error: {args.type_id}.{args.bundle_id} is not in the report", file=sys.stderr)
            sys.exit(1)
        exporter = CSVExporter()
        if args.output:
            with open(args.output, 'w', encoding='utf-8', newline='') as f:
                exporter.write(bundle.fields, f)
            print(f"Output: {args.output}")
        else:
            sys.stdout.write(exporter.render(bundle.fields))


if __name__ == '__main__':
    main()
