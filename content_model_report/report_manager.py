"""Content model report coordinator.

Wires the bundle set resolver, field extractor, and closure builder
together and serves the memoized report graph by key.
"""

from content_model_report.cache import ReportCache
from content_model_report.config.settings import ReportSettings
from content_model_report.domain.models import (
    BundleReport,
    EntityTypeReport,
    FieldReport,
    ReportGraph,
)
from content_model_report.domain.pair_key import split_key
from content_model_report.metadata.source import MetadataSource
from content_model_report.resolution.bundle_set_resolver import BundleSetResolver
from content_model_report.resolution.closure_builder import ClosureBuilder
from content_model_report.resolution.field_extractor import FieldExtractor


class ContentModelReportManager:
    """Computes the content model report once and answers lookups from it.

    Args:
        settings: Report rules, reference toggle, and base field exceptions.
        source: Metadata source describing the content model.
        cache: Cache slot for the graph. A fresh one is created if omitted;
            pass a shared instance to reuse the graph across managers.
    """

    def __init__(
        self,
        settings: ReportSettings,
        source: MetadataSource,
        cache: ReportCache | None = None,
    ) -> None:
        self._settings = settings
        self._source = source
        self._cache = cache or ReportCache()
        self._extractor = FieldExtractor(source, settings.base_fields)
        self.resolution_mapping: dict[str, bool] = {}

    def data(
        self,
        type_id: str | None = None,
        bundle_id: str | None = None,
    ) -> ReportGraph | EntityTypeReport | BundleReport | None:
        """Return report data.

        Args:
            type_id: Optional entity type ID to narrow the result to.
            bundle_id: Optional bundle ID (used with type_id).

        Returns:
            The full graph, one entity type entry, or one bundle entry.
            None when the requested type or bundle is not in the report.
        """
        graph = self._cache.get_or_compute(self._build)
        if type_id is None:
            return graph

        entry = graph.get(type_id)
        if entry is None or bundle_id is None:
            return entry
        return entry.bundles.get(bundle_id)

    def field_data(self, type_id: str, bundle_id: str) -> dict[str, FieldReport]:
        """Extract fields for a pair directly, bypassing the report graph."""
        fields, _ = self._extractor.extract(type_id, bundle_id)
        return fields

    def reference_exists(self, key: str) -> bool:
        """Whether a reference key materialized in the report."""
        type_id, bundle_id = split_key(key)
        return self.data(type_id, bundle_id) is not None

    def reset(self) -> None:
        """Drop the cached graph so the next lookup recomputes it."""
        self._cache.reset()

    def _build(self) -> ReportGraph:
        resolver = BundleSetResolver(self._source)
        mapping = resolver.resolve(self._settings.entity_bundles)
        builder = ClosureBuilder(
            self._source,
            self._extractor,
            include_references=self._settings.include_references,
        )
        graph = builder.build(mapping)
        self.resolution_mapping = mapping
        return graph
