"""Fixed-point closure over entity type bundles.

Processes every queued pair of the resolution mapping, queues the pairs
its reference fields point to, and repeats until a pass queues nothing
new. The finished graph is sorted by label at every level.
"""

import logging

from content_model_report.domain.models import BundleReport, EntityTypeReport, ReportGraph
from content_model_report.domain.pair_key import split_key
from content_model_report.metadata.source import MetadataSource
from content_model_report.resolution.field_extractor import FieldExtractor

logger = logging.getLogger(__name__)


class ClosureBuilder:
    """Builds the report graph from an initial resolution mapping.

    Mapping flags: True means queued, False means processed or excluded.
    A key that is absent has never been seen. Discovered references are
    only queued when absent, so excluded pairs stay excluded and reference
    cycles terminate.

    Args:
        source: Metadata source for entity type and bundle lookups.
        extractor: Field extractor run for every processed pair.
        include_references: Queue pairs discovered through reference fields.
    """

    def __init__(
        self,
        source: MetadataSource,
        extractor: FieldExtractor,
        include_references: bool = True,
    ) -> None:
        self._source = source
        self._extractor = extractor
        self._include_references = include_references
        self.pass_count = 0

    def build(self, mapping: dict[str, bool]) -> ReportGraph:
        """Run passes to a fixed point, then sort the graph.

        Args:
            mapping: Pair key → process flag. Mutated in place; after the
                call it holds every visited and discovered key.

        Returns:
            The sorted report graph.
        """
        graph: ReportGraph = {}
        self.pass_count = 0

        needs_update = True
        while needs_update:
            needs_update = False
            self.pass_count += 1
            queued = [key for key, process in mapping.items() if process]

            for key in queued:
                mapping[key] = False
                references = self._process_pair(key, graph)
                if not self._include_references:
                    continue
                for reference in sorted(references):
                    if reference not in mapping:
                        mapping[reference] = True
                        needs_update = True

        logger.info(
            "Resolved %d entity types from %d pair keys in %d passes",
            len(graph), len(mapping), self.pass_count,
        )
        return sort_graph(graph)

    def _process_pair(self, key: str, graph: ReportGraph) -> set[str]:
        """Add one pair to the graph. Returns its discovered references."""
        type_id, bundle_id = split_key(key)

        definition = self._source.get_entity_type(type_id)
        if definition is None:
            logger.debug("Skipping %s: unknown entity type", key)
            return set()
        bundle = self._source.get_bundles(type_id).get(bundle_id)
        if bundle is None:
            logger.debug("Skipping %s: unknown bundle", key)
            return set()

        if type_id not in graph:
            graph[type_id] = EntityTypeReport(id=type_id, label=str(definition.label))

        fields, references = self._extractor.extract(type_id, bundle_id)
        graph[type_id].bundles[bundle_id] = BundleReport(
            id=bundle_id, label=str(bundle.label), fields=fields,
        )
        return references


def sort_graph(graph: ReportGraph) -> ReportGraph:
    """Sort entity types, bundles, and fields by label (stable)."""
    def by_label(item):
        return item[1].label

    for entry in graph.values():
        for bundle in entry.bundles.values():
            bundle.fields = dict(sorted(bundle.fields.items(), key=by_label))
        entry.bundles = dict(sorted(entry.bundles.items(), key=by_label))
    return dict(sorted(graph.items(), key=by_label))
