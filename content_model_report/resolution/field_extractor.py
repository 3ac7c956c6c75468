"""Field extraction for a single entity type bundle.

Filters out base fields unless allowlisted, classifies reference fields,
and collects the pair keys they point to.
"""

from typing import Any, Iterable

from content_model_report.domain.constants import REFERENCE_FIELD_TYPES
from content_model_report.domain.models import FieldDefinition, FieldReport
from content_model_report.domain.pair_key import make_key
from content_model_report.metadata.source import MetadataSource


class FieldExtractor:
    """Builds FieldReport rows for a bundle and reports discovered references.

    Args:
        source: Metadata source to read field definitions from.
        base_field_exceptions: `type.field` names of base fields to keep.
    """

    def __init__(self, source: MetadataSource, base_field_exceptions: Iterable[str] = ()) -> None:
        self._source = source
        self._base_field_exceptions = set(base_field_exceptions)
        self._type_labels: dict[str, str] | None = None

    def extract(self, type_id: str, bundle_id: str) -> tuple[dict[str, FieldReport], set[str]]:
        """Extract reported fields for a pair.

        Args:
            type_id: Entity type ID.
            bundle_id: Bundle ID.

        Returns:
            Tuple of (fields keyed by machine name, discovered reference keys).
        """
        base_fields = self._source.get_base_field_names(type_id)
        definitions = self._source.get_field_definitions(type_id, bundle_id)
        type_labels = self._field_type_labels()

        fields: dict[str, FieldReport] = {}
        discovered: set[str] = set()

        for name, definition in definitions.items():
            if name in base_fields and f'{type_id}.{name}' not in self._base_field_exceptions:
                continue

            references = self._references(definition)
            discovered.update(references)

            fields[name] = FieldReport(
                name=name,
                label=str(definition.label),
                description=definition.description,
                type=definition.type,
                type_label=type_labels.get(definition.type, ''),
                required=definition.required,
                translatable=definition.translatable,
                references=tuple(sorted(references)),
            )

        return fields, discovered

    def _field_type_labels(self) -> dict[str, str]:
        if self._type_labels is None:
            self._type_labels = self._source.get_field_type_labels()
        return self._type_labels

    @staticmethod
    def _references(definition: FieldDefinition) -> set[str]:
        """Return the pair keys a reference field may point to."""
        if definition.type not in REFERENCE_FIELD_TYPES:
            return set()

        settings = definition.settings or {}
        target_type = settings.get('target_type')
        target_bundles = _target_bundles(settings)
        if not target_type or not target_bundles:
            return set()

        return {make_key(target_type, bundle) for bundle in target_bundles}


def _target_bundles(settings: dict[str, Any]) -> list[str]:
    handler_settings = settings.get('handler_settings') or {}
    target_bundles = handler_settings.get('target_bundles') or []
    if isinstance(target_bundles, dict):
        return [str(b) for b in target_bundles.values() if b]
    return [str(b) for b in target_bundles if b]
