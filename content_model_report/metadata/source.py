"""
Metadata source abstraction for the report engine.

Provides a uniform, read-only interface for looking up entity types,
bundles, and field definitions, either from an in-memory schema document
or from a JSON schema dump on the local filesystem.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from content_model_report.domain.models import (
    BundleDefinition,
    EntityTypeDefinition,
    FieldDefinition,
)


class MetadataSourceError(Exception):
    """Error loading a metadata document."""
    pass


class MetadataSource(ABC):
    """Abstract interface for reading the content model.

    Unknown entity types or bundles are ordinary "not found" results
    (None or empty collections), never exceptions.
    """

    @abstractmethod
    def get_entity_type(self, type_id: str) -> EntityTypeDefinition | None:
        """Return the entity type definition, or None if unknown."""

    @abstractmethod
    def get_bundles(self, type_id: str) -> dict[str, BundleDefinition]:
        """Return bundle definitions keyed by bundle ID (empty if unknown type)."""

    @abstractmethod
    def get_field_definitions(self, type_id: str, bundle_id: str) -> dict[str, FieldDefinition]:
        """Return all field definitions of a bundle, base fields included."""

    @abstractmethod
    def get_base_field_names(self, type_id: str) -> set[str]:
        """Return the names of base fields inherent to the entity type."""

    @abstractmethod
    def get_field_type_labels(self) -> dict[str, str]:
        """Return human labels keyed by field type ID."""


class InMemoryMetadataSource(MetadataSource):
    """Serves the content model from a schema document dict.

    Document layout::

        {
          "entity_types": {
            "<type>": {
              "label": "...",
              "base_fields": {"<field>": {...}},
              "bundles": {"<bundle>": {"label": "...", "fields": {"<field>": {...}}}}
            }
          },
          "field_types": {"<field_type>": {"label": "..."}}
        }

    An entity type, bundle, or field type may also be given as a bare label
    string, and any `label` may itself be a `{"label": "..."}` object.
    """

    def __init__(self, document: dict[str, Any]):
        self._types: dict[str, Any] = document.get('entity_types') or {}
        self._field_types: dict[str, Any] = document.get('field_types') or {}

    def get_entity_type(self, type_id: str) -> EntityTypeDefinition | None:
        if type_id not in self._types:
            return None
        return EntityTypeDefinition(id=type_id, label=_label(self._types[type_id], type_id))

    def get_bundles(self, type_id: str) -> dict[str, BundleDefinition]:
        return {
            bundle_id: BundleDefinition(id=bundle_id, label=_label(info, bundle_id))
            for bundle_id, info in self._bundles(type_id).items()
        }

    def get_field_definitions(self, type_id: str, bundle_id: str) -> dict[str, FieldDefinition]:
        bundles = self._bundles(type_id)
        if bundle_id not in bundles:
            return {}
        bundle_info = _section(bundles[bundle_id])

        definitions: dict[str, FieldDefinition] = {}
        for name, info in (_section(self._types[type_id]).get('base_fields') or {}).items():
            definitions[name] = self._field_definition(name, info)
        for name, info in (bundle_info.get('fields') or {}).items():
            definitions[name] = self._field_definition(name, info)
        return definitions

    def get_base_field_names(self, type_id: str) -> set[str]:
        return set(_section(self._types.get(type_id)).get('base_fields') or {})

    def get_field_type_labels(self) -> dict[str, str]:
        labels: dict[str, str] = {}
        for type_id, info in self._field_types.items():
            label = _label(info, '')
            if label:
                labels[type_id] = label
        return labels

    def _bundles(self, type_id: str) -> dict[str, Any]:
        return _section(self._types.get(type_id)).get('bundles') or {}

    @staticmethod
    def _field_definition(name: str, info: dict[str, Any] | None) -> FieldDefinition:
        info = _section(info)
        return FieldDefinition(
            name=name,
            label=_label(info, name),
            type=info.get('type', ''),
            description=info.get('description') or '',
            required=bool(info.get('required', False)),
            translatable=bool(info.get('translatable', False)),
            settings=info.get('settings') or {},
        )


def _section(info: Any) -> dict[str, Any]:
    """Schema entries given as a bare label string carry no nested sections."""
    return info if isinstance(info, dict) else {}


def _label(info: Any, default: str) -> str:
    """Resolve a label from a plain string, `{"label": "..."}`, or a nested label object."""
    label = info.get('label') if isinstance(info, dict) else info
    if isinstance(label, dict):
        label = label.get('label')
    return str(label) if label else default


class JsonMetadataSource(InMemoryMetadataSource):
    """Reads the schema document from a JSON file on disk."""

    def __init__(self, path: str):
        self._path = Path(path)
        if not self._path.is_file():
            raise MetadataSourceError(f"Metadata file not found: {self._path}")
        try:
            with open(self._path, encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise MetadataSourceError(f"Failed to read metadata: {e}")
        if not isinstance(document, dict):
            raise MetadataSourceError(f"Metadata document must be an object: {self._path}")
        super().__init__(document)
