"""Shared data models used across report modules."""

from dataclasses import asdict, dataclass, field
from typing import Any


# ── Metadata Definitions ─────────────────────────────────────────────────


@dataclass
class EntityTypeDefinition:
    """An entity type known to the metadata source."""

    id: str
    label: str


@dataclass
class BundleDefinition:
    """A bundle (sub-type) of an entity type."""

    id: str
    label: str


@dataclass
class FieldDefinition:
    """A field definition as supplied by the metadata source."""

    name: str
    label: Any
    type: str
    description: str = ''
    required: bool = False
    translatable: bool = False
    settings: dict[str, Any] = field(default_factory=dict)


# ── Report Graph ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class FieldReport:
    """A resolved field row of the content model report."""

    name: str
    label: str
    description: str
    type: str
    type_label: str
    required: bool
    translatable: bool
    references: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data['references'] = list(self.references)
        return data


@dataclass
class BundleReport:
    """A resolved bundle with its fields keyed by machine name."""

    id: str
    label: str
    fields: dict[str, FieldReport] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'label': self.label,
            'fields': {name: f.to_dict() for name, f in self.fields.items()},
        }


@dataclass
class EntityTypeReport:
    """A resolved entity type with its reported bundles."""

    id: str
    label: str
    bundles: dict[str, BundleReport] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'label': self.label,
            'bundles': {bid: b.to_dict() for bid, b in self.bundles.items()},
        }


# entity type ID → EntityTypeReport
ReportGraph = dict[str, EntityTypeReport]


@dataclass
class DumpResult:
    """Result summary of a dump operation."""

    entity_types: int
    bundles: int
    output_dir: str
    exports: list[str] = field(default_factory=list)


def graph_to_dict(graph: ReportGraph) -> dict[str, Any]:
    """Convert a report graph into plain JSON-serializable dicts."""
    return {type_id: entry.to_dict() for type_id, entry in graph.items()}
