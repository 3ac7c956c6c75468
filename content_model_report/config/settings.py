"""Report settings and their JSON file loader."""

import json
import os
from dataclasses import dataclass, field
from typing import Any, Iterable


class SettingsError(Exception):
    """Error reading report settings."""
    pass


def split_lines(value: str | Iterable[str] | None) -> list[str]:
    """Normalize rule input into trimmed, non-empty, unique lines.

    Accepts newline-separated text or a list of lines.
    """
    lines = value.splitlines() if isinstance(value, str) else (value or [])
    items: list[str] = []
    for line in lines:
        line = str(line).strip()
        if line and line not in items:
            items.append(line)
    return items


@dataclass
class ReportSettings:
    """Options controlling which bundles the report covers.

    Attributes:
        entity_bundles: Ordered `[~]type.(bundle|*)` rules.
        include_references: Follow reference fields to further bundles.
        base_fields: `type.field` base fields to keep in the report.
    """

    entity_bundles: list[str] = field(default_factory=list)
    include_references: bool = True
    base_fields: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'ReportSettings':
        """Build settings from a dict, accepting a nested `report` section.

        Rule and base field lists may be lists or newline-separated text;
        both are trimmed, stripped of empty lines, and de-duplicated.
        """
        report = data.get('report', data)
        return cls(
            entity_bundles=split_lines(report.get('entity_bundles')),
            include_references=bool(report.get('include_references', True)),
            base_fields=split_lines(report.get('base_fields')),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            'report': {
                'entity_bundles': list(self.entity_bundles),
                'include_references': self.include_references,
                'base_fields': list(self.base_fields),
            },
        }


def load_settings(path: str) -> ReportSettings:
    """Load report settings from a JSON file."""
    if not os.path.isfile(path):
        raise SettingsError(f"Settings file not found: {path}")
    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise SettingsError(f"Failed to read settings: {e}")
    if not isinstance(data, dict):
        raise SettingsError(f"Settings must be a JSON object: {path}")
    return ReportSettings.from_dict(data)
