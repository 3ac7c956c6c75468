"""Validation of report settings against the content model.

This is the boundary that keeps malformed rules away from the engine:
anything that passes here is safe to resolve.
"""

from content_model_report.config.settings import ReportSettings
from content_model_report.domain.constants import BASE_FIELD_RE, ENTITY_BUNDLE_RULE_RE, NEGATION, WILDCARD
from content_model_report.domain.pair_key import split_key
from content_model_report.metadata.source import MetadataSource


class SettingsValidator:
    """Checks rule lines and base field exceptions for a metadata source.

    Pattern and entity type errors stop validation of the remaining items;
    unknown bundles and base fields are reported and validation continues.
    """

    def __init__(self, source: MetadataSource) -> None:
        self._source = source

    def validate(self, settings: ReportSettings) -> list[str]:
        """Return all error messages for the settings (empty if valid)."""
        errors: list[str] = []
        if not settings.entity_bundles:
            errors.append('Entity bundles: at least one item is required.')
        errors.extend(self.validate_entity_bundles(settings.entity_bundles))
        errors.extend(self.validate_base_fields(settings.base_fields))
        return errors

    def validate_entity_bundles(self, items: list[str]) -> list[str]:
        errors: list[str] = []
        for item in items:
            if not ENTITY_BUNDLE_RULE_RE.match(item):
                errors.append(f'Invalid item: {item}.')
                break
            type_id, bundle_id = split_key(item.lstrip(NEGATION))
            if self._source.get_entity_type(type_id) is None:
                errors.append(f'Invalid entity type ID: {type_id}.')
                break
            if bundle_id != WILDCARD and bundle_id not in self._source.get_bundles(type_id):
                errors.append(f'Invalid {type_id} bundle: {bundle_id}.')
        return errors

    def validate_base_fields(self, items: list[str]) -> list[str]:
        errors: list[str] = []
        for item in items:
            if not BASE_FIELD_RE.match(item):
                errors.append(f'Invalid item: {item}.')
                break
            type_id, field_name = split_key(item)
            if self._source.get_entity_type(type_id) is None:
                errors.append(f'Invalid entity type ID: {type_id}.')
                break
            if field_name not in self._source.get_base_field_names(type_id):
                errors.append(f'Invalid {type_id} base field ID: {field_name}.')
        return errors
