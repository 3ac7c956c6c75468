"""Expands report rules into the initial resolution mapping."""

import logging

from content_model_report.domain.pair_key import make_key, parse_rule
from content_model_report.metadata.source import MetadataSource

logger = logging.getLogger(__name__)


class BundleSetResolver:
    """Turns `[~]type.(bundle|*)` rules into a pair key → process flag mapping.

    Rules are applied in order with insert-if-absent semantics: the first
    rule affecting a pair key decides whether it is processed (True) or
    excluded (False). Wildcards expand to every bundle of the entity type;
    a wildcard for an unknown type contributes nothing.

    Args:
        source: Metadata source used to enumerate bundles for wildcards.
    """

    def __init__(self, source: MetadataSource) -> None:
        self._source = source

    def resolve(self, rules: list[str]) -> dict[str, bool]:
        """Resolve rule lines into the initial mapping.

        Args:
            rules: Ordered rule lines, already validated.

        Returns:
            Ordered dict of literal pair keys to process flags.
        """
        mapping: dict[str, bool] = {}
        for line in rules:
            rule = parse_rule(line)
            process = not rule.negated

            if not rule.is_wildcard:
                mapping.setdefault(rule.key, process)
                continue

            if self._source.get_entity_type(rule.entity_type) is None:
                logger.debug("Skipping wildcard for unknown entity type %s", rule.entity_type)
                continue
            for bundle_id in self._source.get_bundles(rule.entity_type):
                mapping.setdefault(make_key(rule.entity_type, bundle_id), process)

        return mapping
