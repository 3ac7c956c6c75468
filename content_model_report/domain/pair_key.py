"""Pair key and rule helpers.

A pair key addresses one (entity type, bundle) combination:
  - 'node.article'       → literal pair
  - 'node.*'             → rule covering every bundle of `node`
  - '~media.*'           → exclusion rule
"""

from dataclasses import dataclass

from content_model_report.domain.constants import NEGATION, PAIR_SEPARATOR, WILDCARD


@dataclass(frozen=True)
class BundleRule:
    """A single inclusion or exclusion rule from the report settings."""

    entity_type: str
    bundle: str
    negated: bool = False

    @property
    def is_wildcard(self) -> bool:
        return self.bundle == WILDCARD

    @property
    def key(self) -> str:
        return make_key(self.entity_type, self.bundle)


def make_key(entity_type: str, bundle: str) -> str:
    """Join an entity type and bundle into a pair key."""
    return f'{entity_type}{PAIR_SEPARATOR}{bundle}'


def split_key(key: str) -> tuple[str, str]:
    """Split a pair key into (entity_type, bundle)."""
    entity_type, _, bundle = key.partition(PAIR_SEPARATOR)
    return entity_type, bundle


def parse_rule(line: str) -> BundleRule:
    """Parse a `[~]type.(bundle|*)` rule line.

    Args:
        line: Raw rule text. Surrounding whitespace is ignored.

    Returns:
        The parsed BundleRule.
    """
    line = line.strip()
    negated = line.startswith(NEGATION)
    entity_type, bundle = split_key(line.lstrip(NEGATION))
    return BundleRule(entity_type, bundle, negated)


def anchor_id(key: str) -> str:
    """In-page anchor for a pair key: 'node.article' → 'node-article'."""
    return key.replace(PAIR_SEPARATOR, '-')
