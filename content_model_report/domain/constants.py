"""Shared constants, regex patterns, and report configuration.

Centralizes the pair key format, rule syntax, and export layout that are
shared across resolution, configuration, and output modules.
"""

import re

# ── Pair Keys ────────────────────────────────────────────────────────────

# Joins entity type and bundle IDs; not a legal character in either.
PAIR_SEPARATOR = '.'

# Bundle wildcard in rules: `node.*`
WILDCARD = '*'

# Leading marker for exclusion rules: `~media.*`
NEGATION = '~'

# ── Validation Patterns ──────────────────────────────────────────────────

ENTITY_BUNDLE_RULE_RE = re.compile(r'^~?[a-z_]+\.(\*|[a-z_]+)$')
BASE_FIELD_RE = re.compile(r'^[a-z_]+\.[a-z_]+$')

# ── Field Types ──────────────────────────────────────────────────────────

# Field types whose settings name target entity type and bundles.
REFERENCE_FIELD_TYPES: tuple[str, ...] = (
    'entity_reference',
    'entity_reference_revisions',
)

# ── Export Layout ────────────────────────────────────────────────────────

EXPORT_HEADER: list[str] = [
    'Name',
    'Type',
    'References',
    'Required',
    'Translatable',
    'Description',
]

FLAG_LABELS: dict[bool, str] = {True: 'Yes', False: 'No'}
