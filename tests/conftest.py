"""Shared test fixtures."""

import copy
import json

import pytest

from content_model_report.config.settings import ReportSettings
from content_model_report.metadata.source import InMemoryMetadataSource


# ── Sample Metadata ──────────────────────────────────────────────────────

def _ref(target_type, target_bundles, field_type='entity_reference', label='Reference'):
    return {
        'label': label,
        'type': field_type,
        'settings': {
            'target_type': target_type,
            'handler_settings': {'target_bundles': target_bundles},
        },
    }


CONTENT_MODEL = {
    'entity_types': {
        'node': {
            'label': 'Content',
            'base_fields': {
                'nid': {'label': 'ID', 'type': 'integer'},
                'title': {'label': 'Title', 'type': 'string', 'required': True, 'translatable': True},
                'uid': _ref('user', {'user': 'user'}, label='Authored by'),
            },
            'bundles': {
                'article': {
                    'label': 'Article',
                    'fields': {
                        'field_tags': _ref('taxonomy_term', {'tags': 'tags'}, label='Tags'),
                        'field_image': {'label': 'Image', 'type': 'image'},
                        'body': {
                            'label': 'Body',
                            'type': 'text_with_summary',
                            'description': '<p>Main <strong>body</strong> text.</p>',
                            'translatable': True,
                        },
                    },
                },
                'page': {
                    'label': 'Basic page',
                    'fields': {
                        'field_media': _ref(
                            'media', ['video', 'image'],
                            field_type='entity_reference_revisions', label='Media',
                        ),
                    },
                },
                'landing': {
                    'label': 'Landing page',
                    'fields': {
                        'field_related': _ref('node', {'article': 'article', 'landing': 'landing'}, label='Related'),
                        'field_legacy': _ref('legacy', {'old': 'old'}, label='Legacy'),
                    },
                },
            },
        },
        'taxonomy_term': {
            'label': 'Taxonomy term',
            'base_fields': {
                'tid': {'label': 'Term ID', 'type': 'integer'},
                'name': {'label': 'Name', 'type': 'string', 'required': True},
            },
            'bundles': {
                'tags': {'label': 'Tags', 'fields': {}},
                'categories': {
                    'label': 'Categories',
                    'fields': {'field_parent': _ref('taxonomy_term', {'categories': 'categories'}, label='Parent')},
                },
            },
        },
        'media': {
            'label': 'Media',
            'base_fields': {'mid': {'label': 'ID', 'type': 'integer'}},
            'bundles': {
                'image': {'label': 'Image', 'fields': {'field_media_image': {'label': 'Image', 'type': 'image'}}},
                'video': {'label': 'Video', 'fields': {'field_media_oembed': {'label': 'Video URL', 'type': 'string'}}},
            },
        },
        'user': {
            'label': 'User',
            'base_fields': {'name': {'label': 'Name', 'type': 'string'}},
            'bundles': {'user': {'label': 'User', 'fields': {}}},
        },
    },
    'field_types': {
        'entity_reference': {'label': 'Entity reference'},
        'entity_reference_revisions': {'label': 'Entity reference revisions'},
        'string': {'label': 'Text (plain)'},
        'integer': {'label': 'Number (integer)'},
        'text_with_summary': {'label': 'Text (formatted, long, with summary)'},
    },
}

# Single Doc Form scenario: sdf references article and itself.
SDF_MODEL = {
    'entity_types': {
        'node': {
            'label': 'Content',
            'base_fields': {'title': {'label': 'Title', 'type': 'string'}},
            'bundles': {
                'sdf': {
                    'label': 'Single Doc Form',
                    'fields': {
                        'related': _ref('node', {'article': 'article', 'sdf': 'sdf'}, label='Related'),
                    },
                },
                'article': {
                    'label': 'Article',
                    'fields': {'summary': {'label': 'Summary', 'type': 'string'}},
                },
            },
        },
    },
    'field_types': {'entity_reference': {'label': 'Entity reference'}},
}


class CountingMetadataSource(InMemoryMetadataSource):
    """In-memory source that counts lookups made against it."""

    def __init__(self, document):
        super().__init__(document)
        self.calls: dict[str, int] = {}

    def _count(self, name):
        self.calls[name] = self.calls.get(name, 0) + 1

    def get_entity_type(self, type_id):
        self._count('get_entity_type')
        return super().get_entity_type(type_id)

    def get_bundles(self, type_id):
        self._count('get_bundles')
        return super().get_bundles(type_id)

    def get_field_definitions(self, type_id, bundle_id):
        self._count('get_field_definitions')
        return super().get_field_definitions(type_id, bundle_id)


# ── Fixtures ─────────────────────────────────────────────────────────────

@pytest.fixture
def content_model():
    return copy.deepcopy(CONTENT_MODEL)


@pytest.fixture
def source(content_model):
    return InMemoryMetadataSource(content_model)


@pytest.fixture
def sdf_source():
    return CountingMetadataSource(copy.deepcopy(SDF_MODEL))


@pytest.fixture
def counting_source(content_model):
    return CountingMetadataSource(content_model)


@pytest.fixture
def settings():
    return ReportSettings(
        entity_bundles=['~node.page', 'node.*', '~media.*'],
        include_references=True,
        base_fields=['node.title'],
    )


@pytest.fixture
def metadata_file(tmp_path, content_model):
    path = tmp_path / 'metadata.json'
    path.write_text(json.dumps(content_model), encoding='utf-8')
    return str(path)


@pytest.fixture
def settings_file(tmp_path, settings):
    path = tmp_path / 'settings.json'
    path.write_text(json.dumps(settings.to_dict()), encoding='utf-8')
    return str(path)
