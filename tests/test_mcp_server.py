"""Tests for the MCP server tools."""

import json

import pytest

from content_model_report.report_manager import ContentModelReportManager
from mcp_server import server


@pytest.fixture(autouse=True)
def manager(settings, source, monkeypatch):
    manager = ContentModelReportManager(settings, source)
    monkeypatch.setattr(server, '_manager', manager)
    return manager


class TestTools:
    """Tool functions answer from the shared report manager."""

    def test_list_entity_types(self):
        types = server.list_entity_types()
        assert [t['id'] for t in types] == ['node', 'taxonomy_term']
        assert types[1]['bundles'] == [{'id': 'tags', 'label': 'Tags', 'field_count': 0}]

    def test_get_entity_type_missing(self):
        result = server.get_entity_type('media')
        assert 'error' in result

    def test_get_bundle(self):
        result = server.get_bundle('node', 'article')
        assert result['label'] == 'Article'
        assert list(result['fields']) == ['body', 'field_image', 'field_tags', 'title']

    def test_export_bundle_csv(self):
        text = server.export_bundle_csv('taxonomy_term', 'tags')
        assert text.startswith('Name,Type,References,Required,Translatable,Description')

    def test_search_fields_by_type(self):
        results = server.search_fields('field', field_type='entity_reference')
        assert {(r['entity_type'], r['bundle'], r['name']) for r in results} == {
            ('node', 'article', 'field_tags'),
            ('node', 'landing', 'field_related'),
            ('node', 'landing', 'field_legacy'),
        }

    def test_uninitialized_manager(self, monkeypatch):
        monkeypatch.setattr(server, '_manager', None)
        with pytest.raises(RuntimeError):
            server.list_entity_types()


class TestMain:
    """Server start-up validates settings before serving."""

    def test_invalid_settings_exit(self, metadata_file, tmp_path, capsys):
        bad = tmp_path / 'bad_settings.json'
        bad.write_text(json.dumps({'report': {'entity_bundles': ['node.nope']}}), encoding='utf-8')
        with pytest.raises(SystemExit) as exc:
            server.main(['--metadata', metadata_file, '--settings', str(bad)])
        assert exc.value.code == 1
        assert 'Invalid node bundle: nope.' in capsys.readouterr().err

    def test_valid_settings_serve(self, metadata_file, settings_file, monkeypatch):
        calls = []
        monkeypatch.setattr(server.mcp, 'run', lambda transport: calls.append(transport))
        server.main(['--metadata', metadata_file, '--settings', settings_file])
        assert calls == ['stdio']
        assert list(server.list_entity_types()[0]['bundles'][0]) == ['id', 'label', 'field_count']
