"""
Unit Tests for the markdown and JSON report renderers
"""

import json

import pytest

from content_auditor import ContentAuditor, comparable_body, group_by_source, render_json, render_markdown
from rules.base_types import ContentUnit


@pytest.fixture
def report(registry):
    corpus = [
        ContentUnit(id='vocab/1', adjective_text='голем', field_path='items[0].phrase',
                    head_noun='куќа', source='vocabulary'),
        ContentUnit(id='vocab/2', adjective_text='голема', head_noun='куќа', source='vocabulary'),
        ContentUnit(id='dialogues/7', adjective_text='зелен|а', head_noun='книга'),
    ]
    return ContentAuditor(registry).audit_all(corpus)


@pytest.mark.unit
class TestMarkdown:

    def test_structure(self, report):
        md = render_markdown(report)
        assert md.startswith('# Content QA Audit Report\n')
        assert '| Units checked | 3 |' in md
        assert '| Errors | 1 |' in md
        assert '| Warnings | 1 |' in md
        assert '| AGREEMENT_MISMATCH | 1 |' in md

    def test_grouped_by_source(self, report):
        md = render_markdown(report)
        assert '### vocabulary' in md
        assert '### dialogues' in md
        assert md.index('### vocabulary') < md.index('### dialogues')
        assert ('| vocab/1 | items[0].phrase | AGREEMENT_MISMATCH | error | голема | голем | 1 |'
                in md)

    def test_pipes_escaped(self, report):
        assert 'зелен\\|а' in render_markdown(report)

    def test_clean_unit_has_no_row(self, report):
        assert '| vocab/2 |' not in render_markdown(report)

    def test_timestamp_outside_comparable_body(self, report):
        stamped = render_markdown(report, generated_at='2026-10-19T08:00:00+00:00')
        assert stamped.startswith('<!-- generated_at: 2026-10-19T08:00:00+00:00 -->\n')
        assert comparable_body(stamped) == render_markdown(report)


@pytest.mark.unit
class TestJson:

    def test_payload(self, report):
        data = json.loads(render_json(report))
        assert data['summary']['total_checked'] == 3
        assert [e['content_id'] for e in data['entries']] == ['vocab/1', 'vocab/2', 'dialogues/7']
        error = data['entries'][0]['errors'][0]
        assert error['rule_id'] == 'AGREEMENT_MISMATCH'
        assert error['expected'] == 'голема'
        assert error['location'] == {'content_id': 'vocab/1', 'field_path': 'items[0].phrase'}

    def test_cyrillic_not_escaped(self, report):
        assert 'голема' in render_json(report)

    def test_timestamp_envelope(self, report):
        stamped = render_json(report, generated_at='2026-10-19T08:00:00+00:00')
        assert json.loads(stamped)['metadata'] == {'generated_at': '2026-10-19T08:00:00+00:00'}
        assert comparable_body(stamped) == render_json(report)


@pytest.mark.unit
def test_group_by_source_uses_id_prefix(report):
    groups = group_by_source(report)
    assert list(groups) == ['vocabulary', 'dialogues']
    assert [e.content_id for e in groups['vocabulary']] == ['vocab/1']
