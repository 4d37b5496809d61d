"""
Content Auditor Tests
Corpus-level behaviour: deduplication, ordering, failure isolation,
idempotence and parallel/sequential equivalence.
"""

import pytest

from content_auditor import (
    ContentAuditor, GateMode, StatisticsCalculator, exit_code_for, render_json, render_markdown
)
from content_auditor.types import AuditSummary
from rules import UnitCheck
from rules.base_types import RuleId
from tests.conftest import make_unit


def mixed_corpus():
    units = [
        make_unit('vocab/1', adjective='голема', head_noun='куќа'),
        make_unit('vocab/2', adjective='голем', head_noun='куќа'),
        make_unit('vocab/3', adjective='нов', head_noun='непознатзбор'),
        make_unit('vocab/4', adjective='розови', lemma='розов',
                  gender='neuter', number='plural', definiteness='indefinite'),
        make_unit('phrases/1', adjective='ново', head_noun='море'),
        make_unit('phrases/2', adjective='нов', head_noun='стол'),
    ]
    return units * 3


class TestDeduplication:

    def test_repeated_defect_is_one_row(self, registry):
        repeated = [make_unit('lesson-1/ex-1', adjective='голем', head_noun='куќа') for _ in range(40)]
        clean = [make_unit(f'lesson-2/ex-{i}', adjective='голема', head_noun='книга') for i in range(60)]
        corpus = clean[:30] + repeated + clean[30:]

        report = ContentAuditor(registry).audit_all(corpus)

        assert report.summary.total_checked == 100
        assert len(report.entries_with_findings) == 1
        entry = report.entries_with_findings[0]
        assert entry.content_id == 'lesson-1/ex-1'
        assert len(entry.errors) == 1
        assert entry.errors[0].occurrences == 40
        assert report.summary.total_errors == 1
        assert report.summary.total_occurrences == 40
        assert render_markdown(report).count('| lesson-1/ex-1 |') == 1

    def test_distinct_defects_in_one_unit_stay_separate(self, registry):
        corpus = [
            make_unit('u', adjective='голем', head_noun='куќа'),
            make_unit('u', adjective='голем', head_noun='море'),
        ]
        entry = ContentAuditor(registry).audit_all(corpus).entries[0]
        assert [f.expected for f in entry.errors] == ['голема', 'големо']


class TestReport:

    def test_summary_counts(self, registry):
        report = ContentAuditor(registry).audit_all(mixed_corpus())
        summary = report.summary

        assert summary.total_checked == 18
        assert summary.total_errors == 2
        assert summary.total_warnings == 1
        assert summary.by_rule_id == {
            'AGREEMENT_MISMATCH': 1,
            'INVALID_PARADIGM_FORM': 1,
            'MISSING_DICTIONARY_ENTRY': 1,
        }

    def test_entries_follow_corpus_order(self, registry):
        report = ContentAuditor(registry).audit_all(mixed_corpus())
        assert [e.content_id for e in report.entries] == [
            'vocab/1', 'vocab/2', 'vocab/3', 'vocab/4', 'phrases/1', 'phrases/2'
        ]

    def test_metadata_snapshot(self, registry):
        report = ContentAuditor(registry).audit_all([make_unit('x', adjective='голема', head_noun='куќа')])
        assert report.entries[0].metadata.to_dict() == {
            'noun_lemma': 'куќа',
            'gender': 'feminine',
            'number': 'singular',
            'definiteness': 'indefinite',
            'source': 'inferred',
        }

    def test_empty_corpus(self, registry):
        report = ContentAuditor(registry).audit_all([])
        assert report.summary == AuditSummary()
        assert 'No issues found' in render_markdown(report)


class TestDeterminism:

    def test_idempotent(self, registry):
        auditor = ContentAuditor(registry)
        first = auditor.audit_all(mixed_corpus())
        second = auditor.audit_all(mixed_corpus())
        assert render_markdown(first) == render_markdown(second)
        assert render_json(first) == render_json(second)

    @pytest.mark.parametrize('workers', [2, 4, 8])
    def test_parallel_matches_sequential(self, registry, workers):
        sequential = ContentAuditor(registry, max_workers=1).audit_all(mixed_corpus())
        parallel = ContentAuditor(registry, max_workers=workers).audit_all(mixed_corpus())
        assert parallel == sequential
        assert render_json(parallel) == render_json(sequential)


class TestFailureIsolation:

    def test_failing_unit_does_not_abort_corpus(self, registry):
        class FlakyRegistry:
            def check_unit(self, unit):
                if unit.id == 'bad':
                    raise RuntimeError('corrupt unit')
                return registry.check_unit(unit)

        corpus = [
            make_unit('good-1', adjective='голем', head_noun='куќа'),
            make_unit('bad'),
            make_unit('good-2', adjective='големо', head_noun='море'),
        ]
        report = ContentAuditor(FlakyRegistry()).audit_all(corpus)

        assert report.summary.total_checked == 3
        ids = {e.content_id: [f.rule_id for f in e.findings] for e in report.entries}
        assert ids['bad'] == [RuleId.RULE_EXECUTION_FAILURE]
        assert ids['good-1'] == [RuleId.AGREEMENT_MISMATCH]
        assert ids['good-2'] == []

    def test_aggregate_accepts_precomputed_checks(self, registry):
        unit = make_unit('x', adjective='голем', head_noun='куќа')
        check = registry.check_unit(unit)
        assert isinstance(check, UnitCheck)
        report = ContentAuditor(registry).aggregate([check, check])
        assert report.entries[0].errors[0].occurrences == 2


class TestExitCodes:

    @pytest.mark.parametrize('errors, warnings, mode, expected', [
        (0, 0, GateMode.INFORMATIONAL, 0),
        (3, 2, GateMode.INFORMATIONAL, 0),
        (0, 2, GateMode.CI, 0),
        (1, 0, GateMode.CI, 1),
        (0, 0, GateMode.STRICT, 0),
        (0, 1, GateMode.STRICT, 1),
        (1, 0, GateMode.STRICT, 1),
    ])
    def test_gate_modes(self, errors, warnings, mode, expected):
        summary = AuditSummary(total_checked=10, total_errors=errors, total_warnings=warnings)
        assert exit_code_for(summary, mode) == expected

    def test_calculator_counts_rows_not_occurrences(self, registry):
        report = ContentAuditor(registry).audit_all(
            [make_unit('x', adjective='голем', head_noun='куќа')] * 5)
        summary = StatisticsCalculator().calculate_summary(report.entries, 5)
        assert summary.total_errors == 1
        assert summary.total_occurrences == 5
