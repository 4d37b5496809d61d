"""
Content Auditor

Runs the grammar rules over a corpus of content units and produces a
ContentAuditReport for reviewers (markdown) and automation (JSON).

Usage:
    from lexicon import LexiconService
    from rules import get_registry
    from content_auditor import ContentAuditor, render_markdown

    registry = get_registry(LexiconService().load_lexicon())
    report = ContentAuditor(registry).audit_all(units)
    print(render_markdown(report))
"""

from .types import AuditSummary, ContentAuditEntry, ContentAuditReport
from .auditor import ContentAuditor
from .statistics_calculator import GateMode, StatisticsCalculator, exit_code_for
from .report_formatter import comparable_body, group_by_source, render_json, render_markdown
from .corpus_loader import (
    CorpusLoadError,
    load_corpus,
    load_grammar_lessons,
    units_from_grammar_lessons,
    units_from_records,
)

__all__ = [
    'AuditSummary',
    'ContentAuditEntry',
    'ContentAuditReport',
    'ContentAuditor',
    'GateMode',
    'StatisticsCalculator',
    'exit_code_for',
    'comparable_body',
    'group_by_source',
    'render_json',
    'render_markdown',
    'CorpusLoadError',
    'load_corpus',
    'load_grammar_lessons',
    'units_from_grammar_lessons',
    'units_from_records',
]
