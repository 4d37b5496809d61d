"""
Report Formatter
Renders a ContentAuditReport as a markdown review document and as JSON.

Rendering is a pure function of the report. A generation timestamp, when
given, sits outside the comparable body: a leading HTML comment in markdown,
a `metadata` envelope in JSON.
"""

import json
from collections import OrderedDict
from typing import Dict, List, Optional

from .types import ContentAuditEntry, ContentAuditReport

GENERATED_AT_PREFIX = '<!-- generated_at: '

FINDINGS_TABLE_HEADER = [
    '| Content ID | Field | Rule | Severity | Expected | Actual | Count |',
    '|------------|-------|------|----------|----------|--------|-------|',
]


def _cell(value) -> str:
    text = '' if value is None else str(value)
    text = text.replace('\\', '\\\\').replace('|', '\\|').replace('\n', ' ')
    return text if text else '-'


def group_by_source(report: ContentAuditReport) -> Dict[str, List[ContentAuditEntry]]:
    """Entries with findings grouped by content source, first-appearance order."""
    groups: Dict[str, List[ContentAuditEntry]] = OrderedDict()
    for entry in report.entries_with_findings:
        groups.setdefault(entry.source, []).append(entry)
    return groups


def render_markdown(report: ContentAuditReport, generated_at: Optional[str] = None) -> str:
    lines: List[str] = []
    if generated_at:
        lines.append(f'{GENERATED_AT_PREFIX}{generated_at} -->')

    summary = report.summary
    lines.extend([
        '# Content QA Audit Report',
        '',
        '## Summary',
        '',
        '| Metric | Value |',
        '|--------|-------|',
        f'| Units checked | {summary.total_checked} |',
        f'| Errors | {summary.total_errors} |',
        f'| Warnings | {summary.total_warnings} |',
        f'| Total occurrences | {summary.total_occurrences} |',
        '',
        '## Findings by rule',
        '',
        '| Rule | Count |',
        '|------|-------|',
    ])
    if summary.by_rule_id:
        for rule_id, count in sorted(summary.by_rule_id.items()):
            lines.append(f'| {_cell(rule_id)} | {count} |')
    else:
        lines.append('| - | 0 |')

    lines.extend(['', '## Issues', ''])

    groups = group_by_source(report)
    if not groups:
        lines.extend(FINDINGS_TABLE_HEADER)
        lines.append('| - | - | No issues found | - | - | - | - |')
        return '\n'.join(lines) + '\n'

    for source, entries in groups.items():
        lines.extend([f'### {source}', ''])
        lines.extend(FINDINGS_TABLE_HEADER)
        for entry in entries:
            for finding in entry.findings:
                lines.append(
                    f'| {_cell(entry.content_id)} | {_cell(finding.location.field_path)} '
                    f'| {finding.rule_id.value} | {finding.severity.value} '
                    f'| {_cell(finding.expected)} | {_cell(finding.actual)} | {finding.occurrences} |'
                )
        lines.append('')

    return '\n'.join(lines).rstrip('\n') + '\n'


def render_json(report: ContentAuditReport, generated_at: Optional[str] = None) -> str:
    body = report.to_dict()
    if generated_at:
        payload = {'metadata': {'generated_at': generated_at}, 'report': body}
    else:
        payload = body
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + '\n'


def comparable_body(rendered: str) -> str:
    """Strip generation metadata so two renders can be compared byte for byte."""
    stripped = rendered.lstrip()
    if stripped.startswith(GENERATED_AT_PREFIX):
        return stripped.split('\n', 1)[1] if '\n' in stripped else ''
    if stripped.startswith('{'):
        payload = json.loads(stripped)
        if isinstance(payload, dict) and set(payload) == {'metadata', 'report'}:
            return json.dumps(payload['report'], ensure_ascii=False, indent=2, sort_keys=True) + '\n'
    return rendered
