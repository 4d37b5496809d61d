"""
Statistics Calculator Module
Summary counts for an audit report and the exit-code policy derived from them.
"""

import logging
from collections import Counter
from enum import Enum
from typing import Iterable

from rules.base_types import Severity

from .types import AuditSummary, ContentAuditEntry

logger = logging.getLogger(__name__)


class GateMode(Enum):
    """How audit results map to a process exit code."""
    INFORMATIONAL = "informational"
    CI = "ci"
    STRICT = "strict"


class StatisticsCalculator:
    """Computes the report summary from deduplicated entries."""

    def calculate_summary(self, entries: Iterable[ContentAuditEntry], total_checked: int) -> AuditSummary:
        by_rule = Counter()
        errors = 0
        warnings = 0
        occurrences = 0

        for entry in entries:
            for finding in entry.findings:
                by_rule[finding.rule_id.value] += 1
                occurrences += finding.occurrences
                if finding.severity is Severity.ERROR:
                    errors += 1
                else:
                    warnings += 1

        summary = AuditSummary(
            total_checked=total_checked,
            total_errors=errors,
            total_warnings=warnings,
            total_occurrences=occurrences,
            by_rule_id=dict(sorted(by_rule.items())),
        )
        logger.debug(f"Audit summary: {summary.to_dict()}")
        return summary


def exit_code_for(summary: AuditSummary, mode: GateMode = GateMode.INFORMATIONAL) -> int:
    """
    Exit code for a gate mode: informational always passes, CI fails on
    errors, strict fails on errors or warnings.
    """
    if mode is GateMode.STRICT:
        return 1 if (summary.total_errors > 0 or summary.total_warnings > 0) else 0
    if mode is GateMode.CI:
        return 1 if summary.total_errors > 0 else 0
    return 0
