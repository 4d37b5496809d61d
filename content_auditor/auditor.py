"""
Content Auditor
Runs the grammar rules over a whole corpus and aggregates the results into a
ContentAuditReport.

The per-unit checks are a stateless map (optionally on a thread pool); the
aggregation is an explicit reduce in corpus order, so a parallel run produces
exactly the report a sequential run does.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Optional, Sequence

from rules import RulesRegistry, UnitCheck
from rules.base_types import ContentUnit, FindingLocation, RuleId, Severity, ValidationFinding

from .statistics_calculator import StatisticsCalculator
from .types import ContentAuditEntry, ContentAuditReport

logger = logging.getLogger(__name__)


class _EntryAccumulator:
    """Append-only findings for one content id, deduplicated on the finding key."""

    def __init__(self, check: UnitCheck):
        self.content_id = check.unit.id
        self.source = check.unit.source_name
        self.metadata = check.metadata
        self._order: List[tuple] = []
        self._findings: Dict[tuple, ValidationFinding] = {}

    def add(self, finding: ValidationFinding) -> None:
        key = finding.dedup_key
        existing = self._findings.get(key)
        if existing is None:
            self._order.append(key)
            self._findings[key] = finding
        else:
            self._findings[key] = existing.with_occurrences(existing.occurrences + finding.occurrences)

    def build(self) -> ContentAuditEntry:
        findings = [self._findings[key] for key in self._order]
        return ContentAuditEntry(
            content_id=self.content_id,
            source=self.source,
            metadata=self.metadata,
            errors=tuple(f for f in findings if f.severity is Severity.ERROR),
            warnings=tuple(f for f in findings if f.severity is Severity.WARNING),
        )


class ContentAuditor:
    """Orchestrates the rules registry across a corpus."""

    def __init__(self, registry: RulesRegistry, max_workers: int = 1,
                 statistics_calculator: Optional[StatisticsCalculator] = None):
        self.registry = registry
        self.max_workers = max(1, int(max_workers or 1))
        self.statistics_calculator = statistics_calculator or StatisticsCalculator()

    def check_unit(self, unit: ContentUnit) -> UnitCheck:
        """Check one unit; any failure stays local to that unit."""
        try:
            return self.registry.check_unit(unit)
        except Exception as e:
            logger.exception(f"Checking content '{getattr(unit, 'id', '?')}' failed")
            finding = ValidationFinding(
                rule_id=RuleId.RULE_EXECUTION_FAILURE,
                message=f"Content could not be checked: {e.__class__.__name__}: {e}",
                location=FindingLocation(str(getattr(unit, 'id', '')), str(getattr(unit, 'field_path', ''))),
            )
            return UnitCheck(unit, None, [finding])

    def audit_all(self, corpus: Iterable[ContentUnit]) -> ContentAuditReport:
        units: Sequence[ContentUnit] = list(corpus)
        logger.info(f"Auditing {len(units)} content units (workers={self.max_workers})")

        if self.max_workers > 1 and len(units) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                # map() yields in input order, not completion order
                checks = list(executor.map(self.check_unit, units))
        else:
            checks = [self.check_unit(unit) for unit in units]

        return self.aggregate(checks)

    def aggregate(self, checks: Iterable[UnitCheck]) -> ContentAuditReport:
        """Reduce unit checks, in the given order, into a report."""
        accumulators: Dict[str, _EntryAccumulator] = {}
        total_checked = 0

        for check in checks:
            total_checked += 1
            accumulator = accumulators.get(check.unit.id)
            if accumulator is None:
                accumulator = _EntryAccumulator(check)
                accumulators[check.unit.id] = accumulator
            for finding in check.findings:
                accumulator.add(finding)

        entries = tuple(acc.build() for acc in accumulators.values())
        summary = self.statistics_calculator.calculate_summary(entries, total_checked)
        logger.info(
            f"Audit complete: {summary.total_checked} checked, "
            f"{summary.total_errors} errors, {summary.total_warnings} warnings"
        )
        return ContentAuditReport(entries=entries, summary=summary)
