"""
Content Audit Types
Per-unit audit entries and the immutable report produced by one audit run.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from rules.base_types import LinguisticMetadata, ValidationError, ValidationFinding, ValidationWarning


@dataclass(frozen=True)
class ContentAuditEntry:
    """Findings for one content id, deduplicated across repeated units."""
    content_id: str
    source: str
    metadata: Optional[LinguisticMetadata]
    errors: Tuple[ValidationError, ...] = ()
    warnings: Tuple[ValidationWarning, ...] = ()

    @property
    def findings(self) -> Tuple[ValidationFinding, ...]:
        return self.errors + self.warnings

    @property
    def has_findings(self) -> bool:
        return bool(self.errors or self.warnings)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'content_id': self.content_id,
            'source': self.source,
            'metadata': self.metadata.to_dict() if self.metadata else None,
            'errors': [e.to_dict() for e in self.errors],
            'warnings': [w.to_dict() for w in self.warnings],
        }


@dataclass(frozen=True)
class AuditSummary:
    total_checked: int = 0
    total_errors: int = 0
    total_warnings: int = 0
    total_occurrences: int = 0
    by_rule_id: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_checked': self.total_checked,
            'total_errors': self.total_errors,
            'total_warnings': self.total_warnings,
            'total_occurrences': self.total_occurrences,
            'by_rule_id': dict(sorted(self.by_rule_id.items())),
        }


@dataclass(frozen=True)
class ContentAuditReport:
    """Output of one audit run; entries keep the corpus order."""
    entries: Tuple[ContentAuditEntry, ...]
    summary: AuditSummary

    @property
    def entries_with_findings(self) -> Tuple[ContentAuditEntry, ...]:
        return tuple(entry for entry in self.entries if entry.has_findings)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'summary': self.summary.to_dict(),
            'entries': [entry.to_dict() for entry in self.entries],
        }
