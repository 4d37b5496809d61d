"""
Base Types for the Grammar Rules
Content units, linguistic metadata and validation findings shared by the
extractor, the rule engine and the auditor.
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from lexicon.types import Definiteness, Gender, GrammaticalNumber


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


class RuleId(Enum):
    """Stable rule identifiers; downstream tooling filters on these strings."""
    MISSING_METADATA = "MISSING_METADATA"
    MISSING_DICTIONARY_ENTRY = "MISSING_DICTIONARY_ENTRY"
    AMBIGUOUS_GENDER = "AMBIGUOUS_GENDER"
    UNKNOWN_ADJECTIVE = "UNKNOWN_ADJECTIVE"
    AGREEMENT_MISMATCH = "AGREEMENT_MISMATCH"
    INVALID_PARADIGM_FORM = "INVALID_PARADIGM_FORM"
    RULE_EXECUTION_FAILURE = "RULE_EXECUTION_FAILURE"

    @property
    def severity(self) -> Severity:
        return RULE_SEVERITIES[self]


RULE_SEVERITIES = {
    RuleId.MISSING_METADATA: Severity.WARNING,
    RuleId.MISSING_DICTIONARY_ENTRY: Severity.WARNING,
    RuleId.AMBIGUOUS_GENDER: Severity.WARNING,
    RuleId.UNKNOWN_ADJECTIVE: Severity.WARNING,
    RuleId.AGREEMENT_MISMATCH: Severity.ERROR,
    RuleId.INVALID_PARADIGM_FORM: Severity.ERROR,
    RuleId.RULE_EXECUTION_FAILURE: Severity.ERROR,
}


@dataclass(frozen=True)
class ContentUnit:
    """
    One piece of authored content to check: a phrase, an example sentence or
    an explicitly tagged noun-phrase pair.

    `declared` holds author-declared metadata (gender, number, definiteness,
    requires_definite_article, noun_lemma); `head_noun` is a lemma or surface
    form used for dictionary inference when nothing is declared.
    """
    id: str
    adjective_text: str
    field_path: str = ""
    adjective_lemma: Optional[str] = None
    head_noun: Optional[str] = None
    declared: Optional[Mapping[str, Any]] = None
    source: Optional[str] = None

    @property
    def source_name(self) -> str:
        if self.source:
            return self.source
        return self.id.split('/', 1)[0] if self.id else 'unknown'

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ContentUnit':
        adjective = data.get('adjective')
        if isinstance(adjective, Mapping):
            adjective_text = adjective.get('text', '')
            adjective_lemma = adjective.get('lemma')
        else:
            adjective_text = adjective if adjective is not None else data.get('adjective_text', '')
            adjective_lemma = data.get('adjective_lemma')
        declared = data.get('metadata', data.get('declared'))
        return cls(
            id=str(data.get('id', '')),
            adjective_text='' if adjective_text is None else str(adjective_text),
            field_path=str(data.get('field_path', '')),
            adjective_lemma=adjective_lemma,
            head_noun=data.get('head_noun'),
            declared=dict(declared) if isinstance(declared, Mapping) else None,
            source=data.get('source'),
        )


class MetadataSource(Enum):
    DECLARED = "declared"
    INFERRED = "inferred"


@dataclass(frozen=True)
class LinguisticMetadata:
    """Grammatical facts about one unit's head noun, created fresh per check."""
    noun_lemma: Optional[str]
    gender: Gender
    number: GrammaticalNumber
    definiteness: Definiteness
    source: MetadataSource

    def to_dict(self) -> Dict[str, Any]:
        return {
            'noun_lemma': self.noun_lemma,
            'gender': self.gender.value,
            'number': self.number.value,
            'definiteness': self.definiteness.value,
            'source': self.source.value,
        }


@dataclass(frozen=True)
class FindingLocation:
    content_id: str
    field_path: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {'content_id': self.content_id, 'field_path': self.field_path}


@dataclass(frozen=True)
class ValidationFinding:
    """
    A single error or warning. Errors are contract violations (agreement
    mismatch, malformed paradigm); warnings lower confidence without
    invalidating the content.
    """
    rule_id: RuleId
    message: str
    location: FindingLocation
    expected: str = ""
    actual: str = ""
    suggestion: str = ""
    occurrences: int = 1

    @property
    def severity(self) -> Severity:
        return self.rule_id.severity

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def dedup_key(self):
        return (self.rule_id, self.expected, self.actual, self.location.content_id)

    def with_occurrences(self, occurrences: int) -> 'ValidationFinding':
        return replace(self, occurrences=occurrences)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'rule_id': self.rule_id.value,
            'severity': self.severity.value,
            'message': self.message,
            'location': self.location.to_dict(),
            'expected': self.expected,
            'actual': self.actual,
            'suggestion': self.suggestion,
            'occurrences': self.occurrences,
        }


# Names used by audit entries for their errors and warnings
ValidationError = ValidationFinding
ValidationWarning = ValidationFinding


# === Metadata extraction outcome (tagged variant) ===

@dataclass(frozen=True)
class DeclaredMetadata:
    metadata: LinguisticMetadata
    warnings: List[ValidationFinding] = field(default_factory=list)


@dataclass(frozen=True)
class InferredMetadata:
    metadata: LinguisticMetadata


@dataclass(frozen=True)
class UnresolvedNoun:
    """A head noun was given but the dictionary does not know it."""
    noun: str


@dataclass(frozen=True)
class MissingMetadata:
    reason: str


ExtractionResult = Union[DeclaredMetadata, InferredMetadata, UnresolvedNoun, MissingMetadata]
