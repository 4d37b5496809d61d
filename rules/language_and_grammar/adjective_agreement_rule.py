"""
Adjective Agreement Rule
Checks that an adjective agrees with its head noun in gender, number and
definiteness, using the adjective paradigm dictionary.

Example: куќа is feminine, so "куќата е голем" must read "куќата е голема".
"""
from typing import List, Optional

from lexicon.dictionaries import AdjectiveDictionary
from lexicon.normalization import normalize_surface_form
from lexicon.types import AgreementKey
from rules.base_rule import BaseRule, RuleExceptions
from rules.base_types import (
    ContentUnit, DeclaredMetadata, ExtractionResult, InferredMetadata, LinguisticMetadata, MissingMetadata,
    RuleId, UnresolvedNoun, ValidationFinding
)
from .services.metadata_extractor import MetadataExtractor


class AdjectiveAgreementRule(BaseRule):
    """Noun-adjective agreement against the paradigm dictionary."""

    def __init__(self, adjectives: AdjectiveDictionary, extractor: MetadataExtractor,
                 exceptions: Optional[RuleExceptions] = None):
        super().__init__(exceptions)
        self.adjectives = adjectives
        self.extractor = extractor

    def _get_rule_type(self) -> str:
        return 'adjective_agreement'

    def analyze(self, unit: ContentUnit,
                extraction: Optional[ExtractionResult] = None) -> List[ValidationFinding]:
        metadata, findings = self.resolve_metadata(unit, extraction)
        if metadata is None:
            return findings
        findings.extend(self._check_agreement(unit, metadata))
        return findings

    def resolve_metadata(self, unit: ContentUnit, extraction: Optional[ExtractionResult] = None):
        """
        Turn an extraction (run here unless given) into (metadata, findings).
        metadata is None when the unit cannot be checked.
        """
        if extraction is None:
            extraction = self.extractor.extract(unit)

        if isinstance(extraction, DeclaredMetadata):
            return extraction.metadata, list(extraction.warnings)

        if isinstance(extraction, InferredMetadata):
            return extraction.metadata, []

        if isinstance(extraction, UnresolvedNoun):
            return None, [self._create_finding(
                unit, RuleId.MISSING_DICTIONARY_ENTRY,
                message=f"Noun '{extraction.noun}' is not in the noun dictionary; agreement not checked",
                actual=extraction.noun,
                suggestion="Add the noun to the dictionary or declare its gender on the content",
            )]

        if isinstance(extraction, MissingMetadata):
            return None, [self._create_finding(
                unit, RuleId.MISSING_METADATA,
                message=f"Not enough metadata to validate: {extraction.reason}",
                suggestion="Declare gender/number/definiteness or provide a head noun",
            )]

        raise TypeError(f"Unhandled extraction result {type(extraction).__name__}")

    def _check_agreement(self, unit: ContentUnit,
                         metadata: LinguisticMetadata) -> List[ValidationFinding]:
        actual = unit.adjective_text or ''
        lemma = unit.adjective_lemma or self.adjectives.find_lemma(normalize_surface_form(actual))
        paradigm = self.adjectives.get_paradigm(lemma) if lemma else None

        if paradigm is None:
            return [self._create_finding(
                unit, RuleId.UNKNOWN_ADJECTIVE,
                message=f"Unknown adjective '{lemma or actual}'; agreement not checked",
                actual=lemma or actual,
            )]

        if paradigm.invariant:
            return []

        key = AgreementKey(metadata.gender, metadata.number, metadata.definiteness)
        expected = paradigm.form_for(key)

        if expected is None:
            return [self._create_finding(
                unit, RuleId.INVALID_PARADIGM_FORM,
                message=f"Adjective paradigm '{paradigm.lemma}' has no form for {key}",
                expected=str(key),
                actual="",
                suggestion=f"Add the {key} form of '{paradigm.lemma}' to the adjective dictionary",
            )]

        if normalize_surface_form(expected) != normalize_surface_form(actual):
            return [self._create_finding(
                unit, RuleId.AGREEMENT_MISMATCH,
                message=(f"Adjective \"{actual}\" does not agree with "
                         f"{metadata.gender.value} {metadata.number.value} "
                         f"{metadata.definiteness.value} noun"
                         + (f" '{metadata.noun_lemma}'" if metadata.noun_lemma else "")),
                expected=expected,
                actual=actual,
                suggestion=f"Use \"{expected}\" instead of \"{actual}\"",
            )]

        return []
