"""
Linguistic Metadata Extractor

Determines the grammatical facts (gender, number, definiteness) needed to
validate one content unit, either from author-declared metadata or by looking
up the head noun in the noun dictionary.
"""

import logging
from typing import Any, Mapping, Optional

from lexicon.dictionaries import NounDictionary
from lexicon.types import Definiteness, Gender, GrammaticalNumber
from rules.base_types import (
    ContentUnit, DeclaredMetadata, ExtractionResult, FindingLocation, InferredMetadata,
    LinguisticMetadata, MetadataSource, MissingMetadata, RuleId, UnresolvedNoun,
    ValidationFinding
)

logger = logging.getLogger(__name__)


class MetadataExtractor:
    """
    Resolves a ContentUnit to one of DeclaredMetadata, InferredMetadata,
    UnresolvedNoun or MissingMetadata.

    Declared values always win over dictionary values. Definiteness comes from
    the declared fields, then from a definite surface form of the head noun,
    then from `default_definiteness`.
    """

    def __init__(self, nouns: NounDictionary,
                 default_definiteness: Definiteness = Definiteness.INDEFINITE):
        self.nouns = nouns
        self.default_definiteness = default_definiteness

    def extract(self, unit: ContentUnit) -> ExtractionResult:
        declared = unit.declared or {}
        head_noun = _clean(unit.head_noun) or _clean(declared.get('noun_lemma'))

        declared_gender = _parse_enum(Gender, declared.get('gender'))
        if declared_gender is not None:
            return self._from_declared(unit, declared, declared_gender, head_noun)

        if head_noun:
            return self._from_dictionary(declared, head_noun)

        return MissingMetadata(reason="no declared gender and no head noun")

    def _from_declared(self, unit: ContentUnit, declared: Mapping[str, Any],
                       gender: Gender, head_noun: Optional[str]) -> DeclaredMetadata:
        resolved = self.nouns.lookup_surface_form(head_noun) if head_noun else None
        noun_lemma = resolved[0].lemma if resolved else head_noun

        number = self._resolve_number(declared, resolved)
        definiteness = self._declared_definiteness(declared)
        if definiteness is None:
            if resolved and resolved[2] is Definiteness.DEFINITE:
                definiteness = Definiteness.DEFINITE
            else:
                definiteness = self.default_definiteness

        warnings = []
        if resolved and resolved[0].gender is not gender:
            entry = resolved[0]
            warnings.append(ValidationFinding(
                rule_id=RuleId.AMBIGUOUS_GENDER,
                message=(f"Declared gender '{gender.value}' disagrees with dictionary gender "
                         f"'{entry.gender.value}' for noun '{entry.lemma}'"),
                location=FindingLocation(unit.id, unit.field_path),
                expected=entry.gender.value,
                actual=gender.value,
                suggestion=f"Check the declared gender of '{entry.lemma}'",
            ))

        metadata = LinguisticMetadata(
            noun_lemma=noun_lemma,
            gender=gender,
            number=number,
            definiteness=definiteness,
            source=MetadataSource.DECLARED,
        )
        return DeclaredMetadata(metadata=metadata, warnings=warnings)

    def _from_dictionary(self, declared: Mapping[str, Any], head_noun: str) -> ExtractionResult:
        resolved = self.nouns.lookup_surface_form(head_noun)
        if resolved is None:
            return UnresolvedNoun(noun=head_noun)

        entry, _, surface_definiteness = resolved

        number = self._resolve_number(declared, resolved)

        definiteness = self._declared_definiteness(declared)
        if definiteness is None:
            if surface_definiteness is Definiteness.DEFINITE:
                definiteness = Definiteness.DEFINITE
            else:
                definiteness = self.default_definiteness

        return InferredMetadata(metadata=LinguisticMetadata(
            noun_lemma=entry.lemma,
            gender=entry.gender,
            number=number,
            definiteness=definiteness,
            source=MetadataSource.INFERRED,
        ))

    @staticmethod
    def _resolve_number(declared: Mapping[str, Any], resolved) -> GrammaticalNumber:
        """
        Non-declining nouns always use their lexical number; otherwise the
        declared number, then the number of the head noun as written.
        """
        if resolved and not resolved[0].declines_for_number:
            return resolved[0].lexical_number
        number = _parse_enum(GrammaticalNumber, declared.get('number'))
        if number is not None:
            return number
        if resolved:
            return resolved[1]
        return GrammaticalNumber.SINGULAR

    @staticmethod
    def _declared_definiteness(declared: Mapping[str, Any]) -> Optional[Definiteness]:
        definiteness = _parse_enum(Definiteness, declared.get('definiteness'))
        if definiteness is not None:
            return definiteness
        requires_article = declared.get('requires_definite_article')
        if requires_article is None:
            return None
        return Definiteness.DEFINITE if requires_article else Definiteness.INDEFINITE


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_enum(enum_cls, raw: Any):
    """Tolerant enum parsing; unknown or empty values count as not declared."""
    if raw is None:
        return None
    if isinstance(raw, enum_cls):
        return raw
    try:
        return enum_cls(str(raw).strip().lower())
    except ValueError:
        logger.debug(f"Ignoring unrecognised {enum_cls.__name__} value {raw!r}")
        return None
