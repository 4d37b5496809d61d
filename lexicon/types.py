"""
Lexicon Types
Core grammatical categories and dictionary entry structures for Macedonian
noun-adjective agreement.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Mapping, NamedTuple, Optional


class Gender(Enum):
    MASCULINE = "masculine"
    FEMININE = "feminine"
    NEUTER = "neuter"


class GrammaticalNumber(Enum):
    SINGULAR = "singular"
    PLURAL = "plural"


class Definiteness(Enum):
    INDEFINITE = "indefinite"
    DEFINITE = "definite"


class LexiconDataError(ValueError):
    """Raised when dictionary data cannot be turned into valid entries."""


class AgreementKey(NamedTuple):
    """A (gender, number, definiteness) cell of an adjective paradigm."""
    gender: Gender
    number: GrammaticalNumber
    definiteness: Definiteness

    def __str__(self) -> str:
        return build_agreement_key(self.gender, self.number, self.definiteness)


def build_agreement_key(gender: Gender, number: GrammaticalNumber,
                        definiteness: Definiteness) -> str:
    """Build the stable string form, e.g. 'feminine_singular_definite'."""
    return f"{gender.value}_{number.value}_{definiteness.value}"


def parse_agreement_key(key: str) -> AgreementKey:
    """Parse 'feminine_singular_definite' back into an AgreementKey."""
    parts = key.strip().lower().split('_')
    if len(parts) != 3:
        raise LexiconDataError(f"Malformed agreement key: {key!r}")
    try:
        return AgreementKey(Gender(parts[0]), GrammaticalNumber(parts[1]), Definiteness(parts[2]))
    except ValueError as e:
        raise LexiconDataError(f"Malformed agreement key: {key!r}") from e


def all_agreement_keys() -> Iterator[AgreementKey]:
    """Every reachable paradigm cell, in a fixed order."""
    for gender in Gender:
        for number in GrammaticalNumber:
            for definiteness in Definiteness:
                yield AgreementKey(gender, number, definiteness)


@dataclass(frozen=True)
class NounEntry:
    """Grammatical identity of a noun lemma."""
    lemma: str
    gender: Gender
    declines_for_number: bool = True
    irregular_plural_form: Optional[str] = None
    definite_form: Optional[str] = None
    plural_form: Optional[str] = None
    plural_definite_form: Optional[str] = None
    # Number used when the noun does not decline (e.g. pluralia tantum)
    lexical_number: GrammaticalNumber = GrammaticalNumber.SINGULAR

    @property
    def effective_plural_form(self) -> Optional[str]:
        return self.irregular_plural_form or self.plural_form


@dataclass(frozen=True)
class AdjectiveParadigm:
    """
    Surface forms of an adjective across gender x number x definiteness.

    A paradigm is either invariant (one form everywhere) or carries a form per
    AgreementKey. Missing keys on a non-invariant paradigm are data defects,
    reported by the rule engine rather than rejected at load time.
    """
    lemma: str
    forms: Mapping[AgreementKey, str] = field(default_factory=dict)
    invariant: bool = False
    invariant_form: Optional[str] = None

    def form_for(self, key: AgreementKey) -> Optional[str]:
        if self.invariant:
            return self.invariant_form if self.invariant_form is not None else self.lemma
        return self.forms.get(key)

    def missing_keys(self) -> list:
        if self.invariant:
            return []
        return [key for key in all_agreement_keys() if key not in self.forms]
