"""
Noun and adjective dictionaries.

Both are immutable after construction and are passed explicitly into the
extractor and rule engine; nothing here is read from module-level state.
"""
import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from .normalization import normalize_lookup_key
from .types import (
    AdjectiveParadigm, AgreementKey, Definiteness, Gender, GrammaticalNumber,
    LexiconDataError, NounEntry, parse_agreement_key
)

logger = logging.getLogger(__name__)

# YAML shorthands: plural adjective forms do not vary by gender
_PLURAL_SHORTHANDS = {
    'plural_indefinite': Definiteness.INDEFINITE,
    'plural_definite': Definiteness.DEFINITE,
}


class NounDictionary:
    """Lemma -> NounEntry lookup, plus a surface-form index for definite/plural forms."""

    def __init__(self, entries: Iterable[NounEntry]):
        by_lemma: Dict[str, NounEntry] = {}
        for entry in entries:
            key = normalize_lookup_key(entry.lemma)
            if not key:
                raise LexiconDataError("Noun entry with empty lemma")
            if key in by_lemma:
                logger.warning(f"Duplicate noun lemma '{entry.lemma}'; keeping the first entry")
                continue
            by_lemma[key] = entry
        self._entries = MappingProxyType(by_lemma)
        self._surface_index = MappingProxyType(self._build_surface_index(by_lemma.values()))

    @staticmethod
    def _build_surface_index(entries) -> Dict[str, Tuple[NounEntry, GrammaticalNumber, Definiteness]]:
        index = {}
        for entry in entries:
            candidates = []
            if entry.definite_form:
                candidates.append((entry.definite_form, entry.lexical_number, Definiteness.DEFINITE))
            if entry.declines_for_number and entry.effective_plural_form:
                candidates.append((entry.effective_plural_form, GrammaticalNumber.PLURAL, Definiteness.INDEFINITE))
            if entry.declines_for_number and entry.plural_definite_form:
                candidates.append((entry.plural_definite_form, GrammaticalNumber.PLURAL, Definiteness.DEFINITE))
            for form, number, definiteness in candidates:
                index.setdefault(normalize_lookup_key(form), (entry, number, definiteness))
        return index

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'NounDictionary':
        """Build from {lemma: {gender: ..., ...}} as found in nouns.yaml."""
        if not isinstance(data, Mapping):
            raise LexiconDataError("Noun dictionary data must be a mapping of lemma to entry")
        return cls(_parse_noun_entry(lemma, fields) for lemma, fields in data.items())

    def lookup_noun(self, lemma: str) -> Optional[NounEntry]:
        return self._entries.get(normalize_lookup_key(lemma))

    def lookup_surface_form(self, word: str) -> Optional[Tuple[NounEntry, GrammaticalNumber, Definiteness]]:
        """
        Resolve a noun as written in content.

        Returns (entry, number, definiteness) for a lemma, a definite form or a
        plural form; None if the word is unknown.
        """
        entry = self.lookup_noun(word)
        if entry is not None:
            return entry, entry.lexical_number, Definiteness.INDEFINITE
        return self._surface_index.get(normalize_lookup_key(word))

    def __contains__(self, lemma: str) -> bool:
        return self.lookup_noun(lemma) is not None

    def __len__(self) -> int:
        return len(self._entries)


class AdjectiveDictionary:
    """Lemma -> AdjectiveParadigm lookup."""

    def __init__(self, paradigms: Iterable[AdjectiveParadigm]):
        by_lemma: Dict[str, AdjectiveParadigm] = {}
        for paradigm in paradigms:
            key = normalize_lookup_key(paradigm.lemma)
            if not key:
                raise LexiconDataError("Adjective paradigm with empty lemma")
            if key in by_lemma:
                logger.warning(f"Duplicate adjective lemma '{paradigm.lemma}'; keeping the first paradigm")
                continue
            by_lemma[key] = paradigm
        self._paradigms = MappingProxyType(by_lemma)

        form_index: Dict[str, str] = {}
        for key, paradigm in by_lemma.items():
            form_index.setdefault(key, paradigm.lemma)
            for form in paradigm.forms.values():
                form_index.setdefault(normalize_lookup_key(form), paradigm.lemma)
            if paradigm.invariant and paradigm.invariant_form:
                form_index.setdefault(normalize_lookup_key(paradigm.invariant_form), paradigm.lemma)
        self._form_index = MappingProxyType(form_index)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'AdjectiveDictionary':
        """Build from {lemma: {forms: {...}} | {invariant: true, form: ...}}."""
        if not isinstance(data, Mapping):
            raise LexiconDataError("Adjective dictionary data must be a mapping of lemma to paradigm")
        return cls(_parse_paradigm(lemma, fields) for lemma, fields in data.items())

    def get_paradigm(self, lemma: str) -> Optional[AdjectiveParadigm]:
        return self._paradigms.get(normalize_lookup_key(lemma))

    def lookup_adjective_form(self, lemma: str, gender: Gender, number: GrammaticalNumber,
                              definiteness: Definiteness) -> Optional[str]:
        paradigm = self.get_paradigm(lemma)
        if paradigm is None:
            return None
        return paradigm.form_for(AgreementKey(gender, number, definiteness))

    def find_lemma(self, surface_form: str) -> Optional[str]:
        """Reverse lookup: which paradigm does this surface form belong to."""
        return self._form_index.get(normalize_lookup_key(surface_form))

    def __contains__(self, lemma: str) -> bool:
        return self.get_paradigm(lemma) is not None

    def __len__(self) -> int:
        return len(self._paradigms)


def get_correct_adjective_form(adjectives: AdjectiveDictionary, nouns: NounDictionary,
                               adjective_lemma: str, noun_lemma: str,
                               definite: bool = False, plural: bool = False) -> Optional[str]:
    """Authoring helper: the form an adjective takes next to a known noun."""
    noun = nouns.lookup_noun(noun_lemma)
    if noun is None:
        return None
    if plural and noun.declines_for_number:
        number = GrammaticalNumber.PLURAL
    else:
        number = noun.lexical_number
    return adjectives.lookup_adjective_form(
        adjective_lemma,
        noun.gender,
        number,
        Definiteness.DEFINITE if definite else Definiteness.INDEFINITE,
    )


def _enum_value(enum_cls, raw: Any, what: str, lemma: str):
    try:
        return enum_cls(str(raw).strip().lower())
    except ValueError as e:
        raise LexiconDataError(f"Invalid {what} {raw!r} for '{lemma}'") from e


def _parse_noun_entry(lemma: str, fields: Any) -> NounEntry:
    if not isinstance(fields, Mapping):
        raise LexiconDataError(f"Noun entry for '{lemma}' must be a mapping")
    if 'gender' not in fields:
        raise LexiconDataError(f"Noun entry for '{lemma}' has no gender")
    return NounEntry(
        lemma=str(lemma),
        gender=_enum_value(Gender, fields['gender'], 'gender', lemma),
        declines_for_number=bool(fields.get('declines_for_number', True)),
        irregular_plural_form=fields.get('irregular_plural_form'),
        definite_form=fields.get('definite_form'),
        plural_form=fields.get('plural_form'),
        plural_definite_form=fields.get('plural_definite_form'),
        lexical_number=_enum_value(GrammaticalNumber, fields.get('number', 'singular'), 'number', lemma),
    )


def _parse_paradigm(lemma: str, fields: Any) -> AdjectiveParadigm:
    if not isinstance(fields, Mapping):
        raise LexiconDataError(f"Adjective paradigm for '{lemma}' must be a mapping")

    if fields.get('invariant'):
        return AdjectiveParadigm(lemma=str(lemma), invariant=True,
                                 invariant_form=fields.get('form') or str(lemma))

    raw_forms = fields.get('forms') or {}
    if not isinstance(raw_forms, Mapping):
        raise LexiconDataError(f"'forms' for adjective '{lemma}' must be a mapping")

    forms: Dict[AgreementKey, str] = {}
    # Shorthands first so explicit per-gender keys override them
    for raw_key, form in raw_forms.items():
        definiteness = _PLURAL_SHORTHANDS.get(str(raw_key).strip().lower())
        if definiteness is not None:
            for gender in Gender:
                forms[AgreementKey(gender, GrammaticalNumber.PLURAL, definiteness)] = str(form)
    for raw_key, form in raw_forms.items():
        if str(raw_key).strip().lower() in _PLURAL_SHORTHANDS:
            continue
        try:
            forms[parse_agreement_key(str(raw_key))] = str(form)
        except LexiconDataError as e:
            raise LexiconDataError(f"Adjective '{lemma}': {e}") from e

    return AdjectiveParadigm(lemma=str(lemma), forms=MappingProxyType(forms))
