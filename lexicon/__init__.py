"""
Macedonian lexicon: noun and adjective dictionaries used by the agreement rules.
"""

from .types import (
    Gender,
    GrammaticalNumber,
    Definiteness,
    AgreementKey,
    NounEntry,
    AdjectiveParadigm,
    LexiconDataError,
    build_agreement_key,
    parse_agreement_key,
    all_agreement_keys,
)
from .normalization import normalize_lookup_key, normalize_surface_form
from .dictionaries import NounDictionary, AdjectiveDictionary, get_correct_adjective_form
from .dictionary_service import Lexicon, LexiconService

__all__ = [
    'Gender',
    'GrammaticalNumber',
    'Definiteness',
    'AgreementKey',
    'NounEntry',
    'AdjectiveParadigm',
    'LexiconDataError',
    'build_agreement_key',
    'parse_agreement_key',
    'all_agreement_keys',
    'normalize_lookup_key',
    'normalize_surface_form',
    'NounDictionary',
    'AdjectiveDictionary',
    'get_correct_adjective_form',
    'Lexicon',
    'LexiconService',
]
