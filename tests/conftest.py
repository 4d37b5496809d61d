"""
Shared fixtures: small in-memory dictionaries so tests never depend on the
shipped YAML data.
"""

import pytest

from lexicon import AdjectiveDictionary, Lexicon, NounDictionary
from rules import get_registry
from rules.base_types import ContentUnit

NOUN_DATA = {
    'куќа': {'gender': 'feminine', 'definite_form': 'куќата', 'plural_form': 'куќи',
             'plural_definite_form': 'куќите'},
    'книга': {'gender': 'feminine', 'definite_form': 'книгата', 'plural_form': 'книги'},
    'стол': {'gender': 'masculine', 'definite_form': 'столот', 'plural_form': 'столови',
             'plural_definite_form': 'столовите'},
    'човек': {'gender': 'masculine', 'definite_form': 'човекот', 'irregular_plural_form': 'луѓе',
              'plural_definite_form': 'луѓето'},
    'море': {'gender': 'neuter', 'definite_form': 'морето', 'plural_form': 'мориња'},
    'пари': {'gender': 'feminine', 'definite_form': 'парите',
             'declines_for_number': False, 'number': 'plural'},
}

ADJECTIVE_DATA = {
    'голем': {'forms': {
        'masculine_singular_indefinite': 'голем',
        'masculine_singular_definite': 'големиот',
        'feminine_singular_indefinite': 'голема',
        'feminine_singular_definite': 'големата',
        'neuter_singular_indefinite': 'големо',
        'neuter_singular_definite': 'големото',
        'plural_indefinite': 'големи',
        'plural_definite': 'големите',
    }},
    'нов': {'forms': {
        'masculine_singular_indefinite': 'нов',
        'masculine_singular_definite': 'новиот',
        'feminine_singular_indefinite': 'нова',
        'feminine_singular_definite': 'новата',
        'neuter_singular_indefinite': 'ново',
        'neuter_singular_definite': 'новото',
        'plural_indefinite': 'нови',
        'plural_definite': 'новите',
    }},
    # neuter_plural_indefinite deliberately absent
    'розов': {'forms': {
        'masculine_singular_indefinite': 'розов',
        'feminine_singular_indefinite': 'розова',
        'neuter_singular_indefinite': 'розово',
        'masculine_plural_indefinite': 'розови',
        'feminine_plural_indefinite': 'розови',
    }},
    'браон': {'invariant': True, 'form': 'браон'},
}


@pytest.fixture
def nouns():
    return NounDictionary.from_mapping(NOUN_DATA)


@pytest.fixture
def adjectives():
    return AdjectiveDictionary.from_mapping(ADJECTIVE_DATA)


@pytest.fixture
def lexicon(nouns, adjectives):
    return Lexicon(nouns=nouns, adjectives=adjectives)


@pytest.fixture
def registry(lexicon):
    return get_registry(lexicon)


def make_unit(unit_id='u1', adjective='голема', head_noun=None, lemma=None, **declared):
    """Build a ContentUnit; keyword arguments become declared metadata."""
    return ContentUnit(
        id=unit_id,
        adjective_text=adjective,
        field_path='text',
        adjective_lemma=lemma,
        head_noun=head_noun,
        declared=declared or None,
    )
