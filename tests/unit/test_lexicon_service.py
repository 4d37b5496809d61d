"""
Unit Tests for LexiconService
"""

import pytest

from lexicon import (
    Definiteness, Gender, GrammaticalNumber, LexiconDataError, LexiconService, all_agreement_keys
)


@pytest.fixture(scope='module')
def shipped_lexicon():
    return LexiconService().load_lexicon()


@pytest.mark.unit
class TestShippedDictionaries:

    def test_loads(self, shipped_lexicon):
        assert len(shipped_lexicon.nouns) >= 30
        assert len(shipped_lexicon.adjectives) >= 25

    def test_all_inflecting_paradigms_complete(self, shipped_lexicon):
        service = LexiconService()
        for lemma in service.get_adjective_data():
            paradigm = shipped_lexicon.adjectives.get_paradigm(lemma)
            assert paradigm.missing_keys() == [], lemma

    def test_known_forms(self, shipped_lexicon):
        adjectives = shipped_lexicon.adjectives
        assert adjectives.lookup_adjective_form(
            'голем', Gender.FEMININE, GrammaticalNumber.SINGULAR, Definiteness.DEFINITE) == 'големата'
        assert adjectives.lookup_adjective_form(
            'тесен', Gender.FEMININE, GrammaticalNumber.SINGULAR, Definiteness.DEFINITE) == 'тесната'

    def test_invariant_adjectives(self, shipped_lexicon):
        for lemma in ('браон', 'беж', 'супер'):
            paradigm = shipped_lexicon.adjectives.get_paradigm(lemma)
            assert paradigm.invariant
            assert {paradigm.form_for(key) for key in all_agreement_keys()} == {lemma}

    def test_plural_definite_forms(self, shipped_lexicon):
        for word, lemma in (('куќите', 'куќа'), ('столовите', 'стол'), ('децата', 'дете')):
            entry, number, definiteness = shipped_lexicon.nouns.lookup_surface_form(word)
            assert entry.lemma == lemma
            assert number is GrammaticalNumber.PLURAL
            assert definiteness is Definiteness.DEFINITE

    def test_irregular_plural(self, shipped_lexicon):
        entry, number, _ = shipped_lexicon.nouns.lookup_surface_form('деца')
        assert entry.lemma == 'дете'
        assert number is GrammaticalNumber.PLURAL


@pytest.mark.unit
class TestLoadingErrors:

    def test_missing_directory(self, tmp_path):
        with pytest.raises(LexiconDataError):
            LexiconService(tmp_path / 'missing').load_lexicon()

    def test_malformed_yaml(self, tmp_path):
        (tmp_path / 'nouns.yaml').write_text("nouns: {куќа: [unclosed\n", encoding='utf-8')
        (tmp_path / 'adjectives.yaml').write_text("adjectives: {}\n", encoding='utf-8')
        with pytest.raises(LexiconDataError):
            LexiconService(tmp_path).load_lexicon()

    def test_missing_gender(self, tmp_path):
        (tmp_path / 'nouns.yaml').write_text("nouns:\n  куќа: {plural_form: куќи}\n", encoding='utf-8')
        (tmp_path / 'adjectives.yaml').write_text("adjectives: {}\n", encoding='utf-8')
        with pytest.raises(LexiconDataError, match='куќа'):
            LexiconService(tmp_path).load_lexicon()

    def test_reload_picks_up_changes(self, tmp_path):
        nouns_file = tmp_path / 'nouns.yaml'
        nouns_file.write_text("nouns:\n  куќа: {gender: feminine}\n", encoding='utf-8')
        service = LexiconService(tmp_path)
        assert len(service.load_nouns()) == 1

        nouns_file.write_text(
            "nouns:\n  куќа: {gender: feminine}\n  стол: {gender: masculine}\n", encoding='utf-8')
        assert len(service.load_nouns()) == 1
        service.reload_all()
        assert len(service.load_nouns()) == 2
