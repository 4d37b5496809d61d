"""
Text normalization for dictionary lookups and surface-form comparison.
"""
import re
import threading
import unicodedata

import spacy

_WHITESPACE_RE = re.compile(r'\s+')

_nlp = None
_nlp_lock = threading.Lock()


def _get_tokenizer():
    """Blank Macedonian pipeline; only the tokenizer is used."""
    global _nlp
    if _nlp is None:
        with _nlp_lock:
            if _nlp is None:
                _nlp = spacy.blank("mk")
    return _nlp


def normalize_lookup_key(text: str) -> str:
    """Trim, collapse whitespace and lower-case a lemma before matching."""
    if not text:
        return ''
    text = unicodedata.normalize('NFC', str(text))
    return _WHITESPACE_RE.sub(' ', text).strip().lower()


def normalize_surface_form(text: str) -> str:
    """
    Normalize an adjective surface form for comparison.

    Same as normalize_lookup_key, but punctuation tokens ("голема!",
    "„голема“") are dropped using the Macedonian tokenizer.
    """
    key = normalize_lookup_key(text)
    if not key:
        return ''
    doc = _get_tokenizer()(key)
    words = [token.text for token in doc if not (token.is_punct or token.is_space)]
    return ' '.join(words)
