"""
Lexicon Service

Loads the YAML-based noun and adjective dictionaries. Files are parsed once
and cached per service instance; callers pass the resulting dictionaries
explicitly into the extractor, rule engine and auditor.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Set

import yaml

from .dictionaries import AdjectiveDictionary, NounDictionary
from .types import LexiconDataError

logger = logging.getLogger(__name__)

NOUNS_FILE = "nouns.yaml"
ADJECTIVES_FILE = "adjectives.yaml"


@dataclass(frozen=True)
class Lexicon:
    """The pair of dictionaries one audit run works against."""
    nouns: NounDictionary
    adjectives: AdjectiveDictionary


class LexiconService:
    """
    Manages the dictionary files under a config directory.

    Features:
    - Lazy loading with caching
    - Explicit reloads for updated data files
    - Startup-time validation (malformed data raises LexiconDataError)
    """

    def __init__(self, config_dir: Optional[str] = None):
        if config_dir is None:
            config_dir = Path(__file__).parent / "config"

        self.config_dir = Path(config_dir)
        self._cache: Dict[str, Dict[str, Any]] = {}
        self._loaded_files: Set[str] = set()

    def _load_yaml_file(self, filename: str, required: bool = True) -> Dict[str, Any]:
        """Load and cache a YAML dictionary file."""
        if filename in self._cache:
            return self._cache[filename]

        file_path = self.config_dir / filename

        if not file_path.exists():
            if required:
                raise LexiconDataError(f"Dictionary file {file_path} not found")
            logger.warning(f"Dictionary file {file_path} not found. Using empty dictionary.")
            self._cache[filename] = {}
            return {}

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise LexiconDataError(f"Error parsing dictionary file {file_path}: {e}") from e

        if not isinstance(data, dict):
            raise LexiconDataError(f"Dictionary file {file_path} must contain a mapping")

        self._cache[filename] = data
        self._loaded_files.add(filename)
        logger.info(f"Loaded dictionary file: {filename}")
        return data

    def reload_file(self, filename: str) -> None:
        """Reload a specific dictionary file."""
        self._cache.pop(filename, None)
        self._loaded_files.discard(filename)
        self._load_yaml_file(filename)

    def reload_all(self) -> None:
        """Reload all cached dictionary files."""
        loaded_files = list(self._loaded_files)
        self._cache.clear()
        self._loaded_files.clear()

        for filename in loaded_files:
            self._load_yaml_file(filename)

    def get_noun_data(self) -> Dict[str, Any]:
        return self._load_yaml_file(NOUNS_FILE).get('nouns', {})

    def get_adjective_data(self) -> Dict[str, Any]:
        return self._load_yaml_file(ADJECTIVES_FILE).get('adjectives', {})

    def load_nouns(self) -> NounDictionary:
        return NounDictionary.from_mapping(self.get_noun_data())

    def load_adjectives(self) -> AdjectiveDictionary:
        adjectives = AdjectiveDictionary.from_mapping(self.get_adjective_data())
        for lemma in sorted(self.get_adjective_data()):
            paradigm = adjectives.get_paradigm(lemma)
            if paradigm is not None and paradigm.missing_keys():
                logger.warning(
                    f"Adjective paradigm '{lemma}' is incomplete: "
                    f"{', '.join(str(key) for key in paradigm.missing_keys())}"
                )
        return adjectives

    def load_lexicon(self) -> Lexicon:
        lexicon = Lexicon(nouns=self.load_nouns(), adjectives=self.load_adjectives())
        logger.info(f"Lexicon ready: {len(lexicon.nouns)} nouns, {len(lexicon.adjectives)} adjectives")
        return lexicon
