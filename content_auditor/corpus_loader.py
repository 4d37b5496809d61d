"""
Corpus Loader
Turns content files into ContentUnits for the auditor.

Two shapes are understood:
- unit files (YAML or JSON) with a top-level `units` list, one mapping per unit;
- grammar lesson files, whose fill-blank exercises of the form "___ е <adj>"
  become predicate-position units.
"""

import logging
import re
from dataclasses import replace
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Union

import yaml

from rules.base_types import ContentUnit

logger = logging.getLogger(__name__)

# "___ е голем" -> the adjective after the copula
PREDICATE_BLANK_RE = re.compile(r'_{2,}\s+е\s+([^\s.,!?;:]+)', re.IGNORECASE)


class CorpusLoadError(Exception):
    """Raised when a corpus file cannot be read or has the wrong shape."""


def _read_data_file(path: Union[str, Path]) -> Any:
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            # JSON is a subset of YAML
            return yaml.safe_load(f)
    except FileNotFoundError as e:
        raise CorpusLoadError(f"Corpus file not found: {path}") from e
    except yaml.YAMLError as e:
        raise CorpusLoadError(f"Error parsing corpus file {path}: {e}") from e


def units_from_records(records: Iterable[Any], source: Optional[str] = None) -> List[ContentUnit]:
    units = []
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise CorpusLoadError(f"Unit #{index} in {source or 'corpus'} is not a mapping")
        unit = ContentUnit.from_dict(record)
        if not unit.id:
            raise CorpusLoadError(f"Unit #{index} in {source or 'corpus'} has no id")
        if source and not unit.source:
            unit = replace(unit, source=source)
        units.append(unit)
    return units


def load_corpus(path: Union[str, Path]) -> List[ContentUnit]:
    """Load a unit file: {units: [...]} or a bare list of unit mappings."""
    data = _read_data_file(path)
    if isinstance(data, Mapping):
        records = data.get('units')
        source = data.get('source')
    else:
        records = data
        source = None
    if not isinstance(records, list):
        raise CorpusLoadError(f"Corpus file {path} must contain a list of units")
    units = units_from_records(records, source=source)
    logger.info(f"Loaded {len(units)} content units from {path}")
    return units


def units_from_grammar_lessons(lessons: Iterable[Any], source_prefix: str = 'grammar') -> List[ContentUnit]:
    """
    Fill-blank exercises whose Macedonian sentence reads "___ е <adjective>"
    and whose first correct answer is the subject noun. The adjective is in
    predicate position, which takes the indefinite form even after a definite
    noun ("Куќата е голема").
    """
    units = []
    for lesson_index, lesson in enumerate(lessons or []):
        if not isinstance(lesson, Mapping):
            continue
        lesson_id = str(lesson.get('id') or 'unknown')
        for ex_index, exercise in enumerate(lesson.get('exercises') or []):
            if not isinstance(exercise, Mapping) or exercise.get('type') != 'fill-blank':
                continue
            answers = exercise.get('correctAnswers') or []
            field = 'sentenceMk' if exercise.get('sentenceMk') else 'questionMk'
            sentence = str(exercise.get(field) or '')
            match = PREDICATE_BLANK_RE.search(sentence)
            if not match or not answers:
                continue
            units.append(ContentUnit(
                id=f"{lesson_id}/{exercise.get('id', ex_index)}",
                adjective_text=match.group(1),
                field_path=f"[{lesson_index}].exercises[{ex_index}].{field}",
                head_noun=str(answers[0]),
                declared={'definiteness': 'indefinite'},
                source=f"{source_prefix}:{lesson_id}",
            ))
    return units


def load_grammar_lessons(path: Union[str, Path]) -> List[ContentUnit]:
    data = _read_data_file(path)
    if isinstance(data, Mapping):
        data = data.get('lessons', [])
    if not isinstance(data, list):
        raise CorpusLoadError(f"Grammar lessons file {path} must contain a list of lessons")
    units = units_from_grammar_lessons(data)
    logger.info(f"Extracted {len(units)} agreement units from grammar lessons in {path}")
    return units
