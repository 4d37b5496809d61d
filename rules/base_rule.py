"""
Base Rule Class - Abstract interface for all content grammar rules.
All rules must inherit from this class and implement the required methods.
Provides finding construction and rule-exception handling shared by every rule.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Union

import yaml

from .base_types import ContentUnit, ExtractionResult, FindingLocation, RuleId, ValidationFinding

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleExceptions:
    """
    Rules and content ids excluded from reporting.

    suppressed_rules: rule ids dropped everywhere.
    rule_specific_exceptions: rule id -> content ids where that rule is dropped.
    """
    suppressed_rules: FrozenSet[str] = frozenset()
    rule_specific_exceptions: Dict[str, FrozenSet[str]] = field(default_factory=dict)

    def is_excepted(self, rule_id: RuleId, content_id: str) -> bool:
        if rule_id.value in self.suppressed_rules:
            return True
        return content_id in self.rule_specific_exceptions.get(rule_id.value, frozenset())


def load_rule_exceptions(path: Optional[Union[str, Path]]) -> RuleExceptions:
    """
    Load the exceptions YAML file. A missing or malformed file disables
    exceptions rather than failing the run.
    """
    if not path:
        return RuleExceptions()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        logger.warning(f"Exceptions file not found at {path}. No exceptions will be applied.")
        return RuleExceptions()
    except yaml.YAMLError as e:
        logger.error(f"Error parsing exceptions file {path}: {e}")
        return RuleExceptions()

    if data is None:
        return RuleExceptions()
    if not isinstance(data, dict):
        logger.warning(f"Exceptions file at {path} is not a valid dictionary. Disabling exceptions.")
        return RuleExceptions()

    suppressed = data.get('suppressed_rules') or []
    specifics = data.get('rule_specific_exceptions') or {}
    if not isinstance(suppressed, list) or not isinstance(specifics, dict):
        logger.warning(f"Exceptions file at {path} has an unexpected shape. Disabling exceptions.")
        return RuleExceptions()

    return RuleExceptions(
        suppressed_rules=frozenset(str(rule).strip().upper() for rule in suppressed),
        rule_specific_exceptions={
            str(rule).strip().upper(): frozenset(str(cid) for cid in (ids or []))
            for rule, ids in specifics.items()
        },
    )


class BaseRule(ABC):
    """
    Abstract base class for content grammar rules.

    A rule is a pure function of the unit and the dictionaries it was built
    with: analyze() returns findings and never raises for malformed content.
    """

    def __init__(self, exceptions: Optional[RuleExceptions] = None) -> None:
        self.rule_type = self._get_rule_type()
        self.exceptions = exceptions or RuleExceptions()

    @abstractmethod
    def _get_rule_type(self) -> str:
        """Return the rule type identifier (e.g., 'adjective_agreement')."""
        pass

    @abstractmethod
    def analyze(self, unit: ContentUnit, extraction: Optional[ExtractionResult] = None) -> List[ValidationFinding]:
        """
        Check one content unit.

        Args:
            unit: The content unit to validate
            extraction: Metadata already extracted for this unit, if any

        Returns:
            List of findings (errors and warnings), in a deterministic order.
        """
        pass

    def check(self, unit: ContentUnit, extraction: Optional[ExtractionResult] = None) -> List[ValidationFinding]:
        """analyze() with exception isolation and rule exceptions applied."""
        try:
            findings = self.analyze(unit, extraction)
        except Exception as e:
            logger.exception(f"Rule {self.rule_type} failed on content '{unit.id}'")
            findings = [self._create_finding(
                unit, RuleId.RULE_EXECUTION_FAILURE,
                message=f"Rule '{self.rule_type}' failed: {e.__class__.__name__}: {e}",
            )]
        return [f for f in findings if not self._is_excepted(f)]

    def _is_excepted(self, finding: ValidationFinding) -> bool:
        return self.exceptions.is_excepted(finding.rule_id, finding.location.content_id)

    def _create_finding(self, unit: ContentUnit, rule_id: RuleId, message: str,
                        expected: str = "", actual: str = "",
                        suggestion: str = "") -> ValidationFinding:
        """Create a standardized finding located at the unit's id and field path."""
        return ValidationFinding(
            rule_id=rule_id,
            message=str(message),
            location=FindingLocation(content_id=unit.id, field_path=unit.field_path),
            expected='' if expected is None else str(expected),
            actual='' if actual is None else str(actual),
            suggestion=str(suggestion),
        )
