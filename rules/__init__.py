"""
Grammar rules for authored Macedonian content.

The registry builds rule instances from explicitly supplied dictionaries;
rules never read dictionaries from module state.
"""

import logging
from typing import List, NamedTuple, Optional

from lexicon.dictionary_service import Lexicon
from lexicon.types import Definiteness

from .base_rule import BaseRule, RuleExceptions, load_rule_exceptions
from .base_types import (
    ContentUnit,
    FindingLocation,
    LinguisticMetadata,
    MetadataSource,
    RuleId,
    Severity,
    ValidationError,
    ValidationFinding,
    ValidationWarning,
)
from .language_and_grammar.adjective_agreement_rule import AdjectiveAgreementRule
from .language_and_grammar.services.metadata_extractor import MetadataExtractor

logger = logging.getLogger(__name__)


class UnitCheck(NamedTuple):
    unit: ContentUnit
    metadata: Optional[LinguisticMetadata]
    findings: List[ValidationFinding]


class RulesRegistry:
    """Holds the rules applied to every content unit, in application order."""

    def __init__(self, extractor: MetadataExtractor, rules: List[BaseRule]):
        self.extractor = extractor
        self.rules = list(rules)

    def check_unit(self, unit: ContentUnit) -> UnitCheck:
        """Extract metadata once, then collect every rule's findings for one unit."""
        extraction = self.extractor.extract(unit)
        metadata = getattr(extraction, 'metadata', None)
        findings: List[ValidationFinding] = []
        for rule in self.rules:
            findings.extend(rule.check(unit, extraction))
        return UnitCheck(unit, metadata, findings)

    def rule_types(self) -> List[str]:
        return [rule.rule_type for rule in self.rules]


def get_registry(lexicon: Lexicon,
                 default_definiteness: Definiteness = Definiteness.INDEFINITE,
                 exceptions: Optional[RuleExceptions] = None) -> RulesRegistry:
    """Build the registry for one audit run."""
    extractor = MetadataExtractor(lexicon.nouns, default_definiteness=default_definiteness)
    registry = RulesRegistry(extractor, [
        AdjectiveAgreementRule(lexicon.adjectives, extractor, exceptions=exceptions),
    ])
    logger.debug(f"Rules registry built: {', '.join(registry.rule_types())}")
    return registry


__all__ = [
    'BaseRule',
    'RuleExceptions',
    'load_rule_exceptions',
    'ContentUnit',
    'FindingLocation',
    'LinguisticMetadata',
    'MetadataSource',
    'RuleId',
    'Severity',
    'ValidationError',
    'ValidationFinding',
    'ValidationWarning',
    'AdjectiveAgreementRule',
    'MetadataExtractor',
    'RulesRegistry',
    'UnitCheck',
    'get_registry',
]
