# Path: docref/process/resolver/engine/candidate_matcher.py
"""
Candidate Matcher

Runs every evaluator for one reference against one Evidence value and
collects what matched into MatchFindings. The matcher does not score.
"""

from typing import Optional

from docref.core.logger.ipo_logging import get_process_logger

from ..evaluators import (
    TagEvaluator,
    KeywordEvaluator,
    FilenamePatternEvaluator,
    ExcludePatternEvaluator,
    DecisionRuleEvaluator,
)
from ..models.compiled_reference import CompiledReference
from ..models.evidence import Evidence
from ..models.match_findings import MatchFindings


class CandidateMatcher:
    """
    Computes MatchFindings for a reference.

    References that are inactive, or that do not serve the requesting
    AI context, produce no findings at all and never reach the scorer.

    Example:
        matcher = CandidateMatcher()
        findings = matcher.match(compiled, evidence)
        if findings is not None:
            print(findings.match_reasons())
    """

    def __init__(self):
        """Initialize matcher with one evaluator per indicator kind."""
        self.logger = get_process_logger('resolver.matcher')

        self.evaluators = {
            'tag': TagEvaluator(),
            'keyword': KeywordEvaluator(),
            'filename': FilenamePatternEvaluator(),
            'exclude': ExcludePatternEvaluator(),
            'decision_rule': DecisionRuleEvaluator(),
        }

    def is_applicable(self, compiled: CompiledReference, evidence: Evidence) -> bool:
        """Check if a reference takes part in this call."""
        reference = compiled.reference
        return reference.is_active and reference.applies_to(evidence.context)

    def match(
        self,
        compiled: CompiledReference,
        evidence: Evidence
    ) -> Optional[MatchFindings]:
        """
        Match one reference against evidence.

        Args:
            compiled: Reference with compiled patterns
            evidence: Normalized evidence

        Returns:
            MatchFindings, or None if the reference is not applicable
        """
        if not self.is_applicable(compiled, evidence):
            return None

        reference = compiled.reference
        results = {
            name: evaluator.evaluate(compiled, evidence)
            for name, evaluator in self.evaluators.items()
        }

        return MatchFindings(
            reference_id=reference.reference_id,
            tag_hits=results['tag'].hits,
            keyword_hits=results['keyword'].hits,
            filename_hits=results['filename'].hits,
            exclude_hits=results['exclude'].hits,
            fired_rules=results['decision_rule'].hits,
            direct_type_match=(
                evidence.document_type is not None
                and evidence.document_type == reference.file_type
            ),
            category_match=(
                evidence.category is not None
                and evidence.category == reference.category.value
            ),
        )


__all__ = ['CandidateMatcher']
