# Path: docref/process/resolver/scoring/aggregator.py
"""
Score Aggregator

Turns MatchFindings into a single non-negative score per candidate, or
rejects the candidate.

Scoring steps:
1. Exclusion veto: any exclude-pattern hit drops the candidate
2. Required rules: if the reference has require rules, one must fire
   (skipped for the fast-path reference, whose type was named explicitly)
3. Base score: weighted tag hits, keyword hits, filename hits, direct
   type and category matches
4. Decision rules, highest priority first: include and require add
   priority * SCORE_DECISION_RULE_BASE; boost multiplies the running
   score by 1 + priority * BOOST_FACTOR_PER_PRIORITY
"""

import logging

from docref.constants import (
    RuleAction,
    NAMESPACE_WEIGHTS,
    SCORE_DIRECT_TYPE_MATCH,
    SCORE_FILENAME_PATTERN,
    SCORE_CATEGORY_MATCH,
    SCORE_KEYWORD,
    SCORE_DECISION_RULE_BASE,
    BOOST_FACTOR_PER_PRIORITY,
    SCORE_DECIMALS,
)

from ..models.match_findings import MatchFindings
from ..models.reference_definition import ReferenceDefinition
from ..models.resolution_result import ScoredCandidate


REJECT_EXCLUDED = 'excluded'
REJECT_REQUIRE_GATE = 'require_gate'
REJECT_NO_EVIDENCE = 'no_evidence'


class ScoreAggregator:
    """
    Aggregates findings into a scored candidate.

    Example:
        aggregator = ScoreAggregator()
        candidate = aggregator.aggregate(reference, findings)
        if not candidate.is_rejected:
            print(candidate.score)
    """

    def __init__(self):
        """Initialize score aggregator."""
        self.logger = logging.getLogger('resolver.scoring.aggregator')

    def aggregate(
        self,
        reference: ReferenceDefinition,
        findings: MatchFindings
    ) -> ScoredCandidate:
        """
        Score one candidate.

        Args:
            reference: The candidate reference
            findings: What matched for it

        Returns:
            ScoredCandidate; rejected candidates carry score 0 and a reason
        """
        fast_path = findings.direct_type_match

        if findings.is_excluded:
            return self._reject(reference, findings, REJECT_EXCLUDED, fast_path)

        if reference.require_rules and not fast_path:
            if not any(findings.fired(rule) for rule in reference.require_rules):
                return self._reject(reference, findings, REJECT_REQUIRE_GATE, fast_path)

        if not findings.has_evidence:
            return self._reject(reference, findings, REJECT_NO_EVIDENCE, fast_path)

        score = self.base_score(findings)
        score = self.apply_decision_rules(score, findings)

        return ScoredCandidate(
            reference=reference,
            score=round(score, SCORE_DECIMALS),
            findings=findings,
            fast_path=fast_path,
        )

    def base_score(self, findings: MatchFindings) -> float:
        """Score before decision rules."""
        score = 0.0

        for hit in findings.tag_hits:
            score += NAMESPACE_WEIGHTS[hit.namespace] * hit.weight

        score += SCORE_KEYWORD * len(findings.keyword_hits)
        score += SCORE_FILENAME_PATTERN * len(findings.filename_hits)

        if findings.direct_type_match:
            score += SCORE_DIRECT_TYPE_MATCH
        if findings.category_match:
            score += SCORE_CATEGORY_MATCH

        return score

    def apply_decision_rules(self, score: float, findings: MatchFindings) -> float:
        """
        Apply firing decision rules in priority order.

        Each rule contributes once. Boost factors are above 1, so no
        rule ever lowers the score.
        """
        for hit in findings.fired_rules:
            rule = hit.rule
            if rule.action == RuleAction.BOOST:
                score *= 1 + rule.priority * BOOST_FACTOR_PER_PRIORITY
            else:
                score += rule.priority * SCORE_DECISION_RULE_BASE
        return score

    def _reject(
        self,
        reference: ReferenceDefinition,
        findings: MatchFindings,
        reason: str,
        fast_path: bool
    ) -> ScoredCandidate:
        self.logger.debug(f"  [REJECTED] {reference.reference_id}: {reason}")
        return ScoredCandidate(
            reference=reference,
            score=0.0,
            findings=findings,
            rejection_reason=reason,
            fast_path=fast_path,
        )


__all__ = [
    'ScoreAggregator',
    'REJECT_EXCLUDED',
    'REJECT_REQUIRE_GATE',
    'REJECT_NO_EVIDENCE',
]
