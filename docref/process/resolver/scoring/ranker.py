# Path: docref/process/resolver/scoring/ranker.py
"""
Ranker

Sorts scored candidates, applies the fast path, truncates, and packages
scores with match reasons.
"""

import logging
from typing import Optional

from ..models.resolution_result import ScoredCandidate, ResolvedCandidate
from ..models.reference_definition import ReferenceDefinition
from .tiebreaker import Tiebreaker


class Ranker:
    """
    Ranks non-rejected candidates.

    The fast-path candidate (evidence named its type exactly) is placed
    first regardless of score; the rest follow in tie-break order.

    Example:
        ranker = Ranker()
        references, scores = ranker.rank(candidates, max_results=12)
    """

    def __init__(self, tiebreaker: Optional[Tiebreaker] = None):
        """Initialize ranker."""
        self.logger = logging.getLogger('resolver.scoring.ranker')
        self.tiebreaker = tiebreaker or Tiebreaker()

    def rank(
        self,
        candidates: list[ScoredCandidate],
        max_results: int
    ) -> tuple[list[ReferenceDefinition], list[ResolvedCandidate]]:
        """
        Rank candidates.

        Args:
            candidates: Scored candidates; rejected ones are ignored
            max_results: Cap on returned references

        Returns:
            Tuple of (top-N references, every candidate in rank order)
        """
        accepted = [c for c in candidates if not c.is_rejected]
        ranked = self.tiebreaker.order(accepted)

        if len(ranked) > 1 and ranked[0].score == ranked[1].score:
            best, method = self.tiebreaker.resolve(ranked[:2])
            self.logger.debug(f"Top score tie: {best.reference_id} first by {method}")

        fast = next((c for c in ranked if c.fast_path), None)
        if fast is not None and ranked[0] is not fast:
            self.logger.debug(f"Fast path: {fast.reference_id} placed first")
            ranked.remove(fast)
            ranked.insert(0, fast)

        scores = [self.to_resolved(c) for c in ranked]
        references = [c.reference for c in scores[:max_results]]
        return references, scores

    def rank_resolved(
        self,
        candidates: list[ResolvedCandidate],
        max_results: int
    ) -> tuple[list[ReferenceDefinition], list[ResolvedCandidate]]:
        """Rank already-resolved candidates (merged batch results)."""
        ranked = self.tiebreaker.order(candidates)
        references = [c.reference for c in ranked[:max_results]]
        return references, ranked

    @staticmethod
    def to_resolved(candidate: ScoredCandidate) -> ResolvedCandidate:
        return ResolvedCandidate(
            reference=candidate.reference,
            score=candidate.score,
            match_reasons=candidate.findings.match_reasons(),
            primary_rule_count=candidate.primary_rule_count,
            has_type_tag_match=candidate.has_type_tag_match,
        )


__all__ = ['Ranker']
