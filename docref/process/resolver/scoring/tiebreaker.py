# Path: docref/process/resolver/scoring/tiebreaker.py
"""
Tiebreaker

Total, deterministic ordering of candidates.
"""

import logging
from typing import Any, Sequence


class Tiebreaker:
    """
    Orders candidates by score, breaking ties deterministically.

    Order:
    1. Score, descending
    2. Firing require/PRIMARY-level rules, more first
    3. A type-tag match before none
    4. Reference id, lexical

    Works on anything with score, primary_rule_count, has_type_tag_match
    and reference_id (ScoredCandidate, ResolvedCandidate).

    Example:
        tiebreaker = Tiebreaker()
        ranked = tiebreaker.order(candidates)
        best, method = tiebreaker.resolve(ranked[:2])
    """

    def __init__(self):
        """Initialize tiebreaker."""
        self.logger = logging.getLogger('resolver.scoring.tiebreaker')

    @staticmethod
    def sort_key(candidate: Any) -> tuple:
        return (
            -candidate.score,
            -candidate.primary_rule_count,
            not candidate.has_type_tag_match,
            candidate.reference_id,
        )

    def order(self, candidates: Sequence[Any]) -> list[Any]:
        """Return candidates in rank order."""
        return sorted(candidates, key=self.sort_key)

    def resolve(self, matches: Sequence[Any]) -> tuple[Any, str]:
        """
        Pick the best of equally-scored candidates.

        Args:
            matches: Candidates with equal scores

        Returns:
            Tuple of (best candidate, tie-break method used)
        """
        if len(matches) == 0:
            raise ValueError("No matches to resolve")

        if len(matches) == 1:
            return matches[0], "single_match"

        ranked = self.order(matches)
        best, runner_up = ranked[0], ranked[1]

        if best.score != runner_up.score:
            method = "score"
        elif best.primary_rule_count != runner_up.primary_rule_count:
            method = "primary_rules"
        elif best.has_type_tag_match != runner_up.has_type_tag_match:
            method = "type_tag_match"
        else:
            method = "reference_id"

        self.logger.debug(
            f"Resolved tie between {len(matches)} candidates by {method}: "
            f"{best.reference_id}"
        )
        return best, method


__all__ = ['Tiebreaker']
