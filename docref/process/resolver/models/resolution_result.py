# Path: docref/process/resolver/models/resolution_result.py
"""
Resolution Result Models

Models representing the output of a resolution call.
"""

from dataclasses import dataclass, field
from typing import Optional

from .reference_definition import ReferenceDefinition, FilingTarget
from .match_findings import MatchFindings


@dataclass
class ScoredCandidate:
    """
    A reference with its score, as produced by the scorer.

    Attributes:
        reference: The candidate reference
        score: Final score (0 when rejected)
        findings: What matched
        rejection_reason: If dropped, why (exclusion veto, require gate)
        fast_path: Evidence named this reference's type explicitly
    """
    reference: ReferenceDefinition
    score: float
    findings: MatchFindings
    rejection_reason: Optional[str] = None
    fast_path: bool = False

    @property
    def is_rejected(self) -> bool:
        """Check if this candidate was dropped."""
        return self.rejection_reason is not None

    @property
    def reference_id(self) -> str:
        return self.reference.reference_id

    @property
    def primary_rule_count(self) -> int:
        return self.findings.primary_rule_count

    @property
    def has_type_tag_match(self) -> bool:
        return self.findings.has_type_tag_match


@dataclass
class ResolvedCandidate:
    """
    A ranked reference with its score and match reasons.

    Attributes:
        reference: The reference
        score: Final score
        match_reasons: Which indicators fired (audit/debugging only)
        primary_rule_count: Firing require or PRIMARY-level rules
        has_type_tag_match: Whether a type tag matched
    """
    reference: ReferenceDefinition
    score: float
    match_reasons: list[str] = field(default_factory=list)
    primary_rule_count: int = 0
    has_type_tag_match: bool = False

    @property
    def reference_id(self) -> str:
        return self.reference.reference_id

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'reference_id': self.reference.reference_id,
            'file_type': self.reference.file_type,
            'score': self.score,
            'match_reasons': list(self.match_reasons),
        }


@dataclass
class ResolvedResult:
    """
    Result of resolving references for one evidence set.

    Attributes:
        references: Top-N references in rank order
        scores: Every non-excluded candidate in rank order (uncapped)
        cache_hit: Whether the value was served from cache
        prompt_text: Pre-rendered prompt text for non-full formats
        catalog_generation: Generation of the catalog snapshot used
    """
    references: list[ReferenceDefinition] = field(default_factory=list)
    scores: list[ResolvedCandidate] = field(default_factory=list)
    cache_hit: bool = False
    prompt_text: Optional[str] = None
    catalog_generation: int = 0

    @classmethod
    def empty(cls, catalog_generation: int = 0) -> 'ResolvedResult':
        """Create a result for evidence that matched nothing."""
        return cls(catalog_generation=catalog_generation)

    @property
    def is_empty(self) -> bool:
        return len(self.references) == 0

    @property
    def top(self) -> Optional[ReferenceDefinition]:
        """Top-ranked reference, if any."""
        return self.references[0] if self.references else None

    @property
    def filing_target(self) -> Optional[FilingTarget]:
        """Filing destination of the top-ranked reference."""
        top = self.top
        return top.filing if top else None

    def score_for(self, reference_id: str) -> Optional[float]:
        """Score of a reference, or None if it is not a candidate."""
        for candidate in self.scores:
            if candidate.reference.reference_id == reference_id:
                return candidate.score
        return None

    def reference_ids(self) -> list[str]:
        """Ids of the returned references, in rank order."""
        return [ref.reference_id for ref in self.references]

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'references': self.reference_ids(),
            'scores': [candidate.to_dict() for candidate in self.scores],
            'cache_hit': self.cache_hit,
            'prompt_text': self.prompt_text,
            'catalog_generation': self.catalog_generation,
        }


__all__ = [
    'ScoredCandidate',
    'ResolvedCandidate',
    'ResolvedResult',
]
