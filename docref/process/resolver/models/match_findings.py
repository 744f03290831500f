# Path: docref/process/resolver/models/match_findings.py
"""
Match Findings Model

The indicators that fired for one reference against one Evidence value.
Findings carry no score: the scorer turns them into one.
"""

from dataclasses import dataclass, field

from docref.constants import TagNamespace, REASON_CONDITION_LENGTH
from .reference_definition import DecisionRule


@dataclass
class TagHit:
    """
    A matched tag.

    Attributes:
        namespace: Tag namespace
        value: Tag value
        weight: Tag weight (namespace weight is applied by the scorer)
        via: What matched it: 'signal', 'trigger', 'document_type',
             'category' or 'context'
    """
    namespace: TagNamespace
    value: str
    weight: float
    via: str = 'signal'

    def to_dict(self) -> dict:
        return {
            'namespace': self.namespace.value,
            'value': self.value,
            'weight': self.weight,
            'via': self.via,
        }


@dataclass
class RuleHit:
    """A decision rule whose signals intersect the evidence signals."""
    rule: DecisionRule
    matched_signals: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            'condition': self.rule.condition,
            'action': self.rule.action.value,
            'priority': self.rule.priority,
            'matched_signals': list(self.matched_signals),
        }


@dataclass
class MatchFindings:
    """
    Indicators matched for one reference.

    Attributes:
        reference_id: Reference the findings belong to
        tag_hits: Matched tags
        keyword_hits: Keywords found in the text sample
        filename_hits: Filename patterns that matched
        exclude_hits: Exclude patterns that matched (any one vetoes)
        fired_rules: Firing decision rules, highest priority first
        direct_type_match: Evidence documentType equals the reference file type
        category_match: Evidence category equals the reference category
    """
    reference_id: str
    tag_hits: list[TagHit] = field(default_factory=list)
    keyword_hits: list[str] = field(default_factory=list)
    filename_hits: list[str] = field(default_factory=list)
    exclude_hits: list[str] = field(default_factory=list)
    fired_rules: list[RuleHit] = field(default_factory=list)
    direct_type_match: bool = False
    category_match: bool = False

    @property
    def is_excluded(self) -> bool:
        """Check if an exclude pattern vetoes the reference."""
        return len(self.exclude_hits) > 0

    @property
    def has_evidence(self) -> bool:
        """
        Check if anything beyond a context tag matched.

        Context tags describe the caller, not the document, so they
        never make a reference a candidate on their own.
        """
        return bool(
            self.direct_type_match
            or self.category_match
            or self.keyword_hits
            or self.filename_hits
            or self.fired_rules
            or any(hit.via != 'context' for hit in self.tag_hits)
        )

    @property
    def has_type_tag_match(self) -> bool:
        """Check if a type-namespace tag matched."""
        return any(hit.namespace == TagNamespace.TYPE for hit in self.tag_hits)

    @property
    def primary_rule_count(self) -> int:
        """Number of firing require or PRIMARY-level rules."""
        return sum(1 for hit in self.fired_rules if hit.rule.is_primary)

    def fired(self, rule: DecisionRule) -> bool:
        """Check if a given rule fired."""
        return any(hit.rule is rule for hit in self.fired_rules)

    def match_reasons(self) -> list[str]:
        """
        Human-readable list of what fired.

        Used for audit and debugging by calling features.
        """
        reasons = []

        if self.direct_type_match:
            reasons.append("document type matched")
        if self.category_match:
            reasons.append("category matched")

        for pattern in self.filename_hits:
            reasons.append(f"filename matched pattern {pattern}")

        for hit in self.tag_hits:
            reasons.append(
                f"{hit.namespace.value} tag matched: {hit.value} (via {hit.via})"
            )

        for hit in self.fired_rules:
            condition = hit.rule.condition[:REASON_CONDITION_LENGTH]
            reasons.append(
                f"rule fired ({hit.rule.action.value}, priority {hit.rule.priority}): "
                f"{condition}"
            )

        for keyword in self.keyword_hits:
            reasons.append(f"keyword hit: {keyword}")

        return reasons

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'reference_id': self.reference_id,
            'tag_hits': [hit.to_dict() for hit in self.tag_hits],
            'keyword_hits': list(self.keyword_hits),
            'filename_hits': list(self.filename_hits),
            'exclude_hits': list(self.exclude_hits),
            'fired_rules': [hit.to_dict() for hit in self.fired_rules],
            'direct_type_match': self.direct_type_match,
            'category_match': self.category_match,
        }


__all__ = [
    'TagHit',
    'RuleHit',
    'MatchFindings',
]
