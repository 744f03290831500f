# Path: docref/process/resolver/models/reference_definition.py
"""
Reference Definition Model

Pydantic models representing reference definitions loaded from YAML files.
A reference fully describes one document type: how to identify it, which
tags and keywords point at it, which filenames it has, what rules out a
match, and where documents of that type are filed.

Models are frozen: a loaded reference is read-only at resolution time.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from docref.constants import (
    AIContext,
    DocumentCategory,
    TargetLevel,
    ReferenceSource,
    TagNamespace,
    RuleAction,
    RuleEmphasis,
    DEFAULT_TAG_WEIGHT,
    MIN_RULE_PRIORITY,
    MAX_RULE_PRIORITY,
    PRIMARY_RULE_PRIORITY,
)


# =============================================================================
# BUILDING BLOCKS
# =============================================================================

class FilingTarget(BaseModel):
    """Where documents of this type are filed."""
    model_config = ConfigDict(frozen=True)

    target_folder: str = Field(
        description="Folder name documents are filed into"
    )
    target_level: TargetLevel = Field(
        description="Whether the folder lives at client or project level"
    )


class IdentificationRule(BaseModel):
    """Free-text identification guidance with a structured emphasis."""
    model_config = ConfigDict(frozen=True)

    text: str = Field(
        description="Human-readable identification rule"
    )
    emphasis: RuleEmphasis = Field(
        default=RuleEmphasis.STANDARD,
        description="PRIMARY and CRITICAL rules are the strongest indicators"
    )

    @property
    def is_key_indicator(self) -> bool:
        """Check if the rule is flagged PRIMARY or CRITICAL."""
        return self.emphasis in (RuleEmphasis.PRIMARY, RuleEmphasis.CRITICAL)

    def render(self) -> str:
        """Render with the emphasis label used in prompts."""
        if self.emphasis == RuleEmphasis.STANDARD:
            return self.text
        return f"{self.emphasis.value.upper()}: {self.text}"


class ReferenceTag(BaseModel):
    """A namespaced tag for reference discovery."""
    model_config = ConfigDict(frozen=True)

    namespace: TagNamespace = Field(
        description="Tag namespace"
    )
    value: str = Field(
        min_length=1,
        description="Tag value (kebab-case)"
    )
    weight: float = Field(
        default=DEFAULT_TAG_WEIGHT,
        gt=0,
        description="Multiplier applied to the namespace weight"
    )


class DecisionRule(BaseModel):
    """Structured "IF signal THEN action" rule."""
    model_config = ConfigDict(frozen=True)

    condition: str = Field(
        description="Human-readable condition"
    )
    signals: tuple[str, ...] = Field(
        description="Signal keys; the rule fires if any is present"
    )
    priority: int = Field(
        ge=MIN_RULE_PRIORITY, le=MAX_RULE_PRIORITY,
        description="Higher is evaluated first (1-10)"
    )
    action: RuleAction = Field(
        description="include, boost or require"
    )

    @property
    def is_primary(self) -> bool:
        """Check if the rule counts as PRIMARY-level evidence."""
        return (
            self.action == RuleAction.REQUIRE
            or self.priority >= PRIMARY_RULE_PRIORITY
        )


class ReferenceMetadata(BaseModel):
    """Catalog bookkeeping for a reference."""
    model_config = ConfigDict(frozen=True)

    source: ReferenceSource = Field(
        default=ReferenceSource.SYSTEM,
        description="Who authored the reference"
    )
    is_active: bool = Field(
        default=True,
        description="Inactive references never take part in matching"
    )
    version: int = Field(
        default=1,
        ge=1,
        description="Content version of the reference"
    )
    updated_at: Optional[date] = Field(
        default=None,
        description="Last authoring change"
    )


# =============================================================================
# REFERENCE DEFINITION (main model)
# =============================================================================

class ReferenceDefinition(BaseModel):
    """
    Complete definition of one document type.

    Example:
        reference = ReferenceDefinition(
            reference_id="insurance-policy",
            file_type="Insurance Policy",
            category=DocumentCategory.INSURANCE,
            filing=FilingTarget(
                target_folder="Insurance",
                target_level=TargetLevel.PROJECT,
            ),
            description="The full contractual insurance document...",
            tags=[ReferenceTag(namespace=TagNamespace.TYPE, value="insurance-policy")],
            keywords=["policy wording", "exclusions"],
            filename_patterns=[r"policy[_\\-\\s]?wording"],
            applicable_contexts=[AIContext.CLASSIFICATION],
        )
    """
    model_config = ConfigDict(frozen=True)

    # Identity
    reference_id: str = Field(
        min_length=1,
        description="Unique stable identifier (kebab-case)"
    )
    file_type: str = Field(
        min_length=1,
        description="Display type name"
    )
    category: DocumentCategory = Field(
        description="Parent category"
    )
    filing: FilingTarget = Field(
        description="Filing destination"
    )

    # Rich content
    description: str = Field(
        default="",
        description="What the document type is and why it matters"
    )
    identification_rules: tuple[IdentificationRule, ...] = Field(
        default=(),
        description="Ordered identification rules, strongest first"
    )
    disambiguation: tuple[str, ...] = Field(
        default=(),
        description="'This is X, NOT Y because...' statements"
    )
    terminology: dict[str, str] = Field(
        default_factory=dict,
        description="Domain glossary"
    )

    # Discovery
    tags: tuple[ReferenceTag, ...] = Field(
        default=(),
        description="Namespaced tags"
    )
    keywords: tuple[str, ...] = Field(
        default=(),
        description="Keywords matched against the text sample"
    )
    filename_patterns: tuple[str, ...] = Field(
        default=(),
        description="Regular expressions matched against the filename"
    )
    exclude_patterns: tuple[str, ...] = Field(
        default=(),
        description="Filename regular expressions that veto this reference"
    )
    decision_rules: tuple[DecisionRule, ...] = Field(
        default=(),
        description="Ordered decision rules"
    )
    applicable_contexts: tuple[AIContext, ...] = Field(
        default=(),
        description="AI contexts this reference serves"
    )
    expected_fields: Optional[tuple[str, ...]] = Field(
        default=None,
        description="Canonical field paths this document type carries"
    )

    metadata: ReferenceMetadata = Field(
        default_factory=ReferenceMetadata,
        description="Catalog bookkeeping"
    )

    @property
    def is_active(self) -> bool:
        """Check if the reference takes part in matching."""
        return self.metadata.is_active

    @property
    def version(self) -> int:
        """Content version of the reference."""
        return self.metadata.version

    def applies_to(self, context: AIContext) -> bool:
        """Check if the reference serves the given AI context."""
        return context in self.applicable_contexts

    @property
    def require_rules(self) -> list[DecisionRule]:
        """Decision rules with the require action."""
        return [r for r in self.decision_rules if r.action == RuleAction.REQUIRE]

    @property
    def rules_by_priority(self) -> list[DecisionRule]:
        """Decision rules, highest priority first, declaration order within ties."""
        return sorted(self.decision_rules, key=lambda r: -r.priority)

    @property
    def key_identification_rules(self) -> list[IdentificationRule]:
        """Identification rules flagged PRIMARY or CRITICAL."""
        return [r for r in self.identification_rules if r.is_key_indicator]

    @property
    def rule_signal_keys(self) -> set[str]:
        """All signal keys named by decision rules (lower-cased)."""
        return {
            signal.lower()
            for rule in self.decision_rules
            for signal in rule.signals
        }

    def has_tag(self, namespace: TagNamespace, value: str) -> bool:
        """Check if the reference carries a given tag."""
        value = value.lower()
        return any(
            t.namespace == namespace and t.value.lower() == value
            for t in self.tags
        )


__all__ = [
    'FilingTarget',
    'IdentificationRule',
    'ReferenceTag',
    'DecisionRule',
    'ReferenceMetadata',
    'ReferenceDefinition',
]
