# Path: docref/process/resolver/models/__init__.py
"""
Resolver Models

Data models for the resolution engine:
- ReferenceDefinition: Parsed reference definition
- Evidence: Normalized inputs of one call
- MatchFindings: Indicators that fired for one reference
- ResolvedResult: Ranked output of one call
"""

from .reference_definition import (
    FilingTarget,
    IdentificationRule,
    ReferenceTag,
    DecisionRule,
    ReferenceMetadata,
    ReferenceDefinition,
)

from .compiled_reference import (
    CompiledReference,
    compile_reference,
)

from .evidence import (
    canonical_slug,
    ResolveOptions,
    BatchDocument,
    Evidence,
)

from .match_findings import (
    TagHit,
    RuleHit,
    MatchFindings,
)

from .resolution_result import (
    ScoredCandidate,
    ResolvedCandidate,
    ResolvedResult,
)

__all__ = [
    # Reference Definition
    'FilingTarget',
    'IdentificationRule',
    'ReferenceTag',
    'DecisionRule',
    'ReferenceMetadata',
    'ReferenceDefinition',
    # Compiled
    'CompiledReference',
    'compile_reference',
    # Evidence
    'canonical_slug',
    'ResolveOptions',
    'BatchDocument',
    'Evidence',
    # Findings
    'TagHit',
    'RuleHit',
    'MatchFindings',
    # Results
    'ScoredCandidate',
    'ResolvedCandidate',
    'ResolvedResult',
]
