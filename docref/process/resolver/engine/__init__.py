# Path: docref/process/resolver/engine/__init__.py
"""
Resolution Engine

Core engine components:
- ReferenceResolver: Main orchestrator
- ReferenceLoader: Loads reference definitions from YAML
- ReferenceCatalog: Immutable, versioned catalog snapshot
- EvidenceNormalizer: Raw call parameters to Evidence
- CandidateMatcher: Findings per reference
- ResolutionCache: LRU memo per catalog generation
"""

from .reference_catalog import ReferenceCatalog
from .reference_loader import ReferenceLoader
from .evidence_normalizer import EvidenceNormalizer
from .candidate_matcher import CandidateMatcher
from .resolution_cache import ResolutionCache
from .coordinator import ReferenceResolver

__all__ = [
    'ReferenceResolver',
    'ReferenceLoader',
    'ReferenceCatalog',
    'EvidenceNormalizer',
    'CandidateMatcher',
    'ResolutionCache',
]
