# Path: docref/process/resolver/__init__.py
"""
Reference Resolution Engine

Given a document's observable evidence (filename, text sample, signals,
optional known type or category) and a catalog of document-type
definitions ("references"), selects and ranks the references that best
describe the document.

Core Components:
    - ReferenceResolver: Main orchestrator
    - Evaluators: Indicator matching (tags, keywords, filenames, rules)
    - Scoring: Score aggregation, tie-breaking and ranking
    - Models: Definitions, evidence, findings and results

Example:
    from docref.process.resolver import ReferenceResolver

    resolver = ReferenceResolver.from_config()
    result = resolver.resolve(context='filing', file_name='Re_ Deal Update.eml')

    result.top.file_type          # 'Email/Correspondence'
"""

from .models import (
    ReferenceDefinition,
    ResolveOptions,
    BatchDocument,
    Evidence,
    MatchFindings,
    ResolvedCandidate,
    ResolvedResult,
)
from .exceptions import (
    ResolverError,
    InvalidEvidence,
    UnknownContext,
    CatalogUnavailable,
    CatalogIntegrityError,
)
from .engine import (
    ReferenceResolver,
    ReferenceLoader,
    ReferenceCatalog,
    ResolutionCache,
)

__all__ = [
    'ReferenceResolver',
    'ReferenceLoader',
    'ReferenceCatalog',
    'ResolutionCache',
    'ReferenceDefinition',
    'ResolveOptions',
    'BatchDocument',
    'Evidence',
    'MatchFindings',
    'ResolvedCandidate',
    'ResolvedResult',
    'ResolverError',
    'InvalidEvidence',
    'UnknownContext',
    'CatalogUnavailable',
    'CatalogIntegrityError',
]
