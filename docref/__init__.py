# Path: docref/__init__.py
"""
docref - Document Reference Resolution

Resolves which document-type references best describe a document in a
property-finance deal file, for the AI features that classify, file,
summarize, extract from and chat about those documents.

Usage:
    from docref import ReferenceResolver

    resolver = ReferenceResolver.from_config()
    result = resolver.resolve(
        context='classification',
        file_name='insurance_policy_wording_v2.pdf',
    )
    for candidate in result.scores:
        print(candidate.reference.file_type, candidate.score)
"""

from docref.constants import AIContext, OutputFormat
from docref.process.resolver import (
    ReferenceResolver,
    ReferenceLoader,
    ReferenceCatalog,
    ResolutionCache,
    ReferenceDefinition,
    ResolveOptions,
    BatchDocument,
    ResolvedCandidate,
    ResolvedResult,
    ResolverError,
    InvalidEvidence,
    UnknownContext,
    CatalogUnavailable,
    CatalogIntegrityError,
)
from docref.output import PromptFormatter

__version__ = '1.0.0'

__all__ = [
    'AIContext',
    'OutputFormat',
    'ReferenceResolver',
    'ReferenceLoader',
    'ReferenceCatalog',
    'ResolutionCache',
    'ReferenceDefinition',
    'ResolveOptions',
    'BatchDocument',
    'ResolvedCandidate',
    'ResolvedResult',
    'ResolverError',
    'InvalidEvidence',
    'UnknownContext',
    'CatalogUnavailable',
    'CatalogIntegrityError',
    'PromptFormatter',
]
