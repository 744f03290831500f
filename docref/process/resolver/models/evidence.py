# Path: docref/process/resolver/models/evidence.py
"""
Evidence Models

Raw call parameters (ResolveOptions, BatchDocument) and the canonical,
immutable Evidence value the matcher and scorer work from.
"""

import hashlib
import re
from dataclasses import dataclass, field
from typing import Optional, Union

from docref.constants import AIContext, OutputFormat, DEFAULT_MAX_RESULTS


_WHITESPACE = re.compile(r'\s+')


def canonical_slug(value: Optional[str]) -> Optional[str]:
    """
    Canonical tag form of a type or category name.

    "Insurance Policy" -> "insurance-policy"
    """
    if not value or not value.strip():
        return None
    return _WHITESPACE.sub('-', value.strip().lower())


@dataclass
class ResolveOptions:
    """
    Raw inputs of one resolution call.

    Attributes:
        context: Which AI feature is asking (AIContext value)
        signals: Pre-computed signal keys, if the caller has any
        document_type: Known document type name
        category: Known category
        text_sample: Free-text sample of the document
        file_name: Original filename
        max_results: Result-count cap (None = configured default)
        output_format: 'full', 'compact' or 'minimal'
    """
    context: Union[AIContext, str]
    signals: Optional[list[str]] = None
    document_type: Optional[str] = None
    category: Optional[str] = None
    text_sample: Optional[str] = None
    file_name: Optional[str] = None
    max_results: Optional[int] = None
    output_format: Union[OutputFormat, str] = OutputFormat.FULL


@dataclass
class BatchDocument:
    """One document of a batch resolution."""
    file_name: str
    text_sample: Optional[str] = None
    signals: Optional[list[str]] = None


@dataclass(frozen=True)
class Evidence:
    """
    Normalized evidence for one resolution call.

    Original filename and text are kept for reporting; matching
    uses the lower-cased, trimmed forms.
    """
    context: AIContext
    signals: frozenset[str] = field(default_factory=frozenset)
    signals_derived: bool = False
    document_type: Optional[str] = None
    category: Optional[str] = None
    file_name: Optional[str] = None
    text_sample: Optional[str] = None
    normalized_file_name: str = ''
    normalized_text: str = ''
    max_results: int = DEFAULT_MAX_RESULTS
    output_format: OutputFormat = OutputFormat.FULL

    @property
    def document_type_slug(self) -> Optional[str]:
        """Canonical tag form of the known document type."""
        return canonical_slug(self.document_type)

    @property
    def category_slug(self) -> Optional[str]:
        """Canonical tag form of the known category."""
        return canonical_slug(self.category)

    @property
    def has_file_name(self) -> bool:
        return bool(self.normalized_file_name)

    @property
    def has_text(self) -> bool:
        return bool(self.normalized_text)

    @property
    def text_hash(self) -> Optional[str]:
        """SHA-256 of the original text sample."""
        if self.text_sample is None:
            return None
        return hashlib.sha256(
            self.text_sample.encode('utf-8', 'surrogatepass')
        ).hexdigest()

    def cache_key(self) -> tuple:
        """
        Order-independent key identifying equivalent calls.

        Returns:
            (context, documentType, category, sorted signals, fileName,
             textSampleHash, maxResults, format)
        """
        return (
            self.context.value,
            self.document_type,
            self.category,
            tuple(sorted(self.signals)),
            self.file_name,
            self.text_hash,
            self.max_results,
            self.output_format.value,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'context': self.context.value,
            'signals': sorted(self.signals),
            'signals_derived': self.signals_derived,
            'document_type': self.document_type,
            'category': self.category,
            'file_name': self.file_name,
            'has_text_sample': self.text_sample is not None,
            'max_results': self.max_results,
            'output_format': self.output_format.value,
        }


__all__ = [
    'canonical_slug',
    'ResolveOptions',
    'BatchDocument',
    'Evidence',
]
