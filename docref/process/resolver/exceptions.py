# Path: docref/process/resolver/exceptions.py
"""
Resolver Exceptions

Error taxonomy of the resolution engine. Evidence that matches nothing
is not an error: it yields an empty ResolvedResult.
"""

from typing import Any


class ResolverError(Exception):
    """Base class for all resolution engine errors."""


class InvalidEvidence(ResolverError):
    """
    Evidence carries nothing to match against.

    Raised when filename and text sample are both absent and no signals,
    document type or category are given. The caller must supply more
    information; the engine never guesses.
    """


class UnknownContext(ResolverError):
    """The AI context tag is not one of the enumerated values."""

    def __init__(self, context: Any):
        self.context = context
        super().__init__(f"Unknown AI context: {context!r}")


class CatalogUnavailable(ResolverError):
    """resolve() was called before any catalog snapshot was published."""


class CatalogIntegrityError(ResolverError):
    """A catalog snapshot violates internal consistency (e.g. duplicate ids)."""


__all__ = [
    'ResolverError',
    'InvalidEvidence',
    'UnknownContext',
    'CatalogUnavailable',
    'CatalogIntegrityError',
]
