# Path: docref/process/resolver/models/compiled_reference.py
"""
Compiled Reference Model

A reference definition paired with its compiled filename and exclude
patterns. Built once per catalog snapshot, never per call.
"""

import re
from dataclasses import dataclass

from .reference_definition import ReferenceDefinition


@dataclass(frozen=True)
class CompiledReference:
    """
    A reference with its patterns compiled.

    Patterns are kept as (source, compiled) pairs so match reasons can
    quote the pattern as authored.
    """
    reference: ReferenceDefinition
    filename_patterns: tuple[tuple[str, re.Pattern], ...] = ()
    exclude_patterns: tuple[tuple[str, re.Pattern], ...] = ()

    @property
    def reference_id(self) -> str:
        return self.reference.reference_id


def compile_reference(reference: ReferenceDefinition) -> CompiledReference:
    """
    Compile a reference's patterns (case-insensitive).

    Raises:
        re.error: If any pattern is not a valid regular expression
    """
    return CompiledReference(
        reference=reference,
        filename_patterns=tuple(
            (p, re.compile(p, re.IGNORECASE)) for p in reference.filename_patterns
        ),
        exclude_patterns=tuple(
            (p, re.compile(p, re.IGNORECASE)) for p in reference.exclude_patterns
        ),
    )


__all__ = ['CompiledReference', 'compile_reference']
