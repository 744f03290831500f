# Path: docref/process/resolver/evaluators/filename_evaluator.py
"""
Filename Evaluators

Match compiled filename and exclude patterns against the normalized
filename. Patterns are compiled once per catalog snapshot; nothing
is compiled here.
"""

import re

from .base_evaluator import BaseEvaluator, EvaluationResult
from ..models.compiled_reference import CompiledReference
from ..models.evidence import Evidence


class FilenamePatternEvaluator(BaseEvaluator):
    """
    Evaluates filename patterns.

    Filename matches are strong, deterministic evidence (extensions,
    fixed naming conventions).

    Example:
        evaluator = FilenamePatternEvaluator()
        result = evaluator.evaluate(compiled, evidence)
        # result.hits == ['policy[_\\-\\s]?wording']
    """

    @property
    def evaluator_type(self) -> str:
        return "filename"

    def evaluate(
        self,
        compiled: CompiledReference,
        evidence: Evidence
    ) -> EvaluationResult:
        """Return the source text of each matching filename pattern."""
        return self._result(
            _search_all(compiled.filename_patterns, evidence.normalized_file_name)
        )


class ExcludePatternEvaluator(BaseEvaluator):
    """
    Evaluates exclude patterns.

    Any hit is an absolute veto for the reference; the aggregator
    enforces it.
    """

    @property
    def evaluator_type(self) -> str:
        return "exclude"

    def evaluate(
        self,
        compiled: CompiledReference,
        evidence: Evidence
    ) -> EvaluationResult:
        """Return the source text of each matching exclude pattern."""
        hits = _search_all(compiled.exclude_patterns, evidence.normalized_file_name)
        if hits:
            self.logger.debug(f"{compiled.reference_id} excluded by {hits}")
        return self._result(hits)


def _search_all(patterns: tuple[tuple[str, re.Pattern], ...], text: str) -> list[str]:
    if not text:
        return []
    return [source for source, pattern in patterns if pattern.search(text)]


__all__ = ['FilenamePatternEvaluator', 'ExcludePatternEvaluator']
