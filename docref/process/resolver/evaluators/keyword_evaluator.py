# Path: docref/process/resolver/evaluators/keyword_evaluator.py
"""
Keyword Evaluator

Case-insensitive substring containment of keywords in the text sample.
Keywords are weak evidence: each hit is worth little on its own.
"""

from .base_evaluator import BaseEvaluator, EvaluationResult
from ..models.compiled_reference import CompiledReference
from ..models.evidence import Evidence


class KeywordEvaluator(BaseEvaluator):
    """Evaluates reference keywords against the normalized text sample."""

    @property
    def evaluator_type(self) -> str:
        return "keyword"

    def evaluate(
        self,
        compiled: CompiledReference,
        evidence: Evidence
    ) -> EvaluationResult:
        """
        Find keywords contained in the text sample.

        Without a text sample there is nothing to search and no hits.
        """
        if not evidence.has_text:
            return self._result([])

        hits = []
        for keyword in compiled.reference.keywords:
            needle = keyword.strip().lower()
            if needle and needle in evidence.normalized_text and keyword not in hits:
                hits.append(keyword)
        return self._result(hits)


__all__ = ['KeywordEvaluator']
