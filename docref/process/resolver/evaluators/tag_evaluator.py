# Path: docref/process/resolver/evaluators/tag_evaluator.py
"""
Tag Evaluator

Matches a reference's namespaced tags against the evidence.
"""

from docref.constants import TagNamespace, TRIGGER_SEPARATOR

from .base_evaluator import BaseEvaluator, EvaluationResult
from ..models.compiled_reference import CompiledReference
from ..models.evidence import Evidence
from ..models.match_findings import TagHit


class TagEvaluator(BaseEvaluator):
    """
    Evaluates namespaced tags.

    A tag matches when its value equals an evidence signal. In addition:
    - type tags match the canonical form of the known document type
      or category ("Insurance Policy" -> "insurance-policy")
    - trigger tags "a+b" match when every part is a signal
    - context tags match the requesting AI context

    Comparison is exact on lower-cased values; there is no fuzzy matching.

    Example:
        evaluator = TagEvaluator()
        result = evaluator.evaluate(compiled, evidence)
        for hit in result.hits:
            print(hit.namespace, hit.value, hit.via)
    """

    @property
    def evaluator_type(self) -> str:
        return "tag"

    def evaluate(
        self,
        compiled: CompiledReference,
        evidence: Evidence
    ) -> EvaluationResult:
        """
        Evaluate tags against evidence signals and hints.

        Args:
            compiled: Reference with compiled patterns
            evidence: Normalized evidence

        Returns:
            EvaluationResult whose hits are TagHit objects
        """
        hits = []
        for tag in compiled.reference.tags:
            via = self._match_tag(tag.namespace, tag.value.lower(), evidence)
            if via:
                hits.append(TagHit(
                    namespace=tag.namespace,
                    value=tag.value,
                    weight=tag.weight,
                    via=via,
                ))
        return self._result(hits)

    def _match_tag(self, namespace: TagNamespace, value: str, evidence: Evidence):
        """Return what matched the tag, or None."""
        if value in evidence.signals:
            return 'signal'

        if namespace == TagNamespace.TYPE:
            if value == evidence.document_type_slug:
                return 'document_type'
            if value == evidence.category_slug:
                return 'category'

        elif namespace == TagNamespace.TRIGGER:
            if TRIGGER_SEPARATOR in value:
                parts = [p.strip() for p in value.split(TRIGGER_SEPARATOR)]
                if all(parts) and all(p in evidence.signals for p in parts):
                    return 'trigger'

        elif namespace == TagNamespace.CONTEXT:
            if value == evidence.context.value:
                return 'context'

        return None


__all__ = ['TagEvaluator']
