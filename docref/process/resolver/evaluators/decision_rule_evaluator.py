# Path: docref/process/resolver/evaluators/decision_rule_evaluator.py
"""
Decision Rule Evaluator

Finds the decision rules that fire for the evidence. A rule fires when
its signal keys intersect the evidence signal set.
"""

from .base_evaluator import BaseEvaluator, EvaluationResult
from ..models.compiled_reference import CompiledReference
from ..models.evidence import Evidence
from ..models.match_findings import RuleHit


class DecisionRuleEvaluator(BaseEvaluator):
    """
    Evaluates decision rules.

    Firing rules are returned highest priority first; rules of equal
    priority keep their declaration order. Each rule appears at most
    once.

    Example:
        evaluator = DecisionRuleEvaluator()
        result = evaluator.evaluate(compiled, evidence)
        for hit in result.hits:
            print(hit.rule.action, hit.rule.priority, hit.matched_signals)
    """

    @property
    def evaluator_type(self) -> str:
        return "decision_rule"

    def evaluate(
        self,
        compiled: CompiledReference,
        evidence: Evidence
    ) -> EvaluationResult:
        """
        Evaluate decision rules in priority order.

        Args:
            compiled: Reference with compiled patterns
            evidence: Normalized evidence

        Returns:
            EvaluationResult whose hits are RuleHit objects
        """
        if not evidence.signals:
            return self._result([])

        hits = []
        for rule in compiled.reference.rules_by_priority:
            matched = tuple(
                signal for signal in rule.signals
                if signal.lower() in evidence.signals
            )
            if matched:
                hits.append(RuleHit(rule=rule, matched_signals=matched))
        return self._result(hits)


__all__ = ['DecisionRuleEvaluator']
