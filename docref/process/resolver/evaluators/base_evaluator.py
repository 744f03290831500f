# Path: docref/process/resolver/evaluators/base_evaluator.py
"""
Base Evaluator

Abstract base class for all indicator evaluators.
Defines the interface that all evaluators must implement.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from ..models.compiled_reference import CompiledReference
from ..models.evidence import Evidence


@dataclass
class EvaluationResult:
    """
    Result of evaluating one kind of indicator against evidence.

    Evaluators do not score: they report what matched, and the
    ScoreAggregator turns findings into a score.

    Attributes:
        hits: Matched indicators (type depends on the evaluator)
        evaluator_type: Name of the evaluator that produced this result
    """
    hits: list[Any] = field(default_factory=list)
    evaluator_type: str = ""

    @property
    def matched(self) -> bool:
        """Check if anything matched."""
        return len(self.hits) > 0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'hits': [h.to_dict() if hasattr(h, 'to_dict') else h for h in self.hits],
            'evaluator_type': self.evaluator_type,
        }


class BaseEvaluator(ABC):
    """
    Abstract base class for indicator evaluators.

    Each evaluator handles one kind of indicator:
    - TagEvaluator: Namespaced tags
    - KeywordEvaluator: Keywords in the text sample
    - FilenamePatternEvaluator: Filename patterns
    - ExcludePatternEvaluator: Exclude patterns
    - DecisionRuleEvaluator: Decision rule signals

    Subclasses must implement the evaluate() method.

    Example:
        evaluator = KeywordEvaluator()
        result = evaluator.evaluate(compiled, evidence)
        print(f"Keyword hits: {result.hits}")
    """

    def __init__(self):
        """Initialize evaluator."""
        self.logger = logging.getLogger(f'resolver.evaluators.{self.evaluator_type}')

    @property
    @abstractmethod
    def evaluator_type(self) -> str:
        """Return the type name of this evaluator."""
        pass

    @abstractmethod
    def evaluate(
        self,
        compiled: CompiledReference,
        evidence: Evidence
    ) -> EvaluationResult:
        """
        Evaluate one reference's indicators against evidence.

        Args:
            compiled: Reference with compiled patterns
            evidence: Normalized evidence of the call

        Returns:
            EvaluationResult with the matched indicators
        """
        pass

    def _result(self, hits: list[Any]) -> EvaluationResult:
        return EvaluationResult(hits=hits, evaluator_type=self.evaluator_type)


__all__ = ['BaseEvaluator', 'EvaluationResult']
