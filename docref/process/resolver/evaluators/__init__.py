# Path: docref/process/resolver/evaluators/__init__.py
"""
Indicator Evaluators

Each evaluator reports which indicators of one kind matched a reference:
- TagEvaluator: Namespaced tags
- KeywordEvaluator: Keywords in the text sample
- FilenamePatternEvaluator: Filename patterns
- ExcludePatternEvaluator: Exclude patterns (veto)
- DecisionRuleEvaluator: Decision rules whose signals are present
"""

from .base_evaluator import BaseEvaluator, EvaluationResult
from .tag_evaluator import TagEvaluator
from .keyword_evaluator import KeywordEvaluator
from .filename_evaluator import FilenamePatternEvaluator, ExcludePatternEvaluator
from .decision_rule_evaluator import DecisionRuleEvaluator

__all__ = [
    'BaseEvaluator',
    'EvaluationResult',
    'TagEvaluator',
    'KeywordEvaluator',
    'FilenamePatternEvaluator',
    'ExcludePatternEvaluator',
    'DecisionRuleEvaluator',
]
