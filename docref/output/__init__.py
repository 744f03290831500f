# Path: docref/output/__init__.py
"""
Output Layer for docref

Renders resolution results for the AI features that consume them.

Usage:
    from docref.output import PromptFormatter

    formatter = PromptFormatter()
    text = formatter.format_for_prompt(result.references, 'classification')
"""

from .prompt_formatter import PromptFormatter

__all__ = ['PromptFormatter']
