# Path: docref/output/prompt_formatter.py
"""
Prompt Formatter

Renders resolved references as prompt text for the AI feature that
asked for them. Each context gets a different depth of detail so
prompts stay within their token budgets:

    classification  full detail (rules, disambiguation, key terms)
    extraction      description, expected fields, terminology
    summarization   first paragraph and key indicators
    filing          folder guidance and disambiguation
    chat, meeting   compact description and a few terms
    checklist       keywords, filing and primary rules
"""

from typing import Callable, Sequence, Union

from docref.constants import (
    AIContext,
    RuleEmphasis,
    CLASSIFICATION_KEYWORDS,
    CLASSIFICATION_TERMS,
    SUMMARY_KEY_RULES,
    FILING_DISAMBIGUATION,
    CHAT_TERMS,
    CHECKLIST_KEYWORDS,
    CHECKLIST_PRIMARY_RULES,
)
from docref.core.logger.ipo_logging import get_output_logger
from docref.process.resolver.models.reference_definition import ReferenceDefinition


LIBRARY_HEADER = (
    "## Reference Library\n"
    "The following reference documents describe known file types. "
    "Use these to inform your analysis.\n\n"
)


def first_paragraph(text: str) -> str:
    """Text up to the first blank line."""
    return text.split('\n\n')[0].strip()


class PromptFormatter:
    """
    Formats references for prompt injection.

    Example:
        formatter = PromptFormatter()
        text = formatter.format_for_prompt(result.references, 'classification')
        line_per_type = formatter.format_minimal(result.references)
    """

    def __init__(self):
        """Initialize prompt formatter."""
        self.logger = get_output_logger('prompt_formatter')

        self._formatters: dict[AIContext, Callable[[ReferenceDefinition], str]] = {
            AIContext.CLASSIFICATION: self._format_classification,
            AIContext.EXTRACTION: self._format_extraction,
            AIContext.SUMMARIZATION: self._format_summarization,
            AIContext.FILING: self._format_filing,
            AIContext.CHAT: self._format_chat,
            AIContext.MEETING: self._format_chat,
            AIContext.CHECKLIST: self._format_checklist,
        }

    def format_for_prompt(
        self,
        references: Sequence[ReferenceDefinition],
        context: Union[AIContext, str]
    ) -> str:
        """
        Format references for the given AI context.

        Args:
            references: References in rank order
            context: Requesting AI context

        Returns:
            Prompt text, or '' when there are no references
        """
        if not references:
            return ''

        context = AIContext(context)
        header = LIBRARY_HEADER

        # Classification must return one of these exact names
        if context == AIContext.CLASSIFICATION:
            type_names = ', '.join(f'"{ref.file_type}"' for ref in references)
            header += (
                f"**Valid fileType values from these references:** {type_names}\n"
                f"You MUST return one of these exact strings as the fileType. "
                f"Do not use synonyms or subtypes.\n\n"
            )

        render = self._formatters[context]
        text = header + '\n\n'.join(render(ref) for ref in references)

        self.logger.debug(
            f"Formatted {len(references)} references for {context.value} "
            f"({len(text)} chars)"
        )
        return text

    def format_minimal(self, references: Sequence[ReferenceDefinition]) -> str:
        """One line per reference: type, category and filing folder."""
        lines = [
            f"- {ref.file_type} ({ref.category.value}) -> "
            f"{ref.filing.target_folder} ({ref.filing.target_level.value})"
            for ref in references
        ]
        return '\n'.join(lines)

    # =========================================================================
    # CONTEXT-SPECIFIC FORMATTERS
    # =========================================================================

    def _title(self, ref: ReferenceDefinition) -> str:
        return f"### {ref.file_type} ({ref.category.value})"

    def _format_classification(self, ref: ReferenceDefinition) -> str:
        """Full detail: the model must tell similar types apart."""
        parts = [
            self._title(ref),
            f"Tags: {', '.join(t.value for t in ref.tags)}",
            f"Keywords: {', '.join(ref.keywords[:CLASSIFICATION_KEYWORDS])}",
            f"Filing: {ref.filing.target_folder} ({ref.filing.target_level.value}-level)",
            '',
            ref.description,
        ]

        if ref.identification_rules:
            parts.extend(['', '**Identification Rules:**'])
            for i, rule in enumerate(ref.identification_rules, start=1):
                parts.append(f"{i}. {rule.render()}")

        if ref.disambiguation:
            parts.extend(['', '**Disambiguation:**'])
            parts.extend(f"- {d}" for d in ref.disambiguation)

        if ref.terminology:
            parts.extend(['', '**Key Terms:**'])
            for term, definition in list(ref.terminology.items())[:CLASSIFICATION_TERMS]:
                parts.append(f"- **{term}**: {definition}")

        return '\n'.join(parts)

    def _format_extraction(self, ref: ReferenceDefinition) -> str:
        parts = [self._title(ref), '', ref.description]

        if ref.expected_fields:
            parts.extend(['', '**Expected Fields:**'])
            parts.extend(f"- {f}" for f in ref.expected_fields)

        if ref.terminology:
            parts.extend(['', '**Terminology:**'])
            for term, definition in ref.terminology.items():
                parts.append(f"- **{term}**: {definition}")

        return '\n'.join(parts)

    def _format_summarization(self, ref: ReferenceDefinition) -> str:
        parts = [self._title(ref), '', first_paragraph(ref.description)]

        key_rules = ref.key_identification_rules[:SUMMARY_KEY_RULES]
        if key_rules:
            parts.extend(['', '**Key Indicators:**'])
            parts.extend(f"- {rule.render()}" for rule in key_rules)

        return '\n'.join(parts)

    def _format_filing(self, ref: ReferenceDefinition) -> str:
        """The document is already classified; only folder guidance is needed."""
        parts = [
            f"### {ref.file_type} -> {ref.filing.target_folder} "
            f"({ref.filing.target_level.value})"
        ]
        parts.extend(f"- {d}" for d in ref.disambiguation[:FILING_DISAMBIGUATION])
        return '\n'.join(parts)

    def _format_chat(self, ref: ReferenceDefinition) -> str:
        parts = [self._title(ref), '', first_paragraph(ref.description)]

        terms = list(ref.terminology.items())[:CHAT_TERMS]
        if terms:
            parts.extend(['', '**Terms:**'])
            parts.extend(f"- {term}: {definition}" for term, definition in terms)

        return '\n'.join(parts)

    def _format_checklist(self, ref: ReferenceDefinition) -> str:
        parts = [
            self._title(ref),
            f"Keywords: {', '.join(ref.keywords[:CHECKLIST_KEYWORDS])}",
            f"Filing: {ref.filing.target_folder} ({ref.filing.target_level.value})",
        ]

        primary = [
            rule for rule in ref.identification_rules
            if rule.emphasis == RuleEmphasis.PRIMARY
        ][:CHECKLIST_PRIMARY_RULES]
        parts.extend(f"- {rule.render()}" for rule in primary)

        return '\n'.join(parts)


__all__ = ['PromptFormatter', 'first_paragraph']
