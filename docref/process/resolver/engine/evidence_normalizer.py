# Path: docref/process/resolver/engine/evidence_normalizer.py
"""
Evidence Normalizer

Converts raw call parameters into the canonical, immutable Evidence
value used by matching and scoring.

A best-effort signal set is always derived from the filename and text
sample and added to any caller signals. Derivation never fails; worst
case it yields an empty set and scoring degrades to keyword and
filename matching.
"""

import re
from pathlib import PurePath
from typing import Any, Iterable, Optional

from docref.constants import (
    AIContext,
    OutputFormat,
    DEFAULT_MAX_RESULTS,
    MIN_SIGNAL_TOKEN_LENGTH,
    EXTENSION_SIGNAL_SUFFIX,
)
from docref.core.logger.ipo_logging import get_process_logger

from ..exceptions import InvalidEvidence, UnknownContext
from ..models.evidence import Evidence, ResolveOptions


# Tokens are runs of letters and digits
_TOKEN_SPLIT = re.compile(r'[^a-z0-9]+')


def tokenize(text: Optional[str]) -> list[str]:
    """Split lower-cased text on non-alphanumerics."""
    if not text:
        return []
    return [t for t in _TOKEN_SPLIT.split(text.lower()) if t]


class EvidenceNormalizer:
    """
    Builds Evidence from ResolveOptions.

    Example:
        normalizer = EvidenceNormalizer()
        evidence = normalizer.normalize(
            ResolveOptions(context='classification', file_name='Re_ Deal Update.eml'),
            vocabulary=catalog.signal_vocabulary,
        )
        # evidence.signals includes 'eml-extension', 're', 'deal', 'update'
    """

    def __init__(self):
        """Initialize evidence normalizer."""
        self.logger = get_process_logger('resolver.normalizer')

    def parse_context(self, context: Any) -> AIContext:
        """
        Validate the AI context tag.

        Raises:
            UnknownContext: If the value is not an enumerated context
        """
        if isinstance(context, AIContext):
            return context
        try:
            return AIContext(context)
        except ValueError:
            raise UnknownContext(context) from None

    def parse_output_format(self, value: Any) -> OutputFormat:
        """
        Validate the output-shape selector (None means full).

        Raises:
            InvalidEvidence: If the value is not a known format
        """
        if value is None:
            return OutputFormat.FULL
        if isinstance(value, OutputFormat):
            return value
        try:
            return OutputFormat(value)
        except ValueError:
            raise InvalidEvidence(f"Unknown output format: {value!r}") from None

    def parse_max_results(self, value: Any, default: int = DEFAULT_MAX_RESULTS) -> int:
        """Result cap; None takes the default, negatives clamp to 0."""
        if value is None:
            return default
        if isinstance(value, bool):
            raise InvalidEvidence(f"Invalid max_results: {value!r}")
        try:
            cap = int(value)
        except (TypeError, ValueError):
            raise InvalidEvidence(f"Invalid max_results: {value!r}") from None
        return max(cap, 0)

    def normalize(
        self,
        options: ResolveOptions,
        vocabulary: Iterable[str] = (),
        default_max_results: int = DEFAULT_MAX_RESULTS
    ) -> Evidence:
        """
        Normalize raw call parameters.

        Args:
            options: Raw call parameters
            vocabulary: Signal keys the catalog knows, used for derivation
            default_max_results: Cap used when options give none

        Returns:
            Evidence

        Raises:
            UnknownContext: If the context tag is not enumerated
            InvalidEvidence: If there is nothing to match against
        """
        context = self.parse_context(options.context)
        output_format = self.parse_output_format(options.output_format)
        max_results = self.parse_max_results(options.max_results, default_max_results)

        file_name = _clean(options.file_name)
        text_sample = _clean(options.text_sample)
        document_type = _clean(options.document_type)
        category = _clean(options.category)
        signals = self._clean_signals(options.signals)

        if not (file_name or text_sample or signals or document_type or category):
            raise InvalidEvidence(
                "Evidence has no filename, text sample, signals, "
                "document type or category"
            )

        normalized_file_name = file_name.lower() if file_name else ''
        normalized_text = text_sample.lower() if text_sample else ''

        # Derived signals are added to the caller's, never replaced by them
        derived = self.derive_signals(normalized_file_name, normalized_text, vocabulary)
        signals_derived = bool(derived - signals)
        if signals_derived:
            self.logger.debug(f"Derived {len(derived)} signals: {sorted(derived)}")
        signals |= derived

        return Evidence(
            context=context,
            signals=frozenset(signals),
            signals_derived=signals_derived,
            document_type=document_type,
            category=category,
            file_name=file_name,
            text_sample=text_sample,
            normalized_file_name=normalized_file_name,
            normalized_text=normalized_text,
            max_results=max_results,
            output_format=output_format,
        )

    def derive_signals(
        self,
        file_name: str,
        text: str,
        vocabulary: Iterable[str] = ()
    ) -> set[str]:
        """
        Derive a best-effort signal set from filename and text.

        Produces:
        - filename tokens of at least two characters
        - '<ext>-extension' for the filename extension
        - every vocabulary key whose phrase form ('policy-wording' ->
          'policy wording') occurs as whole words in the filename or text

        Args:
            file_name: Normalized filename
            text: Normalized text sample
            vocabulary: Known signal keys

        Returns:
            Set of signal keys
        """
        signals = set()

        name_tokens = tokenize(file_name)
        signals.update(t for t in name_tokens if len(t) >= MIN_SIGNAL_TOKEN_LENGTH)

        extension = _extension(file_name)
        if extension:
            signals.add(f"{extension}{EXTENSION_SIGNAL_SUFFIX}")

        haystacks = [
            f" {' '.join(tokens)} "
            for tokens in (name_tokens, tokenize(text))
            if tokens
        ]
        if haystacks:
            for key in vocabulary:
                phrase = ' '.join(tokenize(key))
                if not phrase:
                    continue
                needle = f" {phrase} "
                if any(needle in haystack for haystack in haystacks):
                    signals.add(key.lower())

        return signals

    def _clean_signals(self, signals: Optional[Iterable[str]]) -> set[str]:
        """Lower-case and strip caller signals, dropping blanks."""
        if not signals:
            return set()
        cleaned = set()
        for signal in signals:
            if signal is None:
                continue
            value = str(signal).strip().lower()
            if value:
                cleaned.add(value)
        return cleaned


def _clean(value: Optional[str]) -> Optional[str]:
    """Strip a string; blank becomes None."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _extension(file_name: str) -> Optional[str]:
    suffix = PurePath(file_name).suffix.lstrip('.') if file_name else ''
    if suffix and suffix.isalnum():
        return suffix
    return None


__all__ = ['EvidenceNormalizer', 'tokenize']
