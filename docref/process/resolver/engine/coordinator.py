# Path: docref/process/resolver/engine/coordinator.py
"""
Reference Resolver

The main orchestrator for reference resolution.
This is the primary entry point for the resolution engine.

Data flows one way:
    Catalog + Evidence -> Matcher -> Scorer -> Ranker -> cached Result

The catalog is an immutable snapshot published by a single attribute
swap, so concurrent resolutions never see a half-updated catalog and
need no lock to read it.
"""

import threading
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from docref.config_loader import ConfigLoader
from docref.constants import (
    AIContext,
    OutputFormat,
    DEFAULT_MAX_RESULTS,
    BATCH_CANDIDATE_MULTIPLIER,
)
from docref.core.logger.ipo_logging import get_process_logger, setup_ipo_logging
from docref.output.prompt_formatter import PromptFormatter

from ..exceptions import CatalogUnavailable, InvalidEvidence
from ..models.evidence import BatchDocument, Evidence, ResolveOptions
from ..models.reference_definition import ReferenceDefinition
from ..models.resolution_result import ResolvedCandidate, ResolvedResult
from ..scoring import ScoreAggregator, Ranker, Tiebreaker
from .candidate_matcher import CandidateMatcher
from .evidence_normalizer import EvidenceNormalizer
from .reference_catalog import ReferenceCatalog
from .reference_loader import ReferenceLoader
from .resolution_cache import ResolutionCache


# Per-reference outcomes recorded in match diagnostics
OUTCOME_CANDIDATE = 'candidate'
OUTCOME_NOT_APPLICABLE = 'not_applicable'
OUTCOME_DISABLED = 'disabled'


class ReferenceResolver:
    """
    Main orchestrator for reference resolution.

    The ReferenceResolver:
    1. Holds the published catalog snapshot and its generation
    2. Normalizes raw call parameters into Evidence
    3. Matches and scores every applicable reference
    4. Ranks, truncates and optionally renders prompt text
    5. Memoizes results per catalog generation

    Example:
        resolver = ReferenceResolver.from_config()

        result = resolver.resolve(
            context='classification',
            file_name='insurance_policy_wording_v2.pdf',
            text_sample='... exclusions ... policy schedule ...',
        )

        result.top.file_type        # 'Insurance Policy'
        result.filing_target        # FilingTarget(target_folder=..., ...)
    """

    def __init__(
        self,
        catalog: Optional[ReferenceCatalog] = None,
        cache: Optional[ResolutionCache] = None,
        formatter: Optional[PromptFormatter] = None,
        enable_caching: bool = True,
        default_max_results: int = DEFAULT_MAX_RESULTS,
        diagnostics: bool = True
    ):
        """
        Initialize resolver.

        Args:
            catalog: Initial catalog snapshot (can be published later)
            cache: Result cache (a default-sized one is created if omitted)
            formatter: Prompt formatter for compact/minimal output
            enable_caching: Whether to memoize results
            default_max_results: Result cap when a call gives none
            diagnostics: Record and log per-reference outcomes
        """
        self.logger = get_process_logger('resolver.coordinator')
        self.diagnostics = diagnostics
        self.enable_caching = enable_caching
        self.default_max_results = default_max_results

        self.cache = cache if cache is not None else ResolutionCache()
        self.formatter = formatter if formatter is not None else PromptFormatter()

        self.normalizer = EvidenceNormalizer()
        self.matcher = CandidateMatcher()
        self.score_aggregator = ScoreAggregator()
        self.ranker = Ranker(Tiebreaker())

        # (catalog, generation), replaced as one value
        self._snapshot: Optional[tuple[ReferenceCatalog, int]] = None
        self._publish_lock = threading.Lock()
        self._match_diagnostics: dict[str, dict] = {}

        self._loader: Optional[ReferenceLoader] = None
        self._overlay_path: Optional[Path] = None
        self._strict_signals = False

        if catalog is not None:
            self.publish_catalog(catalog)

    @classmethod
    def from_config(
        cls,
        config: Optional[ConfigLoader] = None,
        setup_logging: bool = False
    ) -> 'ReferenceResolver':
        """
        Build a resolver from configuration.

        Loads the dictionary, merges the user overlay if configured,
        and publishes the snapshot.

        Args:
            config: Configuration (defaults to the ConfigLoader singleton)
            setup_logging: Install IPO log handlers from the log_* settings

        Returns:
            ReferenceResolver with a published catalog
        """
        config = config or ConfigLoader()

        if setup_logging:
            setup_ipo_logging(
                log_dir=config.get('log_dir'),
                log_level='DEBUG' if config.get('debug') else config.get('log_level'),
                console_output=config.get('log_console'),
            )

        cache = ResolutionCache(max_entries=config.get('cache_max_entries'))
        resolver = cls(
            cache=cache,
            enable_caching=config.get('enable_caching'),
            default_max_results=config.get('default_max_results'),
            diagnostics=config.get('diagnostics'),
        )

        resolver._loader = ReferenceLoader(config.get('dictionary_dir'))
        resolver._overlay_path = config.get('user_references_dir')
        resolver._strict_signals = config.get('strict_signal_validation')
        resolver.reload()
        return resolver

    # =========================================================================
    # CATALOG
    # =========================================================================

    @property
    def catalog(self) -> Optional[ReferenceCatalog]:
        """Currently published snapshot, or None."""
        snapshot = self._snapshot
        return snapshot[0] if snapshot else None

    @property
    def generation(self) -> int:
        """Publish counter of the current snapshot (0 before any publish)."""
        snapshot = self._snapshot
        return snapshot[1] if snapshot else 0

    def publish_catalog(self, catalog: ReferenceCatalog) -> int:
        """
        Publish a new catalog snapshot.

        The snapshot swap is atomic; every cached result is dropped.

        Args:
            catalog: New immutable snapshot

        Returns:
            Generation number of the published snapshot
        """
        with self._publish_lock:
            generation = self.generation + 1
            self._snapshot = (catalog, generation)
            self.cache.invalidate()

        self.logger.info(
            f"Published catalog generation {generation}: {len(catalog)} references, "
            f"content version {catalog.content_version}"
        )
        return generation

    def reload(self, loader: Optional[ReferenceLoader] = None) -> int:
        """
        Reload the catalog from its loader and publish it.

        Args:
            loader: Loader to use (defaults to the configured one)

        Returns:
            Generation number of the published snapshot
        """
        if loader is not None:
            self._loader = loader
        if self._loader is None:
            self._loader = ReferenceLoader()

        catalog = self._loader.load_catalog(
            overlay_path=self._overlay_path,
            strict_signals=self._strict_signals,
            use_cache=False,
        )
        return self.publish_catalog(catalog)

    def get_reference(self, reference_id: str) -> Optional[ReferenceDefinition]:
        """Get a reference from the current snapshot."""
        catalog = self.catalog
        return catalog.get(reference_id) if catalog else None

    def cache_info(self) -> dict:
        """Cache statistics plus the current generation."""
        info = self.cache.info()
        info['enabled'] = self.enable_caching
        info['generation'] = self.generation
        return info

    def get_match_diagnostics(self) -> dict[str, dict]:
        """Per-reference outcome of the most recent computed resolution."""
        return dict(self._match_diagnostics)

    # =========================================================================
    # RESOLUTION
    # =========================================================================

    def resolve(self, options: Optional[ResolveOptions] = None, **kwargs: Any) -> ResolvedResult:
        """
        Resolve the references that best describe a document.

        Accepts a ResolveOptions value or its fields as keyword arguments.

        Returns:
            ResolvedResult (empty when nothing matches)

        Raises:
            UnknownContext: Context is not an enumerated value
            CatalogUnavailable: No catalog has been published
            InvalidEvidence: Nothing to match against
        """
        if options is None:
            options = ResolveOptions(**kwargs)
        elif kwargs:
            raise TypeError("Pass either ResolveOptions or keyword arguments, not both")

        # Context is checked before anything touches the catalog
        self.normalizer.parse_context(options.context)

        snapshot = self._snapshot
        if snapshot is None:
            raise CatalogUnavailable("No reference catalog has been published")
        catalog, generation = snapshot

        evidence = self.normalizer.normalize(
            options,
            vocabulary=catalog.signal_vocabulary,
            default_max_results=self.default_max_results,
        )

        if self.enable_caching:
            cached = self.cache.get(evidence.cache_key(), generation)
            if cached is not None:
                self.logger.debug(f"[CACHE HIT] {evidence.context.value}")
                return cached

        result = self._compute(catalog, generation, evidence)

        if self.enable_caching:
            self.cache.put(evidence.cache_key(), generation, result)

        return result

    def resolve_batch(
        self,
        documents: Iterable[Union[BatchDocument, dict]],
        context: Union[AIContext, str],
        max_results: Optional[int] = None,
        output_format: Union[OutputFormat, str] = OutputFormat.FULL
    ) -> ResolvedResult:
        """
        Resolve references for several documents at once.

        Each document is resolved on its own with twice the result cap.
        Candidates are merged by reference id, keeping the highest score
        and the union of match reasons, then ranked and truncated.

        Args:
            documents: BatchDocument values (or dicts of their fields)
            context: Requesting AI context
            max_results: Result cap for the merged result
            output_format: Output shape of the merged result

        Returns:
            ResolvedResult; cache_hit is True only if every document
            was served from cache
        """
        context = self.normalizer.parse_context(context)
        output_format = self.normalizer.parse_output_format(output_format)
        cap = self.normalizer.parse_max_results(max_results, self.default_max_results)

        documents = [
            d if isinstance(d, BatchDocument) else BatchDocument(**d)
            for d in documents
        ]
        if not documents:
            raise InvalidEvidence("Batch contains no documents")

        merged: dict[str, ResolvedCandidate] = {}
        all_cached = True
        generation = 0

        for document in documents:
            result = self.resolve(ResolveOptions(
                context=context,
                signals=document.signals,
                text_sample=document.text_sample,
                file_name=document.file_name,
                max_results=cap * BATCH_CANDIDATE_MULTIPLIER,
            ))
            all_cached = all_cached and result.cache_hit
            generation = result.catalog_generation

            for candidate in result.scores:
                existing = merged.get(candidate.reference_id)
                if existing is None:
                    merged[candidate.reference_id] = ResolvedCandidate(
                        reference=candidate.reference,
                        score=candidate.score,
                        match_reasons=list(candidate.match_reasons),
                        primary_rule_count=candidate.primary_rule_count,
                        has_type_tag_match=candidate.has_type_tag_match,
                    )
                    continue

                existing.score = max(existing.score, candidate.score)
                existing.primary_rule_count = max(
                    existing.primary_rule_count, candidate.primary_rule_count
                )
                existing.has_type_tag_match = (
                    existing.has_type_tag_match or candidate.has_type_tag_match
                )
                for reason in candidate.match_reasons:
                    if reason not in existing.match_reasons:
                        existing.match_reasons.append(reason)

        references, scores = self.ranker.rank_resolved(list(merged.values()), cap)

        self.logger.info(
            f"[BATCH] {context.value}: {len(documents)} documents, "
            f"{len(scores)} merged candidates, {len(references)} returned"
        )

        return ResolvedResult(
            references=references,
            scores=scores,
            cache_hit=all_cached,
            prompt_text=self._render(references, context, output_format),
            catalog_generation=generation,
        )

    def _compute(
        self,
        catalog: ReferenceCatalog,
        generation: int,
        evidence: Evidence
    ) -> ResolvedResult:
        """Run matcher, scorer and ranker over the whole snapshot."""
        diagnostics: dict[str, dict] = {}
        candidates = []
        rejected = 0
        not_applicable = 0

        if self.diagnostics:
            self.logger.debug(f"  [EVIDENCE] {evidence.to_dict()}")

        for reference_id, error in catalog.disabled_references.items():
            diagnostics[reference_id] = {'outcome': OUTCOME_DISABLED, 'detail': error}

        for compiled in catalog.compiled_references:
            findings = self.matcher.match(compiled, evidence)
            if findings is None:
                not_applicable += 1
                diagnostics[compiled.reference_id] = {'outcome': OUTCOME_NOT_APPLICABLE}
                continue

            scored = self.score_aggregator.aggregate(compiled.reference, findings)
            if scored.is_rejected:
                rejected += 1
                diagnostics[compiled.reference_id] = {
                    'outcome': scored.rejection_reason,
                    'findings': findings.to_dict(),
                }
                continue

            candidates.append(scored)
            diagnostics[compiled.reference_id] = {
                'outcome': OUTCOME_CANDIDATE,
                'score': scored.score,
                'fast_path': scored.fast_path,
                'findings': findings.to_dict(),
            }

        references, scores = self.ranker.rank(candidates, evidence.max_results)

        if self.diagnostics:
            self._match_diagnostics = diagnostics
            self.logger.info(
                f"[RESOLVE] {evidence.context.value}: "
                f"{len(candidates)} candidates, {rejected} rejected, "
                f"{not_applicable} not applicable, {len(references)} returned"
            )
            if scores:
                top = scores[0]
                self.logger.debug(f"  [TOP] {top.reference_id} (score={top.score:.2f})")

        if not scores:
            result = ResolvedResult.empty(catalog_generation=generation)
            result.prompt_text = self._render([], evidence.context, evidence.output_format)
            return result

        return ResolvedResult(
            references=references,
            scores=scores,
            cache_hit=False,
            prompt_text=self._render(references, evidence.context, evidence.output_format),
            catalog_generation=generation,
        )

    def _render(
        self,
        references: list[ReferenceDefinition],
        context: AIContext,
        output_format: OutputFormat
    ) -> Optional[str]:
        """Prompt text for non-full shapes; full has none."""
        if output_format == OutputFormat.COMPACT:
            return self.formatter.format_for_prompt(references, context)
        if output_format == OutputFormat.MINIMAL:
            return self.formatter.format_minimal(references)
        return None


__all__ = ['ReferenceResolver']
