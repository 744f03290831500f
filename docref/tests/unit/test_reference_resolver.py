# Path: docref/tests/unit/test_reference_resolver.py
"""
Unit Tests for ReferenceResolver

Tests the full resolution flow over the synthetic catalog:
- Scoring, exclusion and the require gate end to end
- Fast path, truncation and output formats
- Caching and catalog publication
- Batch resolution and diagnostics
"""

import os
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest

from docref.constants import AIContext
from docref.process.resolver import (
    ReferenceResolver,
    ReferenceCatalog,
    ReferenceLoader,
    ResolveOptions,
    BatchDocument,
    InvalidEvidence,
    UnknownContext,
    CatalogUnavailable,
)

from fixtures.sample_references import BETA_EMAIL, make_reference


POLICY_FILE = 'alpha_policy_wording_v2.pdf'
POLICY_TEXT = 'Exclusions apply. Sum insured: £2,000,000'


def _policy_options(**overrides) -> ResolveOptions:
    values = {'context': 'classification', 'file_name': POLICY_FILE, 'text_sample': POLICY_TEXT}
    values.update(overrides)
    return ResolveOptions(**values)


class TestResolve:
    """Test single-document resolution."""

    def test_policy_document(self, resolver):
        """A policy wording file resolves to the policy reference only."""
        result = resolver.resolve(_policy_options())

        assert result.reference_ids() == ['alpha-policy']
        assert result.score_for('alpha-policy') == pytest.approx(71.6)
        assert result.top.file_type == 'Alpha Policy'
        assert result.filing_target.target_folder == 'Insurance'
        assert result.catalog_generation == 1

    def test_exclusion_veto(self, resolver):
        """An excluded reference never appears, even among scores."""
        result = resolver.resolve(_policy_options())

        assert result.score_for('alpha-certificate') is None

    def test_inactive_reference_never_returned(self, resolver):
        """Inactive references never take part."""
        result = resolver.resolve(context='classification', file_name='policy.pdf')

        assert result.score_for('gamma-archived') is None

    def test_context_enum_accepted(self, resolver):
        """AIContext values work as well as strings."""
        result = resolver.resolve(context=AIContext.FILING, file_name='Re_ Deal Update.eml')

        assert result.top.reference_id == 'beta-email'

    def test_keyword_arguments(self, resolver):
        """Options can be given as keyword arguments."""
        by_kwargs = resolver.resolve(
            context='classification', file_name=POLICY_FILE, text_sample=POLICY_TEXT,
        )

        assert by_kwargs.reference_ids() == ['alpha-policy']

    def test_options_and_kwargs_together_rejected(self, resolver):
        """Passing both forms is a usage error."""
        with pytest.raises(TypeError):
            resolver.resolve(_policy_options(), max_results=3)

    def test_empty_result(self, resolver):
        """Evidence that matches nothing gives an empty result, not an error."""
        result = resolver.resolve(context='classification', signals=['nothing-here'])

        assert result.is_empty
        assert result.scores == []
        assert result.top is None
        assert result.filing_target is None

    def test_scores_non_negative(self, resolver):
        """Every returned score is non-negative."""
        result = resolver.resolve(context='filing', file_name='Re_ Deal Update.eml')

        assert result.scores
        assert all(c.score >= 0 for c in result.scores)

    def test_deterministic(self, catalog):
        """Identical evidence over one snapshot gives identical output."""
        first = ReferenceResolver(catalog=catalog, enable_caching=False)
        second = ReferenceResolver(catalog=catalog, enable_caching=False)

        assert first.resolve(_policy_options()).to_dict() == second.resolve(_policy_options()).to_dict()

    def test_more_signals_never_lower_score(self, resolver):
        """Adding a signal that fires a rule cannot lower the score."""
        base = resolver.resolve(
            context='classification', signals=['policy-wording'], text_sample='exclusions',
        )
        boosted = resolver.resolve(
            context='classification',
            signals=['policy-wording', 'insurance-schedule'],
            text_sample='exclusions',
        )

        assert base.score_for('alpha-policy') == pytest.approx(35.6)
        assert boosted.score_for('alpha-policy') == pytest.approx(46.28)

    def test_first_supplied_signal_keeps_derived_ones(self, resolver):
        """Supplying a signal cannot drop a candidate found by derived signals."""
        derived_only = resolver.resolve(context='classification', file_name='Re_ Deal Update.eml')
        with_signal = resolver.resolve(
            context='classification', file_name='Re_ Deal Update.eml', signals=['email-headers'],
        )

        before = {c.reference_id: c.score for c in derived_only.scores}
        after = {c.reference_id: c.score for c in with_signal.scores}
        assert before == {'beta-email': pytest.approx(45.0)}
        assert after['beta-email'] == pytest.approx(49.0)
        for reference_id, score in before.items():
            assert after[reference_id] >= score


class TestFastPath:
    """Test explicit document types."""

    def test_named_type_placed_first(self, resolver):
        """The named type leads even with a lower score."""
        result = resolver.resolve(
            context='classification',
            document_type='Alpha Certificate',
            file_name='policy_schedule.eml',
        )

        assert result.reference_ids() == ['alpha-certificate', 'beta-email']
        assert result.score_for('alpha-certificate') == pytest.approx(40.0)
        assert result.score_for('beta-email') == pytest.approx(45.0)
        assert result.score_for('alpha-policy') is None

    def test_exclusion_beats_fast_path(self, resolver):
        """An exclude pattern vetoes even the named type."""
        result = resolver.resolve(
            context='classification',
            document_type='Alpha Certificate',
            file_name='policy_wording.pdf',
        )

        assert 'alpha-certificate' not in result.reference_ids()


class TestMaxResults:
    """Test truncation."""

    def test_max_results_caps_references(self, resolver):
        """Only the top N references are returned; scores stay complete."""
        result = resolver.resolve(
            context='classification',
            document_type='Alpha Certificate',
            file_name='policy_schedule.eml',
            max_results=1,
        )

        assert result.reference_ids() == ['alpha-certificate']
        assert len(result.scores) == 2

    def test_max_results_zero(self, resolver):
        """A zero cap returns no references but still reports scores."""
        result = resolver.resolve(_policy_options(max_results=0))

        assert result.references == []
        assert len(result.scores) == 1

    def test_default_cap_from_resolver(self, catalog):
        """Calls without a cap use the resolver default."""
        resolver = ReferenceResolver(catalog=catalog, default_max_results=1)
        result = resolver.resolve(
            context='classification',
            document_type='Alpha Certificate',
            file_name='policy_schedule.eml',
        )

        assert len(result.references) == 1


class TestErrors:
    """Test error reporting."""

    def test_unknown_context_scans_nothing(self, resolver):
        """Unknown contexts fail before any reference is matched."""
        with patch.object(resolver.matcher, 'match') as mock_match:
            with pytest.raises(UnknownContext):
                resolver.resolve(context='sales', file_name=POLICY_FILE)

        mock_match.assert_not_called()

    def test_unknown_context_before_publish(self):
        """Context is validated even when no catalog exists."""
        with pytest.raises(UnknownContext):
            ReferenceResolver().resolve(context='sales', file_name=POLICY_FILE)

    def test_catalog_unavailable(self):
        """Resolving before publication fails."""
        with pytest.raises(CatalogUnavailable):
            ReferenceResolver().resolve(_policy_options())

    def test_invalid_evidence(self, resolver):
        """Evidence with nothing to match is rejected."""
        with pytest.raises(InvalidEvidence):
            resolver.resolve(context='classification')


class TestCaching:
    """Test result memoization."""

    def test_second_call_served_from_cache(self, resolver):
        """A repeated call returns the same ranking from cache."""
        first = resolver.resolve(_policy_options())
        second = resolver.resolve(_policy_options())

        assert first.cache_hit is False
        assert second.cache_hit is True
        assert second.reference_ids() == first.reference_ids()
        assert [c.score for c in second.scores] == [c.score for c in first.scores]

    def test_undecodable_text_sample(self, resolver):
        """Text decoded with surrogateescape still resolves and caches."""
        text = b'bad \xff bytes'.decode('utf-8', 'surrogateescape')

        first = resolver.resolve(context='classification', text_sample=text, file_name='x.pdf')
        second = resolver.resolve(context='classification', text_sample=text, file_name='x.pdf')

        assert first.references == []
        assert second.cache_hit is True

    def test_cache_hit_skips_matching(self, resolver):
        """A cached call does not match references again."""
        resolver.resolve(_policy_options())

        with patch.object(resolver.matcher, 'match') as mock_match:
            resolver.resolve(_policy_options())

        mock_match.assert_not_called()

    def test_mutating_result_does_not_touch_cache(self, resolver):
        """Callers cannot alter a cached ranking."""
        first = resolver.resolve(_policy_options())
        first.references.clear()

        assert resolver.resolve(_policy_options()).reference_ids() == ['alpha-policy']

    def test_caching_disabled(self, catalog):
        """With caching off every call is computed."""
        resolver = ReferenceResolver(catalog=catalog, enable_caching=False)
        resolver.resolve(_policy_options())

        assert resolver.resolve(_policy_options()).cache_hit is False
        assert resolver.cache_info()['size'] == 0
        assert resolver.cache_info()['enabled'] is False


class TestPublication:
    """Test catalog publication and reload."""

    def test_publish_invalidates_cache(self, resolver, references):
        """A new snapshot gets a new generation and an empty cache."""
        resolver.resolve(_policy_options())

        generation = resolver.publish_catalog(ReferenceCatalog(references))
        result = resolver.resolve(_policy_options())

        assert generation == 2
        assert resolver.generation == 2
        assert result.cache_hit is False
        assert result.catalog_generation == 2
        assert resolver.cache_info()['invalidations'] == 2

    def test_new_snapshot_changes_results(self, resolver):
        """Results follow the published snapshot."""
        resolver.publish_catalog(ReferenceCatalog([make_reference(BETA_EMAIL)]))

        result = resolver.resolve(_policy_options())

        assert result.is_empty

    def test_reload_from_loader(self, dictionary_dir):
        """reload() loads and publishes the loader's catalog."""
        resolver = ReferenceResolver()

        generation = resolver.reload(ReferenceLoader(dictionary_dir))

        assert generation == 1
        assert len(resolver.catalog) == 5
        assert resolver.get_reference('beta-email').file_type == 'Email/Correspondence'

    def test_concurrent_resolution_during_publish(self, resolver, references):
        """Readers see either the old or the new snapshot, never a mix."""
        def resolve_once(_):
            return resolver.resolve(_policy_options()).catalog_generation

        with ThreadPoolExecutor(max_workers=4) as pool:
            futures = [pool.submit(resolve_once, i) for i in range(20)]
            resolver.publish_catalog(ReferenceCatalog(references))
            generations = {f.result() for f in futures}

        assert generations <= {1, 2}

    def test_from_config(self, mock_env_vars, reset_singletons, dictionary_dir):
        """from_config wires configuration into the resolver."""
        with patch.dict(os.environ, {'DOCREF_DICTIONARY_DIR': str(dictionary_dir)}):
            resolver = ReferenceResolver.from_config()

        assert resolver.default_max_results == 5
        assert resolver.cache.max_entries == 64
        assert len(resolver.catalog) == 5
        assert resolver.generation == 1


class TestOutputFormats:
    """Test prompt text rendering."""

    def test_full_has_no_prompt_text(self, resolver):
        """The full format returns structured data only."""
        assert resolver.resolve(_policy_options()).prompt_text is None

    def test_compact_prompt(self, resolver):
        """The compact format renders context-specific prompt text."""
        result = resolver.resolve(_policy_options(output_format='compact'))

        assert result.prompt_text.startswith('## Reference Library')
        assert '"Alpha Policy"' in result.prompt_text

    def test_minimal_prompt(self, resolver):
        """The minimal format lists one line per reference."""
        result = resolver.resolve(_policy_options(output_format='minimal'))

        assert result.prompt_text == '- Alpha Policy (Insurance) -> Insurance (project)'

    def test_empty_compact_prompt(self, resolver):
        """No references render as empty prompt text."""
        result = resolver.resolve(
            context='classification', signals=['nothing-here'], output_format='compact',
        )

        assert result.prompt_text == ''


class TestBatch:
    """Test batch resolution."""

    @pytest.fixture
    def documents(self):
        return [
            BatchDocument(file_name=POLICY_FILE, text_sample=POLICY_TEXT),
            {'file_name': 'Re_ Deal Update.eml'},
        ]

    def test_batch_merges_candidates(self, resolver, documents):
        """Candidates from all documents are merged and ranked."""
        result = resolver.resolve_batch(documents, context='classification')

        assert result.reference_ids() == ['alpha-policy', 'beta-email']
        assert result.score_for('alpha-policy') == pytest.approx(71.6)
        assert result.score_for('beta-email') == pytest.approx(45.0)

    def test_batch_cap(self, resolver, documents):
        """The merged result is truncated to the cap."""
        result = resolver.resolve_batch(documents, context='classification', max_results=1)

        assert result.reference_ids() == ['alpha-policy']
        assert len(result.scores) == 2

    def test_batch_keeps_highest_score(self, resolver):
        """A reference seen in several documents keeps its best score."""
        result = resolver.resolve_batch([
            {'file_name': 'Re_ Deal Update.eml'},
            {'file_name': 'Re_ Deal Update.eml', 'text_sample': 'From: a\nSubject: b'},
        ], context='filing')

        assert result.score_for('beta-email') == pytest.approx(47.0)

    def test_batch_cache_hit_only_when_all_cached(self, resolver, documents):
        """cache_hit is set only when every document came from cache."""
        first = resolver.resolve_batch(documents, context='classification')
        second = resolver.resolve_batch(documents, context='classification')

        assert first.cache_hit is False
        assert second.cache_hit is True

    def test_empty_batch(self, resolver):
        """An empty batch is invalid evidence."""
        with pytest.raises(InvalidEvidence):
            resolver.resolve_batch([], context='classification')

    def test_batch_unknown_context(self, resolver, documents):
        """Batch calls validate the context too."""
        with pytest.raises(UnknownContext):
            resolver.resolve_batch(documents, context='sales')

    def test_batch_minimal_prompt(self, resolver, documents):
        """Batch results render like single results."""
        result = resolver.resolve_batch(documents, context='classification', output_format='minimal')

        assert result.prompt_text.splitlines() == [
            '- Alpha Policy (Insurance) -> Insurance (project)',
            '- Email/Correspondence (Communications) -> Correspondence (project)',
        ]


class TestDiagnostics:
    """Test per-reference match diagnostics."""

    def test_outcomes_recorded(self, resolver):
        """Every matchable reference gets an outcome."""
        resolver.resolve(_policy_options())
        diagnostics = resolver.get_match_diagnostics()

        assert diagnostics['alpha-policy']['outcome'] == 'candidate'
        assert diagnostics['alpha-certificate']['outcome'] == 'excluded'
        assert diagnostics['beta-email']['outcome'] == 'require_gate'
        assert diagnostics['delta-notes']['outcome'] == 'not_applicable'
        assert 'gamma-archived' not in diagnostics

    def test_disabled_references_reported(self):
        """References with broken patterns are reported as disabled."""
        broken = make_reference(BETA_EMAIL, filename_patterns=['(unclosed'])
        resolver = ReferenceResolver(catalog=ReferenceCatalog([make_reference(), broken]))

        resolver.resolve(_policy_options())

        assert resolver.get_match_diagnostics()['beta-email']['outcome'] == 'disabled'

    def test_diagnostics_disabled(self, catalog):
        """With diagnostics off nothing is recorded."""
        resolver = ReferenceResolver(catalog=catalog, diagnostics=False)
        resolver.resolve(_policy_options())

        assert resolver.get_match_diagnostics() == {}

    def test_resolve_logs_summary(self, resolver, capture_logs):
        """Each computed resolution logs a one-line summary."""
        resolver.resolve(_policy_options())

        messages = [r.getMessage() for r in capture_logs if r.name == 'process.resolver.coordinator']
        assert any(m.startswith('[RESOLVE] classification: 1 candidates') for m in messages)

