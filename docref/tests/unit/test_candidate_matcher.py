# Path: docref/tests/unit/test_candidate_matcher.py
"""
Unit Tests for CandidateMatcher

Tests findings collection and context applicability.
"""

import pytest

from docref.constants import AIContext
from docref.process.resolver.engine import CandidateMatcher
from docref.process.resolver.models import Evidence, compile_reference

from fixtures.sample_references import (
    ALPHA_POLICY,
    ALPHA_CERTIFICATE,
    DELTA_NOTES,
    GAMMA_ARCHIVED,
    make_reference,
)


@pytest.fixture
def matcher():
    return CandidateMatcher()


def _evidence(**kwargs) -> Evidence:
    kwargs.setdefault('context', AIContext.CLASSIFICATION)
    kwargs['signals'] = frozenset(kwargs.get('signals', ()))
    return Evidence(**kwargs)


class TestApplicability:
    """Test which references take part in a call."""

    def test_context_not_served(self, matcher):
        """A reference that does not serve the context yields no findings."""
        compiled = compile_reference(make_reference(DELTA_NOTES))

        assert matcher.match(compiled, _evidence(normalized_text='minutes')) is None

    def test_context_served(self, matcher):
        """A reference serving the context yields findings."""
        compiled = compile_reference(make_reference(DELTA_NOTES))
        findings = matcher.match(compiled, _evidence(
            context=AIContext.MEETING, normalized_text='minutes of the meeting',
        ))

        assert findings is not None
        assert findings.keyword_hits == ['minutes']

    def test_inactive_reference(self, matcher):
        """Inactive references are never applicable."""
        compiled = compile_reference(make_reference(GAMMA_ARCHIVED))

        assert matcher.is_applicable(compiled, _evidence()) is False


class TestFindings:
    """Test collected findings."""

    def test_all_indicator_kinds_collected(self, matcher):
        """Findings should gather every evaluator's hits."""
        compiled = compile_reference(make_reference(ALPHA_POLICY))
        findings = matcher.match(compiled, _evidence(
            signals={'policy-wording'},
            normalized_file_name='policy_wording.pdf',
            normalized_text='exclusions',
        ))

        assert {h.value for h in findings.tag_hits} == {'policy-wording', 'classification'}
        assert findings.keyword_hits == ['exclusions']
        assert findings.filename_hits == ['policy[_\\-\\s]?wording']
        assert findings.exclude_hits == []
        assert [h.rule.condition for h in findings.fired_rules] == ['Policy wording present']
        assert findings.has_evidence is True

    def test_direct_type_match_is_exact(self, matcher):
        """Direct type match compares the display name exactly."""
        compiled = compile_reference(make_reference(ALPHA_CERTIFICATE))

        exact = matcher.match(compiled, _evidence(document_type='Alpha Certificate'))
        lower = matcher.match(compiled, _evidence(document_type='alpha certificate'))

        assert exact.direct_type_match is True
        assert lower.direct_type_match is False

    def test_category_match(self, matcher):
        """Category match compares the category name."""
        compiled = compile_reference(make_reference(ALPHA_CERTIFICATE))
        findings = matcher.match(compiled, _evidence(category='Insurance'))

        assert findings.category_match is True
        assert findings.has_evidence is True

    def test_context_tag_alone_is_not_evidence(self, matcher):
        """A context-tag hit on its own does not make a candidate."""
        compiled = compile_reference(make_reference(ALPHA_POLICY))
        findings = matcher.match(compiled, _evidence(signals={'unrelated'}))

        assert [h.via for h in findings.tag_hits] == ['context']
        assert findings.has_evidence is False

    def test_match_reasons(self, matcher):
        """Match reasons should describe what fired."""
        compiled = compile_reference(make_reference(ALPHA_POLICY))
        findings = matcher.match(compiled, _evidence(
            signals={'policy-wording'},
            normalized_text='exclusions',
        ))

        reasons = findings.match_reasons()

        assert 'signal tag matched: policy-wording (via signal)' in reasons
        assert 'rule fired (require, priority 9): Policy wording present' in reasons
        assert 'keyword hit: exclusions' in reasons
