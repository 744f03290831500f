# Path: docref/process/resolver/scoring/__init__.py
"""
Scoring Components

- ScoreAggregator: Findings to score, with exclusion veto and require gate
- Tiebreaker: Deterministic candidate ordering
- Ranker: Fast path, sort, truncation and match reasons
"""

from .aggregator import (
    ScoreAggregator,
    REJECT_EXCLUDED,
    REJECT_REQUIRE_GATE,
    REJECT_NO_EVIDENCE,
)
from .tiebreaker import Tiebreaker
from .ranker import Ranker

__all__ = [
    'ScoreAggregator',
    'Tiebreaker',
    'Ranker',
    'REJECT_EXCLUDED',
    'REJECT_REQUIRE_GATE',
    'REJECT_NO_EVIDENCE',
]
