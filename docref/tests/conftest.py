# Path: docref/tests/conftest.py
"""
Pytest Configuration and Shared Fixtures for docref

Provides common test fixtures used across all test modules.
"""

import logging
import os
import sys
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

# Make tests/fixtures importable as 'fixtures'
TESTS_ROOT = Path(__file__).parent
sys.path.insert(0, str(TESTS_ROOT))

from fixtures.sample_references import (  # noqa: E402
    SAMPLE_CATALOG,
    sample_references,
    write_reference_yaml,
)

from docref.process.resolver import ReferenceCatalog, ReferenceResolver  # noqa: E402


# ==============================================================================
# ENVIRONMENT FIXTURES
# ==============================================================================

@pytest.fixture
def mock_env_vars(temp_dir):
    """Provide mock environment variables for testing."""
    env_vars = {
        'DOCREF_ENVIRONMENT': 'test',
        'DOCREF_DEBUG': 'true',
        'DOCREF_LOG_LEVEL': 'DEBUG',
        'DOCREF_LOG_CONSOLE': 'false',
        'DOCREF_ENABLE_CACHING': 'true',
        'DOCREF_CACHE_MAX_ENTRIES': '64',
        'DOCREF_DEFAULT_MAX_RESULTS': '5',
        'DOCREF_STRICT_SIGNAL_VALIDATION': 'false',
        'DOCREF_DIAGNOSTICS': 'true',
        'DOCREF_LOG_DIR': str(temp_dir / 'logs'),
    }

    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def reset_singletons():
    """Reset any singleton instances between tests."""
    from docref.config_loader import ConfigLoader
    ConfigLoader._instance = None
    ConfigLoader._initialized = False

    yield

    ConfigLoader._instance = None
    ConfigLoader._initialized = False


@pytest.fixture
def capture_logs():
    """Capture all log records emitted during a test."""
    records = []

    class _ListHandler(logging.Handler):
        def emit(self, record):
            records.append(record)

    handler = _ListHandler(level=logging.DEBUG)
    root = logging.getLogger()
    previous_level = root.level
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)

    yield records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# ==============================================================================
# CATALOG FIXTURES
# ==============================================================================

@pytest.fixture
def references():
    """The synthetic reference list."""
    return sample_references()


@pytest.fixture
def catalog(references):
    """An immutable snapshot of the synthetic catalog."""
    return ReferenceCatalog(references)


@pytest.fixture
def resolver(catalog):
    """A resolver with the synthetic catalog published."""
    return ReferenceResolver(catalog=catalog)


@pytest.fixture
def dictionary_dir(temp_dir):
    """A dictionary directory holding the synthetic catalog as YAML."""
    root = temp_dir / 'dictionary'
    for data in SAMPLE_CATALOG:
        folder = root / 'references' / data['category'].lower().replace(' ', '_')
        write_reference_yaml(folder, data)
    return root
