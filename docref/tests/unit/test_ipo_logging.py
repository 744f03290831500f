# Path: docref/tests/unit/test_ipo_logging.py
"""
Unit Tests for IPO Logging

Tests layer loggers and the per-layer log files.
"""

import logging
import os
from unittest.mock import patch

import pytest

from docref.core.logger import (
    setup_ipo_logging,
    get_input_logger,
    get_process_logger,
    get_output_logger,
)
from docref.core.logger.ipo_logging import IPOFilter
from docref.process.resolver import ReferenceResolver


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way the test found it."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level

    yield root

    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLayerLoggers:
    """Test logger naming."""

    def test_layer_prefixes(self):
        """Each layer prefixes its logger names."""
        assert get_input_logger('reference_loader').name == 'input.reference_loader'
        assert get_process_logger('resolver.cache').name == 'process.resolver.cache'
        assert get_output_logger('prompt_formatter').name == 'output.prompt_formatter'

    def test_filter(self):
        """IPOFilter passes only its own layer."""
        layer_filter = IPOFilter('input')
        record = logging.LogRecord('input.x', logging.INFO, __file__, 1, 'm', None, None)
        other = logging.LogRecord('process.x', logging.INFO, __file__, 1, 'm', None, None)

        assert layer_filter.filter(record) is True
        assert layer_filter.filter(other) is False


class TestSetup:
    """Test handler setup."""

    def test_console_only(self, restore_root_logger):
        """Without a log directory only the console handler is installed."""
        setup_ipo_logging(log_dir=None, log_level='WARNING', console_output=True)

        assert len(restore_root_logger.handlers) == 1
        assert restore_root_logger.level == logging.WARNING

    def test_layer_files(self, restore_root_logger, temp_dir):
        """Each layer writes to its own file and everything to the full log."""
        log_dir = temp_dir / 'logs'
        setup_ipo_logging(log_dir=log_dir, log_level='DEBUG', console_output=False)

        get_input_logger('reference_loader').info('loaded references')
        get_process_logger('resolver.coordinator').info('resolved evidence')
        for handler in restore_root_logger.handlers:
            handler.flush()

        assert 'loaded references' in (log_dir / 'input_activity.log').read_text()
        assert 'resolved evidence' not in (log_dir / 'input_activity.log').read_text()
        assert 'resolved evidence' in (log_dir / 'process_activity.log').read_text()
        full = (log_dir / 'full_activity.log').read_text()
        assert 'loaded references' in full and 'resolved evidence' in full

    def test_resolver_from_config_installs_logging(
        self, restore_root_logger, mock_env_vars, reset_singletons, dictionary_dir, temp_dir
    ):
        """from_config can install handlers from the log settings."""
        with patch.dict(os.environ, {'DOCREF_DICTIONARY_DIR': str(dictionary_dir)}):
            ReferenceResolver.from_config(setup_logging=True)
        for handler in restore_root_logger.handlers:
            handler.flush()

        input_log = (temp_dir / 'logs' / 'input_activity.log').read_text()
        assert 'Loaded 5 reference definitions' in input_log
        assert restore_root_logger.level == logging.DEBUG

    def test_debug_flag_forces_debug_level(
        self, restore_root_logger, mock_env_vars, reset_singletons, dictionary_dir
    ):
        """DOCREF_DEBUG overrides a quieter configured log level."""
        env = {'DOCREF_DICTIONARY_DIR': str(dictionary_dir), 'DOCREF_LOG_LEVEL': 'WARNING'}
        with patch.dict(os.environ, env):
            ReferenceResolver.from_config(setup_logging=True)

        assert restore_root_logger.level == logging.DEBUG

    def test_configured_level_without_debug(
        self, restore_root_logger, mock_env_vars, reset_singletons, dictionary_dir
    ):
        """Without DOCREF_DEBUG the configured level is used."""
        env = {
            'DOCREF_DICTIONARY_DIR': str(dictionary_dir),
            'DOCREF_LOG_LEVEL': 'WARNING',
            'DOCREF_DEBUG': 'false',
        }
        with patch.dict(os.environ, env):
            ReferenceResolver.from_config(setup_logging=True)

        assert restore_root_logger.level == logging.WARNING
