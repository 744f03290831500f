# Path: docref/core/logger/ipo_logging.py
"""
IPO-Aware Logging for docref

Input-Process-Output separated logging for reference resolution.

This module sets up logging with separate files for:
- INPUT layer (reference loader, overlay merge)
- PROCESS layer (normalizer, matcher, scorer, ranker, cache)
- OUTPUT layer (prompt formatter)
- Full activity (everything combined)

When no log directory is given only the console handler is installed,
so the engine can be embedded in a host process without touching disk.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


LOG_FORMAT = '[%(asctime)s] [%(levelname)s] %(name)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
CONSOLE_FORMAT = '[%(levelname)s] %(name)s - %(message)s'

LAYER_FILES = {
    'input': 'input_activity.log',
    'process': 'process_activity.log',
    'output': 'output_activity.log',
}


class IPOFilter(logging.Filter):
    """Filter logs by IPO layer prefix."""

    def __init__(self, layer: str):
        """
        Initialize filter for specific IPO layer.

        Args:
            layer: 'input', 'process', or 'output'
        """
        super().__init__()
        self.layer = layer

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter records by logger name prefix."""
        return record.name.startswith(self.layer)


def setup_ipo_logging(
    log_dir: Optional[Path] = None,
    log_level: str = 'INFO',
    console_output: bool = True
) -> None:
    """
    Set up IPO-aware logging for docref.

    Creates separate log files (when log_dir is given) for:
    - input_activity.log (INPUT layer)
    - process_activity.log (PROCESS/resolution layer)
    - output_activity.log (OUTPUT layer)
    - full_activity.log (all activities combined)

    Args:
        log_dir: Directory for log files, or None for console only
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_output: Whether to also output to console

    Example:
        setup_ipo_logging(
            log_dir=Path('/var/log/docref'),
            log_level='INFO',
            console_output=True
        )
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    # Clear any existing handlers
    root_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        full_handler = logging.FileHandler(log_dir / 'full_activity.log')
        full_handler.setLevel(logging.DEBUG)
        full_handler.setFormatter(formatter)
        root_logger.addHandler(full_handler)

        for layer, file_name in LAYER_FILES.items():
            handler = logging.FileHandler(log_dir / file_name)
            handler.setLevel(logging.DEBUG)
            handler.setFormatter(formatter)
            handler.addFilter(IPOFilter(layer))
            root_logger.addHandler(handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(getattr(logging, log_level.upper()))
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        root_logger.addHandler(console_handler)


def get_input_logger(name: str) -> logging.Logger:
    """
    Get logger for INPUT layer.

    Args:
        name: Logger name (e.g., 'reference_loader')

    Returns:
        Logger configured for INPUT layer

    Example:
        logger = get_input_logger('reference_loader')
        logger.info("Loading reference definitions")
    """
    return logging.getLogger(f'input.{name}')


def get_process_logger(name: str) -> logging.Logger:
    """
    Get logger for PROCESS layer (resolution engine).

    Args:
        name: Logger name (e.g., 'resolver.coordinator')

    Returns:
        Logger configured for PROCESS layer
    """
    return logging.getLogger(f'process.{name}')


def get_output_logger(name: str) -> logging.Logger:
    """
    Get logger for OUTPUT layer.

    Args:
        name: Logger name (e.g., 'prompt_formatter')

    Returns:
        Logger configured for OUTPUT layer
    """
    return logging.getLogger(f'output.{name}')


__all__ = [
    'IPOFilter',
    'setup_ipo_logging',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]
