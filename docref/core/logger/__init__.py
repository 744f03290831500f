# Path: docref/core/logger/__init__.py
"""
docref Logger Package

IPO-aware logging for the reference resolution engine.

Provides separate log streams for:
- INPUT layer (catalog loading)
- PROCESS layer (evidence normalization, matching, scoring, ranking)
- OUTPUT layer (prompt formatting)
"""

from .ipo_logging import (
    setup_ipo_logging,
    get_input_logger,
    get_process_logger,
    get_output_logger,
)

__all__ = [
    'setup_ipo_logging',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]
