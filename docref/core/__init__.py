# Path: docref/core/__init__.py
"""
docref Core Package

Core utilities shared by the resolution engine.

Submodules:
    - logger: IPO-aware logging system
"""

from .logger import setup_ipo_logging

__all__ = [
    'setup_ipo_logging',
]
