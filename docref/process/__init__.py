# Path: docref/process/__init__.py
"""
Process Layer for docref

The PROCESS layer holds the reference resolution engine:
- resolver/ - Evidence normalization, matching, scoring, ranking, caching

All components follow the IPO pattern:
- Read from INPUT layer (reference loader)
- Process data (match, score, rank)
- Prepare for OUTPUT layer (prompt formatter)
"""

from .resolver import ReferenceResolver, ReferenceLoader, ReferenceCatalog

__all__ = [
    'ReferenceResolver',
    'ReferenceLoader',
    'ReferenceCatalog',
]
