"""
=================================
Value types for pgcursor.
=================================

Dataclasses exchanged between the query cursor (``pgcursor.sql``) and the
execution service (``pgcursor.utils``). Centralized here to prevent
circular imports between those packages.
"""

__all__ = [
    'CompiledQuery',
    'ColumnDescriptor',
    'RawResult',
    'Shape',
    'ShapeMode',
]

from pgcursor.models.results import (
    ColumnDescriptor,
    CompiledQuery,
    RawResult,
    Shape,
    ShapeMode,
)
