"""
===========================================
SQL construction for pgcursor.
===========================================

    - conditions.py: Condition translation (mapping -> WHERE clause + args)
    - cursor.py: Fluent, deferred SELECT cursor and its result shapes

All SQL generation is pure; only ``Cursor.execute()`` reaches the database,
through the execution service the cursor was created with.

Example:
    >>> from pgcursor.sql.conditions import where_builder
    >>> where_builder({'status': 'active', 'age': '>=21'})
    ('status = $1 AND age >= $2', ['active', '21'])
"""

__all__ = [
    'where_builder', 'classify_value', 'placeholder_for_paramstyle', 'TranslationError',
    'Cursor', 'CursorError', 'CursorConsumedError', 'EmptyResultError'
]

from .conditions import (
    TranslationError,
    classify_value,
    placeholder_for_paramstyle,
    where_builder,
)
from .cursor import Cursor, CursorConsumedError, CursorError, EmptyResultError
