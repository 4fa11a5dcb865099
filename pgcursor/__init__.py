"""
pgcursor - fluent, deferred SELECT queries over PostgreSQL.

Describe a selection with chained calls and get rows back without writing
SQL text or parameter lists by hand::

    from pgcursor import open_database

    db = open_database(instrumentation=print)
    adults = db.select('people').where({'age': '>=18'}).order('name').execute()
    total = db.select('people').count().execute()
    names = await db.select('people').where({'name': 'A*'}).col('name')
    db.close()

Connection settings default to the POSTGRES_* environment variables (see
``pgcursor.core.config``).
"""

__version__ = "0.1.0"
__all__ = [
    'open_database',
    'Database',
    'Cursor',
    'CompiledQuery',
    'RawResult',
    'ColumnDescriptor',
    'Shape',
    'ShapeMode',
    'where_builder',
    'TranslationError',
    'CursorError',
    'CursorConsumedError',
    'EmptyResultError',
    'QueryInstrumentation',
    'LoggingInstrumentation',
    'QueryMetricsCollector',
]

from pgcursor.logs.query_monitor import (
    LoggingInstrumentation,
    QueryInstrumentation,
    QueryMetricsCollector,
)
from pgcursor.models.results import (
    ColumnDescriptor,
    CompiledQuery,
    RawResult,
    Shape,
    ShapeMode,
)
from pgcursor.sql.conditions import TranslationError, where_builder
from pgcursor.sql.cursor import Cursor, CursorConsumedError, CursorError, EmptyResultError
from pgcursor.utils.database_utils import Database, create_sqlalchemy_engine


def open_database(instrumentation=None, **engine_kwargs) -> Database:
    """Create a Database over a new pooled engine.

    Args:
        instrumentation: None, a QueryInstrumentation or a logger-style callable
        **engine_kwargs: Passed to create_sqlalchemy_engine (host, port, user,
            password, database, echo, pool_size, max_overflow)

    Returns:
        Database ready to hand out cursors
    """
    return Database(create_sqlalchemy_engine(**engine_kwargs), instrumentation=instrumentation)
