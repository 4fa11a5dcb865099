"""
==================================================
Database access for pgcursor.
==================================================

Provides the ``Database`` execution service that cursors run against, plus
the engine and connection-string helpers it is built from. Connections come
from a pooled SQLAlchemy engine and are returned to the pool after every
query.

Key Features:
    - Connection string / engine building from config
    - Raw parameterized queries returning RawResult
    - Cursor factory (``select``)
    - Instrumentation notified before and after every query

Example:
    >>> from pgcursor.utils.database_utils import Database, create_sqlalchemy_engine
    >>>
    >>> db = Database(create_sqlalchemy_engine())
    >>> db.select('cities').where({'country': 'NL'}).col('name').execute()
    ['Amsterdam', 'Rotterdam']
    >>>
    >>> result = db.query('SELECT count(*) AS n FROM cities')
    >>> result.rows[0]['n']
    2
    >>> db.close()
"""

import logging
import time
from typing import Any, Optional, Sequence
from urllib.parse import quote_plus

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError

from pgcursor.core.config import config
from pgcursor.logs.query_monitor import as_instrumentation
from pgcursor.models.results import RawResult
from pgcursor.sql.conditions import placeholder_for_paramstyle
from pgcursor.sql.cursor import Cursor

logger = logging.getLogger(__name__)


def get_connection_string(
    host: str = None,
    port: int = None,
    user: str = None,
    password: str = None,
    database: str = None
) -> str:
    """
    Build PostgreSQL connection string.

    Args:
        host: Database hostname (defaults to config.db_host)
        port: Database port (defaults to config.db_port)
        user: Database user (defaults to config.db_user)
        password: Database password (defaults to config.db_password)
        database: Database name (defaults to config.db_name)

    Returns:
        PostgreSQL connection string

    Example:
        >>> get_connection_string(host='db', database='geo')
        'postgresql://postgres:@db:5432/geo'
    """
    host = host if host is not None else config.db_host
    port = port if port is not None else config.db_port
    user = user if user is not None else config.db_user
    password = password if password is not None else config.db_password
    database = database if database is not None else config.db_name

    return f"postgresql://{user}:{quote_plus(password)}@{host}:{port}/{database}"


def create_sqlalchemy_engine(
    host: str = None,
    port: int = None,
    user: str = None,
    password: str = None,
    database: str = None,
    echo: bool = None,
    pool_size: int = None,
    max_overflow: int = None
) -> Engine:
    """
    Create SQLAlchemy engine with connection pooling.

    Every argument left as None falls back to pgcursor.core.config.

    Args:
        host: Database hostname
        port: Database port
        user: Database user
        password: Database password
        database: Database name
        echo: Enable SQL statement logging
        pool_size: Connection pool size
        max_overflow: Maximum overflow connections

    Returns:
        Configured SQLAlchemy Engine
    """
    connection_url = URL.create(
        drivername='postgresql',
        username=user if user is not None else config.db_user,
        password=password if password is not None else config.db_password,
        host=host if host is not None else config.db_host,
        port=port if port is not None else config.db_port,
        database=database if database is not None else config.db_name
    )

    return create_engine(
        connection_url,
        echo=config.pool.echo if echo is None else echo,
        pool_size=config.pool.pool_size if pool_size is None else pool_size,
        max_overflow=config.pool.max_overflow if max_overflow is None else max_overflow,
        pool_pre_ping=True  # Verify connections before using
    )


class Database:
    """Execution service backed by a SQLAlchemy engine.

    Attributes:
        engine: SQLAlchemy Engine used for every query
        instrumentation: Hook notified around each query
        placeholder: Placeholder style handed to cursors, derived from the
            dialect's DB-API paramstyle

    Example:
        >>> with Database(create_sqlalchemy_engine(), instrumentation=print) as db:
        ...     db.select('cities').order('name').row().execute()
        {'sql': 'SELECT * FROM cities ORDER BY name', 'values': []}
        Execution time: 3
        {'id': 1, 'name': 'Amsterdam', 'country': 'NL'}
    """

    def __init__(self, engine: Engine, instrumentation: Any = None):
        """Initialize the database wrapper.

        Args:
            engine: SQLAlchemy engine
            instrumentation: None, a QueryInstrumentation or a logger-style
                callable such as ``print``
        """
        self.engine = engine
        self.instrumentation = as_instrumentation(instrumentation)
        self.placeholder = placeholder_for_paramstyle(engine.dialect.paramstyle)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def _notify(self, event: str, *args) -> None:
        try:
            getattr(self.instrumentation, event)(*args)
        except Exception as e:
            logger.warning(f"⚠️ Instrumentation {event} failed: {e}")

    def query(self, sql: str, args: Optional[Sequence[Any]] = None) -> RawResult:
        """
        Run a parameterized query and materialize its result.

        Args:
            sql: SQL text using this database's placeholder style
            args: Positional arguments for the placeholders

        Returns:
            RawResult with rows, column descriptors and row count

        Raises:
            SQLAlchemyError: Driver or database failure, re-raised unchanged
        """
        args = list(args or [])
        self._notify('before_query', sql, args)

        start_time = time.perf_counter()
        try:
            with self.engine.connect() as conn:
                result = conn.exec_driver_sql(sql, tuple(args) if args else None)
                return RawResult.from_cursor_result(result)
        except SQLAlchemyError as e:
            logger.error(f"❌ Query failed: {sql} | {e}")
            raise
        finally:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            self._notify('after_query', sql, args, elapsed_ms)

    def select(self, table: str) -> Cursor:
        """Create a fresh cursor reading from ``table``."""
        return Cursor(self, table, placeholder=self.placeholder)

    def close(self) -> None:
        """Dispose of the engine and its pooled connections."""
        self.engine.dispose()
        logger.debug("Database engine disposed")
