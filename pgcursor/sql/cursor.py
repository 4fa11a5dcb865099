"""
==================================
Fluent SELECT cursor.
==================================

A ``Cursor`` collects the intent of a single-table SELECT (filter,
projection, ordering, result shape) through chained calls and only touches
the database when it is consumed, either with ``execute()`` or by awaiting
it. The query runs at most once; the shaped value is cached on the cursor.

Shapes:
    - ``all()``       list of row dicts (default)
    - ``row()``       first row dict, ``None`` when there are no rows
    - ``value()``     first column of the first row, EmptyResultError when empty
    - ``col(name)``   list of ``row[name]`` values, ``None`` for unknown names
    - ``count()``     row count reported by the driver

Example:
    >>> cursor = (
    ...     Cursor(db, 'cities')
    ...     .where({'population': '>=1000000', 'name': 'S*'})
    ...     .fields(['name', 'population'])
    ...     .order('population', 'desc')
    ... )
    >>> cursor.compile().sql
    'SELECT name, population FROM cities WHERE population >= $1 AND name LIKE $2 ORDER BY population DESC'
    >>> rows = cursor.execute()
    >>>
    >>> # Or from a coroutine
    >>> names = await db.select('cities').col('name')
"""

import asyncio
import logging
import threading
from typing import Any, List, Mapping, Optional, Sequence, Union

from pgcursor.models.results import CompiledQuery, RawResult, Shape, ShapeMode
from pgcursor.sql.conditions import where_builder

logger = logging.getLogger(__name__)

ORDER_DIRECTIONS = ('ASC', 'DESC')


class CursorError(Exception):
    """Base exception for cursor errors."""
    pass


class EmptyResultError(CursorError):
    """Raised when a scalar value is requested from a result with no rows."""
    pass


class CursorConsumedError(CursorError):
    """Raised when a consumed cursor is configured again."""
    pass


class Cursor:
    """Deferred single-table SELECT with a selectable result shape.

    Attributes:
        database: Execution service exposing ``query(sql, args) -> RawResult``
        table: Table the cursor reads from
        placeholder: Placeholder style passed to where_builder
    """

    def __init__(self, database, table: str, placeholder: str = 'numeric'):
        if not table:
            raise ValueError("Cursor requires a table name")

        self.database = database
        self.table = table
        self.placeholder = placeholder

        self._columns: List[str] = ['*']
        self._where_clause: Optional[str] = None
        self._args: List[Any] = []
        self._order_by: Optional[str] = None
        self._shape = Shape.rows()

        self._raw_result: Optional[RawResult] = None
        self._value: Any = None
        self._shape_error: Optional[EmptyResultError] = None
        self._consumed = False
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        state = 'consumed' if self._consumed else 'pending'
        return f"<Cursor table={self.table!r} shape={self._shape.mode.value} {state}>"

    # ------------------------------------------------------------------
    # Fluent configuration
    # ------------------------------------------------------------------

    def _check_open(self):
        if self._consumed:
            raise CursorConsumedError(
                f"Cursor on '{self.table}' was already executed; create a new one with select()"
            )

    def where(self, conditions: Mapping[str, Any]) -> 'Cursor':
        """Filter rows; replaces any previous filter.

        Args:
            conditions: Mapping of column to constraint, see pgcursor.sql.conditions
        """
        self._check_open()
        clause, args = where_builder(conditions, placeholder=self.placeholder)
        self._where_clause = clause or None
        self._args = args
        return self

    def fields(self, columns: Union[str, Sequence[str]]) -> 'Cursor':
        """Set the projection; a bare string selects a single column."""
        self._check_open()
        if isinstance(columns, str):
            columns = [columns]
        columns = list(columns)
        if not columns:
            raise ValueError("fields() needs at least one column")
        self._columns = columns
        return self

    def order(self, column: str, direction: Optional[str] = None) -> 'Cursor':
        """Order by a column, optionally with 'asc' or 'desc' in any case."""
        self._check_open()
        order_by = column
        if direction:
            direction = direction.strip().upper()
            if direction not in ORDER_DIRECTIONS:
                raise ValueError(f"Order direction must be ASC or DESC, got '{direction}'")
            order_by += f" {direction}"
        self._order_by = order_by
        return self

    def shape(self, shape: Shape) -> 'Cursor':
        """Select how the result is returned; the last selection wins."""
        self._check_open()
        if not isinstance(shape, Shape):
            raise TypeError(f"Expected a Shape, got {type(shape).__name__}")
        self._shape = shape
        return self

    def all(self) -> 'Cursor':
        return self.shape(Shape.rows())

    def row(self) -> 'Cursor':
        return self.shape(Shape.row())

    def value(self) -> 'Cursor':
        return self.shape(Shape.value())

    def col(self, name: str) -> 'Cursor':
        return self.shape(Shape.column_of(name))

    def count(self) -> 'Cursor':
        return self.shape(Shape.count())

    # ------------------------------------------------------------------
    # Compile / execute
    # ------------------------------------------------------------------

    def compile(self) -> CompiledQuery:
        """Snapshot the current state as a CompiledQuery; no side effects."""
        return CompiledQuery(
            table=self.table,
            columns=tuple(self._columns),
            where_clause=self._where_clause,
            args=tuple(self._args),
            order_by=self._order_by
        )

    def execute(self) -> Any:
        """
        Run the query once and return the shaped result.

        The first call compiles, executes and caches. Later calls return the
        cached value without contacting the database. If the execution
        service raises, the exception propagates unchanged and the cursor
        stays unconsumed. Concurrent callers, including several awaits of
        the same cursor, wait for the first execution and share its result.

        Returns:
            Value in the shape selected at the time of this call

        Raises:
            EmptyResultError: value() shape and the query returned no rows;
                raised again by every later call
        """
        with self._lock:
            return self._execute_once()

    def _execute_once(self) -> Any:
        if self._consumed:
            if self._shape_error is not None:
                raise EmptyResultError(str(self._shape_error))
            return self._value

        query = self.compile()
        logger.debug(f"Executing cursor on '{self.table}': {query.sql}")

        raw_result = self.database.query(query.sql, list(query.args))

        self._raw_result = raw_result
        self._consumed = True
        try:
            self._value = self._apply_shape(raw_result, self._shape)
        except EmptyResultError as e:
            self._shape_error = e
            raise
        return self._value

    async def _execute_async(self) -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.execute)

    def __await__(self):
        return self._execute_async().__await__()

    @staticmethod
    def _apply_shape(result: RawResult, shape: Shape) -> Any:
        rows = result.rows

        if shape.mode is ShapeMode.ROW:
            return rows[0] if rows else None

        if shape.mode is ShapeMode.COUNT:
            return result.row_count

        if shape.mode is ShapeMode.COLUMN:
            return [row.get(shape.column) for row in rows]

        if shape.mode is ShapeMode.VALUE:
            if not rows:
                raise EmptyResultError("Query returned no rows, no value to return")
            if result.columns:
                return rows[0][result.columns[0].name]
            return next(iter(rows[0].values()))

        return list(rows)

    # ------------------------------------------------------------------
    # Result introspection
    # ------------------------------------------------------------------

    @property
    def consumed(self) -> bool:
        return self._consumed

    @property
    def raw_result(self) -> Optional[RawResult]:
        return self._raw_result

    @property
    def rows(self) -> List[dict]:
        """Unshaped rows of the executed query, empty before execution."""
        return list(self._raw_result.rows) if self._raw_result else []

    @property
    def columns(self) -> List[str]:
        """Column names reported by the driver, empty before execution."""
        return list(self._raw_result.column_names) if self._raw_result else []

    @property
    def row_count(self) -> int:
        return self._raw_result.row_count if self._raw_result else 0
