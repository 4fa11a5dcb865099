"""
======================================
Value types shared by cursor and database.
======================================

Plain immutable dataclasses passed between the query cursor and the
execution service. Kept in their own module so that ``pgcursor.sql`` and
``pgcursor.utils`` can both import them without importing each other.

Types:
    CompiledQuery: SQL text and positional arguments derived from a cursor
    ColumnDescriptor: Name of a column reported by the driver
    RawResult: Rows, columns and row count returned by an execution
    ShapeMode / Shape: How a RawResult is reshaped for the caller
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class CompiledQuery:
    """A single-table SELECT ready for execution.

    Attributes:
        table: Table the query reads from
        columns: Projection, ``('*',)`` for all columns
        where_clause: Predicate clause without the WHERE keyword, if any
        args: Positional arguments matching the clause placeholders
        order_by: Order clause without the ORDER BY keyword, if any
    """

    table: str
    columns: Tuple[str, ...] = ('*',)
    where_clause: Optional[str] = None
    args: Tuple[Any, ...] = ()
    order_by: Optional[str] = None

    @property
    def sql(self) -> str:
        """Render the SQL text."""
        sql = f"SELECT {', '.join(self.columns)} FROM {self.table}"
        if self.where_clause:
            sql += f" WHERE {self.where_clause}"
        if self.order_by:
            sql += f" ORDER BY {self.order_by}"
        return sql


@dataclass(frozen=True)
class ColumnDescriptor:
    """Column metadata reported by the driver."""

    name: str


@dataclass(frozen=True)
class RawResult:
    """Result set as returned by the execution service.

    Attributes:
        rows: One mapping of column name to value per row
        columns: Column descriptors in declaration order
        row_count: Number of rows reported by the driver
    """

    rows: Tuple[Dict[str, Any], ...] = ()
    columns: Tuple[ColumnDescriptor, ...] = ()
    row_count: int = 0

    @classmethod
    def from_cursor_result(cls, result) -> 'RawResult':
        """Materialize a SQLAlchemy ``CursorResult``.

        Args:
            result: Result returned by ``Connection.exec_driver_sql``

        Returns:
            RawResult holding plain dict rows
        """
        columns = tuple(ColumnDescriptor(name=str(name)) for name in result.keys())
        rows = tuple(dict(row) for row in result.mappings())
        row_count = result.rowcount if result.rowcount is not None and result.rowcount >= 0 else len(rows)
        return cls(rows=rows, columns=columns, row_count=row_count)

    @property
    def column_names(self) -> Tuple[str, ...]:
        return tuple(column.name for column in self.columns)


class ShapeMode(Enum):
    """How a cursor reshapes its raw result."""

    ROWS = 'rows'
    ROW = 'row'
    VALUE = 'value'
    COLUMN = 'column'
    COUNT = 'count'


@dataclass(frozen=True)
class Shape:
    """Tagged result shape; ``column`` is only set for ``ShapeMode.COLUMN``.

    Example:
        >>> Shape.column_of('id')
        Shape(mode=<ShapeMode.COLUMN: 'column'>, column='id')
    """

    mode: ShapeMode = ShapeMode.ROWS
    column: Optional[str] = field(default=None)

    def __post_init__(self):
        if self.mode is ShapeMode.COLUMN and not self.column:
            raise ValueError("Column shape requires a column name")
        if self.mode is not ShapeMode.COLUMN and self.column is not None:
            raise ValueError(f"Shape {self.mode.value!r} does not take a column name")

    @classmethod
    def rows(cls) -> 'Shape':
        return cls(ShapeMode.ROWS)

    @classmethod
    def row(cls) -> 'Shape':
        return cls(ShapeMode.ROW)

    @classmethod
    def value(cls) -> 'Shape':
        return cls(ShapeMode.VALUE)

    @classmethod
    def column_of(cls, name: str) -> 'Shape':
        return cls(ShapeMode.COLUMN, name)

    @classmethod
    def count(cls) -> 'Shape':
        return cls(ShapeMode.COUNT)
