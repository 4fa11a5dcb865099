"""
===========================================
Query instrumentation hooks.
===========================================

Instrumentation is passed to a ``Database`` at construction time and is
notified around every query: once with the SQL text and arguments before
execution, once with the elapsed time afterwards. Hooks only observe; the
Database logs and swallows any exception a hook raises so the query result
is never affected.

Classes:
    QueryInstrumentation: Base class, both callbacks are no-ops
    NullInstrumentation: Default hook, does nothing
    LoggingInstrumentation: Emits SQL and execution time through ``logging``
    CallbackInstrumentation: Adapts a plain ``func(message)`` logger callable
    QueryMetricsCollector: Keeps per-query timings and summarizes them

Example:
    >>> from pgcursor import open_database
    >>> from pgcursor.logs.query_monitor import QueryMetricsCollector
    >>>
    >>> metrics = QueryMetricsCollector()
    >>> db = open_database(instrumentation=metrics)
    >>> db.select('cities').count().execute()
    >>> metrics.get_summary()['query_count']
    1
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)


class QueryInstrumentation:
    """Base class for query hooks."""

    def before_query(self, sql: str, args: Sequence[Any]) -> None:
        """Called with the compiled SQL and arguments before execution."""

    def after_query(self, sql: str, args: Sequence[Any], elapsed_ms: float) -> None:
        """Called after execution, whether it succeeded or failed."""


class NullInstrumentation(QueryInstrumentation):
    """Instrumentation that records nothing."""
    pass


class LoggingInstrumentation(QueryInstrumentation):
    """
    Log every query and its execution time.

    Args:
        log: Logger to write to, defaults to this module's logger
        level: Level used for both messages
    """

    def __init__(self, log: Optional[logging.Logger] = None, level: int = logging.DEBUG):
        self.log = log or logger
        self.level = level

    def before_query(self, sql: str, args: Sequence[Any]) -> None:
        self.log.log(self.level, f"SQL: {sql} | values: {list(args)}")

    def after_query(self, sql: str, args: Sequence[Any], elapsed_ms: float) -> None:
        self.log.log(self.level, f"Execution time: {elapsed_ms:.2f} ms")


class CallbackInstrumentation(QueryInstrumentation):
    """
    Forward query events to a single logger-style callable.

    The callable receives ``{'sql': ..., 'values': [...]}`` before the query
    and the string ``'Execution time: <ms>'`` after it, e.g. ``print``.
    """

    def __init__(self, func: Callable[[Any], Any]):
        if not callable(func):
            raise TypeError(f"Expected a callable, got {type(func).__name__}")
        self.func = func

    def before_query(self, sql: str, args: Sequence[Any]) -> None:
        self.func({'sql': sql, 'values': list(args)})

    def after_query(self, sql: str, args: Sequence[Any], elapsed_ms: float) -> None:
        self.func(f"Execution time: {round(elapsed_ms)}")


@dataclass
class QueryMetric:
    """One recorded query execution."""

    sql: str
    args: List[Any]
    elapsed_ms: float
    recorded_at: datetime = field(default_factory=datetime.now)


class QueryMetricsCollector(QueryInstrumentation):
    """
    In-memory collection of query timings.

    Attributes:
        metrics: Recorded QueryMetric entries in execution order
        max_entries: Oldest entries are dropped beyond this many, None keeps all
    """

    def __init__(self, max_entries: Optional[int] = 1000):
        self.metrics: List[QueryMetric] = []
        self.max_entries = max_entries

    def after_query(self, sql: str, args: Sequence[Any], elapsed_ms: float) -> None:
        self.metrics.append(QueryMetric(sql=sql, args=list(args), elapsed_ms=elapsed_ms))
        if self.max_entries is not None and len(self.metrics) > self.max_entries:
            del self.metrics[:len(self.metrics) - self.max_entries]

    def reset(self) -> None:
        self.metrics.clear()

    def get_summary(self) -> Dict[str, Any]:
        """
        Summarize the recorded executions.

        Returns:
            Dictionary with query_count, total_ms, avg_ms, max_ms and
            slowest_sql (None when nothing was recorded)
        """
        if not self.metrics:
            return {
                'query_count': 0,
                'total_ms': 0.0,
                'avg_ms': 0.0,
                'max_ms': 0.0,
                'slowest_sql': None
            }

        total = sum(metric.elapsed_ms for metric in self.metrics)
        slowest = max(self.metrics, key=lambda metric: metric.elapsed_ms)
        return {
            'query_count': len(self.metrics),
            'total_ms': total,
            'avg_ms': total / len(self.metrics),
            'max_ms': slowest.elapsed_ms,
            'slowest_sql': slowest.sql
        }


def as_instrumentation(hook: Any) -> QueryInstrumentation:
    """
    Normalize the ``instrumentation`` argument accepted by Database.

    Args:
        hook: None, a QueryInstrumentation, or a logger-style callable

    Returns:
        QueryInstrumentation instance

    Raises:
        TypeError: If hook is none of the accepted kinds
    """
    if hook is None:
        return NullInstrumentation()
    if isinstance(hook, QueryInstrumentation):
        return hook
    if callable(hook):
        return CallbackInstrumentation(hook)
    raise TypeError(f"Unsupported instrumentation type: {type(hook).__name__}")
