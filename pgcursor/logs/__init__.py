"""
===============================
Query instrumentation for pgcursor.
===============================

Modules:
    query_monitor: Hooks notified before and after every query

Example:
    >>> from pgcursor.logs.query_monitor import LoggingInstrumentation
    >>> db = open_database(instrumentation=LoggingInstrumentation())
"""

__all__ = [
    'QueryInstrumentation', 'NullInstrumentation', 'LoggingInstrumentation',
    'CallbackInstrumentation', 'QueryMetricsCollector', 'QueryMetric',
    'as_instrumentation'
]

from .query_monitor import (
    CallbackInstrumentation,
    LoggingInstrumentation,
    NullInstrumentation,
    QueryInstrumentation,
    QueryMetric,
    QueryMetricsCollector,
    as_instrumentation,
)
