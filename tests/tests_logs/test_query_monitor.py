"""
Test suite for pgcursor.logs.query_monitor module.

Tests cover:
- NullInstrumentation / QueryInstrumentation no-op callbacks
- LoggingInstrumentation: messages and levels
- CallbackInstrumentation: logger-callable message format
- QueryMetricsCollector: recording, trimming, summary
- as_instrumentation: normalization of accepted hook kinds
"""

import logging
from unittest.mock import Mock

import pytest

from pgcursor.logs.query_monitor import (
    CallbackInstrumentation,
    LoggingInstrumentation,
    NullInstrumentation,
    QueryInstrumentation,
    QueryMetric,
    QueryMetricsCollector,
    as_instrumentation,
)

# ============================================================================
# UNIT TESTS - Base hooks
# ============================================================================


def test_null_instrumentation_callbacks_return_none():
    hook = NullInstrumentation()

    assert hook.before_query('SELECT 1', []) is None
    assert hook.after_query('SELECT 1', [], 1.0) is None


# ============================================================================
# UNIT TESTS - LoggingInstrumentation
# ============================================================================


def test_logging_instrumentation_logs_sql_and_time(caplog):
    hook = LoggingInstrumentation(level=logging.INFO)

    with caplog.at_level(logging.INFO, logger='pgcursor.logs.query_monitor'):
        hook.before_query('SELECT * FROM cities WHERE id = $1', [3])
        hook.after_query('SELECT * FROM cities WHERE id = $1', [3], 12.5)

    assert 'SQL: SELECT * FROM cities WHERE id = $1 | values: [3]' in caplog.text
    assert 'Execution time: 12.50 ms' in caplog.text


def test_logging_instrumentation_custom_logger():
    log = Mock(spec=logging.Logger)
    hook = LoggingInstrumentation(log=log, level=logging.WARNING)

    hook.after_query('SELECT 1', [], 2.0)

    log.log.assert_called_once_with(logging.WARNING, 'Execution time: 2.00 ms')


# ============================================================================
# UNIT TESTS - CallbackInstrumentation
# ============================================================================


def test_callback_instrumentation_message_format():
    messages = []
    hook = CallbackInstrumentation(messages.append)

    hook.before_query('SELECT * FROM cities', ('a',))
    hook.after_query('SELECT * FROM cities', ('a',), 7.6)

    assert messages == [
        {'sql': 'SELECT * FROM cities', 'values': ['a']},
        'Execution time: 8',
    ]


def test_callback_instrumentation_requires_callable():
    with pytest.raises(TypeError):
        CallbackInstrumentation('print')


# ============================================================================
# UNIT TESTS - QueryMetricsCollector
# ============================================================================


def test_metrics_collector_records_entries():
    collector = QueryMetricsCollector()

    collector.after_query('SELECT 1', [], 1.5)
    collector.after_query('SELECT 2', [2], 4.5)

    assert [metric.sql for metric in collector.metrics] == ['SELECT 1', 'SELECT 2']
    assert isinstance(collector.metrics[0], QueryMetric)
    assert collector.metrics[1].args == [2]


def test_metrics_collector_summary():
    collector = QueryMetricsCollector()
    collector.after_query('SELECT fast', [], 1.0)
    collector.after_query('SELECT slow', [], 5.0)

    summary = collector.get_summary()

    assert summary == {
        'query_count': 2,
        'total_ms': 6.0,
        'avg_ms': 3.0,
        'max_ms': 5.0,
        'slowest_sql': 'SELECT slow'
    }


def test_metrics_collector_empty_summary():
    summary = QueryMetricsCollector().get_summary()

    assert summary['query_count'] == 0
    assert summary['slowest_sql'] is None


def test_metrics_collector_trims_oldest_entries():
    collector = QueryMetricsCollector(max_entries=2)

    for i in range(4):
        collector.after_query(f'SELECT {i}', [], float(i))

    assert [metric.sql for metric in collector.metrics] == ['SELECT 2', 'SELECT 3']


def test_metrics_collector_reset():
    collector = QueryMetricsCollector()
    collector.after_query('SELECT 1', [], 1.0)

    collector.reset()

    assert collector.metrics == []


# ============================================================================
# UNIT TESTS - as_instrumentation
# ============================================================================


def test_as_instrumentation_none_is_null():
    assert isinstance(as_instrumentation(None), NullInstrumentation)


def test_as_instrumentation_passes_instances_through():
    hook = QueryMetricsCollector()

    assert as_instrumentation(hook) is hook


def test_as_instrumentation_wraps_callables():
    hook = as_instrumentation(print)

    assert isinstance(hook, CallbackInstrumentation)
    assert hook.func is print


def test_as_instrumentation_rejects_other_values():
    with pytest.raises(TypeError, match="Unsupported instrumentation type: str"):
        as_instrumentation('verbose')


def test_subclasses_share_base():
    assert issubclass(LoggingInstrumentation, QueryInstrumentation)
    assert issubclass(QueryMetricsCollector, QueryInstrumentation)
