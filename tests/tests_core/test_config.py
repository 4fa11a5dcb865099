"""
Test suite for pgcursor.core.config and pgcursor.core.logger.

Tests cover:
- Config: environment defaults and overrides
- DatabaseConfig: connection string and params
- setup_logging / get_logger: handler wiring and levels
"""

import logging

import pytest

from pgcursor.core.config import Config, DatabaseConfig
from pgcursor.core.logger import ColoredFormatter, get_logger, setup_logging


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        'POSTGRES_HOST', 'POSTGRES_PORT', 'POSTGRES_USER', 'POSTGRES_PASSWORD',
        'POSTGRES_DB', 'PGCURSOR_POOL_SIZE', 'PGCURSOR_MAX_OVERFLOW',
        'PGCURSOR_ECHO', 'PGCURSOR_LOG_LEVEL',
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.mark.unit
def test_config_defaults(clean_env):
    config = Config()

    assert config.db_host == 'localhost'
    assert config.db_port == 5432
    assert config.db_user == 'postgres'
    assert config.db_password == ''
    assert config.db_name == 'postgres'
    assert config.pool.pool_size == 5
    assert config.pool.max_overflow == 10
    assert config.pool.echo is False
    assert config.log_level == 'INFO'


@pytest.mark.unit
def test_config_reads_environment(clean_env):
    clean_env.setenv('POSTGRES_HOST', 'db.internal')
    clean_env.setenv('POSTGRES_PORT', '6543')
    clean_env.setenv('POSTGRES_DB', 'geo')
    clean_env.setenv('PGCURSOR_POOL_SIZE', '2')
    clean_env.setenv('PGCURSOR_ECHO', 'true')
    clean_env.setenv('PGCURSOR_LOG_LEVEL', 'debug')

    config = Config()

    assert config.db_host == 'db.internal'
    assert config.db_port == 6543
    assert config.db_name == 'geo'
    assert config.pool.pool_size == 2
    assert config.pool.echo is True
    assert config.log_level == 'DEBUG'


@pytest.mark.unit
def test_database_config_connection_string_quotes_password():
    db = DatabaseConfig(host='h', port=5432, user='u', password='p@ss word', database='d')

    assert db.get_connection_string() == 'postgresql://u:p%40ss+word@h:5432/d'
    assert db.get_connection_string(database='other').endswith('/other')


@pytest.mark.unit
def test_database_config_connection_params():
    db = DatabaseConfig(host='h', port=1, user='u', password='p', database='d')

    assert db.get_connection_params() == {
        'host': 'h', 'port': 1, 'user': 'u', 'password': 'p', 'database': 'd'
    }


@pytest.mark.unit
def test_get_logger_sets_level():
    logger = get_logger('pgcursor.tests.level', level='warning')

    assert logger.level == logging.WARNING


@pytest.mark.unit
def test_setup_logging_console_and_file(tmp_path):
    logger = setup_logging(
        log_level='DEBUG',
        log_file='queries.log',
        log_dir=str(tmp_path),
        logger_name='pgcursor.tests.setup'
    )

    try:
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2
        assert isinstance(logger.handlers[0].formatter, ColoredFormatter)
        logger.debug('hello')
        for handler in logger.handlers:
            handler.flush()
        assert 'hello' in (tmp_path / 'queries.log').read_text(encoding='utf-8')
    finally:
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()


@pytest.mark.unit
def test_colored_formatter_restores_levelname():
    formatter = ColoredFormatter('%(emoji)s %(levelname)s %(message)s')
    record = logging.LogRecord('x', logging.ERROR, __file__, 1, 'boom', None, None)

    output = formatter.format(record)

    assert 'boom' in output
    assert '\033[31m' in output
    assert record.levelname == 'ERROR'
