"""
===================================
Core infrastructure for pgcursor.
===================================

Modules:
    config: Configuration management from environment variables
    logger: Logging setup and utilities

Example:
    >>> from pgcursor.core.config import config
    >>> from pgcursor.core.logger import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info(f"Connecting to {config.db_host}")
"""

__all__ = ['get_logger', 'setup_logging', 'config', 'Config']

from pgcursor.core.config import Config, config
from pgcursor.core.logger import get_logger, setup_logging
