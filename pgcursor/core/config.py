"""
=============================================
Configuration management for pgcursor.
=============================================

Loads connection and runtime settings from environment variables (.env file)
and provides a centralized Config singleton for library-wide access.

The configuration system ensures:
- Single source of truth for connection settings
- Type conversion of numeric and boolean values
- Secure handling of credentials (never logged)

Example:
    >>> from pgcursor.core.config import config
    >>>
    >>> # Database connection
    >>> url = config.get_connection_string()
    >>>
    >>> # Access individual settings
    >>> print(f"Host: {config.db_host}, Port: {config.db_port}")
"""

import os
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote_plus

from dotenv import find_dotenv, load_dotenv

# Load environment variables from the nearest .env file
load_dotenv(dotenv_path=find_dotenv(usecwd=True))

_TRUTHY = {'1', 'true', 'yes', 'on'}


def _env_bool(name: str, default: bool = False) -> bool:
    """Read a boolean flag from the environment."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


@dataclass
class DatabaseConfig:
    """Database configuration settings.

    Attributes:
        host: PostgreSQL server hostname or IP address
        port: PostgreSQL server port number
        user: Database username
        password: Database password
        database: Database name queried by cursors
    """

    host: str
    port: int
    user: str
    password: str
    database: str

    def get_connection_string(self, database: Optional[str] = None) -> str:
        """Get PostgreSQL connection string.

        Args:
            database: Optional database name override

        Returns:
            SQLAlchemy-compatible PostgreSQL connection string
        """
        db_name = database or self.database
        return (
            f"postgresql://{self.user}:{quote_plus(self.password)}"
            f"@{self.host}:{self.port}/{db_name}"
        )

    def get_connection_params(self, database: Optional[str] = None) -> dict:
        """Get connection parameters as dictionary.

        Args:
            database: Optional database name override

        Returns:
            Dictionary with keys: host, port, user, password, database
        """
        return {
            'host': self.host,
            'port': self.port,
            'user': self.user,
            'password': self.password,
            'database': database or self.database
        }


@dataclass
class PoolConfig:
    """SQLAlchemy engine settings.

    Attributes:
        pool_size: Number of pooled connections kept open
        max_overflow: Connections allowed beyond pool_size
        echo: Enable SQLAlchemy statement echo
    """

    pool_size: int
    max_overflow: int
    echo: bool


class Config:
    """Centralized configuration manager.

    Attributes:
        db: DatabaseConfig instance with connection settings
        pool: PoolConfig instance with engine settings
        log_level: Default level used by setup_logging()

    Example:
        >>> config = Config()
        >>> conn_str = config.get_connection_string()
        >>> print(f"Connecting to {config.db_host}:{config.db_port}")
    """

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.db = DatabaseConfig(
            host=os.getenv('POSTGRES_HOST', 'localhost'),
            port=int(os.getenv('POSTGRES_PORT', '5432')),
            user=os.getenv('POSTGRES_USER', 'postgres'),
            password=os.getenv('POSTGRES_PASSWORD', ''),
            database=os.getenv('POSTGRES_DB', 'postgres')
        )

        self.pool = PoolConfig(
            pool_size=int(os.getenv('PGCURSOR_POOL_SIZE', '5')),
            max_overflow=int(os.getenv('PGCURSOR_MAX_OVERFLOW', '10')),
            echo=_env_bool('PGCURSOR_ECHO')
        )

        self.log_level = os.getenv('PGCURSOR_LOG_LEVEL', 'INFO').upper()

    @property
    def db_host(self) -> str:
        """Get database server hostname."""
        return self.db.host

    @property
    def db_port(self) -> int:
        """Get database server port number."""
        return self.db.port

    @property
    def db_user(self) -> str:
        """Get database username."""
        return self.db.user

    @property
    def db_password(self) -> str:
        """Get database password."""
        return self.db.password

    @property
    def db_name(self) -> str:
        """Get database name."""
        return self.db.database

    def get_connection_string(self, database: Optional[str] = None) -> str:
        """Get database connection string.

        Args:
            database: Optional database name override

        Returns:
            SQLAlchemy-compatible PostgreSQL connection string
        """
        return self.db.get_connection_string(database=database)

    def get_connection_params(self, database: Optional[str] = None) -> dict:
        """Get database connection parameters."""
        return self.db.get_connection_params(database=database)


# Global configuration instance
config = Config()
