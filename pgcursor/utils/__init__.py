"""
==========================
Database access utilities.
==========================

Modules:
    database_utils: SQLAlchemy engine helpers and the Database execution service
"""

__all__ = [
    'Database',
    'create_sqlalchemy_engine',
    'get_connection_string'
]

from .database_utils import Database, create_sqlalchemy_engine, get_connection_string
