"""
==========================
Utility Functions Package.
==========================

Database connectivity and statement execution for db-helper.

Modules:
    database_utils: DbConnection collaborator and the named ConnectionRegistry
    query_executor: QueryExecutor pairing a QueryBuilder with a connection
"""

__version__ = "1.0.0"
__all__ = [
    'ConnectionNotFoundError',
    'ConnectionRegistry',
    'DbConnection',
    'ExecResult',
    'QueryExecutor',
    'get_pool_options',
]

from .database_utils import (
    ConnectionNotFoundError,
    ConnectionRegistry,
    DbConnection,
    ExecResult,
    get_pool_options,
)
from .query_executor import QueryExecutor
