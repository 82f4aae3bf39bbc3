"""Database adapters package.

Provides the ``DatabaseClient`` Protocol and the ``AsyncMySQLAdapter``
implementation.

Usage:
    from schooldb.adapters import DatabaseClient, AsyncMySQLAdapter
"""

from schooldb.adapters.base import DatabaseClient
from schooldb.adapters.mysql import AsyncMySQLAdapter

__all__ = [
    "DatabaseClient",
    "AsyncMySQLAdapter",
]
