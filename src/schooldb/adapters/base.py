"""Database client protocol definition.

Defines the ``DatabaseClient`` Protocol that the orchestration code talks to.
All methods are ``async def`` and a client is used as an async context
manager so its connection is released on every exit path.

Usage:
    from schooldb.adapters.base import DatabaseClient

    async def do_work(client: DatabaseClient) -> None:
        await client.execute("CREATE TABLE IF NOT EXISTS t (id INT)")
        row = await client.insert("users", {"username": "alice"})
        total = await client.count("users")
"""

from typing import Any, Protocol


class DatabaseClient(Protocol):
    """Database client interface that all adapters must implement.

    A client holds a single session for its lifetime, so session state such
    as ``SET FOREIGN_KEY_CHECKS`` applies to every later statement issued
    through the same client.
    """

    async def __aenter__(self) -> "DatabaseClient":
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        ...

    async def execute(self, sql: str, params: dict[str, Any] | None = None) -> None:
        """Execute a raw SQL statement (DDL or other non-query operations).

        Args:
            sql: Raw SQL statement to execute.
            params: Optional dict of named parameters for the statement.

        Example:
            await client.execute("TRUNCATE TABLE messages")
        """
        ...

    async def insert(self, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """Insert a row and return it with its generated ``id``.

        Values are always sent as bound parameters.

        Raises:
            Exception: On constraint violations.

        Example:
            row = await client.insert("classes", {"name": "Kelas 1A"})
            row["id"]
        """
        ...

    async def count(self, table: str) -> int:
        """Return the number of rows in ``table``."""
        ...

    async def list_tables(self) -> list[str]:
        """Return the base tables of the selected database, sorted by name."""
        ...

    async def close(self) -> None:
        """Release the connection and any pooled resources."""
        ...
