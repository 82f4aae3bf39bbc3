"""Schema applier.

Executes the table DDL in dependency order against an open client.  Every
statement is create-if-missing, so applying twice is harmless.  The first
failing statement stops the run; tables created before it are kept.

Usage:
    from schooldb.schema.apply import apply_schema

    async with get_adapter(profile) as client:
        created = await apply_schema(client)
"""

import logging

from schooldb.adapters.base import DatabaseClient
from schooldb.schema.graph import check_dependency_order
from schooldb.schema.models import TableDef
from schooldb.schema.tables import TABLES

logger = logging.getLogger(__name__)


class SchemaApplyError(Exception):
    """Raised when a table's DDL fails.  ``table`` names the failing table."""

    def __init__(self, table: str, cause: BaseException):
        self.table = table
        super().__init__(f"Failed to create table '{table}': {cause}")


async def ensure_database(client: DatabaseClient, name: str) -> None:
    """Create the database if it does not exist.

    ``client`` must be connected to the server without a selected database.
    The name is expected to be validated already (see ``DatabaseProfile``).
    """
    await client.execute(f"CREATE DATABASE IF NOT EXISTS `{name}`")
    logger.info("Database '%s' created or already present", name)


async def apply_schema(
    client: DatabaseClient,
    tables: list[TableDef] | None = None,
) -> list[str]:
    """Create every table that does not exist yet.

    Args:
        client: Client connected to the target database.
        tables: Table definitions in creation order (default: the full
            schema).

    Returns:
        Names of the tables whose DDL ran, in order.

    Raises:
        ValueError: If ``tables`` is not in dependency order.
        SchemaApplyError: If a statement fails.  Later tables are skipped.
    """
    if tables is None:
        tables = TABLES

    check_dependency_order(tables)

    applied: list[str] = []
    for table in tables:
        try:
            await client.execute(table.ddl)
        except Exception as e:
            logger.error("Error creating table '%s': %s", table.name, e)
            raise SchemaApplyError(table.name, e) from e
        logger.info("Table '%s' ready", table.name)
        applied.append(table.name)

    return applied
