"""Database lifecycle orchestration.

Each operation opens its own client(s) with ``async with`` and closes them
before returning, whether it succeeds, skips or fails.

Usage:
    from schooldb.migration import run_migration, check_status

    result = await run_migration(profile, setup=True, seed=True)
    report = await check_status(profile)
"""

import logging

from schooldb.config.models import DatabaseProfile
from schooldb.factory import get_adapter
from schooldb.models import MigrationResult, SeedResult, StatusReport
from schooldb.schema.apply import apply_schema, ensure_database
from schooldb.schema.tables import KEY_TABLES
from schooldb.seed.orchestrator import seed as seed_fixtures

logger = logging.getLogger(__name__)


class ResetError(Exception):
    """Dropping or recreating the database failed."""

    pass


async def setup_database(profile: DatabaseProfile) -> list[str]:
    """Create the database if missing, then every table.

    Returns:
        Names of the tables whose DDL ran.

    Raises:
        SchemaApplyError: If a table fails; later tables are not created.
    """
    async with get_adapter(profile, include_database=False) as server:
        await ensure_database(server, profile.database)

    async with get_adapter(profile) as client:
        tables = await apply_schema(client)

    logger.info("All %d tables created", len(tables))
    return tables


async def seed_database(profile: DatabaseProfile, force: bool = False) -> SeedResult:
    """Seed fixture data into the profile's database.

    Returns the ``SeedResult``; failures are reported through it, not raised.
    """
    async with get_adapter(profile) as client:
        return await seed_fixtures(client, force=force)


async def recreate_database(profile: DatabaseProfile) -> None:
    """Drop the database if it exists and create it empty.

    Runs on a server connection with no database selected; MySQL will not
    drop the database a session is using.

    Raises:
        ResetError: Chained from the driver error.
    """
    name = profile.database
    try:
        async with get_adapter(profile, include_database=False) as server:
            await server.execute(f"DROP DATABASE IF EXISTS `{name}`")
            logger.info("Database '%s' dropped", name)
            await server.execute(f"CREATE DATABASE `{name}`")
            logger.info("Database '%s' recreated", name)
    except Exception as e:
        logger.error("Error resetting database: %s", e)
        raise ResetError(f"Could not reset database '{name}': {e}") from e


async def reset_database(profile: DatabaseProfile) -> MigrationResult:
    """Drop and recreate the database, then rebuild schema and force-seed.

    Raises:
        ResetError: If drop/create fails; nothing else is attempted.
        SchemaApplyError: If table creation fails.
        SeedError: If seeding fails (original error as ``__cause__``).
    """
    return await run_migration(profile, setup=True, seed=True, force=True, reset=True)


async def run_migration(
    profile: DatabaseProfile,
    setup: bool = True,
    seed: bool = True,
    force: bool = False,
    reset: bool = False,
) -> MigrationResult:
    """Run the requested lifecycle steps in order: reset, setup, seed.

    Args:
        profile: Connection settings.
        setup: Create database and tables.
        seed: Insert fixture data.
        force: Truncate existing data before seeding.
        reset: Drop and recreate the database first.  Implies a forced seed.

    Returns:
        ``MigrationResult``.  A skipped seed is not an error.

    Raises:
        ResetError, SchemaApplyError, SeedError: The first failure, unchanged.
    """
    logger.info(
        "Migration options: setup=%s seed=%s force=%s reset=%s",
        setup, seed, force, reset,
    )
    result = MigrationResult(reset=reset)

    if reset:
        await recreate_database(profile)
        force = True

    if setup:
        result.tables_applied = await setup_database(profile)

    if seed:
        result.seed = await seed_database(profile, force=force)
        result.seed.raise_for_outcome()

    return result


async def check_status(profile: DatabaseProfile) -> StatusReport:
    """Report connectivity, tables and key-table row counts.

    Never raises: any error becomes ``StatusReport(connected=False)``.
    """
    try:
        async with get_adapter(profile) as client:
            tables = await client.list_tables()
            row_counts = {}
            for table in KEY_TABLES:
                if table in tables:
                    row_counts[table] = await client.count(table)
    except Exception as e:
        logger.error("Error checking database: %s", e)
        return StatusReport(connected=False, database=profile.database, error=str(e))

    return StatusReport(
        connected=True,
        database=profile.database,
        tables_count=len(tables),
        tables=tables,
        row_counts=row_counts,
    )
