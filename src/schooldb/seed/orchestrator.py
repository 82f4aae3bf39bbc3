"""Seeding orchestrator.

Runs the entity-seeding steps in dependency order on one client.

Without ``force`` the run is gated on the anchor table: if it already has
rows nothing is written and the result is ``SKIPPED_ALREADY_SEEDED``.
With ``force`` every schema table is truncated first, children before
parents, with foreign-key checks suspended on the session for the
duration.

Only the anchor table is checked.  A database whose anchor has rows but
whose other tables are empty (an earlier run that failed half way) stays
that way until a forced seed; the orchestrator logs a warning when it sees
this instead of repairing it.

Usage:
    from schooldb.seed.orchestrator import seed

    async with get_adapter(profile) as client:
        result = await seed(client, force=True)
        result.raise_for_outcome()
"""

import logging

from schooldb.adapters.base import DatabaseClient
from schooldb.models import SeedOutcome, SeedResult
from schooldb.schema.graph import truncate_order
from schooldb.schema.tables import ANCHOR_TABLE
from schooldb.seed.steps import SEED_STEPS, IdMap, SeedStep

logger = logging.getLogger(__name__)


class SeedError(Exception):
    """A seeding step failed.  ``step`` names it; ``__cause__`` is the original error."""

    def __init__(self, step: str, cause: BaseException):
        self.step = step
        super().__init__(f"Seeding '{step}' failed: {cause}")


async def truncate_tables(client: DatabaseClient, tables: list[str] | None = None) -> None:
    """Empty every table with foreign-key checks suspended.

    Checks are switched back on even when a ``TRUNCATE`` fails.  Tables
    emptied before the failure stay empty; the statements are not atomic.
    If switching the checks back on also fails, that error is logged and
    the ``TRUNCATE`` error is the one raised.

    Args:
        client: Client whose session runs every statement.
        tables: Table names, children first (default: ``truncate_order()``).
    """
    if tables is None:
        tables = truncate_order()

    await client.execute("SET FOREIGN_KEY_CHECKS = 0")
    try:
        for table in tables:
            await client.execute(f"TRUNCATE TABLE {table}")
            logger.info("  Table '%s' emptied", table)
    except BaseException:
        try:
            await client.execute("SET FOREIGN_KEY_CHECKS = 1")
        except Exception as restore_error:
            logger.error("Could not restore FOREIGN_KEY_CHECKS: %s", restore_error)
        raise
    await client.execute("SET FOREIGN_KEY_CHECKS = 1")


async def run_seed_steps(
    client: DatabaseClient,
    steps: list[tuple[str, SeedStep]] | None = None,
) -> IdMap:
    """Run each step in order, threading the ids each one created.

    Raises:
        SeedError: On the first failing step; later steps do not run.
    """
    if steps is None:
        steps = SEED_STEPS

    ids: IdMap = {}
    for name, step in steps:
        logger.info("Seeding %s...", name)
        try:
            ids[name] = await step(client, ids)
        except Exception as e:
            raise SeedError(name, e) from e
    return ids


async def _warn_if_partially_seeded(client: DatabaseClient, steps: list[tuple[str, SeedStep]]) -> None:
    empty = []
    for name, _ in steps:
        if name != ANCHOR_TABLE and await client.count(name) == 0:
            empty.append(name)
    if empty:
        logger.warning(
            "'%s' has rows but %s %s empty; run with force to reseed",
            ANCHOR_TABLE,
            ", ".join(empty),
            "is" if len(empty) == 1 else "are",
        )


async def seed(
    client: DatabaseClient,
    force: bool = False,
    steps: list[tuple[str, SeedStep]] | None = None,
) -> SeedResult:
    """Seed fixture data.

    Args:
        client: Client connected to the target database.  The caller owns
            it and closes it.
        force: Truncate all tables before seeding instead of checking the
            anchor table.
        steps: Seeding steps (default: ``SEED_STEPS``).

    Returns:
        ``SeedResult`` with outcome APPLIED, SKIPPED_ALREADY_SEEDED or FAILED.
        A FAILED result carries the error; ``raise_for_outcome()`` re-raises
        it.

    Example:
        result = await seed(client)
        if result.skipped:
            print("already seeded")
    """
    if steps is None:
        steps = SEED_STEPS

    try:
        if force:
            logger.warning("Force mode: deleting all existing data")
            await truncate_tables(client)
        else:
            existing = await client.count(ANCHOR_TABLE)
            if existing > 0:
                logger.info("Database already has data, seeding skipped")
                await _warn_if_partially_seeded(client, steps)
                return SeedResult(
                    outcome=SeedOutcome.SKIPPED_ALREADY_SEEDED,
                    anchor_count=existing,
                )

        ids = await run_seed_steps(client, steps)
    except Exception as e:
        logger.error("Error while seeding database: %s", e)
        return SeedResult(outcome=SeedOutcome.FAILED, force=force, error=e)

    return SeedResult(
        outcome=SeedOutcome.APPLIED,
        force=force,
        row_counts={table: len(created) for table, created in ids.items()},
    )
