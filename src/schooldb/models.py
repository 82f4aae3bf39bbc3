"""Result models for lifecycle operations."""

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, Field


# ============================================================================
# Seeding
# ============================================================================


class SeedOutcome(str, Enum):
    """How a seed run ended."""

    APPLIED = "applied"
    SKIPPED_ALREADY_SEEDED = "skipped_already_seeded"
    FAILED = "failed"


@dataclass
class SeedResult:
    """Result of a seed run.

    Attributes:
        outcome: Applied, skipped because the anchor table has rows, or failed.
        force: Whether tables were truncated first.
        row_counts: Rows inserted per table (APPLIED only).
        anchor_count: Rows found in the anchor table (SKIPPED only).
        error: The failure, with the driver error as ``__cause__`` (FAILED only).
    """

    outcome: SeedOutcome
    force: bool = False
    row_counts: dict[str, int] = field(default_factory=dict)
    anchor_count: int = 0
    error: Exception | None = None

    @property
    def applied(self) -> bool:
        return self.outcome is SeedOutcome.APPLIED

    @property
    def skipped(self) -> bool:
        return self.outcome is SeedOutcome.SKIPPED_ALREADY_SEEDED

    @property
    def failed(self) -> bool:
        return self.outcome is SeedOutcome.FAILED

    def raise_for_outcome(self) -> None:
        """Re-raise the stored error if the run failed."""
        if self.failed and self.error is not None:
            raise self.error


# ============================================================================
# Migration
# ============================================================================


@dataclass
class MigrationResult:
    """What a ``run_migration()`` call did."""

    reset: bool = False
    tables_applied: list[str] = field(default_factory=list)
    seed: SeedResult | None = None


# ============================================================================
# Status
# ============================================================================


class StatusReport(BaseModel):
    """Result of ``check_status()``.  Never raised, always returned."""

    connected: bool
    database: str | None = None
    tables_count: int = 0
    tables: list[str] = Field(default_factory=list)
    row_counts: dict[str, int] = Field(default_factory=dict)
    error: str | None = None
