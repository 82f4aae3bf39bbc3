"""schooldb: create, seed, inspect and back up the school-management database.

Usage:
    from schooldb import resolve_profile, run_migration, check_status

    _, profile = resolve_profile()
    await run_migration(profile, setup=True, seed=True)
"""

__version__ = "0.1.0"

# Config
from schooldb.config.loader import load_db_config, load_env_profile
from schooldb.config.models import DatabaseConfig, DatabaseProfile

# Factory
from schooldb.factory import ProfileNotFoundError, get_adapter, resolve_profile

# Lifecycle
from schooldb.migration import (
    ResetError,
    check_status,
    reset_database,
    run_migration,
    seed_database,
    setup_database,
)
from schooldb.models import MigrationResult, SeedOutcome, SeedResult, StatusReport

# Schema and seeding
from schooldb.schema.apply import SchemaApplyError, apply_schema
from schooldb.seed.orchestrator import SeedError
from schooldb.seed.orchestrator import seed as seed_fixtures

# Backup
from schooldb.backup.dump import BackupError, backup_database

__all__ = [
    # Config
    "load_db_config",
    "load_env_profile",
    "DatabaseConfig",
    "DatabaseProfile",
    # Factory
    "get_adapter",
    "resolve_profile",
    "ProfileNotFoundError",
    # Lifecycle
    "setup_database",
    "seed_database",
    "reset_database",
    "run_migration",
    "check_status",
    "ResetError",
    "MigrationResult",
    "SeedOutcome",
    "SeedResult",
    "StatusReport",
    # Schema and seeding
    "apply_schema",
    "SchemaApplyError",
    "seed_fixtures",
    "SeedError",
    # Backup
    "backup_database",
    "BackupError",
]
