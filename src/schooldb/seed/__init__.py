"""Fixture data and the seeding orchestrator.

Usage:
    from schooldb.seed import seed, truncate_tables, hash_password
"""

from schooldb.seed.orchestrator import SeedError, run_seed_steps, seed, truncate_tables
from schooldb.seed.passwords import hash_password, verify_password
from schooldb.seed.steps import SEED_STEPS, IdMap

__all__ = [
    "seed",
    "run_seed_steps",
    "truncate_tables",
    "SeedError",
    "SEED_STEPS",
    "IdMap",
    "hash_password",
    "verify_password",
]
