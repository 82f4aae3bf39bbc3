"""Load connection profiles from db.toml or the environment."""

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path

from schooldb.config.models import DatabaseConfig, DatabaseProfile

# Environment variable suffix -> DatabaseProfile field
ENV_FIELDS = {
    "DB_HOST": "host",
    "DB_PORT": "port",
    "DB_USER": "user",
    "DB_PASSWORD": "password",
    "DB_NAME": "database",
    "DB_POOL_SIZE": "pool_size",
    "DB_CONNECT_TIMEOUT": "connect_timeout",
}


def load_db_config(config_path: Path | None = None) -> DatabaseConfig:
    """Load database profiles from a TOML file.

    Args:
        config_path: Path to db.toml (default: ``./db.toml``).

    Returns:
        DatabaseConfig with all profiles.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ValueError: If a profile is invalid.

    Example:
        [profiles.local]
        host = "localhost"
        user = "root"
        database = "seangkatan_db"
    """
    if config_path is None:
        config_path = Path.cwd() / "db.toml"

    if not config_path.exists():
        raise FileNotFoundError(
            f"Database config not found: {config_path}\n"
            f"Create db.toml with a [profiles.<name>] table, or use DB_* "
            f"environment variables."
        )

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    profiles = {}
    for name, profile_data in data.get("profiles", {}).items():
        profiles[name] = DatabaseProfile(**profile_data)

    return DatabaseConfig(profiles=profiles)


def load_env_profile(
    env_prefix: str = "",
    environ: Mapping[str, str] | None = None,
) -> DatabaseProfile:
    """Build a profile from ``<prefix>DB_*`` environment variables.

    Unset variables fall back to the DatabaseProfile defaults.
    """
    if environ is None:
        environ = os.environ

    values = {}
    for suffix, field in ENV_FIELDS.items():
        value = environ.get(f"{env_prefix}{suffix}")
        if value is not None:
            values[field] = value

    return DatabaseProfile(**values)
