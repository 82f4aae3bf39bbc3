"""Profile resolution and adapter construction.

Supports two configuration modes:
1. Profile mode (db.toml): named profiles selected with ``--profile`` or
   ``<PREFIX>DB_PROFILE``
2. Environment mode: ``<PREFIX>DB_HOST``, ``DB_USER``, ``DB_PASSWORD``,
   ``DB_NAME``... over built-in defaults

The resolved ``DatabaseProfile`` is built once by the caller and passed to
every operation; nothing below reads the environment on its own.
"""

import os
from collections.abc import Mapping
from pathlib import Path

from schooldb.adapters.mysql import AsyncMySQLAdapter
from schooldb.config.loader import load_db_config, load_env_profile
from schooldb.config.models import DatabaseProfile
from schooldb.schema.tables import json_columns

ENV_PROFILE_NAME = "env"


class ProfileNotFoundError(Exception):
    """Raised when a requested database profile is not configured."""

    pass


def get_active_profile_name(
    env_prefix: str = "",
    environ: Mapping[str, str] | None = None,
) -> str | None:
    """Return the profile named by ``<prefix>DB_PROFILE``, if set."""
    if environ is None:
        environ = os.environ
    return environ.get(f"{env_prefix}DB_PROFILE") or None


def resolve_profile(
    profile_name: str | None = None,
    env_prefix: str = "",
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> tuple[str, DatabaseProfile]:
    """Resolve the connection profile for this run.

    Priority:
    1. ``profile_name`` argument
    2. ``<prefix>DB_PROFILE`` env var
    3. ``<prefix>DB_*`` env vars with defaults

    Returns:
        Tuple of (profile_name, DatabaseProfile).  Environment mode is named
        ``"env"``.

    Raises:
        ProfileNotFoundError: If a named profile is requested but db.toml is
            missing or does not define it.
    """
    name = profile_name or get_active_profile_name(env_prefix, environ)

    if name is None:
        return ENV_PROFILE_NAME, load_env_profile(env_prefix, environ)

    try:
        config = load_db_config(config_path)
    except FileNotFoundError as e:
        raise ProfileNotFoundError(str(e)) from e

    if name not in config.profiles:
        available = ", ".join(config.profiles) or "(none)"
        raise ProfileNotFoundError(
            f"Profile '{name}' not found in db.toml. Available: {available}"
        )

    return name, config.profiles[name]


def get_adapter(
    profile: DatabaseProfile,
    include_database: bool = True,
) -> AsyncMySQLAdapter:
    """Create an adapter for the profile.

    Args:
        profile: Connection settings.
        include_database: When False, connect to the server without
            selecting the profile's database.

    Returns:
        Unconnected ``AsyncMySQLAdapter``; use it with ``async with``.

    Example:
        async with get_adapter(profile) as client:
            await client.count("users")
    """
    return AsyncMySQLAdapter(
        profile.url(include_database=include_database),
        json_columns=json_columns(),
        pool_size=profile.pool_size,
        connect_args={"connect_timeout": profile.connect_timeout},
    )
