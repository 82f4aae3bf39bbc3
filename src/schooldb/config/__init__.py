"""Configuration management: profiles, TOML and environment loading.

Usage:
    >>> from schooldb.config import load_db_config, load_env_profile, DatabaseProfile
"""

from schooldb.config.loader import load_db_config, load_env_profile
from schooldb.config.models import DatabaseConfig, DatabaseProfile

__all__ = ["load_db_config", "load_env_profile", "DatabaseConfig", "DatabaseProfile"]
