"""Pydantic models for database connection configuration."""

import re

from pydantic import BaseModel, Field, field_validator
from sqlalchemy.engine import URL

# Database names are interpolated into CREATE/DROP DATABASE, which cannot
# take bound parameters.
_DATABASE_NAME = re.compile(r"^[A-Za-z0-9_$]+$")

DEFAULT_PORT = 3306


class DatabaseProfile(BaseModel):
    """Connection settings for one MySQL server/database pair."""

    host: str = "localhost"
    port: int = DEFAULT_PORT
    user: str = "root"
    password: str = ""
    database: str = "seangkatan_db"
    pool_size: int = Field(default=10, ge=1)
    connect_timeout: int = Field(default=10, ge=1)
    description: str = ""

    @field_validator("database")
    @classmethod
    def _check_database_name(cls, value: str) -> str:
        if not _DATABASE_NAME.match(value):
            raise ValueError(
                f"Invalid database name {value!r}: "
                "only letters, digits, '_' and '$' are allowed"
            )
        return value

    def url(self, include_database: bool = True) -> URL:
        """Build the SQLAlchemy URL for this profile.

        Args:
            include_database: When False the URL selects no database, which is
                required for DROP/CREATE DATABASE on the target itself.
        """
        return URL.create(
            "mysql+aiomysql",
            username=self.user,
            password=self.password or None,
            host=self.host,
            port=self.port,
            database=self.database if include_database else None,
        )


class DatabaseConfig(BaseModel):
    """Named profiles loaded from db.toml."""

    profiles: dict[str, DatabaseProfile] = Field(default_factory=dict)
