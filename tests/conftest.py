"""Shared fixtures: an in-memory stand-in for a MySQL server.

``FakeServer`` keeps databases, tables and rows in dicts and understands the
handful of statements the lifecycle code issues.  ``FakeClient`` implements
the ``DatabaseClient`` protocol against it with per-session
``FOREIGN_KEY_CHECKS``, auto-increment ids that ``TRUNCATE`` resets, and
foreign-key enforcement on insert and truncate.
"""

import re
from typing import Any

import pytest

from schooldb.schema.models import TableDef
from schooldb.seed import passwords

_CREATE_TABLE = re.compile(r"CREATE\s+TABLE\s+IF\s+NOT\s+EXISTS\s+(\w+)", re.IGNORECASE)
_CREATE_DB = re.compile(r"CREATE\s+DATABASE\s+(IF\s+NOT\s+EXISTS\s+)?`(\w+)`", re.IGNORECASE)
_DROP_DB = re.compile(r"DROP\s+DATABASE\s+IF\s+EXISTS\s+`(\w+)`", re.IGNORECASE)
_FK_CHECKS = re.compile(r"SET\s+FOREIGN_KEY_CHECKS\s*=\s*([01])", re.IGNORECASE)
_TRUNCATE = re.compile(r"TRUNCATE\s+TABLE\s+(\w+)", re.IGNORECASE)


class FakeDBError(Exception):
    pass


class FakeTable:
    def __init__(self, definition: TableDef):
        self.definition = definition
        self.rows: list[dict[str, Any]] = []
        self.next_id = 1

    def insert(self, data: dict[str, Any]) -> int:
        row_id = self.next_id
        self.next_id += 1
        self.rows.append({**data, "id": row_id})
        return row_id

    def ids(self) -> set[int]:
        return {row["id"] for row in self.rows}


class FakeServer:
    """In-memory MySQL server shared by every client created for a test."""

    def __init__(self) -> None:
        self.databases: dict[str, dict[str, FakeTable]] = {}
        self.statements: list[str] = []
        self.clients: list["FakeClient"] = []
        self.down = False
        # substring -> exception raised when a statement contains it
        self.fail_on: dict[str, Exception] = {}

    def client(self, database: str | None = None) -> "FakeClient":
        client = FakeClient(self, database)
        self.clients.append(client)
        return client

    def tables(self, database: str) -> dict[str, FakeTable]:
        return self.databases[database]

    def rows(self, database: str, table: str) -> list[dict[str, Any]]:
        return self.databases[database][table].rows


class FakeClient:
    """``DatabaseClient`` backed by a ``FakeServer``."""

    def __init__(self, server: FakeServer, database: str | None = None):
        self.server = server
        self.database = database
        self.fk_checks = True
        self.closed = False
        self.entered = False

    async def __aenter__(self) -> "FakeClient":
        if self.server.down:
            raise FakeDBError("Can't connect to MySQL server")
        if self.database is not None and self.database not in self.server.databases:
            raise FakeDBError(f"Unknown database '{self.database}'")
        self.entered = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _check_fail(self, statement: str) -> None:
        for fragment, error in self.server.fail_on.items():
            if fragment in statement:
                raise error

    def _tables(self) -> dict[str, FakeTable]:
        if self.database is None:
            raise FakeDBError("No database selected")
        return self.server.databases[self.database]

    async def execute(self, sql: str, params: dict[str, Any] | None = None) -> None:
        statement = " ".join(sql.split())
        self.server.statements.append(statement)
        self._check_fail(statement)

        if match := _CREATE_DB.search(statement):
            if_not_exists, name = match.groups()
            if name in self.server.databases and not if_not_exists:
                raise FakeDBError(f"Can't create database '{name}'; database exists")
            self.server.databases.setdefault(name, {})
        elif match := _DROP_DB.search(statement):
            self.server.databases.pop(match.group(1), None)
        elif match := _CREATE_TABLE.search(statement):
            tables = self._tables()
            definition = TableDef(name=match.group(1), ddl=sql)
            if definition.name in tables:
                return
            for parent in definition.depends_on:
                if parent not in tables:
                    raise FakeDBError(f"Failed to open the referenced table '{parent}'")
            tables[definition.name] = FakeTable(definition)
        elif match := _FK_CHECKS.search(statement):
            self.fk_checks = match.group(1) == "1"
        elif match := _TRUNCATE.search(statement):
            tables = self._tables()
            name = match.group(1)
            if name not in tables:
                raise FakeDBError(f"Table '{name}' doesn't exist")
            if self.fk_checks:
                for other in tables.values():
                    if other.definition.name != name and name in other.definition.depends_on:
                        raise FakeDBError(
                            f"Cannot truncate a table referenced in a foreign key constraint ({name})"
                        )
            tables[name].rows = []
            tables[name].next_id = 1
        else:
            raise FakeDBError(f"Unsupported statement: {statement}")

    async def insert(self, table: str, data: dict[str, Any]) -> dict[str, Any]:
        self.server.statements.append(f"INSERT INTO {table}")
        self._check_fail(f"INSERT INTO {table}")
        tables = self._tables()
        if table not in tables:
            raise FakeDBError(f"Table '{table}' doesn't exist")

        target = tables[table]
        if self.fk_checks:
            for fk in target.definition.foreign_keys:
                value = data.get(fk.column)
                if value is not None and value not in tables[fk.table].ids():
                    raise FakeDBError(
                        f"Cannot add or update a child row: {table}.{fk.column}={value}"
                    )

        row_id = target.insert(data)
        return {**data, "id": row_id}

    async def count(self, table: str) -> int:
        tables = self._tables()
        if table not in tables:
            raise FakeDBError(f"Table '{table}' doesn't exist")
        return len(tables[table].rows)

    async def list_tables(self) -> list[str]:
        return sorted(self._tables())

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """Lowest bcrypt cost so seeding tests stay quick."""
    monkeypatch.setattr(passwords, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def patched_adapter(server, monkeypatch) -> FakeServer:
    """Route ``get_adapter`` in the lifecycle module to the fake server."""

    def fake_get_adapter(profile, include_database=True):
        return server.client(profile.database if include_database else None)

    monkeypatch.setattr("schooldb.migration.get_adapter", fake_get_adapter)
    return server
