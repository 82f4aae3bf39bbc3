"""Table definition models.

A ``TableDef`` pairs a table name with its ``CREATE TABLE IF NOT EXISTS``
statement.  Foreign keys, dependencies and JSON columns are read from the
DDL itself, so the statement is the only place a relationship is declared.

Usage:
    from schooldb.schema.models import TableDef

    classes = TableDef(
        name="classes",
        ddl='''CREATE TABLE IF NOT EXISTS classes (
            id INT PRIMARY KEY AUTO_INCREMENT,
            teacher_id INT,
            FOREIGN KEY (teacher_id) REFERENCES users(id)
        )''',
    )
    classes.depends_on  # {"users"}
"""

import re

from pydantic import BaseModel

_FK_PATTERN = re.compile(
    r"FOREIGN\s+KEY\s*\(\s*(\w+)\s*\)\s*REFERENCES\s+(\w+)\s*\(",
    re.IGNORECASE,
)
_JSON_COLUMN_PATTERN = re.compile(r"^\s*(\w+)\s+JSON\b", re.IGNORECASE | re.MULTILINE)


class ForeignKey(BaseModel):
    """Foreign key reference to a parent table."""

    column: str         # FK column in this table
    table: str          # referenced table name


class TableDef(BaseModel):
    """One table of the schema and its DDL."""

    name: str
    ddl: str

    @property
    def foreign_keys(self) -> list[ForeignKey]:
        """Foreign keys declared in the DDL, in declaration order."""
        return [
            ForeignKey(column=column, table=table)
            for column, table in _FK_PATTERN.findall(self.ddl)
        ]

    @property
    def depends_on(self) -> set[str]:
        """Tables this one references, excluding self references."""
        return {fk.table for fk in self.foreign_keys if fk.table != self.name}

    @property
    def json_columns(self) -> list[str]:
        """Columns declared with the JSON type."""
        return _JSON_COLUMN_PATTERN.findall(self.ddl)
