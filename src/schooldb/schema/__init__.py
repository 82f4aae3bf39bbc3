"""Schema definition, dependency ordering and the schema applier.

Usage:
    from schooldb.schema import TABLES, apply_schema, truncate_order
"""

from schooldb.schema.apply import SchemaApplyError, apply_schema, ensure_database
from schooldb.schema.graph import (
    check_dependency_order,
    creation_order,
    topological_sort,
    truncate_order,
)
from schooldb.schema.models import ForeignKey, TableDef
from schooldb.schema.tables import ANCHOR_TABLE, KEY_TABLES, TABLES, get_table

__all__ = [
    # Definitions
    "TABLES",
    "ANCHOR_TABLE",
    "KEY_TABLES",
    "TableDef",
    "ForeignKey",
    "get_table",
    # Ordering
    "topological_sort",
    "check_dependency_order",
    "creation_order",
    "truncate_order",
    # Applier
    "apply_schema",
    "ensure_database",
    "SchemaApplyError",
]
