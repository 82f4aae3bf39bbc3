"""Foreign-key dependency ordering for the schema.

Creation and seeding run parents first; truncation runs children first.
"""

from schooldb.schema.models import TableDef
from schooldb.schema.tables import TABLES


def dependency_graph(tables: list[TableDef]) -> dict[str, set[str]]:
    """Map each table to the set of tables it references via FK."""
    return {table.name: table.depends_on for table in tables}


def topological_sort(dependencies: dict[str, set[str]], tables: list[str]) -> list[str]:
    """Topological sort of tables based on FK dependencies.

    Returns tables in forward order: parent tables first, child tables last.
    Ties keep the order of ``tables``.

    Args:
        dependencies: FK dependency graph (table -> set of referenced tables).
        tables: List of table names to sort.

    Returns:
        Tables sorted so that parent tables come before child tables.
    """
    # Filter dependencies to only include relevant tables
    relevant = {t: dependencies.get(t, set()) & set(tables) for t in tables}

    sorted_tables: list[str] = []
    visited: set[str] = set()
    visiting: set[str] = set()  # For cycle detection

    def visit(table: str) -> None:
        if table in visited:
            return
        if table in visiting:
            # Cycle detected -- break it by just adding the table
            return
        visiting.add(table)
        for dep in sorted(relevant.get(table, set())):
            visit(dep)
        visiting.discard(table)
        visited.add(table)
        sorted_tables.append(table)

    for table in tables:
        visit(table)

    return sorted_tables


def check_dependency_order(tables: list[TableDef]) -> None:
    """Verify every table comes after the tables it references.

    Raises:
        ValueError: Naming the first table that references a table which is
            defined later or not at all.
    """
    seen: set[str] = set()
    for table in tables:
        missing = table.depends_on - seen
        if missing:
            raise ValueError(
                f"Table '{table.name}' references {', '.join(sorted(missing))} "
                f"before it is created"
            )
        seen.add(table.name)


def creation_order(tables: list[TableDef] | None = None) -> list[str]:
    """Table names ordered parents first."""
    if tables is None:
        tables = TABLES
    return topological_sort(dependency_graph(tables), [t.name for t in tables])


def truncate_order(tables: list[TableDef] | None = None) -> list[str]:
    """Table names ordered children first (reverse of ``creation_order``)."""
    return list(reversed(creation_order(tables)))
