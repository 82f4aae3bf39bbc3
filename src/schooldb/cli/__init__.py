"""Command-line interface for the school database lifecycle.

Usage:
    schooldb setup
    schooldb seed [--force]
    schooldb migrate [--force]
    schooldb reset [--yes]
    schooldb status
    schooldb backup [output_file]
    schooldb profiles
    schooldb --profile staging migrate

Commands:
    setup     - Create the database and tables only
    seed      - Insert fixture data (--force empties every table first)
    migrate   - Setup + seed
    reset     - Drop the database, recreate it, setup and force-seed
    status    - Show tables and key row counts
    backup    - Dump the database with mysqldump
    profiles  - List profiles defined in db.toml
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from schooldb.backup.dump import backup_database
from schooldb.config.loader import load_db_config
from schooldb.config.models import DatabaseProfile
from schooldb.factory import ProfileNotFoundError, resolve_profile
from schooldb.migration import check_status, reset_database, run_migration
from schooldb.models import MigrationResult

console = Console()


# ============================================================================
# Helpers
# ============================================================================


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _resolve(args: argparse.Namespace) -> tuple[str, DatabaseProfile]:
    """Resolve the profile from the global options.

    Raises:
        ProfileNotFoundError: Unknown profile or missing db.toml.
        ValueError: Invalid settings (pydantic ``ValidationError``) or
            malformed db.toml (``tomllib.TOMLDecodeError``).
    """
    config_path = Path(args.config) if getattr(args, "config", None) else None
    return resolve_profile(
        profile_name=getattr(args, "profile", None),
        env_prefix=getattr(args, "env_prefix", ""),
        config_path=config_path,
    )


def _print_migration(result: MigrationResult) -> None:
    if result.reset:
        console.print("[bold green]v[/bold green] Database dropped and recreated")

    if result.tables_applied:
        console.print(
            f"[bold green]v[/bold green] {len(result.tables_applied)} tables ready"
        )

    seed = result.seed
    if seed is None:
        return

    if seed.skipped:
        console.print(
            "[yellow]Database already has data. Seeding skipped.[/yellow]"
        )
        console.print(
            "[dim]Use[/dim] [cyan]--force[/cyan] [dim]to overwrite existing data.[/dim]"
        )
        return

    table = Table(title="Seeded Rows", show_header=True, header_style="bold")
    table.add_column("Table", style="dim")
    table.add_column("Rows", justify="right")
    for name, count in seed.row_counts.items():
        table.add_row(name, str(count))
    console.print(table)


async def _run(args: argparse.Namespace, **options: bool) -> int:
    """Resolve the profile, run a migration and report it."""
    try:
        _, profile = _resolve(args)
        result = await run_migration(profile, **options)
    except Exception as e:
        console.print(f"[bold red]x[/bold red] Command failed: {escape(str(e))}")
        return 1

    _print_migration(result)
    console.print("[bold green]Done.[/bold green]")
    return 0


# ============================================================================
# Async command implementations
# ============================================================================


async def _async_reset(args: argparse.Namespace) -> int:
    try:
        _, profile = _resolve(args)
    except (ProfileNotFoundError, ValueError) as e:
        console.print(f"[bold red]x[/bold red] {escape(str(e))}")
        return 1

    if not args.yes:
        console.print(
            f"[bold yellow]WARNING:[/bold yellow] this drops database "
            f"[bold]{profile.database}[/bold] on {profile.host} and all its data."
        )
        response = console.input("Continue? \\[y/N] ")
        if response.lower() not in ["y", "yes"]:
            console.print("Cancelled.")
            return 0

    try:
        result = await reset_database(profile)
    except Exception as e:
        console.print(f"[bold red]x[/bold red] Reset failed: {escape(str(e))}")
        return 1

    _print_migration(result)
    console.print("[bold green]Done.[/bold green]")
    return 0


async def _async_status(args: argparse.Namespace) -> int:
    try:
        profile_name, profile = _resolve(args)
    except (ProfileNotFoundError, ValueError) as e:
        console.print(f"[bold red]x[/bold red] {escape(str(e))}")
        return 1

    console.print("Checking database status...", style="dim")
    report = await check_status(profile)

    if not report.connected:
        console.print(f"[bold red]x[/bold red] Not connected: {escape(str(report.error))}")
        return 0

    table = Table(title="Database Status", show_header=False)
    table.add_column("Key", style="dim")
    table.add_column("Value")
    table.add_row("Profile", f"[bold cyan]{profile_name}[/bold cyan]")
    table.add_row("Database", str(report.database))
    table.add_row("Tables", str(report.tables_count))
    for name, count in report.row_counts.items():
        table.add_row(f"{name} rows", str(count))
    console.print(table)

    if not report.tables:
        console.print("[yellow]No tables found.[/yellow]")

    return 0


async def _async_backup(args: argparse.Namespace) -> int:
    try:
        _, profile = _resolve(args)
        path = await backup_database(profile, args.output_file)
    except Exception as e:
        console.print(f"[bold red]x[/bold red] Backup failed: {escape(str(e))}")
        return 1

    console.print(f"[bold green]v[/bold green] Backup saved: [cyan]{path}[/cyan]")
    return 0


# ============================================================================
# Sync command wrappers
# ============================================================================


def cmd_setup(args: argparse.Namespace) -> int:
    """Create the database and tables."""
    return asyncio.run(_run(args, setup=True, seed=False))


def cmd_seed(args: argparse.Namespace) -> int:
    """Insert fixture data."""
    return asyncio.run(_run(args, setup=False, seed=True, force=args.force))


def cmd_migrate(args: argparse.Namespace) -> int:
    """Create the schema, then seed."""
    return asyncio.run(_run(args, setup=True, seed=True, force=args.force))


def cmd_reset(args: argparse.Namespace) -> int:
    """Drop, recreate, set up and force-seed the database."""
    return asyncio.run(_async_reset(args))


def cmd_status(args: argparse.Namespace) -> int:
    """Show connectivity, tables and key row counts.

    Returns:
        0 whenever the profile resolves, connected or not (informational
        command; connection failures are printed).  1 for invalid
        configuration.
    """
    return asyncio.run(_async_status(args))


def cmd_backup(args: argparse.Namespace) -> int:
    """Dump the database to a file."""
    return asyncio.run(_async_backup(args))


def cmd_profiles(args: argparse.Namespace) -> int:
    """List profiles from db.toml.

    Reads only the local TOML config -- no database calls.
    """
    config_path = Path(args.config) if args.config else None
    try:
        config = load_db_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1

    table = Table(
        title="Database Profiles", show_header=True, header_style="bold"
    )
    table.add_column("Profile")
    table.add_column("Host")
    table.add_column("Database")
    table.add_column("Description")

    for name, profile in config.profiles.items():
        table.add_row(
            name,
            f"{profile.host}:{profile.port}",
            profile.database,
            profile.description or "",
        )

    console.print(table)
    return 0


# ============================================================================
# Main entry point
# ============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schooldb",
        description="Database migration tool for the school-management app",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  schooldb migrate
  schooldb seed --force
  schooldb reset --yes
  schooldb backup my-backup.sql
        """,
    )

    parser.add_argument(
        "--profile",
        help="Profile name from db.toml (default: DB_PROFILE, else DB_* env vars)",
    )
    parser.add_argument(
        "--config",
        help="Path to db.toml (default: ./db.toml)",
    )
    parser.add_argument(
        "--env-prefix",
        default="",
        help=(
            "Prefix for environment variable lookup "
            "(e.g., --env-prefix APP_ reads APP_DB_HOST)"
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every step",
    )

    subparsers = parser.add_subparsers(dest="command")

    p_setup = subparsers.add_parser("setup", help="Create the database and tables only")
    p_setup.set_defaults(func=cmd_setup)

    p_seed = subparsers.add_parser("seed", help="Insert fixture data")
    p_seed.add_argument(
        "--force",
        action="store_true",
        help="Empty every table before seeding",
    )
    p_seed.set_defaults(func=cmd_seed)

    p_migrate = subparsers.add_parser("migrate", help="Setup + seed")
    p_migrate.add_argument(
        "--force",
        action="store_true",
        help="Empty every table before seeding",
    )
    p_migrate.set_defaults(func=cmd_migrate)

    p_reset = subparsers.add_parser(
        "reset",
        help="Drop and recreate the database, then setup and seed",
    )
    p_reset.add_argument(
        "--yes",
        "-y",
        action="store_true",
        help="Skip confirmation prompt",
    )
    p_reset.set_defaults(func=cmd_reset)

    p_status = subparsers.add_parser("status", help="Show database status")
    p_status.set_defaults(func=cmd_status)

    p_backup = subparsers.add_parser("backup", help="Create a database backup")
    p_backup.add_argument(
        "output_file",
        nargs="?",
        help="Output file (default: backup_<database>_<date>.sql)",
    )
    p_backup.set_defaults(func=cmd_backup)

    p_profiles = subparsers.add_parser("profiles", help="List db.toml profiles")
    p_profiles.set_defaults(func=cmd_profiles)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code (0 for success, 1 for errors).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    _configure_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
