"""Logical backups through ``mysqldump``.

The dump's standard output is streamed into a temporary file next to the
target and moved into place only when the process exits with code 0, so a
failed or interrupted dump never leaves a truncated backup at the requested
path.

The password is passed on the command line (``-p<password>``), where other
local users can see it in the process list.

Usage:
    from schooldb.backup import backup_database

    path = await backup_database(profile)                # backup_<db>_<date>.sql
    path = await backup_database(profile, "nightly.sql")
"""

import asyncio
import logging
import os
import tempfile
from datetime import date
from pathlib import Path

from schooldb.config.models import DEFAULT_PORT, DatabaseProfile

logger = logging.getLogger(__name__)

DUMP_EXECUTABLE = "mysqldump"
CHUNK_SIZE = 64 * 1024


class BackupError(Exception):
    """The dump process could not be started or exited non-zero.

    ``exit_code`` is ``None`` when the process never started.
    """

    def __init__(self, message: str, exit_code: int | None = None):
        self.exit_code = exit_code
        super().__init__(message)


def default_backup_path(database: str, today: date | None = None) -> Path:
    """``backup_<database>_<YYYY-MM-DD>.sql`` in the working directory."""
    if today is None:
        today = date.today()
    return Path(f"backup_{database}_{today.isoformat()}.sql")


def build_dump_args(profile: DatabaseProfile, executable: str = DUMP_EXECUTABLE) -> list[str]:
    """Command line for dumping the profile's database with routines and triggers."""
    args = [executable, "-h", profile.host]
    if profile.port != DEFAULT_PORT:
        args += ["-P", str(profile.port)]
    args += ["-u", profile.user]
    if profile.password:
        args.append(f"-p{profile.password}")
    args += ["--routines", "--triggers", profile.database]
    return args


async def _copy_stream(reader: asyncio.StreamReader, out) -> None:
    while True:
        chunk = await reader.read(CHUNK_SIZE)
        if not chunk:
            break
        out.write(chunk)


async def _log_stderr(reader: asyncio.StreamReader) -> None:
    async for line in reader:
        logger.warning("mysqldump: %s", line.decode(errors="replace").rstrip())


async def run_dump(args: list[str], output_path: str | Path) -> Path:
    """Run a dump command and save its standard output to ``output_path``.

    Args:
        args: Command and arguments.
        output_path: Destination file.  Only written on success.

    Returns:
        The destination path.

    Raises:
        BackupError: If the process cannot start or exits non-zero.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{output_path.name}.", suffix=".part", dir=output_path.parent
    )
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "wb") as out:
            try:
                process = await asyncio.create_subprocess_exec(
                    *args,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                )
            except OSError as e:
                raise BackupError(f"Could not start {args[0]}: {e}") from e

            try:
                await asyncio.gather(
                    _copy_stream(process.stdout, out),
                    _log_stderr(process.stderr),
                )
                exit_code = await process.wait()
            except BaseException:
                if process.returncode is None:
                    process.kill()
                    await asyncio.shield(process.wait())
                raise

        if exit_code != 0:
            raise BackupError(f"{args[0]} exited with code {exit_code}", exit_code=exit_code)

        os.replace(tmp_path, output_path)
    finally:
        tmp_path.unlink(missing_ok=True)

    logger.info("Backup saved: %s", output_path)
    return output_path


async def backup_database(
    profile: DatabaseProfile,
    output_path: str | Path | None = None,
    executable: str = DUMP_EXECUTABLE,
) -> Path:
    """Dump the profile's database to ``output_path``.

    Args:
        profile: Connection settings.
        output_path: Destination (default: ``default_backup_path()``).
        executable: Dump program to run.

    Raises:
        BackupError: If the dump fails.  No file is left at ``output_path``.
    """
    if output_path is None:
        output_path = default_backup_path(profile.database)

    logger.info("Creating backup of '%s'...", profile.database)
    return await run_dump(build_dump_args(profile, executable), output_path)
