"""Logical backups with mysqldump.

Usage:
    from schooldb.backup import backup_database, BackupError
"""

from schooldb.backup.dump import (
    BackupError,
    backup_database,
    build_dump_args,
    default_backup_path,
    run_dump,
)

__all__ = [
    "BackupError",
    "backup_database",
    "build_dump_args",
    "default_backup_path",
    "run_dump",
]
