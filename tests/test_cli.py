"""Tests for the schooldb CLI.

Lifecycle functions are patched at the CLI module; these tests check
argument parsing, which operation each command runs and the exit codes.
"""

import textwrap
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from schooldb import cli
from schooldb.backup.dump import BackupError
from schooldb.cli import build_parser, main
from schooldb.config.models import DatabaseProfile
from schooldb.factory import ProfileNotFoundError
from schooldb.models import MigrationResult, SeedOutcome, SeedResult, StatusReport
from schooldb.seed.orchestrator import SeedError

PROFILE = DatabaseProfile(database="seangkatan_db")


@pytest.fixture
def resolved():
    with patch("schooldb.cli.resolve_profile", return_value=("env", PROFILE)) as mock:
        yield mock


def _applied() -> MigrationResult:
    return MigrationResult(
        tables_applied=["users", "classes"],
        seed=SeedResult(outcome=SeedOutcome.APPLIED, row_counts={"users": 7}),
    )


# ============================================================================
# Parser
# ============================================================================


class TestParser:
    def test_prog(self) -> None:
        assert build_parser().prog == "schooldb"

    def test_global_options(self) -> None:
        args = build_parser().parse_args(
            ["--profile", "staging", "--env-prefix", "APP_", "-v", "status"]
        )
        assert args.profile == "staging"
        assert args.env_prefix == "APP_"
        assert args.verbose
        assert args.command == "status"

    def test_force_flags(self) -> None:
        parser = build_parser()
        assert parser.parse_args(["seed", "--force"]).force
        assert not parser.parse_args(["migrate"]).force

    def test_backup_output_optional(self) -> None:
        parser = build_parser()
        assert parser.parse_args(["backup"]).output_file is None
        assert parser.parse_args(["backup", "out.sql"]).output_file == "out.sql"

    def test_unknown_command(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["explode"])

    def test_no_command_prints_help(self, capsys) -> None:
        assert main([]) == 0
        assert "schooldb" in capsys.readouterr().out


# ============================================================================
# Migration commands
# ============================================================================


class TestMigrationCommands:
    def test_setup(self, resolved) -> None:
        with patch("schooldb.cli.run_migration", new_callable=AsyncMock) as mock_run:
            mock_run.return_value = MigrationResult(tables_applied=["users"])
            assert main(["setup"]) == 0
        assert mock_run.call_args[1] == {"setup": True, "seed": False}

    def test_seed(self, resolved) -> None:
        with patch("schooldb.cli.run_migration", new_callable=AsyncMock) as mock_run:
            mock_run.return_value = _applied()
            assert main(["seed"]) == 0
        assert mock_run.call_args[1] == {"setup": False, "seed": True, "force": False}

    def test_seed_force(self, resolved) -> None:
        with patch("schooldb.cli.run_migration", new_callable=AsyncMock) as mock_run:
            mock_run.return_value = _applied()
            assert main(["seed", "--force"]) == 0
        assert mock_run.call_args[1]["force"] is True

    def test_migrate(self, resolved) -> None:
        with patch("schooldb.cli.run_migration", new_callable=AsyncMock) as mock_run:
            mock_run.return_value = _applied()
            assert main(["migrate"]) == 0
        assert mock_run.call_args[1] == {"setup": True, "seed": True, "force": False}

    def test_already_seeded_exits_zero(self, resolved, capsys) -> None:
        result = MigrationResult(
            seed=SeedResult(outcome=SeedOutcome.SKIPPED_ALREADY_SEEDED, anchor_count=7)
        )
        with patch("schooldb.cli.run_migration", new_callable=AsyncMock, return_value=result):
            assert main(["migrate"]) == 0
        assert "already has data" in capsys.readouterr().out

    def test_failure_exits_one(self, resolved, capsys) -> None:
        error = SeedError("users", RuntimeError("Duplicate entry"))
        with patch("schooldb.cli.run_migration", new_callable=AsyncMock, side_effect=error):
            assert main(["migrate"]) == 1
        assert "Duplicate entry" in capsys.readouterr().out

    def test_unknown_profile_exits_one(self) -> None:
        with patch(
            "schooldb.cli.resolve_profile", side_effect=ProfileNotFoundError("no such profile")
        ):
            assert main(["--profile", "nope", "setup"]) == 1

    def test_profile_options_forwarded(self, tmp_path: Path) -> None:
        with patch(
            "schooldb.cli.resolve_profile", return_value=("staging", PROFILE)
        ) as mock_resolve, patch(
            "schooldb.cli.run_migration", new_callable=AsyncMock, return_value=_applied()
        ):
            main(["--profile", "staging", "--config", str(tmp_path / "db.toml"),
                  "--env-prefix", "APP_", "migrate"])

        assert mock_resolve.call_args[1] == {
            "profile_name": "staging",
            "env_prefix": "APP_",
            "config_path": tmp_path / "db.toml",
        }


class TestReset:
    def test_confirmation_declined(self, resolved) -> None:
        with patch.object(cli.console, "input", return_value="n"), \
             patch("schooldb.cli.reset_database", new_callable=AsyncMock) as mock_reset:
            assert main(["reset"]) == 0
        mock_reset.assert_not_called()

    def test_confirmation_accepted(self, resolved) -> None:
        with patch.object(cli.console, "input", return_value="yes"), \
             patch("schooldb.cli.reset_database", new_callable=AsyncMock) as mock_reset:
            mock_reset.return_value = MigrationResult(reset=True, seed=_applied().seed)
            assert main(["reset"]) == 0
        mock_reset.assert_awaited_once_with(PROFILE)

    def test_yes_skips_prompt(self, resolved) -> None:
        with patch.object(cli.console, "input") as mock_input, \
             patch("schooldb.cli.reset_database", new_callable=AsyncMock) as mock_reset:
            mock_reset.return_value = MigrationResult(reset=True)
            assert main(["reset", "--yes"]) == 0
        mock_input.assert_not_called()

    def test_failure_exits_one(self, resolved) -> None:
        with patch("schooldb.cli.reset_database", new_callable=AsyncMock,
                   side_effect=RuntimeError("access denied")):
            assert main(["reset", "-y"]) == 1


# ============================================================================
# Status, backup, profiles
# ============================================================================


class TestStatus:
    def test_connected(self, resolved, capsys) -> None:
        report = StatusReport(
            connected=True,
            database="seangkatan_db",
            tables_count=19,
            tables=["users"],
            row_counts={"users": 7},
        )
        with patch("schooldb.cli.check_status", new_callable=AsyncMock, return_value=report):
            assert main(["status"]) == 0
        out = capsys.readouterr().out
        assert "seangkatan_db" in out
        assert "19" in out

    def test_not_connected_still_exits_zero(self, resolved, capsys) -> None:
        report = StatusReport(connected=False, error="Can't connect to MySQL server")
        with patch("schooldb.cli.check_status", new_callable=AsyncMock, return_value=report):
            assert main(["status"]) == 0
        assert "Can't connect" in capsys.readouterr().out


class TestBackup:
    def test_success(self, resolved, capsys) -> None:
        with patch("schooldb.cli.backup_database", new_callable=AsyncMock) as mock_backup:
            mock_backup.return_value = Path("out.sql")
            assert main(["backup", "out.sql"]) == 0
        mock_backup.assert_awaited_once_with(PROFILE, "out.sql")
        assert "out.sql" in capsys.readouterr().out

    def test_failure(self, resolved) -> None:
        with patch("schooldb.cli.backup_database", new_callable=AsyncMock,
                   side_effect=BackupError("mysqldump exited with code 2", exit_code=2)):
            assert main(["backup"]) == 1


class TestProfiles:
    def test_lists_profiles(self, tmp_path: Path, capsys) -> None:
        config_file = tmp_path / "db.toml"
        config_file.write_text(textwrap.dedent("""\
            [profiles.local]
            host = "localhost"
            description = "Laptop"

            [profiles.staging]
            host = "staging.example.com"
        """))

        assert main(["--config", str(config_file), "profiles"]) == 0

        out = capsys.readouterr().out
        assert "local" in out
        assert "staging.example.com" in out

    def test_missing_config(self, tmp_path: Path) -> None:
        assert main(["--config", str(tmp_path / "none.toml"), "profiles"]) == 1

    def test_malformed_config(self, tmp_path: Path) -> None:
        config_file = tmp_path / "db.toml"
        config_file.write_text("[profiles.local\nhost = ")
        assert main(["--config", str(config_file), "profiles"]) == 1


# ============================================================================
# Invalid configuration
# ============================================================================


@pytest.fixture
def clean_env(monkeypatch):
    for name in ["DB_PROFILE", "DB_HOST", "DB_PORT", "DB_USER", "DB_PASSWORD", "DB_NAME"]:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestInvalidConfiguration:
    """Bad settings are reported with exit code 1, never a traceback."""

    @pytest.mark.parametrize("command", [["status"], ["reset", "--yes"], ["migrate"], ["backup"]])
    def test_invalid_port(self, clean_env, command, capsys) -> None:
        clean_env.setenv("DB_PORT", "abc")
        assert main(command) == 1
        assert "port" in capsys.readouterr().out

    def test_invalid_database_name_on_status(self, clean_env) -> None:
        clean_env.setenv("DB_NAME", "school-db")
        with patch("schooldb.cli.check_status", new_callable=AsyncMock) as mock_status:
            assert main(["status"]) == 1
        mock_status.assert_not_called()

    def test_invalid_profile_on_reset(self, clean_env, tmp_path: Path) -> None:
        config_file = tmp_path / "db.toml"
        config_file.write_text('[profiles.local]\nport = "not-a-port"\n')
        with patch("schooldb.cli.reset_database", new_callable=AsyncMock) as mock_reset:
            assert main(["--config", str(config_file), "--profile", "local", "reset", "-y"]) == 1
        mock_reset.assert_not_called()

    def test_malformed_toml_on_status(self, clean_env, tmp_path: Path) -> None:
        config_file = tmp_path / "db.toml"
        config_file.write_text("[profiles.local\n")
        assert main(["--config", str(config_file), "--profile", "local", "status"]) == 1
