"""Unit tests for database migrations module."""

import subprocess
import sys
from unittest.mock import patch

import pytest
from alembic.config import Config
from alembic.script import ScriptDirectory

from passprobe.config.exceptions import ConfigurationError
from passprobe.database.migrations import (
    build_alembic_command,
    resolve_database_url,
    run_migration_command,
    scenario_cli_connection_string,
)


def _completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=["alembic"], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.mark.unit
class TestRunMigrationCommand:
    """Test external command execution and outcome capture."""

    @patch("passprobe.database.migrations.subprocess.run")
    def test_success(self, mock_run):
        mock_run.return_value = _completed(stdout="done\n", stderr="INFO  [alembic.runtime.migration] Running upgrade")

        result = run_migration_command(["alembic", "upgrade", "head"], {"DATABASE_URL": "x"}, timeout=12)

        assert result.success is True
        assert result.returncode == 0
        assert result.command == "alembic upgrade head"
        assert "done" in result.output
        assert "STDERR: INFO" in result.output
        kwargs = mock_run.call_args[1]
        assert kwargs["timeout"] == 12
        assert kwargs["env"]["DATABASE_URL"] == "x"
        assert kwargs["capture_output"] is True

    @patch("passprobe.database.migrations.subprocess.run")
    def test_environment_inherits_parent(self, mock_run, monkeypatch):
        monkeypatch.setenv("PASSPROBE_PARENT_MARKER", "1")
        mock_run.return_value = _completed()

        run_migration_command(["alembic", "current"], {"PASSPROBE_TEST_SCENARIO": "curly"})

        env = mock_run.call_args[1]["env"]
        assert env["PASSPROBE_PARENT_MARKER"] == "1"
        assert env["PASSPROBE_TEST_SCENARIO"] == "curly"

    @patch("passprobe.database.migrations.subprocess.run")
    def test_nonzero_exit_is_failure(self, mock_run):
        mock_run.return_value = _completed(returncode=1, stderr="Login failed for user 'sa'.")

        result = run_migration_command(["alembic", "upgrade", "head"])

        assert result.success is False
        assert result.returncode == 1
        assert result.error == "Login failed for user 'sa'."

    @patch("passprobe.database.migrations.subprocess.run")
    def test_nonzero_exit_without_output(self, mock_run):
        mock_run.return_value = _completed(returncode=2)

        result = run_migration_command(["alembic", "upgrade", "head"])

        assert result.error == "Command exited with code 2"

    @patch("passprobe.database.migrations.subprocess.run")
    def test_error_in_stderr_is_failure(self, mock_run):
        mock_run.return_value = _completed(stderr="Error: P1000 authentication failed")

        result = run_migration_command(["alembic", "upgrade", "head"])

        assert result.success is False
        assert "authentication failed" in result.error

    @patch("passprobe.database.migrations.subprocess.run")
    def test_timeout_is_failure(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="alembic", timeout=30, output=b"partial")

        result = run_migration_command(["alembic", "upgrade", "head"], timeout=30)

        assert result.success is False
        assert result.timed_out is True
        assert result.error == "Command timed out after 30s"
        assert result.output == "partial"

    @patch("passprobe.database.migrations.subprocess.run")
    def test_missing_executable_is_failure(self, mock_run):
        mock_run.side_effect = FileNotFoundError("No such file or directory: 'alembic'")

        result = run_migration_command(["alembic", "current"])

        assert result.success is False
        assert result.error.startswith("FileNotFoundError")


@pytest.mark.unit
class TestBuildAlembicCommand:
    """Test Alembic argv construction."""

    def test_uses_current_interpreter_and_config(self, test_settings):
        command = build_alembic_command(test_settings, ["upgrade", "head"])

        assert command[:3] == [sys.executable, "-m", "alembic"]
        assert command[3:5] == ["-c", test_settings.alembic_config_path]
        assert command[5:] == ["upgrade", "head"]

    def test_connection_string_never_on_command_line(self, test_settings, curly_scenario):
        command = build_alembic_command(test_settings, test_settings.migration_command)

        assert curly_scenario.password not in " ".join(command)


@pytest.mark.unit
class TestResolveDatabaseUrl:
    """Test connection string resolution for the migration CLI environment."""

    def test_override_wins(self, test_settings):
        settings = test_settings.model_copy(update={
            "database_url": "sqlserver://override:1433;user=sa",
            "test_scenario": "curly",
        })

        assert resolve_database_url(settings) == "sqlserver://override:1433;user=sa"

    def test_scenario_selector(self, test_settings, curly_scenario):
        settings = test_settings.model_copy(update={"test_scenario": "curly"})

        url = resolve_database_url(settings)

        assert url == scenario_cli_connection_string(curly_scenario)
        assert "password=Strong{{}Pass{}}2024!;" in url
        assert ":1434;" in url

    @pytest.mark.parametrize("selector", ["", "unknown"])
    def test_falls_back_to_basic(self, test_settings, selector, caplog):
        settings = test_settings.model_copy(update={"test_scenario": selector})

        with caplog.at_level("WARNING", logger="passprobe"):
            url = resolve_database_url(settings)

        assert url == scenario_cli_connection_string(settings.scenarios["basic"])
        assert "Available scenarios: basic, curly, urlChars, sqlChars, complex" in caplog.text

    def test_no_scenarios_raises(self, test_settings):
        with pytest.raises(ConfigurationError):
            resolve_database_url(test_settings, scenarios={})


@pytest.mark.unit
class TestMigrationScripts:
    """Test that the bundled Alembic scripts load."""

    def test_single_head_creates_connection_tests(self, test_settings):
        script = ScriptDirectory.from_config(Config(test_settings.alembic_config_path))

        heads = script.get_heads()
        assert heads == ["5f2a9c7e1b34"]
        revision = script.get_revision("5f2a9c7e1b34")
        assert revision.down_revision is None
        assert "connection_tests" in revision.doc

    def test_model_metadata_matches_migration(self):
        from sqlmodel import SQLModel

        import passprobe.models.db_models  # noqa: F401

        table = SQLModel.metadata.tables["connection_tests"]
        assert set(table.columns.keys()) == {"id", "scenario", "style", "created_at"}
