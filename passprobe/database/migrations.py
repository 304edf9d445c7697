"""
Database Migration Module

Runs the Alembic command line as an external process against a scenario
database and resolves the connection string that the Alembic environment
uses when it is started that way.
"""

import os
import subprocess
import sys
from typing import Dict, List, Mapping, Optional

from passprobe.config.builtin_scenarios import DEFAULT_SCENARIO_KEY
from passprobe.config.exceptions import ConfigurationError
from passprobe.config.settings import Settings
from passprobe.database.connection_strings import build_cli_connection_string
from passprobe.models.results import CommandResult
from passprobe.models.scenario import Scenario
from passprobe.utils.logger import get_module_logger

logger = get_module_logger(__name__)

DATABASE_URL_ENV = "DATABASE_URL"
TEST_SCENARIO_ENV = "PASSPROBE_TEST_SCENARIO"


def build_alembic_command(settings: Settings, arguments: List[str]) -> List[str]:
    """Build the argv for one Alembic CLI invocation."""
    return [sys.executable, "-m", "alembic", "-c", settings.alembic_config_path, *arguments]


def run_migration_command(
    command: List[str],
    env_overrides: Optional[Mapping[str, str]] = None,
    timeout: int = 30,
) -> CommandResult:
    """
    Run an external migration command and capture its outcome.

    The command inherits the current environment plus ``env_overrides``;
    the connection string is always passed this way, never on the command
    line. A nonzero exit code, a timeout, or ``Error`` in stderr all count
    as failure.

    Args:
        command: argv of the command to run
        env_overrides: Extra environment variables for the child process
        timeout: Seconds before the process is killed

    Returns:
        CommandResult describing the outcome
    """
    command_line = " ".join(command)
    env: Dict[str, str] = {**os.environ, **(env_overrides or {})}

    logger.info(f"Running: {command_line}")
    try:
        completed = subprocess.run(
            command,
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        logger.warning(f"Command timed out after {timeout}s: {command_line}")
        return CommandResult(
            command=command_line,
            success=False,
            output=_as_text(e.stdout),
            error=f"Command timed out after {timeout}s",
            timed_out=True,
        )
    except OSError as e:
        logger.error(f"Failed to start command '{command_line}': {e}")
        return CommandResult(command=command_line, success=False, error=f"{type(e).__name__}: {e}")

    stdout = completed.stdout or ""
    stderr = completed.stderr or ""
    output = stdout + (f"\nSTDERR: {stderr}" if stderr else "")

    if completed.returncode != 0:
        error = stderr.strip() or stdout.strip() or f"Command exited with code {completed.returncode}"
        return CommandResult(
            command=command_line,
            success=False,
            output=output,
            error=error,
            returncode=completed.returncode,
        )

    if "Error" in stderr:
        return CommandResult(
            command=command_line,
            success=False,
            output=output,
            error=stderr.strip(),
            returncode=completed.returncode,
        )

    return CommandResult(command=command_line, success=True, output=output, returncode=completed.returncode)


def _as_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def scenario_cli_connection_string(scenario: Scenario) -> str:
    """CLI connection string for a scenario."""
    return build_cli_connection_string(
        scenario.host, scenario.port, scenario.user, scenario.password, scenario.database
    )


def resolve_database_url(
    settings: Settings,
    scenarios: Optional[Dict[str, Scenario]] = None,
) -> str:
    """
    Resolve the connection string the migration CLI should use.

    Priority:
    1. ``DATABASE_URL`` override
    2. CLI connection string of the scenario named by ``PASSPROBE_TEST_SCENARIO``
    3. the basic scenario, with a warning

    Raises:
        ConfigurationError: If no scenario is available at all
    """
    if settings.database_url:
        return settings.database_url

    if scenarios is None:
        scenarios = settings.scenarios

    selector = settings.test_scenario
    if selector and selector in scenarios:
        return scenario_cli_connection_string(scenarios[selector])

    if selector:
        logger.warning(f"Unknown {TEST_SCENARIO_ENV} '{selector}', using {DEFAULT_SCENARIO_KEY} scenario")
    else:
        logger.warning(f"No {DATABASE_URL_ENV} or {TEST_SCENARIO_ENV} set, using {DEFAULT_SCENARIO_KEY} scenario")
    logger.warning(f"Available scenarios: {', '.join(scenarios)}")
    logger.warning(f"Set {TEST_SCENARIO_ENV}=<scenario> to use a specific one")

    if DEFAULT_SCENARIO_KEY in scenarios:
        return scenario_cli_connection_string(scenarios[DEFAULT_SCENARIO_KEY])
    if scenarios:
        return scenario_cli_connection_string(next(iter(scenarios.values())))
    raise ConfigurationError("No scenarios configured to resolve a database URL from")
