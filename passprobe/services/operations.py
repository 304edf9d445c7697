"""
Adapter and CLI operations shared by the test suites.

Adapter operations raise on failure; the scenario runner turns the
exception into a failed outcome. CLI operations return the command result
converted to an outcome.
"""

from typing import Dict, List, Optional

from passprobe.config.settings import Settings
from passprobe.database.adapter import (
    check_connection,
    create_engine_from_config,
    create_engine_from_url,
)
from passprobe.database.connection_strings import create_mssql_config, redact_password
from passprobe.database.migrations import (
    DATABASE_URL_ENV,
    TEST_SCENARIO_ENV,
    build_alembic_command,
    run_migration_command,
)
from passprobe.models.results import CommandResult, StyleOutcome
from passprobe.models.scenario import Scenario
from passprobe.utils.logger import get_module_logger

logger = get_module_logger(__name__)


def connect_with_config(settings: Settings, scenario: Scenario) -> None:
    """Connect through a structured configuration holding the raw password."""
    config = create_mssql_config(scenario.host, scenario.port, scenario.user, scenario.password, scenario.database)
    logger.info("   Config created (password not logged)")
    engine = create_engine_from_config(
        config,
        connect_timeout=settings.connect_timeout,
        odbc_driver=settings.odbc_driver,
    )
    check_connection(engine)


def connect_with_connection_string(settings: Settings, scenario: Scenario, connection_string: str) -> None:
    """Connect through a connection string that the adapter has to parse."""
    logger.info(f"   Connection string: {redact_password(connection_string, scenario.password)}")
    engine = create_engine_from_url(
        connection_string,
        connect_timeout=settings.connect_timeout,
        odbc_driver=settings.odbc_driver,
    )
    check_connection(engine)


def run_cli(
    settings: Settings,
    arguments: List[str],
    database_url: Optional[str] = None,
    scenario_key: Optional[str] = None,
) -> CommandResult:
    """
    Run the migration CLI with a connection string or a scenario selector.

    Exactly one of ``database_url`` and ``scenario_key`` is expected. When
    the selector is used, DATABASE_URL is blanked for the child so that an
    override inherited from the harness environment cannot win.
    """
    env: Dict[str, str] = {}
    if database_url is not None:
        env[DATABASE_URL_ENV] = database_url
    else:
        env[DATABASE_URL_ENV] = ""
        env[TEST_SCENARIO_ENV] = scenario_key or ""

    return run_migration_command(
        build_alembic_command(settings, arguments),
        env_overrides=env,
        timeout=settings.command_timeout,
    )


def command_outcome(style: str, result: CommandResult) -> StyleOutcome:
    """Convert a command result into a style outcome."""
    if result.success:
        return StyleOutcome.succeeded(style, output=result.output)
    return StyleOutcome.failed(style, result.error or "Unknown error", output=result.output)
