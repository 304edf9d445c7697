"""
Test suites comparing how the adapter and the migration CLI handle
special-character passwords.

Each suite declares its styles and hands them to the ScenarioRunner; all
suites share the same scenario list and the same failure semantics.
"""

from typing import Callable, Dict, List, Optional

from passprobe.config.settings import Settings
from passprobe.database.connection_strings import (
    build_cli_connection_string,
    build_database_url,
    build_raw_connection_string,
    redact_password,
)
from passprobe.models.results import StyleOutcome, SuiteReport
from passprobe.models.scenario import Scenario
from passprobe.services.operations import (
    command_outcome,
    connect_with_config,
    connect_with_connection_string,
    run_cli,
)
from passprobe.services.scenario_runner import ScenarioRunner, StyleSpec
from passprobe.utils.error_details import extract_error_message
from passprobe.utils.escaping import escape_password_in_url, unescape_password_in_url
from passprobe.utils.logger import get_module_logger

logger = get_module_logger(__name__)

CONNECTION_SUITE = "connection"
MIGRATION_SUITE = "migration"
CLI_VS_ADAPTER_SUITE = "cli-vs-adapter"
URL_VS_CONFIG_SUITE = "url-vs-config"
RUNTIME_ESCAPING_SUITE = "runtime-escaping"
COMPREHENSIVE_SUITE = "comprehensive"

# Display names used by the console report
STYLE_LABELS: Dict[str, str] = {
    "database_url": "DATABASE_URL",
    "config": "Structured config",
    "push": "CLI schema push",
    "introspect": "CLI introspection",
    "cli": "CLI (escaped string)",
    "adapter": "Adapter (config)",
    "raw_url": "Raw DATABASE_URL",
    "cli_escaped_url": "Adapter (CLI-escaped string)",
    "raw_then_escape": "Approach 1 (Raw -> Escape)",
    "escaped_then_unescape": "Approach 2 (Escaped -> Unescape)",
    "escaped_url": "Escaped DATABASE_URL",
}


def run_connection_suite(settings: Settings, scenarios: List[Scenario], runner: ScenarioRunner) -> SuiteReport:
    """Compare a percent-encoded DATABASE_URL with a structured configuration."""

    def database_url_style(scenario: Scenario) -> None:
        url = build_database_url(scenario.host, scenario.port, scenario.user, scenario.password, scenario.database)
        connect_with_connection_string(settings, scenario, url)

    def config_style(scenario: Scenario) -> None:
        connect_with_config(settings, scenario)

    return runner.run(CONNECTION_SUITE, scenarios, [
        StyleSpec("database_url", database_url_style),
        StyleSpec("config", config_style),
    ])


def run_migration_suite(settings: Settings, scenarios: List[Scenario], runner: ScenarioRunner) -> SuiteReport:
    """Push the schema with the migration CLI, then introspect it."""

    def push_style(scenario: Scenario) -> StyleOutcome:
        result = run_cli(settings, settings.migration_command, scenario_key=scenario.key)
        return command_outcome("push", result)

    def introspect_style(scenario: Scenario) -> StyleOutcome:
        result = run_cli(settings, settings.introspect_command, scenario_key=scenario.key)
        return command_outcome("introspect", result)

    return runner.run(MIGRATION_SUITE, scenarios, [
        StyleSpec("push", push_style),
        StyleSpec("introspect", introspect_style, requires="push"),
    ])


def run_cli_vs_adapter_suite(settings: Settings, scenarios: List[Scenario], runner: ScenarioRunner) -> SuiteReport:
    """Compare the CLI with an escaped connection string and the adapter with a raw config."""

    def cli_style(scenario: Scenario) -> StyleOutcome:
        connection_string = build_cli_connection_string(
            scenario.host, scenario.port, scenario.user, scenario.password, scenario.database
        )
        logger.info(f"   Connection string: {redact_password(connection_string, scenario.password)}")
        return command_outcome("cli", run_cli(settings, settings.migration_command, database_url=connection_string))

    def adapter_style(scenario: Scenario) -> None:
        connect_with_config(settings, scenario)

    return runner.run(CLI_VS_ADAPTER_SUITE, scenarios, [
        StyleSpec("cli", cli_style),
        StyleSpec("adapter", adapter_style),
    ])


def run_url_vs_config_suite(settings: Settings, scenarios: List[Scenario], runner: ScenarioRunner) -> SuiteReport:
    """Check whether the adapter can take connection strings directly, raw or CLI-escaped."""

    def config_style(scenario: Scenario) -> None:
        connect_with_config(settings, scenario)

    def raw_url_style(scenario: Scenario) -> None:
        raw = build_raw_connection_string(scenario.host, scenario.port, scenario.user, scenario.password, scenario.database)
        connect_with_connection_string(settings, scenario, raw)

    def cli_escaped_url_style(scenario: Scenario) -> None:
        escaped = build_cli_connection_string(
            scenario.host, scenario.port, scenario.user, scenario.password, scenario.database
        )
        connect_with_connection_string(settings, scenario, escaped)

    return runner.run(URL_VS_CONFIG_SUITE, scenarios, [
        StyleSpec("config", config_style),
        StyleSpec("raw_url", raw_url_style),
        StyleSpec("cli_escaped_url", cli_escaped_url_style),
    ])


def run_runtime_escaping_suite(settings: Settings, scenarios: List[Scenario], runner: ScenarioRunner) -> SuiteReport:
    """
    Test whether one stored DATABASE_URL can serve both the adapter and the CLI.

    Approach 1 stores the raw string and escapes it for the CLI at runtime.
    Approach 2 stores the escaped string and unescapes it for the adapter.
    An approach succeeds only when both its halves succeed.
    """

    def raw_then_escape(scenario: Scenario) -> StyleOutcome:
        stored = build_raw_connection_string(
            scenario.host, scenario.port, scenario.user, scenario.password, scenario.database
        )
        return _run_approach(
            "raw_then_escape",
            adapter=lambda: connect_with_connection_string(settings, scenario, stored),
            cli=lambda: run_cli(settings, settings.migration_command, database_url=escape_password_in_url(stored)),
        )

    def escaped_then_unescape(scenario: Scenario) -> StyleOutcome:
        stored = build_cli_connection_string(
            scenario.host, scenario.port, scenario.user, scenario.password, scenario.database
        )
        return _run_approach(
            "escaped_then_unescape",
            adapter=lambda: connect_with_connection_string(settings, scenario, unescape_password_in_url(stored)),
            cli=lambda: run_cli(settings, settings.migration_command, database_url=stored),
        )

    return runner.run(RUNTIME_ESCAPING_SUITE, scenarios, [
        StyleSpec("raw_then_escape", raw_then_escape),
        StyleSpec("escaped_then_unescape", escaped_then_unescape),
    ])


def run_comprehensive_suite(settings: Settings, scenarios: List[Scenario], runner: ScenarioRunner) -> SuiteReport:
    """
    Check whether one DATABASE_URL format can be standardised on.

    The raw and the CLI-escaped semicolon strings are each handed unchanged
    to both the adapter and the CLI; a format succeeds for a scenario only
    when both tools accept it.
    """

    def url_format(style: str, build: Callable[..., str]) -> StyleSpec:
        def operation(scenario: Scenario) -> StyleOutcome:
            database_url = build(scenario.host, scenario.port, scenario.user, scenario.password, scenario.database)
            return _run_approach(
                style,
                adapter=lambda: connect_with_connection_string(settings, scenario, database_url),
                cli=lambda: run_cli(settings, settings.migration_command, database_url=database_url),
            )
        return StyleSpec(style, operation)

    return runner.run(COMPREHENSIVE_SUITE, scenarios, [
        url_format("raw_url", build_raw_connection_string),
        url_format("escaped_url", build_cli_connection_string),
    ])


def _run_approach(style: str, adapter: Callable[[], None], cli: Callable) -> StyleOutcome:
    errors: List[str] = []

    adapter_success = True
    try:
        adapter()
    except Exception as e:
        adapter_success = False
        errors.append(f"Adapter: {extract_error_message(e)}")

    result = cli()
    if not result.success:
        errors.append(f"CLI: {result.error}")

    return StyleOutcome(
        style=style,
        success=adapter_success and result.success,
        error=", ".join(errors) or None,
        output=result.output,
        details={"adapter": adapter_success, "cli": result.success},
    )


SUITES: Dict[str, Callable[[Settings, List[Scenario], ScenarioRunner], SuiteReport]] = {
    CONNECTION_SUITE: run_connection_suite,
    MIGRATION_SUITE: run_migration_suite,
    CLI_VS_ADAPTER_SUITE: run_cli_vs_adapter_suite,
    URL_VS_CONFIG_SUITE: run_url_vs_config_suite,
    RUNTIME_ESCAPING_SUITE: run_runtime_escaping_suite,
    COMPREHENSIVE_SUITE: run_comprehensive_suite,
}


def run_suite(
    name: str,
    settings: Settings,
    scenarios: List[Scenario],
    runner: Optional[ScenarioRunner] = None,
) -> SuiteReport:
    """
    Run a suite by name.

    Raises:
        KeyError: If the suite name is unknown
    """
    suite = SUITES[name]
    return suite(settings, scenarios, runner or ScenarioRunner(settings))
