"""
Command line entry point for the passprobe harness.

Examples:
    passprobe                      # start containers, run connection + migration suites
    passprobe cli-vs-adapter       # compare CLI escaping with the adapter config
    passprobe runtime-escaping --skip-docker --scenario curly
    passprobe comprehensive        # can one DATABASE_URL format serve both tools?
    passprobe reference            # print password encodings only
"""

import argparse
import sys
from typing import List, Optional

from passprobe.config.builtin_scenarios import BRACE_SCENARIO_KEYS
from passprobe.config.exceptions import ConfigurationError, ServiceStartupError
from passprobe.config.settings import Settings, get_settings
from passprobe.services.docker_services import DockerServiceManager
from passprobe.services.report import (
    print_encoding_reference,
    print_escaping_check,
    print_suite_report,
)
from passprobe.services.scenario_runner import ScenarioRunner
from passprobe.services.suites import (
    CLI_VS_ADAPTER_SUITE,
    CONNECTION_SUITE,
    MIGRATION_SUITE,
    RUNTIME_ESCAPING_SUITE,
    STYLE_LABELS,
    SUITES,
    URL_VS_CONFIG_SUITE,
    run_suite,
)
from passprobe.utils.logger import get_module_logger, setup_logging

logger = get_module_logger(__name__)

ALL_COMMAND = "all"
REFERENCE_COMMAND = "reference"

# Suites run by "all", in order
DEFAULT_SUITES = [CONNECTION_SUITE, MIGRATION_SUITE]

# Suites that default to the brace scenarios when no --scenario is given
BRACE_SUITES = {URL_VS_CONFIG_SUITE, RUNTIME_ESCAPING_SUITE}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="passprobe",
        description="Test how the database adapter and the migration CLI handle special-character passwords",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default=ALL_COMMAND,
        choices=[ALL_COMMAND, *SUITES.keys(), REFERENCE_COMMAND],
        help="Suite to run (default: all = connection + migration)",
    )
    parser.add_argument(
        "--scenario",
        action="append",
        dest="scenarios",
        metavar="KEY",
        help="Only run the given scenario (repeatable)",
    )
    parser.add_argument(
        "--skip-docker",
        action="store_true",
        help="Assume the database containers are already running and healthy",
    )
    parser.add_argument("--log-level", default=None, help="Override the configured log level")
    return parser


def run(command: str, settings: Settings, scenario_keys: Optional[List[str]], skip_docker: bool) -> int:
    """
    Run one command against the configured scenarios.

    Returns:
        Process exit code: 1 when configuration or container startup fails,
        0 otherwise (individual scenario failures are reported, not fatal)
    """
    try:
        all_scenarios = settings.select_scenarios(scenario_keys)
    except ConfigurationError as e:
        logger.error(str(e))
        return 1

    print("🎯 Database Password Handling Tester")
    print("====================================")

    if command == REFERENCE_COMMAND:
        print_encoding_reference(all_scenarios)
        return 0

    suites = DEFAULT_SUITES if command == ALL_COMMAND else [command]

    if not skip_docker:
        try:
            DockerServiceManager(settings).ensure_services(all_scenarios)
        except ServiceStartupError as e:
            logger.error(f"{e}")
            print(f"❌ {e}")
            return 1

    if command == ALL_COMMAND:
        print_encoding_reference(all_scenarios)

    runner = ScenarioRunner(settings)
    for suite in suites:
        scenarios = all_scenarios
        if suite in BRACE_SUITES and not scenario_keys:
            scenarios = settings.select_scenarios(BRACE_SCENARIO_KEYS)

        print("\n" + "=" * 50)
        print(f"🚀 Starting {suite} tests")
        if suite == CLI_VS_ADAPTER_SUITE:
            print_escaping_check(scenarios)

        report = run_suite(suite, settings, scenarios, runner)
        print_suite_report(report, labels=STYLE_LABELS)

    print("\n🏁 All tests completed!")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    try:
        setup_logging(args.log_level or settings.log_level)
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    return run(args.command, settings, args.scenarios, args.skip_docker)


if __name__ == "__main__":
    sys.exit(main())
