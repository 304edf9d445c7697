"""
Sequential scenario runner.

Runs every style operation of every scenario strictly one after another,
converting any failure into a failed StyleOutcome. Scenarios are
independent: one scenario's failure never changes another's result.
"""

import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from passprobe.config.settings import Settings
from passprobe.models.results import ScenarioResult, StyleOutcome, SuiteReport
from passprobe.models.scenario import Scenario
from passprobe.utils.error_details import extract_error_message
from passprobe.utils.logger import get_module_logger

logger = get_module_logger(__name__)

# An operation either returns an outcome or raises; raising means failure
StyleOperation = Callable[[Scenario], Optional[StyleOutcome]]


@dataclass(frozen=True)
class StyleSpec:
    """
    One connection style exercised for every scenario.

    Attributes:
        name: Style identifier used in results
        operation: Callable run against the scenario
        requires: Name of a style that must have succeeded first; the
            style is skipped (not recorded) otherwise
    """
    name: str
    operation: StyleOperation
    requires: Optional[str] = None


class ScenarioRunner:
    """Runs styles against scenarios in a fixed order with settle delays."""

    def __init__(self, settings: Settings, sleep: Callable[[float], None] = time.sleep):
        self.settings = settings
        self._sleep = sleep

    def run(self, suite: str, scenarios: List[Scenario], styles: List[StyleSpec]) -> SuiteReport:
        """
        Run all styles for all scenarios.

        Args:
            suite: Suite name for the report
            scenarios: Scenarios in execution order
            styles: Styles in execution order

        Returns:
            SuiteReport with one ScenarioResult per scenario
        """
        report = SuiteReport(suite=suite, styles=[style.name for style in styles])

        for index, scenario in enumerate(scenarios):
            if index > 0:
                self._sleep(self.settings.scenario_delay)

            logger.info(f"[{suite}] Scenario: {scenario.name} (port {scenario.port})")
            report.results.append(self._run_scenario(scenario, styles))

        return report

    def _run_scenario(self, scenario: Scenario, styles: List[StyleSpec]) -> ScenarioResult:
        result = ScenarioResult(scenario=scenario.name)
        attempted = 0

        for style in styles:
            if style.requires is not None:
                required = result.outcome(style.requires)
                if required is None or not required.success:
                    logger.info(f"   Skipping {style.name}: {style.requires} did not succeed")
                    continue

            if attempted > 0:
                self._sleep(self.settings.operation_delay)
            attempted += 1

            outcome = self._run_style(scenario, style)
            if outcome.success:
                logger.info(f"   {style.name}: SUCCESS")
            else:
                logger.error(f"   {style.name}: FAILED - {outcome.error}")
            result.outcomes.append(outcome)

        return result

    def _run_style(self, scenario: Scenario, style: StyleSpec) -> StyleOutcome:
        try:
            outcome = style.operation(scenario)
        except Exception as e:
            return StyleOutcome.failed(style.name, extract_error_message(e))

        if outcome is None:
            return StyleOutcome.succeeded(style.name)
        if outcome.style != style.name:
            outcome = outcome.model_copy(update={"style": style.name})
        return outcome
