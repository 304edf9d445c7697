"""Unit tests for console report formatting."""

import pytest

from passprobe.models.results import ScenarioResult, StyleOutcome, SuiteReport
from passprobe.services.report import (
    FAIL,
    PASS,
    format_rate,
    print_encoding_reference,
    print_escaping_check,
    print_suite_report,
    recommendation,
)


def _report(rows, styles):
    return SuiteReport(
        suite="connection",
        styles=styles,
        results=[
            ScenarioResult(
                scenario=scenario,
                outcomes=[
                    StyleOutcome(style=s, success=ok, error=None if ok else f"{s} failed")
                    for s, ok in outcomes.items()
                ],
            )
            for scenario, outcomes in rows.items()
        ],
    )


@pytest.fixture
def lines():
    return []


@pytest.mark.unit
class TestRecommendation:
    """Test the summary recommendation."""

    LABELS = {"database_url": "DATABASE_URL", "config": "Structured config"}

    def test_single_reliable_style(self):
        report = _report({
            "Basic": {"database_url": True, "config": True},
            "Curly": {"database_url": False, "config": True},
        }, ["database_url", "config"])

        assert recommendation(report, self.LABELS) == (
            "Uniformly reliable: Structured config. Prefer Structured config."
        )

    def test_all_reliable(self):
        report = _report({"Basic": {"database_url": True, "config": True}}, ["database_url", "config"])
        assert recommendation(report).startswith("All styles handled every password")

    def test_best_partial(self):
        report = _report({
            "Basic": {"database_url": True, "config": True},
            "Curly": {"database_url": False, "config": True},
            "Complex": {"database_url": False, "config": False},
        }, ["database_url", "config"])

        assert recommendation(report, self.LABELS) == (
            "Structured config is the most reliable, but no style handled every password."
        )

    def test_tied_partial(self):
        report = _report({
            "Basic": {"database_url": True, "config": False},
            "Curly": {"database_url": False, "config": True},
        }, ["database_url", "config"])

        assert recommendation(report) == "Mixed results: no style handled every password."

    def test_no_results(self):
        assert recommendation(SuiteReport(suite="x", styles=["a"])) == "No results to compare."


@pytest.mark.unit
class TestPrintSuiteReport:
    """Test the printed table."""

    def test_table_rates_and_errors(self, lines):
        report = _report({
            "Basic Password": {"push": True, "introspect": True},
            "Curly Braces Password": {"push": False},
        }, ["push", "introspect"])

        print_suite_report(report, printer=lines.append)
        text = "\n".join(lines)

        basic_row = [line for line in lines if line.startswith("Basic Password")][0]
        curly_row = [line for line in lines if line.startswith("Curly Braces Password ")][0]
        assert basic_row.count(PASS) == 2
        assert FAIL in curly_row and "-" in curly_row
        assert f"{FAIL} Curly Braces Password [push]: push failed" in text
        assert "1/2 (50%)" in text
        assert "1/1 (100%)" in text
        assert text.rstrip().endswith("Prefer introspect.")

    def test_labels_used(self, lines):
        report = _report({"Basic": {"config": True}}, ["config"])

        print_suite_report(report, labels={"config": "Structured config"}, printer=lines.append)

        assert any("Structured config" in line for line in lines)

    def test_long_errors_truncated(self, lines):
        report = SuiteReport(suite="s", styles=["cli"], results=[
            ScenarioResult(scenario="Basic", outcomes=[StyleOutcome.failed("cli", "x" * 500)]),
        ])

        print_suite_report(report, printer=lines.append)

        error_line = [line for line in lines if "[cli]" in line][0]
        assert error_line.endswith("x" * 200 + "...")

    def test_format_rate(self):
        report = _report({"A": {"s": True}, "B": {"s": False}, "C": {"s": False}}, ["s"])
        assert format_rate(report.summary()[0]) == "1/3 (33%)"


@pytest.mark.unit
class TestEncodingReference:
    """Test the password encoding reference and escaping check."""

    def test_reference_lists_all_forms(self, builtin_scenarios, lines):
        print_encoding_reference(builtin_scenarios, printer=lines.append)
        text = "\n".join(lines)

        assert "Complex Special Characters:" in text
        assert "Original:    P{a}s@s#w%o&r*d!2024" in text
        assert "URL Encoded: P%7Ba%7Ds%40s%23w%25o%26r*d!2024" in text
        assert "CLI Escaped: P{{}a{}}s@s#w%o&r*d!2024" in text

    def test_escaping_check_passes_for_builtins(self, builtin_scenarios, lines):
        assert print_escaping_check(builtin_scenarios, printer=lines.append) is True
        assert sum(1 for line in lines if "CORRECT" in line) == len(builtin_scenarios)

    def test_escaping_check_reports_mismatch(self, curly_scenario, lines):
        wrong = curly_scenario.model_copy(update={"expected_cli_escaping": "Strong{{Pass}}2024!"})

        assert print_escaping_check([wrong], printer=lines.append) is False
        assert any("MISMATCH" in line for line in lines)

    def test_escaping_check_without_expectation(self, curly_scenario, lines):
        unset = curly_scenario.model_copy(update={"expected_cli_escaping": None})

        assert print_escaping_check([unset], printer=lines.append) is True
        assert any("(not set)" in line for line in lines)
