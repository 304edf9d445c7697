"""
Console report formatting.

Reports are human-readable tables printed to stdout; diagnostics go
through logging instead.
"""

from typing import Callable, Dict, List, Optional

from passprobe.models.results import StyleSummary, SuiteReport
from passprobe.models.scenario import Scenario
from passprobe.utils.error_details import truncate_error
from passprobe.utils.escaping import escape_cli_password, url_encode_password

PASS = "✅"
FAIL = "❌"

Printer = Callable[[str], None]


def _label(style: str, labels: Optional[Dict[str, str]]) -> str:
    return (labels or {}).get(style, style)


def heading(title: str, printer: Printer = print) -> None:
    printer("")
    printer(title)
    printer("=" * len(title))


def format_rate(summary: StyleSummary) -> str:
    return f"{summary.successes}/{summary.total} ({summary.percentage}%)"


def recommendation(report: SuiteReport, labels: Optional[Dict[str, str]] = None) -> str:
    """
    One-line recommendation derived from the per-style success counts.
    """
    summaries = report.summary()
    if not summaries or all(s.total == 0 for s in summaries):
        return "No results to compare."

    reliable = [s for s in summaries if s.uniformly_reliable]
    if len(reliable) == len(summaries):
        return "All styles handled every password: any of them can be used."
    if reliable:
        names = ", ".join(_label(s.style, labels) for s in reliable)
        return f"Uniformly reliable: {names}. Prefer {_label(reliable[0].style, labels)}."

    best = max(summaries, key=lambda s: s.percentage)
    tied = [s for s in summaries if s.percentage == best.percentage]
    if len(tied) > 1:
        return "Mixed results: no style handled every password."
    return f"{_label(best.style, labels)} is the most reliable, but no style handled every password."


def print_suite_report(
    report: SuiteReport,
    labels: Optional[Dict[str, str]] = None,
    printer: Printer = print,
) -> None:
    """Print the per-scenario table, the per-style rates and the recommendation."""
    heading(f"📊 {report.suite} results", printer)

    styles = report.styles
    scenario_width = max([len("Scenario")] + [len(r.scenario) for r in report.results])
    columns = [max(len(_label(s, labels)), 4) for s in styles]

    header = "Scenario".ljust(scenario_width) + "  " + "  ".join(
        _label(s, labels).ljust(width) for s, width in zip(styles, columns)
    )
    printer(header)
    printer("-" * len(header))

    for result in report.results:
        cells = []
        for style, width in zip(styles, columns):
            outcome = result.outcome(style)
            if outcome is None:
                cell = "-"
            else:
                cell = PASS if outcome.success else FAIL
            cells.append(cell.ljust(width))
        printer(result.scenario.ljust(scenario_width) + "  " + "  ".join(cells))

    failures = [
        (result.scenario, outcome)
        for result in report.results
        for outcome in result.outcomes
        if not outcome.success
    ]
    if failures:
        printer("")
        printer("Errors:")
        for scenario, outcome in failures:
            printer(f"  {FAIL} {scenario} [{_label(outcome.style, labels)}]: {truncate_error(outcome.error)}")

    printer("")
    printer("🎯 Success rates:")
    summaries = report.summary()
    label_width = max([len(_label(s.style, labels)) for s in summaries] + [0])
    for summary in summaries:
        printer(f"   {_label(summary.style, labels).ljust(label_width)}  {format_rate(summary)}")

    printer("")
    printer(f"💡 {recommendation(report, labels)}")


def print_encoding_reference(scenarios: List[Scenario], printer: Printer = print) -> None:
    """Print the raw, URL-encoded and CLI-escaped form of every scenario password."""
    heading("📚 Password Encoding Reference", printer)
    for scenario in scenarios:
        printer(f"{scenario.name}:")
        printer(f"  Original:    {scenario.password}")
        printer(f"  URL Encoded: {url_encode_password(scenario.password)}")
        printer(f"  CLI Escaped: {escape_cli_password(scenario.password)}")
        printer("")


def print_escaping_check(scenarios: List[Scenario], printer: Printer = print) -> bool:
    """
    Compare the CLI escaping of each scenario with its expected value.

    Returns:
        True when every scenario with an expectation matches
    """
    heading("📋 Password Escaping Check", printer)
    all_match = True
    for scenario in scenarios:
        escaped = escape_cli_password(scenario.password)
        printer(f"{scenario.name}:")
        printer(f"  Raw:      {scenario.password}")
        printer(f"  Escaped:  {escaped}")
        if scenario.expected_cli_escaping is None:
            printer("  Expected: (not set)")
        else:
            matches = escaped == scenario.expected_cli_escaping
            all_match = all_match and matches
            printer(f"  Expected: {scenario.expected_cli_escaping}")
            printer(f"  {PASS + ' CORRECT' if matches else FAIL + ' MISMATCH'}")
        printer("")
    return all_match
