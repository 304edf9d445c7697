"""
Result models for scenario runs.

A suite run produces one ScenarioResult per scenario, each holding one
StyleOutcome per connection style. SuiteReport aggregates them.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class CommandResult(BaseModel):
    """Outcome of one external command invocation."""

    command: str = Field(..., description="Command line that was executed")
    success: bool = Field(...)
    output: str = Field(default="", description="Captured stdout (and stderr, when present)")
    error: Optional[str] = Field(default=None)
    returncode: Optional[int] = Field(default=None, description="Exit code, None when the process never finished")
    timed_out: bool = Field(default=False)


class StyleOutcome(BaseModel):
    """Outcome of a single (scenario, style) operation."""

    style: str = Field(..., description="Connection style or operation name")
    success: bool = Field(...)
    error: Optional[str] = Field(default=None)
    output: Optional[str] = Field(default=None)
    details: Dict[str, bool] = Field(
        default_factory=dict,
        description="Sub-step results, e.g. adapter and CLI halves of a runtime escaping approach"
    )

    @classmethod
    def failed(cls, style: str, error: str, output: Optional[str] = None) -> "StyleOutcome":
        return cls(style=style, success=False, error=error, output=output)

    @classmethod
    def succeeded(cls, style: str, output: Optional[str] = None) -> "StyleOutcome":
        return cls(style=style, success=True, output=output)


class ScenarioResult(BaseModel):
    """All style outcomes recorded for one scenario."""

    scenario: str = Field(..., description="Scenario name")
    outcomes: List[StyleOutcome] = Field(default_factory=list)

    def outcome(self, style: str) -> Optional[StyleOutcome]:
        for outcome in self.outcomes:
            if outcome.style == style:
                return outcome
        return None


class StyleSummary(BaseModel):
    """Aggregate success count of one style across all scenarios."""

    style: str
    successes: int
    total: int

    @property
    def percentage(self) -> int:
        if self.total == 0:
            return 0
        return round(self.successes / self.total * 100)

    @property
    def uniformly_reliable(self) -> bool:
        return self.total > 0 and self.successes == self.total


class SuiteReport(BaseModel):
    """Results of one suite run."""

    suite: str
    styles: List[str] = Field(default_factory=list, description="Styles in execution order")
    results: List[ScenarioResult] = Field(default_factory=list)

    def summary(self) -> List[StyleSummary]:
        summaries = []
        for style in self.styles:
            outcomes = [r.outcome(style) for r in self.results]
            attempted = [o for o in outcomes if o is not None]
            summaries.append(StyleSummary(
                style=style,
                successes=sum(1 for o in attempted if o.success),
                total=len(attempted),
            ))
        return summaries

    def reliable_styles(self) -> List[str]:
        return [s.style for s in self.summary() if s.uniformly_reliable]

    @property
    def all_passed(self) -> bool:
        return all(o.success for r in self.results for o in r.outcomes)
