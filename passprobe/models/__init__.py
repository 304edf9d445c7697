"""
Models Package

Contains connection configuration, scenario and result models.
"""

from .connection import MssqlConfig, MssqlOptions
from .results import CommandResult, ScenarioResult, StyleOutcome, StyleSummary, SuiteReport
from .scenario import Scenario

__all__ = [
    "CommandResult",
    "MssqlConfig",
    "MssqlOptions",
    "Scenario",
    "ScenarioResult",
    "StyleOutcome",
    "StyleSummary",
    "SuiteReport",
]
