"""
Global pytest configuration and fixtures for all tests.

Settings are always built explicitly with zero delays so that no test
sleeps and no test depends on the developer's environment.
"""

from typing import List

import pytest

from passprobe.config.settings import Settings, get_settings
from passprobe.models.scenario import Scenario


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make sure a cached Settings instance never leaks between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings isolated from the environment, with zero delays."""
    return Settings(
        database_url="",
        test_scenario="",
        operation_delay=0,
        scenario_delay=0,
        command_timeout=5,
        connect_timeout=3,
        service_wait_timeout_minutes=0.01,
        service_poll_interval=0.01,
        scenarios_path=None,
        _env_file=None,
    )


@pytest.fixture
def builtin_scenarios(test_settings) -> List[Scenario]:
    """The five built-in scenarios in declaration order."""
    return test_settings.select_scenarios()


@pytest.fixture
def curly_scenario(test_settings) -> Scenario:
    return test_settings.scenarios["curly"]


@pytest.fixture
def sleep_calls() -> List[float]:
    return []


@pytest.fixture
def fake_sleep(sleep_calls):
    """Sleep replacement that records requested delays."""
    def _sleep(seconds: float) -> None:
        sleep_calls.append(seconds)
    return _sleep
