"""
Built-in password scenarios.

Each scenario matches one service in docker-compose.yml: the container
name, host port and SA password must stay in sync with that file.

Note: This module contains only data structures to avoid circular imports.
"""

import copy
from typing import Any, Dict, List

from passprobe.models.connection import DEFAULT_MSSQL_DATABASE, DEFAULT_MSSQL_HOST, DEFAULT_MSSQL_USER
from passprobe.models.scenario import Scenario

# ==============================================================================
# BUILT-IN SCENARIOS (Single source of truth)
# ==============================================================================

# Format: "selector key" -> scenario fields
BUILTIN_SCENARIOS: Dict[str, Dict[str, Any]] = {
    "basic": {
        "name": "Basic Password",
        "password": "YourStrong@Passw0rd",
        "port": 1433,
        "container": "mssql-basic-test",
        "expected_cli_escaping": "YourStrong@Passw0rd",  # @ is not reserved
    },
    "curly": {
        "name": "Curly Braces Password",
        "password": "Strong{Pass}2024!",
        "port": 1434,
        "container": "mssql-curly-test",
        "expected_cli_escaping": "Strong{{}Pass{}}2024!",
    },
    "urlChars": {
        "name": "URL Problematic Characters",
        "password": "Pass@#%&2024",
        "port": 1435,
        "container": "mssql-url-chars-test",
        "expected_cli_escaping": "Pass@#%&2024",
    },
    "sqlChars": {
        "name": "SQL Escape Characters",
        "password": "Pass'Word\"2024",
        "port": 1436,
        "container": "mssql-sql-chars-test",
        "expected_cli_escaping": "Pass'Word\"2024",
    },
    "complex": {
        "name": "Complex Special Characters",
        "password": "P{a}s@s#w%o&r*d!2024",
        "port": 1437,
        "container": "mssql-complex-test",
        "expected_cli_escaping": "P{{}a{}}s@s#w%o&r*d!2024",
    },
}

DEFAULT_SCENARIO_KEY = "basic"

# Scenarios whose passwords contain braces or '@', used by the URL vs config
# and runtime escaping suites
BRACE_SCENARIO_KEYS: List[str] = ["basic", "curly", "complex"]


def get_builtin_scenarios(
    host: str = DEFAULT_MSSQL_HOST,
    user: str = DEFAULT_MSSQL_USER,
    database: str = DEFAULT_MSSQL_DATABASE,
) -> Dict[str, Scenario]:
    """
    Return validated built-in scenarios keyed by selector, in declaration order.

    ``host``, ``user`` and ``database`` apply to every scenario.
    """
    return {
        key: Scenario(key=key, host=host, user=user, database=database, **copy.deepcopy(fields))
        for key, fields in BUILTIN_SCENARIOS.items()
    }
