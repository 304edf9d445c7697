"""
Database Package

Contains connection string handling, engine creation and migration CLI
utilities.
"""

from .adapter import check_connection, create_engine_from_config, create_engine_from_url
from .connection_strings import (
    build_cli_connection_string,
    build_database_url,
    build_raw_connection_string,
    create_mssql_config,
    parse_connection_string,
)

__all__ = [
    "build_cli_connection_string",
    "build_database_url",
    "build_raw_connection_string",
    "check_connection",
    "create_engine_from_config",
    "create_engine_from_url",
    "create_mssql_config",
    "parse_connection_string",
]
