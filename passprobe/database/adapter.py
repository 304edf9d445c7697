"""
Database Adapter Module

Creates SQLAlchemy engines for SQL Server from either a structured
configuration or a connection string, and runs the connect-and-query
check used by every adapter-side scenario.
"""

from typing import Optional

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.pool import NullPool

from passprobe.database.connection_strings import (
    DEFAULT_ODBC_DRIVER,
    parse_connection_string,
    to_sqlalchemy_url,
)
from passprobe.models.connection import MssqlConfig
from passprobe.utils.logger import get_module_logger

logger = get_module_logger(__name__)

CHECK_QUERY = "SELECT 1 AS test"


def create_engine_from_config(
    config: MssqlConfig,
    connect_timeout: Optional[int] = None,
    odbc_driver: str = DEFAULT_ODBC_DRIVER,
) -> Engine:
    """
    Create an engine from a structured configuration.

    The raw password travels inside a SQLAlchemy URL object, never through
    a string that has to be parsed again.

    Args:
        config: Structured connection configuration
        connect_timeout: Login timeout in seconds handed to the driver
        odbc_driver: Name of the installed ODBC driver

    Returns:
        SQLAlchemy engine without connection pooling
    """
    connect_args = {}
    if connect_timeout is not None:
        connect_args["timeout"] = connect_timeout

    return create_engine(
        to_sqlalchemy_url(config, odbc_driver=odbc_driver),
        echo=False,
        poolclass=NullPool,
        connect_args=connect_args,
    )


def create_engine_from_url(
    connection_string: str,
    connect_timeout: Optional[int] = None,
    odbc_driver: str = DEFAULT_ODBC_DRIVER,
) -> Engine:
    """
    Create an engine from a connection string.

    Raises:
        ConnectionStringError: If the connection string cannot be parsed
    """
    config = parse_connection_string(connection_string)
    return create_engine_from_config(config, connect_timeout=connect_timeout, odbc_driver=odbc_driver)


def check_connection(engine: Engine) -> None:
    """
    Connect and run a trivial query, then release the engine.

    Raises:
        SQLAlchemyError: If the connection or the query fails
    """
    try:
        with engine.connect() as connection:
            connection.execute(text(CHECK_QUERY)).scalar()
        logger.debug("Connection check query succeeded")
    finally:
        engine.dispose()
