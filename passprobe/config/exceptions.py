"""
Configuration-related exceptions for passprobe.

This module centralizes the exceptions raised while loading settings,
scenario definitions and connection strings.
"""


class ConfigurationError(Exception):
    """
    Raised when configuration loading or validation fails.

    This exception is used for:
    - Scenario YAML file loading issues
    - YAML parsing errors
    - Pydantic validation failures
    - Unknown scenario selectors
    """
    pass


class ConnectionStringError(ValueError):
    """Raised when a connection string cannot be parsed into a configuration."""

    def __init__(self, message: str, connection_string: str = ""):
        self.connection_string = connection_string
        super().__init__(message)


class ServiceStartupError(RuntimeError):
    """Raised when the database containers fail to start or become healthy."""
    pass
