"""
Password test scenario model.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from passprobe.models.connection import DEFAULT_MSSQL_DATABASE, DEFAULT_MSSQL_HOST, DEFAULT_MSSQL_USER


class Scenario(BaseModel):
    """
    A named password exercised against its own database container.

    Each scenario targets a dedicated SQL Server instance whose ``sa``
    password is ``password``, listening on ``port``.
    """

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., min_length=1, description="Selector value (e.g. 'curly')")
    name: str = Field(..., min_length=1, description="Human readable scenario name")
    password: str = Field(..., min_length=1, description="Raw password configured on the server")
    port: int = Field(..., ge=1, le=65535, description="Host port of the database container")
    container: str = Field(..., min_length=1, description="Docker container name")
    host: str = Field(default=DEFAULT_MSSQL_HOST)
    user: str = Field(default=DEFAULT_MSSQL_USER)
    database: str = Field(default=DEFAULT_MSSQL_DATABASE)
    expected_cli_escaping: Optional[str] = Field(
        default=None,
        description="Expected CLI-escaped password, checked by the CLI vs adapter suite"
    )
