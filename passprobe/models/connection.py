"""
Structured connection configuration models.

MssqlConfig mirrors the configuration object accepted by the SQL Server
adapter: the password is always held raw (unescaped, unencoded).
"""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MSSQL_HOST = "localhost"
DEFAULT_MSSQL_PORT = 1433
DEFAULT_MSSQL_USER = "sa"
DEFAULT_MSSQL_DATABASE = "master"


class MssqlOptions(BaseModel):
    """Transport options of a SQL Server connection."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    encrypt: bool = Field(default=True, description="Encrypt the connection")
    trust_server_certificate: bool = Field(
        default=True,
        alias="trustServerCertificate",
        description="Accept self-signed server certificates"
    )


class MssqlConfig(BaseModel):
    """
    Structured SQL Server connection configuration.

    ``model_dump(by_alias=True)`` produces the mapping
    ``{server, port, user, password, database, options: {encrypt, trustServerCertificate}}``.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    server: str = Field(..., min_length=1, description="Database host")
    port: int = Field(default=DEFAULT_MSSQL_PORT, ge=1, le=65535, description="Database port")
    user: str = Field(default=DEFAULT_MSSQL_USER, description="Login name")
    password: str = Field(default="", description="Raw password")
    database: str = Field(default=DEFAULT_MSSQL_DATABASE, description="Initial catalog")
    options: MssqlOptions = Field(default_factory=MssqlOptions)

    def __repr__(self) -> str:
        return (
            f"MssqlConfig(server={self.server!r}, port={self.port}, user={self.user!r}, "
            f"password='***', database={self.database!r}, options={self.options!r})"
        )

    __str__ = __repr__
