"""
Database models applied by the migration CLI.

The migration CLI pushes this single table to every scenario database.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ConnectionTest(SQLModel, table=True):
    """Table created by the schema push and reported by introspection."""

    __tablename__ = "connection_tests"

    id: Optional[int] = Field(default=None, primary_key=True)
    scenario: str = Field(max_length=100, index=True, description="Scenario key that produced the row")
    style: str = Field(max_length=50, description="Connection style used")
    created_at: datetime = Field(default_factory=_utc_now)
