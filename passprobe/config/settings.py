"""
Harness settings and configuration management.
"""

from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from passprobe.config.builtin_scenarios import get_builtin_scenarios
from passprobe.config.exceptions import ConfigurationError
from passprobe.models.scenario import Scenario

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """Harness settings."""

    # Connection string override and scenario selector, read by the
    # migration CLI environment as well as by the harness itself
    database_url: str = Field(
        default="",
        validation_alias="DATABASE_URL",
        description="Connection string override used by the migration CLI"
    )
    test_scenario: str = Field(
        default="",
        validation_alias="PASSPROBE_TEST_SCENARIO",
        description="Scenario key selecting the CLI connection string when DATABASE_URL is unset"
    )

    @field_validator('database_url', 'test_scenario', mode='after')
    @classmethod
    def strip_value(cls, v: str) -> str:
        """Strip whitespace to avoid common configuration errors."""
        return v.strip() if v else v

    # Target database defaults shared by all scenarios
    db_host: str = Field(default="localhost", description="Host of the scenario containers")
    db_user: str = Field(default="sa", description="Login used against every container")
    db_name: str = Field(default="master", description="Initial catalog")
    odbc_driver: str = Field(
        default="ODBC Driver 18 for SQL Server",
        description="ODBC driver used by the adapter engines"
    )

    log_level: str = Field(default="INFO")

    # Scheduling
    operation_delay: float = Field(
        default=1.0,
        ge=0,
        description="Seconds to wait between two operations of the same scenario"
    )
    scenario_delay: float = Field(
        default=2.0,
        ge=0,
        description="Seconds to wait between two scenarios"
    )
    command_timeout: int = Field(
        default=30,
        gt=0,
        description="Timeout in seconds for a single migration CLI invocation"
    )
    connect_timeout: int = Field(
        default=15,
        gt=0,
        description="Login timeout in seconds handed to the database driver"
    )

    # Migration CLI
    alembic_config_path: str = Field(
        default=str(PROJECT_ROOT / "alembic.ini"),
        description="Path to the alembic.ini used by the migration CLI"
    )
    migration_command: List[str] = Field(
        default_factory=lambda: ["upgrade", "head"],
        description="Alembic arguments for the schema push step"
    )
    introspect_command: List[str] = Field(
        default_factory=lambda: ["current"],
        description="Alembic arguments for the introspection step"
    )

    # Docker services
    compose_file: str = Field(
        default=str(PROJECT_ROOT / "docker-compose.yml"),
        description="Compose file declaring one SQL Server container per scenario"
    )
    service_wait_timeout_minutes: float = Field(default=5.0, gt=0)
    service_poll_interval: float = Field(default=10.0, gt=0)

    scenarios_path: Optional[str] = Field(
        default=None,
        description="Optional YAML file overriding or adding scenarios"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore"
    )

    @property
    def scenarios(self) -> Dict[str, Scenario]:
        """
        Get merged scenarios (built-in defaults + YAML overrides).

        Fails fast if the YAML file is configured but invalid.

        Raises:
            ConfigurationError: If the scenarios file is missing or invalid
        """
        merged = get_builtin_scenarios(self.db_host, self.db_user, self.db_name)
        yaml_scenarios = self._load_yaml_scenarios()
        if yaml_scenarios:
            merged.update(yaml_scenarios)
        return merged

    def _load_yaml_scenarios(self) -> Optional[Dict[str, Scenario]]:
        from passprobe.utils.logger import get_module_logger
        logger = get_module_logger(__name__)

        if not self.scenarios_path:
            return None

        path = Path(self.scenarios_path)
        if not path.exists():
            raise ConfigurationError(f"Scenarios file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                yaml_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"YAML syntax error in {path}: {e}") from e

        if not yaml_config:
            logger.warning(f"Scenarios file is empty: {path}")
            return None

        if not isinstance(yaml_config, dict) or 'scenarios' not in yaml_config:
            raise ConfigurationError(f"Invalid scenarios file: missing 'scenarios' section in {path}")

        validated: Dict[str, Scenario] = {}
        validation_errors = []
        for key, fields in (yaml_config['scenarios'] or {}).items():
            try:
                validated[key] = Scenario.model_validate({
                    "key": key,
                    "host": self.db_host,
                    "user": self.db_user,
                    "database": self.db_name,
                    **(fields or {}),
                })
            except ValidationError as e:
                validation_errors.append(f"Scenario '{key}': {e}")

        if validation_errors:
            error_msg = "\n  - ".join(validation_errors)
            raise ConfigurationError(f"Invalid scenarios in {path}. Errors:\n  - {error_msg}")

        logger.info(f"Loaded {len(validated)} scenarios from {path}")
        return validated

    def select_scenarios(self, keys: Optional[List[str]] = None) -> List[Scenario]:
        """
        Return scenarios in declaration order, optionally restricted to ``keys``.

        Raises:
            ConfigurationError: If a requested key is unknown
        """
        available = self.scenarios
        if not keys:
            return list(available.values())

        unknown = [key for key in keys if key not in available]
        if unknown:
            raise ConfigurationError(
                f"Unknown scenario(s): {', '.join(unknown)}. Available: {', '.join(available)}"
            )
        return [available[key] for key in keys]


@lru_cache()
def get_settings() -> Settings:
    """Get cached harness settings."""
    return Settings()
