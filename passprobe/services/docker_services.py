"""
Docker service management for the scenario databases.

Starting the containers and waiting for them to become healthy is the only
stage whose failure aborts a run.
"""

import subprocess
import time
from typing import Callable, List

from passprobe.config.exceptions import ServiceStartupError
from passprobe.config.settings import Settings
from passprobe.models.scenario import Scenario
from passprobe.utils.logger import get_module_logger

logger = get_module_logger(__name__)


class DockerServiceManager:
    """Starts the compose services and polls their health."""

    def __init__(
        self,
        settings: Settings,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.settings = settings
        self._sleep = sleep
        self._clock = clock

    def start_services(self) -> None:
        """
        Run ``docker compose up -d`` for the scenario containers.

        Raises:
            ServiceStartupError: If docker is unavailable or compose fails
        """
        command = ["docker", "compose", "-f", self.settings.compose_file, "up", "-d"]
        logger.info("Starting Docker Compose services...")
        try:
            subprocess.run(command, capture_output=True, text=True, check=True)
        except FileNotFoundError as e:
            raise ServiceStartupError("docker executable not found on PATH") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise ServiceStartupError(f"Failed to start Docker services: {stderr or e}") from e
        logger.info("Docker Compose services started")

    def check_service(self, scenario: Scenario) -> bool:
        """Return True when the scenario's container is running and healthy."""
        command = [
            "docker", "ps",
            "--filter", f"name={scenario.container}",
            "--format", "{{.Names}}\t{{.Status}}",
        ]
        try:
            completed = subprocess.run(command, capture_output=True, text=True, check=True)
        except (OSError, subprocess.CalledProcessError) as e:
            logger.warning(f"Failed to check {scenario.container}: {e}")
            return False

        stdout = completed.stdout or ""
        if scenario.container not in stdout:
            logger.info(f"   {scenario.container} is not running")
            return False

        if "(healthy)" not in stdout:
            logger.info(f"   {scenario.container} is starting (not healthy yet)")
            return False

        logger.info(f"   {scenario.container} is running and healthy")
        return True

    def wait_for_services(self, scenarios: List[Scenario]) -> None:
        """
        Poll until every scenario container is healthy.

        Raises:
            ServiceStartupError: If the containers are not healthy in time
        """
        timeout_seconds = self.settings.service_wait_timeout_minutes * 60
        started = self._clock()

        while True:
            statuses = [self.check_service(scenario) for scenario in scenarios]
            if all(statuses):
                logger.info("All services are healthy and ready for testing")
                return

            elapsed = self._clock() - started
            if elapsed >= timeout_seconds:
                raise ServiceStartupError(
                    f"Services not ready after {self.settings.service_wait_timeout_minutes:g} minutes. "
                    f"Check 'docker compose logs'."
                )

            logger.info(f"Waiting for services to be ready... ({round(elapsed)}s elapsed)")
            self._sleep(self.settings.service_poll_interval)

    def ensure_services(self, scenarios: List[Scenario]) -> None:
        """Start the services and wait until they are healthy."""
        self.start_services()
        self.wait_for_services(scenarios)
