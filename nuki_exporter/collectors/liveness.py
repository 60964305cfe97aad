"""
Self check of the metrics endpoint for the systemd watchdog
"""

import requests
import structlog

from nuki_exporter.core.exceptions import LivenessProbeFailure
from nuki_exporter.core.supervisor import Supervisor

logger = structlog.get_logger(__name__)


class LivenessProber:
    """Reads our own metrics URL and feeds the watchdog when that works"""

    def __init__(self, url: str, supervisor: Supervisor, timeout: float = 10.0):
        self.url = url
        self.supervisor = supervisor
        self.timeout = timeout

    def probe(self) -> None:
        """Raises LivenessProbeFailure unless the endpoint answers with 200"""
        try:
            response = requests.get(self.url, timeout=self.timeout)
        except requests.RequestException as e:
            raise LivenessProbeFailure(str(e)) from e
        if response.status_code != 200:
            raise LivenessProbeFailure(f"status {response.status_code}")

    def check(self) -> bool:
        try:
            self.probe()
        except LivenessProbeFailure as e:
            # no watchdog ping, systemd restarts us once its timeout expires
            logger.warning("liveness check failed", url=self.url, error=str(e))
            return False
        self.supervisor.watchdog()
        return True
