"""
HTTP client for the Nuki bridge /list endpoint
"""

import requests
import structlog

from nuki_exporter.core.config import Settings
from nuki_exporter.core.credentials import Credentials
from nuki_exporter.core.exceptions import TransportError

logger = structlog.get_logger(__name__)


class BridgeClient:
    """Fetches the raw device list from one bridge"""

    def __init__(self, settings: Settings, credentials: Credentials):
        self.url = settings.bridge_url
        self.timeout = settings.request_timeout
        self.proxies = {"http": settings.proxy_url, "https": settings.proxy_url} if settings.proxy_url else None
        self._token = credentials.token

    def fetch(self) -> bytes:
        """
        Request the device list.

        Returns:
            The raw response body

        Raises:
            TransportError: If the bridge is unreachable or answers with a non-200 status
        """
        logger.debug("Fetching device list", url=self.url + "?token=***")
        try:
            response = requests.get(
                self.url,
                params={"token": self._token},
                timeout=self.timeout,
                proxies=self.proxies,
            )
        except requests.Timeout as e:
            raise TransportError(f"Request to bridge timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            raise TransportError(f"Request to bridge failed: {e}") from e

        if response.status_code != 200:
            raise TransportError(
                f"Could not get metrics: {response.status_code} - {response.text[:200]}",
                status_code=response.status_code,
            )
        return response.content
