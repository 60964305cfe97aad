"""
Configuration settings for the Nuki Exporter
"""

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings
from typing import Optional

LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")

# seconds before the next poll is started
MIN_POLL_INTERVAL = 30


class Settings(BaseSettings):
    """Application settings"""

    # Bridge
    bridge_host: str = Field("", validation_alias=AliasChoices("bridge_host", "BRIDGE"))
    bridge_port: int = 8080
    proxy_url: Optional[str] = None

    # Credentials, a given token wins over the credentials file
    token: str = ""
    credentials_file: str = ""

    # Exposition
    listen_address: str = ":9314"
    metrics_path: str = "/metrics"
    metric_prefix: str = "nuki_"

    # Polling
    poll_interval: int = Field(MIN_POLL_INTERVAL, ge=MIN_POLL_INTERVAL)
    request_timeout: float = 60.0
    probe_timeout: float = 10.0
    startup_timeout: float = 3.0

    # Logging
    log_level: str = "ERROR"

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        value = value.upper()
        return value if value in LOG_LEVELS else "ERROR"

    @field_validator("listen_address")
    @classmethod
    def check_listen_address(cls, value: str) -> str:
        _, sep, port = value.rpartition(":")
        if not sep or not port.isdigit() or not 0 < int(port) < 65536:
            raise ValueError("listen_address must be :port or address:port")
        return value

    @field_validator("metrics_path")
    @classmethod
    def normalize_metrics_path(cls, value: str) -> str:
        return value if value.startswith("/") else "/" + value

    @property
    def bridge_url(self) -> str:
        return f"http://{self.bridge_host}:{self.bridge_port}/list"

    @property
    def bind_address(self) -> tuple:
        """(host, port) for the HTTP server; ':port' binds all interfaces"""
        host, _, port = self.listen_address.rpartition(":")
        return host or "0.0.0.0", int(port)

    @property
    def self_metrics_url(self) -> str:
        """URL the liveness probe reads back"""
        if self.listen_address.startswith(":"):
            # only :port given, check ourselves on the loopback address
            return "http://127.0.0.1" + self.listen_address + self.metrics_path
        return "http://" + self.listen_address + self.metrics_path
