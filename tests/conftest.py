import json

import pytest

from nuki_exporter.core.config import Settings
from nuki_exporter.metrics.registry import MetricRegistry

SETTINGS_ENV_VARS = (
    "BRIDGE", "BRIDGE_HOST", "BRIDGE_PORT", "TOKEN", "CREDENTIALS_FILE",
    "LISTEN_ADDRESS", "METRICS_PATH", "LOG_LEVEL", "POLL_INTERVAL",
    "METRIC_PREFIX", "PROXY_URL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the host environment out of Settings"""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def frontdoor_device():
    return {
        "deviceType": 0,
        "nukiId": 1,
        "name": "Frontdoor",
        "firmwareVersion": "1.0",
        "lastKnownState": {
            "mode": 2,
            "state": 3,
            "doorsensorState": 1,
            "batteryChargeState": 80,
            "batteryCritical": False,
            "batteryCharging": True,
        },
    }


@pytest.fixture
def bridge_payload(frontdoor_device):
    return json.dumps([frontdoor_device]).encode()


@pytest.fixture
def settings():
    return Settings(bridge_host="bridge.local", token="secret")


@pytest.fixture
def registry():
    return MetricRegistry(default_collectors=False)
