"""
Exporter error taxonomy
"""


class ExporterError(Exception):
    """Base class for all exporter errors"""


class ConfigError(ExporterError):
    """Missing or invalid startup configuration. Fatal."""


class TransportError(ExporterError):
    """Bridge unreachable or answered with a non-200 status"""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedPayload(ExporterError):
    """Bridge payload could not be decoded into device records"""


class SchemaConflict(ExporterError):
    """A metric name was requested with a label schema different from its first one"""

    def __init__(self, name: str, existing: tuple, requested: tuple):
        super().__init__(
            f"metric {name!r} is registered with labels {list(existing)}, "
            f"got {list(requested)}"
        )
        self.name = name
        self.existing = existing
        self.requested = requested


class LivenessProbeFailure(ExporterError):
    """Local read of the exporter's own metrics endpoint failed"""
