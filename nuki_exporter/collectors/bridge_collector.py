"""
Bridge poll loop for the Nuki Exporter
Fetches the device list on a fixed interval and publishes it as gauges
"""

import threading
from typing import Iterable, Optional, Set

import structlog

from nuki_exporter.collectors.bridge_client import BridgeClient
from nuki_exporter.collectors.classifier import classify
from nuki_exporter.collectors.decoder import decode_devices
from nuki_exporter.collectors.liveness import LivenessProber
from nuki_exporter.core.exceptions import ExporterError, MalformedPayload, SchemaConflict, TransportError
from nuki_exporter.metrics.registry import MetricRegistry
from nuki_exporter.schemas import DeviceRecord

logger = structlog.get_logger(__name__)


class BridgeCollector:
    """Polls the bridge and publishes every device into the metric registry"""

    def __init__(
        self,
        client: BridgeClient,
        registry: MetricRegistry,
        interval: int,
        prober: Optional[LivenessProber] = None,
        server_thread: Optional[threading.Thread] = None,
    ):
        self.client = client
        self.registry = registry
        self.interval = interval
        self.prober = prober
        self.server_thread = server_thread
        self.running = False
        self._wakeup = threading.Event()

    def start(self):
        """Run poll cycles until stop() is called"""
        self.running = True
        logger.info("Starting bridge collector", interval=self.interval)
        self._collect_loop()

    def stop(self):
        self.running = False
        self._wakeup.set()
        logger.info("Bridge collector stopped")

    def _collect_loop(self):
        while self.running:
            try:
                self.collect_once()
            except Exception:
                logger.exception("Unexpected error in collection loop")

            if self.prober is not None:
                self.prober.check()

            if self.server_thread is not None and not self.server_thread.is_alive():
                self.running = False
                raise ExporterError("HTTP server stopped")

            self._wakeup.wait(self.interval)

    def collect_once(self) -> bool:
        """One fetch, decode and publish pass. Returns True when data was published."""
        try:
            payload = self.client.fetch()
        except TransportError as e:
            logger.warning("Bridge fetch failed", error=str(e), status_code=e.status_code)
            return False

        try:
            records = decode_devices(payload)
        except MalformedPayload as e:
            logger.warning("Bridge payload rejected", error=str(e))
            return False

        self.publish(records)
        return True

    def publish(self, records: Iterable[DeviceRecord]) -> int:
        """
        Push every metric of every record into the registry.

        A metric whose label schema conflicts with its registered one is
        skipped for the rest of the call, other metrics are still written.

        Returns:
            Number of values written
        """
        classified = [classify(record) for record in records]
        skipped: Set[str] = set()
        written = 0

        for labels in classified:
            logger.debug("Publishing device", labels=dict(zip(labels.label_names, labels.label_values)))
            for name, value in labels.metrics:
                if name in skipped:
                    continue
                try:
                    series = self.registry.get_or_create(name, labels.label_names)
                except SchemaConflict as e:
                    logger.error("Label schema conflict, skipping metric", metric=name, error=str(e))
                    skipped.add(name)
                    continue
                self.registry.set(series, labels.label_values, value)
                written += 1

        self.registry.touch_freshness()
        logger.info("Published devices", devices=len(classified), values=written)
        return written
