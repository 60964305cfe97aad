"""
Metric registry shared by the poll loop and the scrape endpoint
"""

import threading
import time
from typing import Dict, Optional, Sequence

import structlog
from prometheus_client import (
    CollectorRegistry,
    GCCollector,
    Gauge,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)

from nuki_exporter.core.exceptions import SchemaConflict

logger = structlog.get_logger(__name__)

FRESHNESS_NAME = "lastUpdate"
FRESHNESS_SCOPE = "global"


class MetricSeries:
    """A gauge for one metric name with its label schema fixed at creation"""

    def __init__(self, name: str, label_names: Sequence[str], gauge: Gauge):
        self.name = name
        self.label_names = tuple(label_names)
        self.gauge = gauge
        self.registered = False

    def __repr__(self):
        return f"MetricSeries({self.name!r}, {list(self.label_names)!r})"


class MetricRegistry:
    """
    Owns a prometheus CollectorRegistry and the gauges created from bridge data.

    Gauges are created lazily per metric name and live for the whole process.
    A gauge only becomes visible to scrapes together with its first value, and
    all writes and renders are serialized by a single lock.
    """

    def __init__(self, prefix: str = "nuki_", default_collectors: bool = True):
        self.prefix = prefix
        self.registry = CollectorRegistry()
        self._lock = threading.Lock()
        self._series: Dict[str, MetricSeries] = {}

        if default_collectors:
            ProcessCollector(registry=self.registry)
            PlatformCollector(registry=self.registry)
            GCCollector(registry=self.registry)

        # show last update time to see if the exporter is working correctly
        self.freshness = Gauge(
            prefix + FRESHNESS_NAME,
            "Last update timestamp in epoch seconds",
            ["scope"],
            registry=self.registry,
        )
        self.freshness.labels(FRESHNESS_SCOPE)

    def get_or_create(self, name: str, label_names: Sequence[str]) -> MetricSeries:
        """
        Return the series for ``name``, creating it on first use.

        Raises:
            SchemaConflict: If ``name`` already exists with other label names
        """
        label_names = tuple(label_names)
        with self._lock:
            series = self._series.get(name)
            if series is None:
                gauge = Gauge(self.prefix + name, "N/A", label_names, registry=None)
                series = MetricSeries(name, label_names, gauge)
                self._series[name] = series
                logger.debug("Created series", metric=name, labels=list(label_names))
            elif series.label_names != label_names:
                raise SchemaConflict(name, series.label_names, label_names)
            return series

    def set(self, series: MetricSeries, label_values: Sequence[str], value: float) -> None:
        """Record ``value`` for the label tuple, replacing any earlier value"""
        with self._lock:
            series.gauge.labels(*label_values).set(value)
            if not series.registered:
                self.registry.register(series.gauge)
                series.registered = True
        logger.debug("Set metric", metric=series.name, labels=list(label_values), value=value)

    def touch_freshness(self, now: Optional[float] = None) -> None:
        with self._lock:
            self.freshness.labels(FRESHNESS_SCOPE).set(int(now if now is not None else time.time()))

    def get_value(self, name: str, label_values: Sequence[str]) -> Optional[float]:
        """Current value of one series, None if it was never set"""
        with self._lock:
            series = self._series.get(name)
            if series is None or not series.registered:
                return None
            labels = dict(zip(series.label_names, label_values))
            return self.registry.get_sample_value(self.prefix + name, labels)

    def freshness_value(self) -> float:
        with self._lock:
            return self.registry.get_sample_value(
                self.prefix + FRESHNESS_NAME, {"scope": FRESHNESS_SCOPE}
            )

    def series_names(self):
        with self._lock:
            return sorted(self._series)

    def render(self) -> bytes:
        """Prometheus text exposition of everything registered"""
        with self._lock:
            return generate_latest(self.registry)
