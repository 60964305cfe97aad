"""
Splits device records into series labels and metric values
"""

from typing import List, NamedTuple, Tuple

from nuki_exporter.schemas import DeviceRecord


class Classification(NamedTuple):
    label_names: Tuple[str, ...]
    label_values: Tuple[str, ...]
    metrics: List[Tuple[str, int]]


def _label_value(value) -> str:
    # ids are integers, labels are strings
    return value if isinstance(value, str) else str(value)


def classify(record: DeviceRecord) -> Classification:
    """Labels and metrics of a record, both in declared field order"""
    label_names = DeviceRecord.LABEL_FIELDS
    label_values = tuple(_label_value(getattr(record, name)) for name in label_names)
    metrics = [(name, int(getattr(record, name))) for name in DeviceRecord.METRIC_FIELDS]
    return Classification(label_names, label_values, metrics)
