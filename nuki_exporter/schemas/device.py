"""
Normalized device record Pydantic schema
"""

from typing import ClassVar, Tuple

from pydantic import BaseModel, ConfigDict, Field


class DeviceRecord(BaseModel):
    """
    One device observed in a poll.

    Every field has a fixed role. Label fields identify the device and become
    series dimensions, metric fields become gauge values. The roles and their
    order are declared here once and never derived from names or values.
    """
    model_config = ConfigDict(frozen=True)

    LABEL_FIELDS: ClassVar[Tuple[str, ...]] = (
        "devicetype",
        "nukiid",
        "name",
        "firmwareversion",
    )
    METRIC_FIELDS: ClassVar[Tuple[str, ...]] = (
        "mode",
        "state",
        "doorsensorstate",
        "batterychargestate",
        "numbatterycharging",
        "numbatterycritical",
    )

    # Labels
    devicetype: int = Field(..., description="Device type code")
    nukiid: int = Field(..., description="Nuki device identifier")
    name: str = Field(..., description="Display name")
    firmwareversion: str = Field(..., description="Firmware version string")

    # Metrics
    mode: int = Field(..., description="Operating mode code")
    state: int = Field(..., description="Current state code")
    doorsensorstate: int = Field(..., description="Door sensor state code")
    batterychargestate: int = Field(..., description="Battery charge in percent")
    numbatterycharging: int = Field(0, ge=0, le=1, description="1 while charging")
    numbatterycritical: int = Field(1, ge=0, le=1, description="1 when battery is critical or unknown")
