"""
Bridge /list response Pydantic schemas
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class LastKnownState(BaseModel):
    """Nested device state as reported by the bridge"""
    model_config = ConfigDict(strict=True, populate_by_name=True)

    mode: int = Field(..., description="Operating mode code")
    state: int = Field(..., description="Current lock state code")
    doorsensor_state: int = Field(..., alias="doorsensorState", description="Door sensor state code")
    battery_charge_state: int = Field(..., alias="batteryChargeState", description="Battery charge in percent")
    battery_critical: Optional[bool] = Field(None, alias="batteryCritical")
    battery_charging: Optional[bool] = Field(None, alias="batteryCharging")
    state_name: Optional[str] = Field(None, alias="stateName")
    timestamp: Optional[str] = None

    @field_validator("battery_critical", "battery_charging", mode="before")
    @classmethod
    def drop_unrecognized_flag(cls, value: Any) -> Optional[bool]:
        # anything but a JSON boolean counts as unknown
        return value if isinstance(value, bool) else None

    @field_validator("state_name", "timestamp", mode="before")
    @classmethod
    def drop_unparsable_info(cls, value: Any) -> Any:
        return value if isinstance(value, str) else None


class BridgeDevice(BaseModel):
    """One device object of the bridge /list response"""
    model_config = ConfigDict(strict=True, populate_by_name=True)

    device_type: int = Field(..., alias="deviceType")
    nuki_id: int = Field(..., alias="nukiId")
    name: str
    firmware_version: str = Field(..., alias="firmwareVersion")
    last_known_state: LastKnownState = Field(..., alias="lastKnownState")


BridgeDeviceList = TypeAdapter(List[BridgeDevice])
