"""
Decodes bridge /list payloads into device records
"""

from typing import List, Union

from pydantic import ValidationError

from nuki_exporter.core.exceptions import MalformedPayload
from nuki_exporter.schemas import BridgeDevice, BridgeDeviceList, DeviceRecord


def _flag_to_int(value, default: int) -> int:
    if value is True:
        return 1
    if value is False:
        return 0
    return default


def to_record(device: BridgeDevice) -> DeviceRecord:
    """Flatten a bridge device; unknown battery flags mean charging=0, critical=1"""
    state = device.last_known_state
    return DeviceRecord(
        devicetype=device.device_type,
        nukiid=device.nuki_id,
        name=device.name,
        firmwareversion=device.firmware_version,
        mode=state.mode,
        state=state.state,
        doorsensorstate=state.doorsensor_state,
        batterychargestate=state.battery_charge_state,
        numbatterycharging=_flag_to_int(state.battery_charging, default=0),
        numbatterycritical=_flag_to_int(state.battery_critical, default=1),
    )


def decode_devices(payload: Union[bytes, str]) -> List[DeviceRecord]:
    """
    Parse a bridge response body.

    Args:
        payload: Raw JSON body, expected to be an array of device objects

    Returns:
        One DeviceRecord per device, in payload order

    Raises:
        MalformedPayload: If the body is not valid JSON or any device is malformed
    """
    try:
        devices = BridgeDeviceList.validate_json(payload)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise MalformedPayload(
            f"Couldn't decode bridge payload: {first['msg']} at '{location}' "
            f"({e.error_count()} error(s))"
        ) from e
    return [to_record(device) for device in devices]
