# Schemas package
from .bridge import BridgeDevice, BridgeDeviceList, LastKnownState
from .device import DeviceRecord

__all__ = ['BridgeDevice', 'BridgeDeviceList', 'LastKnownState', 'DeviceRecord']
