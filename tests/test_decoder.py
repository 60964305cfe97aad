import copy
import json
import unittest

from nuki_exporter.collectors.decoder import decode_devices
from nuki_exporter.core.exceptions import MalformedPayload


class TestDecodeDevices(unittest.TestCase):
    """Test cases for bridge payload decoding"""

    def setUp(self):
        self.device = {
            'deviceType': 0,
            'nukiId': 1,
            'name': 'Frontdoor',
            'firmwareVersion': '1.0',
            'lastKnownState': {
                'mode': 2,
                'state': 3,
                'stateName': 'unlocked',
                'doorsensorState': 1,
                'batteryChargeState': 80,
                'batteryCritical': False,
                'batteryCharging': True,
                'timestamp': '2024-01-01T10:00:00+00:00'
            }
        }

    def _decode(self, *devices):
        return decode_devices(json.dumps(list(devices)))

    def test_decodes_device(self):
        records = self._decode(self.device)

        self.assertEqual(len(records), 1)
        record = records[0]
        self.assertEqual(record.devicetype, 0)
        self.assertEqual(record.nukiid, 1)
        self.assertEqual(record.name, 'Frontdoor')
        self.assertEqual(record.firmwareversion, '1.0')
        self.assertEqual(record.mode, 2)
        self.assertEqual(record.state, 3)
        self.assertEqual(record.doorsensorstate, 1)
        self.assertEqual(record.batterychargestate, 80)
        self.assertEqual(record.numbatterycharging, 1)
        self.assertEqual(record.numbatterycritical, 0)

    def test_accepts_bytes_and_keeps_order(self):
        second = copy.deepcopy(self.device)
        second['nukiId'] = 2
        second['name'] = 'Backdoor'

        records = decode_devices(json.dumps([self.device, second]).encode())

        self.assertEqual([r.name for r in records], ['Frontdoor', 'Backdoor'])

    def test_empty_list(self):
        self.assertEqual(decode_devices(b'[]'), [])

    def test_missing_flags_use_failsafe_defaults(self):
        del self.device['lastKnownState']['batteryCritical']
        del self.device['lastKnownState']['batteryCharging']

        record = self._decode(self.device)[0]

        self.assertEqual(record.numbatterycharging, 0)
        self.assertEqual(record.numbatterycritical, 1)

    def test_unrecognized_flags_use_failsafe_defaults(self):
        self.device['lastKnownState']['batteryCritical'] = 'no'
        self.device['lastKnownState']['batteryCharging'] = 1

        record = self._decode(self.device)[0]

        self.assertEqual(record.numbatterycharging, 0)
        self.assertEqual(record.numbatterycritical, 1)

    def test_critical_battery(self):
        self.device['lastKnownState']['batteryCritical'] = True
        self.device['lastKnownState']['batteryCharging'] = False

        record = self._decode(self.device)[0]

        self.assertEqual(record.numbatterycharging, 0)
        self.assertEqual(record.numbatterycritical, 1)

    def test_missing_last_known_state_fails(self):
        del self.device['lastKnownState']

        with self.assertRaises(MalformedPayload) as ctx:
            self._decode(self.device)
        self.assertIn('lastKnownState', str(ctx.exception))

    def test_one_bad_device_fails_whole_payload(self):
        broken = copy.deepcopy(self.device)
        del broken['lastKnownState']['mode']

        with self.assertRaises(MalformedPayload):
            self._decode(self.device, broken)

    def test_string_id_is_rejected(self):
        self.device['nukiId'] = '1'

        with self.assertRaises(MalformedPayload):
            self._decode(self.device)

    def test_numeric_name_is_rejected(self):
        self.device['name'] = 42

        with self.assertRaises(MalformedPayload):
            self._decode(self.device)

    def test_invalid_json(self):
        with self.assertRaises(MalformedPayload):
            decode_devices(b'[{"deviceType": 0,')

    def test_object_instead_of_list(self):
        with self.assertRaises(MalformedPayload):
            decode_devices(json.dumps(self.device))


if __name__ == '__main__':
    unittest.main()
