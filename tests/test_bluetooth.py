"""
Unit tests for the Bluetooth backend (netmenu/backends/bluetooth.py)
"""

import pytest

from netmenu.errors import ApplyFailed, BackendUnavailable

DEVICES = """Device 00:1A:7D:DA:71:13 WH-1000XM4
Device AC:80:0A:11:22:33 Keyboard K380
"""

INFO_CONNECTED = """Device 00:1A:7D:DA:71:13 (public)
\tName: WH-1000XM4
\tConnected: yes
"""


@pytest.mark.unit
class TestBluetoothParsing:
    """Tests for the bluetoothctl parsers."""

    def test_parse_devices(self):
        from netmenu.backends.bluetooth import parse_bluetooth_devices

        options = parse_bluetooth_devices(DEVICES, connected=["AC:80:0A:11:22:33"])

        assert [o.identifier for o in options] == ["00:1A:7D:DA:71:13", "AC:80:0A:11:22:33"]
        assert options[0].label == f"{'WH-1000XM4':<25} - 00:1A:7D:DA:71:13"
        assert [o.is_active for o in options] == [False, True]
        assert all(o.kind == "bluetooth" for o in options)

    def test_parse_connected_devices(self):
        from netmenu.backends.bluetooth import parse_connected_devices

        assert parse_connected_devices(INFO_CONNECTED) == ["00:1A:7D:DA:71:13"]
        assert parse_connected_devices("Missing device address argument") == []


@pytest.mark.unit
class TestBluetoothDriver:
    """Tests for BluetoothDriver."""

    def test_list_options_marks_connected(self, fake_commands):
        from netmenu.backends.bluetooth import BluetoothDriver

        fake_commands.add(["bluetoothctl", "devices"], "Device 00:1A:7D:DA:71:13 WH-1000XM4\n")
        fake_commands.add(["bluetoothctl", "info"], INFO_CONNECTED)

        options = BluetoothDriver().list_options()

        assert len(options) == 1
        assert options[0].is_active

    def test_nothing_connected(self, fake_commands):
        from netmenu.backends.bluetooth import BluetoothDriver

        fake_commands.add(["bluetoothctl", "info"], returncode=1, stdout="Missing device address")

        driver = BluetoothDriver()

        assert driver.connected_devices() == []
        assert driver.current_active() is None

    def test_listing_failure_is_unavailable(self, fake_commands):
        from netmenu.backends.bluetooth import BluetoothDriver

        fake_commands.add(["bluetoothctl", "devices"], returncode=1, stderr="No default controller")

        with pytest.raises(BackendUnavailable, match="No default controller"):
            BluetoothDriver().list_options()

    def test_apply_connects(self, fake_commands):
        from netmenu.backends.bluetooth import BluetoothDriver

        fake_commands.add(["bluetoothctl", "info"], returncode=1)
        fake_commands.add(["bluetoothctl", "connect", "AC:80:0A:11:22:33"])

        message = BluetoothDriver().apply("AC:80:0A:11:22:33")

        assert message == "Connected AC:80:0A:11:22:33"

    def test_apply_disconnects_connected_device(self, fake_commands):
        from netmenu.backends.bluetooth import BluetoothDriver

        fake_commands.add(["bluetoothctl", "info"], INFO_CONNECTED)
        fake_commands.add(["bluetoothctl", "disconnect", "00:1A:7D:DA:71:13"])

        message = BluetoothDriver().apply("00:1A:7D:DA:71:13")

        assert message == "Disconnected 00:1A:7D:DA:71:13"
        assert not fake_commands.called(["bluetoothctl", "connect", "00:1A:7D:DA:71:13"])

    def test_apply_failure(self, fake_commands):
        from netmenu.backends.bluetooth import BluetoothDriver

        fake_commands.add(["bluetoothctl", "info"], returncode=1)
        fake_commands.add(
            ["bluetoothctl", "connect", "AC:80:0A:11:22:33"],
            returncode=1,
            stdout="Failed to connect: org.bluez.Error.Failed",
        )

        with pytest.raises(ApplyFailed, match="org.bluez.Error.Failed"):
            BluetoothDriver().apply("AC:80:0A:11:22:33")
