"""
Bluetooth backend for NetMenu.

Offers every paired device; choosing one connects it, or disconnects it
if it is already connected.
"""

import re
from typing import List, Optional

from ..errors import BackendUnavailable
from ..logging_config import get_logger
from ..models import BackendOption, Source
from .base import BackendDriver

logger = get_logger(__name__)

DEVICE_RE = re.compile(r"([0-9A-Fa-f]{2}(?::[0-9A-Fa-f]{2}){5})\s+(.*)")


def parse_bluetooth_devices(output, connected=()) -> List[BackendOption]:
    """Parse `bluetoothctl devices` output ("Device <MAC> <name>" per line)."""
    options = []
    for line in output.splitlines():
        match = DEVICE_RE.search(line)
        if not match:
            continue
        address, name = match.group(1), match.group(2).strip()
        options.append(
            BackendOption(
                identifier=address,
                label=f"{name:<25} - {address}",
                kind="bluetooth",
                is_active=address in connected,
            )
        )
    return options


def parse_connected_devices(output) -> List[str]:
    """Collect MAC addresses from `bluetoothctl info` blocks."""
    addresses = []
    for line in output.splitlines():
        if line.startswith("Device "):
            fields = line.split()
            if len(fields) > 1:
                addresses.append(fields[1])
    return addresses


class BluetoothDriver(BackendDriver):
    """Bluetooth manager backed by bluetoothctl."""

    name = "bluetooth"
    source = Source.BLUETOOTH_DEVICE
    requires = ("bluetoothctl",)
    query_steps = 2

    def connected_devices(self) -> List[str]:
        result = self._query(["bluetoothctl", "info"])
        if result.returncode != 0:
            # bluetoothctl info fails when nothing is connected
            return []
        return parse_connected_devices(result.stdout)

    def list_options(self) -> List[BackendOption]:
        self._require_installed()

        result = self._query(["bluetoothctl", "devices"])
        if result.returncode != 0:
            raise BackendUnavailable(
                self.name, (result.stderr or "failed to list paired devices").strip()
            )

        options = parse_bluetooth_devices(result.stdout, self.connected_devices())
        logger.debug(f"Found {len(options)} paired Bluetooth devices")
        return options

    def current_active(self) -> Optional[str]:
        connected = self.connected_devices()
        return connected[0] if connected else None

    def apply(self, identifier: str) -> str:
        try:
            connected = self.connected_devices()
        except BackendUnavailable as e:
            logger.debug(f"Could not read connected devices: {e}")
            connected = []

        action = "disconnect" if identifier in connected else "connect"
        logger.info(f"Bluetooth {action} {identifier}")
        self._execute(["bluetoothctl", action, identifier])
        return f"{action.capitalize()}ed {identifier}"
