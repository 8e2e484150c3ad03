"""
NetworkManager Wi-Fi backend for NetMenu.

Uses nmcli in terse mode. Terse output separates fields with ':' and
escapes literal colons and backslashes inside values with a backslash.
"""

import re
from typing import List

from ..errors import BackendUnavailable
from ..logging_config import get_logger
from .wifi import WifiDriver, WifiNetwork

logger = get_logger(__name__)

# Split on colons not preceded by a backslash
TERSE_FIELD_RE = re.compile(r"(?<!\\):")


def _unescape(value):
    return value.replace("\\:", ":").replace("\\\\", "\\")


def parse_nmcli_wifi(lines) -> List[WifiNetwork]:
    """Parse `nmcli -t -f IN-USE,SSID,BARS device wifi` output."""
    networks = []
    for line in lines:
        parts = TERSE_FIELD_RE.split(line)
        if len(parts) != 3:
            continue
        in_use, ssid, bars = (_unescape(part).strip() for part in parts)
        if not ssid:
            # Hidden networks have no name to connect to
            continue
        networks.append(WifiNetwork(ssid=ssid, signal=bars, connected=in_use == "*"))
    return networks


class NetworkManagerDriver(WifiDriver):
    """Wi-Fi manager backed by NetworkManager's nmcli."""

    name = "networkmanager"
    requires = ("nmcli",)
    supports_device_connect = True

    def _fetch_lines(self):
        result = self._query(["nmcli", "-t", "-f", "IN-USE,SSID,BARS", "device", "wifi"])
        if result.returncode != 0:
            raise BackendUnavailable(
                self.name, (result.stderr or "device wifi listing failed").strip()
            )
        return result.stdout.splitlines()

    def fetch(self) -> List[WifiNetwork]:
        return parse_nmcli_wifi(self._fetch_lines())

    def scan(self) -> List[WifiNetwork]:
        networks = self.fetch()
        if any(network.connected for network in networks):
            return networks

        logger.debug("No Wi-Fi network in use, rescanning")
        rescan = self._query(["nmcli", "dev", "wifi", "list", "--rescan", "auto"])
        if rescan.returncode != 0:
            logger.debug("nmcli rescan failed, using cached scan results")
            return networks
        return self.fetch()

    def attempt_connection(self, ssid, passphrase=None):
        if passphrase is None:
            command = ["nmcli", "connection", "up", ssid]
        else:
            command = ["nmcli", "device", "wifi", "connect", ssid, "password", passphrase]
        return self._execute(command, input="", secret=passphrase, check=False)

    def disconnect(self) -> str:
        logger.info(f"Disconnecting {self.interface}")
        self._execute(["nmcli", "device", "disconnect", self.interface])
        return f"Disconnected {self.interface}"

    def connect_device(self) -> str:
        logger.info(f"Connecting {self.interface}")
        self._execute(["nmcli", "device", "connect", self.interface])
        return f"Connected {self.interface}"
