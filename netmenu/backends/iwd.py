"""
iwd Wi-Fi backend for NetMenu.

Used when NetworkManager is not installed. iwctl prints a colored table;
the connected network is marked with '>' and signal strength as stars.
"""

from typing import List

from ..errors import BackendUnavailable
from ..logging_config import get_logger
from ..utils import convert_network_strength, strip_ansi
from .wifi import WifiDriver, WifiNetwork

logger = get_logger(__name__)


def parse_iwd_networks(output) -> List[WifiNetwork]:
    """Parse `iwctl station <iface> get-networks` output."""
    networks = []
    in_table = False
    for raw_line in output.splitlines():
        line = strip_ansi(raw_line).strip()
        if not in_table:
            in_table = "Available networks" in line
            continue
        if not line or line.startswith(("-", "Network name", "No networks")):
            continue

        parts = line.split()
        connected = parts[0] == ">"
        if connected:
            parts = parts[1:]
        # Network name, security, signal; names may contain spaces
        if len(parts) < 3:
            continue
        networks.append(
            WifiNetwork(
                ssid=" ".join(parts[:-2]),
                signal=convert_network_strength(parts[-1]),
                connected=connected,
            )
        )
    return networks


class IwdDriver(WifiDriver):
    """Wi-Fi manager backed by iwd's iwctl."""

    name = "iwd"
    requires = ("iwctl",)

    def fetch(self) -> List[WifiNetwork]:
        result = self._query(["iwctl", "station", self.interface, "get-networks"])
        if result.returncode != 0:
            raise BackendUnavailable(
                self.name, (result.stderr or result.stdout or "get-networks failed").strip()
            )
        return parse_iwd_networks(result.stdout)

    def scan(self) -> List[WifiNetwork]:
        networks = self.fetch()
        if any(network.connected for network in networks):
            return networks

        logger.debug(f"No network connected on {self.interface}, rescanning")
        rescan = self._query(["iwctl", "station", self.interface, "scan"])
        if rescan.returncode != 0:
            logger.debug("iwctl scan failed, using cached scan results")
            return networks
        return self.fetch()

    def attempt_connection(self, ssid, passphrase=None):
        command = ["iwctl"]
        if passphrase is not None:
            command += ["--passphrase", passphrase]
        command += ["station", self.interface, "connect", ssid]
        # Empty stdin keeps iwctl from waiting on an interactive prompt
        return self._execute(command, input="", secret=passphrase, check=False)

    def disconnect(self) -> str:
        logger.info(f"Disconnecting {self.interface}")
        self._execute(["iwctl", "station", self.interface, "disconnect"])
        return f"Disconnected {self.interface}"
