"""
Shared behaviour of the Wi-Fi backends.

Both Wi-Fi managers connect the same way: try the network as a known
connection first, and only ask for a passphrase when that fails.
"""

from abc import abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from .. import config
from ..errors import ApplyFailed, BackendUnavailable, WrongCredentials
from ..icons import SIGNAL_ICON
from ..logging_config import get_logger
from ..models import BackendOption, Source
from ..notify import send_notification
from ..prompt import prompt_for_password
from .base import BackendDriver

logger = get_logger(__name__)


@dataclass(frozen=True)
class WifiNetwork:
    ssid: str
    signal: str
    connected: bool = False


def collapse_networks(networks) -> List[WifiNetwork]:
    """Merge repeated SSIDs (one entry per access point) keeping first-seen order."""
    merged = {}
    for network in networks:
        if not network.ssid:
            continue
        seen = merged.get(network.ssid)
        if seen is None:
            merged[network.ssid] = network
        elif network.connected and not seen.connected:
            merged[network.ssid] = WifiNetwork(seen.ssid, seen.signal, connected=True)
    return list(merged.values())


class WifiDriver(BackendDriver):
    """Base class for Wi-Fi managers."""

    source = Source.WIFI_NETWORK
    checks_connectivity = True
    # fetch, rescan, fetch again
    query_steps = 3
    #: Whether the manager can bring the interface up without naming a network
    supports_device_connect = False

    def __init__(
        self,
        interface=config.DEFAULT_WIFI_INTERFACE,
        timeout=config.DEFAULT_BACKEND_TIMEOUT,
        pinentry_cmd=config.DEFAULT_PINENTRY_CMD,
        notifications=True,
    ):
        super().__init__(timeout=timeout)
        self.interface = interface
        self.pinentry_cmd = pinentry_cmd
        self.notifications = notifications

    @abstractmethod
    def scan(self) -> List[WifiNetwork]:
        """List visible networks, rescanning if none is connected."""

    @abstractmethod
    def fetch(self) -> List[WifiNetwork]:
        """List visible networks without triggering a rescan."""

    @abstractmethod
    def attempt_connection(self, ssid, passphrase=None):
        """Run the connect command; returns the completed process."""

    @abstractmethod
    def disconnect(self) -> str:
        """Disconnect the interface from its current network."""

    def connect_device(self) -> str:
        raise ApplyFailed(f"{self.name} cannot connect {self.interface} without a network")

    def list_options(self) -> List[BackendOption]:
        self._require_installed()
        networks = collapse_networks(self.scan())
        logger.debug(f"Found {len(networks)} Wi-Fi networks via {self.name}")
        return [
            BackendOption(
                identifier=network.ssid,
                label=f"{network.ssid} - {network.signal}",
                kind="wifi",
                icon=SIGNAL_ICON,
                is_active=network.connected,
            )
            for network in networks
        ]

    def current_active(self) -> Optional[str]:
        for network in self.fetch():
            if network.connected:
                return network.ssid
        return None

    def apply(self, identifier: str) -> str:
        try:
            active = self.current_active()
        except BackendUnavailable as e:
            logger.debug(f"Could not read current network before connecting: {e}")
            active = None

        if active == identifier:
            logger.info(f"Already connected to '{identifier}'")
            return f"Already connected to {identifier}"

        logger.info(f"Connecting to '{identifier}' via {self.name}")
        result = self.attempt_connection(identifier)
        if result.returncode != 0:
            logger.info(f"'{identifier}' is not a known network, asking for passphrase")
            passphrase = prompt_for_password(identifier, self.pinentry_cmd)
            if passphrase is None:
                raise ApplyFailed(f"no passphrase entered for '{identifier}'")

            result = self.attempt_connection(identifier, passphrase)
            if result.returncode != 0:
                detail = (result.stderr or result.stdout or "").strip()
                if passphrase:
                    detail = detail.replace(passphrase, "****")
                raise WrongCredentials(f"could not connect to '{identifier}': {detail}")

        if self.notifications:
            send_notification("Wi-Fi", f"Connected to {identifier}")
        return f"Connected to {identifier}"
