"""
System controls for NetMenu.

One-shot toggles that are not a choice among discovered options: radio
kill switch, the NetworkManager connection editor, bringing Tailscale up
or down and its shields setting, and Wi-Fi connect/disconnect of the
configured interface.
"""

from typing import List, Optional

from ..errors import ApplyFailed, BackendUnavailable
from ..icons import ACTIVE_ICON, DISABLE_ICON, EDIT_ICON, SHIELD_ICON, SIGNAL_ICON
from ..logging_config import get_logger
from ..models import BackendOption, Source
from ..utils import is_command_installed
from .base import BackendDriver

logger = get_logger(__name__)

# identifier -> (required executable, command, kind, icon, label)
COMMANDS = {
    "rfkill-block": (
        "rfkill", ["rfkill", "block", "wlan"], "system", DISABLE_ICON, "Radio wifi rfkill block"
    ),
    "rfkill-unblock": (
        "rfkill", ["rfkill", "unblock", "wlan"], "system", SIGNAL_ICON, "Radio wifi rfkill unblock"
    ),
    "edit-connections": (
        "nm-connection-editor", ["nm-connection-editor"], "system", EDIT_ICON, "Edit connections"
    ),
    "tailscale-up": (
        "tailscale", ["tailscale", "up"], "tailscale", ACTIVE_ICON, "Enable tailscale"
    ),
    "tailscale-down": (
        "tailscale", ["tailscale", "down"], "tailscale", DISABLE_ICON, "Disable tailscale"
    ),
    "shields-down": (
        "tailscale",
        ["tailscale", "set", "--shields-up", "false"],
        "tailscale",
        SHIELD_ICON,
        "Shields down",
    ),
    "shields-up": (
        "tailscale",
        ["tailscale", "set", "--shields-up", "true"],
        "tailscale",
        SHIELD_ICON,
        "Shields up",
    ),
}

WIFI_CONNECT = "wifi-connect"
WIFI_DISCONNECT = "wifi-disconnect"


class SystemDriver(BackendDriver):
    """Miscellaneous radio and VPN switches."""

    name = "system"
    source = Source.SYSTEM
    query_steps = 2

    def __init__(self, wifi=None, **kwargs):
        super().__init__(**kwargs)
        self.wifi = wifi

    def _option(self, identifier):
        _, _, kind, icon, label = COMMANDS[identifier]
        return BackendOption(identifier=identifier, label=label, kind=kind, icon=icon)

    def tailscale_enabled(self) -> bool:
        result = self._query(["tailscale", "status"])
        return result.returncode == 0 and "Tailscale is stopped" not in result.stdout

    def _wifi_options(self) -> List[BackendOption]:
        if self.wifi is None or not self.wifi.is_installed():
            return []
        try:
            connected = self.wifi.current_active() is not None
        except BackendUnavailable as e:
            logger.debug(f"Skipping Wi-Fi switches: {e}")
            return []

        if connected:
            return [
                BackendOption(
                    identifier=WIFI_DISCONNECT, label="Disconnect", kind="wifi", icon=DISABLE_ICON
                )
            ]
        if self.wifi.supports_device_connect:
            return [
                BackendOption(
                    identifier=WIFI_CONNECT, label="Connect", kind="wifi", icon=SIGNAL_ICON
                )
            ]
        return []

    def list_options(self) -> List[BackendOption]:
        options = self._wifi_options()

        if is_command_installed("rfkill"):
            options += [self._option("rfkill-block"), self._option("rfkill-unblock")]

        if is_command_installed("nm-connection-editor"):
            options.append(self._option("edit-connections"))

        if is_command_installed("tailscale"):
            toggle = "tailscale-down" if self.tailscale_enabled() else "tailscale-up"
            options += [
                self._option(toggle),
                self._option("shields-down"),
                self._option("shields-up"),
            ]

        return options

    def current_active(self) -> Optional[str]:
        return None

    def changes_route(self, identifier: str) -> bool:
        return identifier == WIFI_CONNECT

    def apply(self, identifier: str) -> str:
        if identifier == WIFI_DISCONNECT:
            return self._wifi().disconnect()
        if identifier == WIFI_CONNECT:
            return self._wifi().connect_device()

        if identifier not in COMMANDS:
            raise ApplyFailed(f"unknown system action '{identifier}'")

        _, command, _, _, label = COMMANDS[identifier]
        logger.info(f"{label}: {' '.join(command)}")
        result = self._execute(command)
        return result.stdout.strip()

    def _wifi(self):
        if self.wifi is None:
            raise ApplyFailed("no Wi-Fi manager available")
        return self.wifi
