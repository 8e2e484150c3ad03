"""
Backend drivers for NetMenu.

The dispatcher iterates the drivers returned by build_backends() without
knowing their concrete types. Registration order is menu group order.
"""

from .. import config
from ..logging_config import get_logger
from ..utils import is_command_installed
from .base import BackendDriver
from .bluetooth import BluetoothDriver
from .iwd import IwdDriver
from .networkmanager import NetworkManagerDriver
from .system import SystemDriver
from .tailscale import TailscaleDriver

logger = get_logger(__name__)

DRIVERS = {
    driver.name: driver
    for driver in (
        TailscaleDriver,
        NetworkManagerDriver,
        IwdDriver,
        BluetoothDriver,
        SystemDriver,
    )
}


def select_wifi_driver(cfg):
    """Prefer NetworkManager; fall back to iwd when only iwctl is installed."""
    driver_cls = NetworkManagerDriver
    if not is_command_installed("nmcli") and is_command_installed("iwctl"):
        driver_cls = IwdDriver
    logger.debug(f"Using {driver_cls.name} for Wi-Fi")
    return driver_cls(
        interface=cfg.wifi_interface,
        timeout=cfg.backend_timeout,
        pinentry_cmd=cfg.pinentry_cmd,
        notifications=cfg.notifications,
    )


def build_backends(cfg=None):
    """Instantiate one driver per backend kind, in menu order."""
    cfg = cfg or config.Configuration()
    wifi = select_wifi_driver(cfg)
    return [
        DRIVERS["tailscale"](timeout=cfg.backend_timeout),
        wifi,
        DRIVERS["bluetooth"](timeout=cfg.backend_timeout),
        DRIVERS["system"](wifi=wifi, timeout=cfg.backend_timeout),
    ]


__all__ = [
    "DRIVERS",
    "BackendDriver",
    "BluetoothDriver",
    "IwdDriver",
    "NetworkManagerDriver",
    "SystemDriver",
    "TailscaleDriver",
    "build_backends",
    "select_wifi_driver",
]
