"""
Tailscale exit-node backend for NetMenu.

Lists the exit nodes known to the local tailscale client, including the
Mullvad nodes offered through the Tailscale Mullvad add-on, and switches
between them with `tailscale set --exit-node`.
"""

import json
import re
from typing import List, Optional

from ..errors import BackendUnavailable
from ..icons import DISABLE_ICON, EXIT_NODE_ICON
from ..logging_config import get_logger
from ..models import BackendOption, Source
from .base import BackendDriver

logger = get_logger(__name__)

# `tailscale exit-node list` separates columns with runs of spaces
COLUMN_SPLIT_RE = re.compile(r"\s{2,}")

MULLVAD_DOMAIN = "mullvad.ts.net"
TAILNET_DOMAIN = "ts.net"

# Identifier of the distinguished "route traffic directly" option
NO_EXIT_NODE = ""


def parse_exit_node_line(line, active_node=None) -> Optional[BackendOption]:
    """
    Parse one row of `tailscale exit-node list`.

    Rows are "IP  HOSTNAME  COUNTRY  CITY  STATUS". Mullvad nodes are keyed
    by country so they get a flag; personal nodes by their short host name.
    """
    parts = [part.strip() for part in COLUMN_SPLIT_RE.split(line.strip())]
    if len(parts) < 2 or TAILNET_DOMAIN not in parts[1]:
        return None

    node_ip, hostname = parts[0], parts[1]
    country = parts[2] if len(parts) > 2 else ""
    is_active = hostname == active_node

    if MULLVAD_DOMAIN in hostname:
        return BackendOption(
            identifier=hostname,
            label=f"{country:<15} - {node_ip:<16} {hostname}",
            kind="mullvad",
            country=country,
            is_active=is_active,
        )

    short_name = hostname.split(".")[0]
    return BackendOption(
        identifier=hostname,
        label=f"{short_name:<15} - {node_ip:<16} {hostname}",
        kind="exit-node",
        icon=EXIT_NODE_ICON,
        is_active=is_active,
    )


def parse_active_exit_node(status_json) -> Optional[str]:
    """Find the DNS name of the peer currently used as exit node in `tailscale status --json`."""
    try:
        status = json.loads(status_json)
    except json.JSONDecodeError as e:
        logger.debug(f"Could not parse tailscale status JSON: {e}")
        return None

    peers = status.get("Peer") or {}
    if not isinstance(peers, dict):
        return None

    for peer in peers.values():
        if peer.get("Active") and peer.get("ExitNode"):
            dns_name = peer.get("DNSName") or ""
            if dns_name:
                return dns_name.rstrip(".")
    return None


class TailscaleDriver(BackendDriver):
    """VPN exit-node provider backed by the tailscale CLI."""

    name = "tailscale"
    source = Source.VPN_EXIT_NODE
    requires = ("tailscale",)
    checks_connectivity = True
    query_steps = 2

    def list_options(self) -> List[BackendOption]:
        self._require_installed()

        result = self._query(["tailscale", "exit-node", "list"])
        if result.returncode != 0:
            raise BackendUnavailable(
                self.name, (result.stderr or "exit-node list failed").strip()
            )

        active_node = self.current_active()

        personal, mullvad = [], []
        for line in result.stdout.splitlines():
            option = parse_exit_node_line(line, active_node)
            if option is None:
                continue
            if option.kind == "mullvad":
                mullvad.append(option)
            else:
                personal.append(option)

        disable = BackendOption(
            identifier=NO_EXIT_NODE,
            label="Disable exit node",
            kind="tailscale",
            icon=DISABLE_ICON,
            is_active=active_node is None,
        )
        logger.debug(
            f"Found {len(personal)} personal and {len(mullvad)} Mullvad exit nodes "
            f"(active: {active_node or 'none'})"
        )
        return [disable] + personal + mullvad

    def current_active(self) -> Optional[str]:
        result = self._query(["tailscale", "status", "--json"])
        if result.returncode != 0:
            logger.debug("tailscale status --json failed, assuming no exit node")
            return None
        return parse_active_exit_node(result.stdout)

    def apply(self, identifier: str) -> str:
        try:
            active_node = self.current_active()
        except BackendUnavailable as e:
            logger.debug(f"Could not read active exit node before applying: {e}")
            active_node = None

        if (active_node or NO_EXIT_NODE) == identifier:
            logger.info(f"Exit node already set to '{identifier or 'none'}'")
            return ""

        if identifier == NO_EXIT_NODE:
            logger.info("Disabling exit node")
            self._execute(["tailscale", "set", "--exit-node="])
            return "Exit node disabled"

        logger.info(f"Switching exit node to {identifier}")
        self._execute(["tailscale", "up"])
        self._execute(
            [
                "tailscale",
                "set",
                "--exit-node",
                identifier,
                "--exit-node-allow-lan-access=true",
            ]
        )
        return f"Exit node set to {identifier}"
