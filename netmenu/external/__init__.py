"""
External services module for NetMenu.

This module handles interactions with internet services, currently the
Mullvad connection check used after switching exit node or network.
"""

from .mullvad import check_mullvad, report_connectivity

__all__ = [
    "check_mullvad",
    "report_connectivity",
]
