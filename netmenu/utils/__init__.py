"""
Utility functions for NetMenu.

This module provides common utility functions used throughout the application.
"""

from .commands import run_command, run_process, is_command_installed
from .text import strip_ansi, convert_network_strength

__all__ = [
    "run_command",
    "run_process",
    "is_command_installed",
    "strip_ansi",
    "convert_network_strength",
]
