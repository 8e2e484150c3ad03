"""
NetMenu - one menu for VPN exit nodes, Wi-Fi, Bluetooth and custom actions.

Collects the selectable options of several connectivity tools, shows them
in a single dmenu-style picker and runs the one the user chooses.
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Make key components available at package level
from . import config, logging_config

__all__ = ["config", "logging_config"]
