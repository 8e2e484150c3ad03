"""
Passphrase prompt for secured Wi-Fi networks.

The secret is read through a pinentry program speaking the Assuan
protocol: SETDESC sets the dialog text, GETPIN returns the secret on a
line starting with "D ".
"""

import urllib.parse

from . import config
from .errors import ApplyFailed
from .logging_config import get_logger
from .utils import is_command_installed, run_process

logger = get_logger(__name__)


def _escape(text):
    # Assuan escapes percent signs and line breaks
    return text.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def prompt_for_password(ssid, pinentry_cmd=config.DEFAULT_PINENTRY_CMD):
    """
    Ask the user for the passphrase of a network.

    Returns:
        The passphrase, or None if the user cancelled the dialog

    Raises:
        ApplyFailed: If the pinentry program is missing or cannot be run
    """
    if not is_command_installed(pinentry_cmd):
        raise ApplyFailed(
            f"{pinentry_cmd} is not installed, cannot ask for the passphrase of '{ssid}'"
        )

    description = f"Enter '{ssid}' password"
    script = f"SETDESC {_escape(description)}\nGETPIN\nBYE\n"
    try:
        result = run_process([pinentry_cmd], input=script, scrape=False)
    except OSError as e:
        raise ApplyFailed(f"could not run {pinentry_cmd}: {e}") from e

    for line in result.stdout.splitlines():
        if line.startswith("D "):
            return urllib.parse.unquote(line[2:])

    logger.info(f"No passphrase entered for '{ssid}'")
    return None
