"""
Mullvad connection check for NetMenu.

After the route to the internet changes, am.i.mullvad.net tells whether
traffic now leaves through Mullvad, and from which server.
"""

import urllib.error
import urllib.request

from .. import config
from ..logging_config import get_logger
from ..notify import send_notification

# Get module logger
logger = get_logger(__name__)


def check_mullvad(url=config.MULLVAD_CHECK_URL, timeout=config.MULLVAD_CHECK_TIMEOUT):
    """
    Ask am.i.mullvad.net whether we are connected through Mullvad.

    Returns:
        The service's one-line answer, or None if it could not be reached
    """
    request = urllib.request.Request(url)
    request.add_header("User-Agent", "NetMenu/1.0")

    logger.debug(f"Making request to {url}")
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            answer = response.read().decode("utf-8", errors="replace").strip()
    except (urllib.error.URLError, TimeoutError, OSError) as e:
        logger.debug(f"Mullvad connection check failed: {e}")
        return None

    logger.info(f"Mullvad connection check: {answer}")
    return answer


def report_connectivity(notifications=True):
    """Run the Mullvad check and show the answer as a notification."""
    answer = check_mullvad()
    if answer and notifications:
        send_notification("Connected Status", answer)
    return answer
