"""Desktop notifications through notify-send."""

from .logging_config import get_logger
from .utils import is_command_installed, run_command

logger = get_logger(__name__)

NOTIFY_CMD = "notify-send"


def send_notification(summary, body=""):
    """Show a desktop notification. Returns True if one was sent."""
    if not is_command_installed(NOTIFY_CMD):
        logger.debug(f"{NOTIFY_CMD} not installed, skipping notification '{summary}'")
        return False
    return run_command([NOTIFY_CMD, summary, body], timeout=5, quiet_on_error=True)
