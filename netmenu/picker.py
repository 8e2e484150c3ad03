"""
Picker interface for NetMenu.

Hands the menu to an external dmenu-compatible program (dmenu, rofi
-dmenu, fuzzel --dmenu, wofi --dmenu, ...) on stdin and reads the chosen
line back from stdout.
"""

import shlex
from typing import Optional, Sequence

from . import config
from .logging_config import get_logger
from .utils import run_process

logger = get_logger(__name__)


class DmenuPicker:
    """Single-choice menu backed by a dmenu-style program."""

    def __init__(self, command=config.DEFAULT_DMENU_CMD, args=config.DEFAULT_DMENU_ARGS):
        self.argv = [command] + shlex.split(args)

    def choose(self, entries: Sequence[str]) -> Optional[int]:
        """
        Present entries and return the index of the chosen one.

        Returns None when the user cancels, the picker exits non-zero or
        its answer is not one of the entries.
        """
        if not entries:
            logger.info("No actions to choose from")
            return None

        try:
            result = run_process(self.argv, input="\n".join(entries) + "\n", scrape=False)
        except OSError as e:
            logger.error(f"Could not run picker '{self.argv[0]}': {e}")
            return None

        if result.returncode != 0:
            logger.debug(f"Picker exited with status {result.returncode}, treating as cancelled")
            return None

        lines = result.stdout.splitlines()
        choice = lines[0] if lines else ""
        if not choice.strip():
            return None

        for index, entry in enumerate(entries):
            if entry == choice:
                return index
        # Some pickers trim surrounding whitespace from the returned line
        for index, entry in enumerate(entries):
            if entry.strip() == choice.strip():
                return index

        logger.warning(f"Picker returned an unknown entry: {choice!r}")
        return None
