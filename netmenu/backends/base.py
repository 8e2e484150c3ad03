"""
Backend driver interface for NetMenu.

A backend driver adapts one external connectivity tool (a VPN client, a
Wi-Fi manager, a Bluetooth manager) to a single capability set: list the
options it currently offers, report which one is in effect, and apply one.
"""

import subprocess
from abc import ABC, abstractmethod
from typing import List, Optional

from .. import config
from ..errors import ApplyFailed, BackendUnavailable
from ..logging_config import get_logger
from ..models import BackendOption, Source
from ..utils import is_command_installed, run_process

logger = get_logger(__name__)


class BackendDriver(ABC):
    """Base class for all backend drivers."""

    #: Unique name, used to route an applied option back to its driver
    name = "backend"
    source = Source.SYSTEM
    #: Executables that must be on PATH for the backend to be usable
    requires = ()
    #: Whether a successful apply changes the route to the internet
    checks_connectivity = False
    #: Most external queries list_options() runs one after another
    query_steps = 1

    def __init__(self, timeout=config.DEFAULT_BACKEND_TIMEOUT):
        self.timeout = timeout

    def __repr__(self):
        return f"<{self.__class__.__name__} name={self.name!r}>"

    def is_installed(self) -> bool:
        return all(is_command_installed(cmd) for cmd in self.requires)

    @abstractmethod
    def list_options(self) -> List[BackendOption]:
        """
        Query the external tool once for its selectable options.

        Raises:
            BackendUnavailable: The tool is missing, failed or timed out
        """

    @abstractmethod
    def current_active(self) -> Optional[str]:
        """Return the identifier of the option currently in effect, if any."""

    @abstractmethod
    def apply(self, identifier: str) -> str:
        """
        Apply the option with the given identifier.

        Returns:
            Text worth showing to the user, possibly empty

        Raises:
            ApplyFailed: The tool refused or failed to apply the option
        """

    def changes_route(self, identifier: str) -> bool:
        """Whether applying identifier may change the route to the internet."""
        return self.checks_connectivity

    def _require_installed(self):
        missing = [cmd for cmd in self.requires if not is_command_installed(cmd)]
        if missing:
            raise BackendUnavailable(self.name, f"{', '.join(missing)} not installed")

    def _query(self, command, input=None):
        """Run a read-only query command, converting spawn failures to BackendUnavailable."""
        try:
            return run_process(command, input=input, timeout=self.timeout)
        except FileNotFoundError as e:
            raise BackendUnavailable(self.name, f"{command[0]} not installed") from e
        except subprocess.TimeoutExpired as e:
            raise BackendUnavailable(
                self.name, f"'{command[0]}' timed out after {self.timeout}s"
            ) from e
        except OSError as e:
            raise BackendUnavailable(self.name, str(e)) from e

    def _execute(self, command, input=None, secret=None, check=True):
        """Run a state-changing command, converting failures to ApplyFailed."""
        try:
            result = run_process(command, input=input, secret=secret)
        except OSError as e:
            raise ApplyFailed(f"could not run {command[0]}: {e}") from e

        if check and result.returncode != 0:
            raise ApplyFailed(failure_text(command, result, secret))
        return result


def failure_text(command, result, secret=None):
    detail = (result.stderr or result.stdout or "").strip()
    what = " ".join(command[:2])
    text = f"'{what}' exited with status {result.returncode}"
    if detail:
        text += f": {detail}"
    if secret:
        text = text.replace(secret, "****")
    return text
