"""Data models shared by the backends, the normalizer and the dispatcher."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .errors import ExecutionError, NetMenuError


class Source(Enum):
    """Where an Action came from. The value doubles as its disambiguation tag."""

    STATIC = "static-config"
    VPN_EXIT_NODE = "vpn-exit-node"
    WIFI_NETWORK = "wifi-network"
    BLUETOOTH_DEVICE = "bluetooth-device"
    SYSTEM = "system"


@dataclass(frozen=True)
class BackendOption:
    """Raw datum returned by a backend driver, before normalization."""

    identifier: str
    label: str
    kind: str  # display column, e.g. "wifi", "mullvad", "exit-node"
    country: Optional[str] = None
    icon: str = ""
    is_active: bool = False


@dataclass(frozen=True)
class ShellRecipe:
    """Run a literal shell command."""

    cmd: str


@dataclass(frozen=True)
class ApplyRecipe:
    """Ask the named backend driver to apply one of its options."""

    backend: str
    target: str


Recipe = Union[ShellRecipe, ApplyRecipe]


@dataclass(frozen=True)
class Action:
    """One normalized, selectable, executable menu entry."""

    display: str
    source: Source
    recipe: Recipe
    is_active: bool = False
    label: str = ""


class CycleState(Enum):
    """States of a single dispatcher invocation."""

    IDLE = "idle"
    QUERYING = "querying"
    PRESENTING = "presenting"
    CANCELLED = "cancelled"
    SELECTED = "selected"
    EXECUTING = "executing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class CycleResult:
    """Outcome of one dispatcher cycle."""

    state: CycleState
    action: Optional[Action] = None
    output: str = ""
    error: Optional[NetMenuError] = None

    @property
    def exit_code(self) -> int:
        if self.state in (CycleState.SUCCEEDED, CycleState.CANCELLED):
            return 0
        if isinstance(self.error, ExecutionError) and self.error.exit_code > 0:
            return self.error.exit_code
        return 1
