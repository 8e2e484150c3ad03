"""
Action normalization for NetMenu.

Turns configured actions and raw backend options into Actions. Both
functions are pure: no external calls, same input gives the same Action.
"""

from typing import List

from .icons import ACTIVE_ICON, format_entry, get_flag
from .models import Action, ApplyRecipe, BackendOption, ShellRecipe, Source

STATIC_COLUMN = "action"

# The picker shows one entry per line
LINE_BREAKS = str.maketrans({"\r": " ", "\n": " "})


def static_actions(cfg) -> List[Action]:
    """Configured actions, in configuration order, labels and commands verbatim."""
    return [
        Action(
            display=format_entry(STATIC_COLUMN, "", entry.display),
            source=Source.STATIC,
            recipe=ShellRecipe(entry.cmd),
            label=entry.display,
        )
        for entry in cfg.actions
    ]


def option_icon(option: BackendOption) -> str:
    """Active options are checked; classified options get their flag."""
    if option.is_active:
        return ACTIVE_ICON
    if option.country is not None:
        return get_flag(option.country)
    return option.icon


def normalize_option(option: BackendOption, source: Source, backend: str) -> Action:
    """Build the Action for one backend option, routed back to backend by name."""
    label = option.label.translate(LINE_BREAKS)
    return Action(
        display=format_entry(option.kind, option_icon(option), label),
        source=source,
        recipe=ApplyRecipe(backend=backend, target=option.identifier),
        is_active=option.is_active,
        label=option.label,
    )
