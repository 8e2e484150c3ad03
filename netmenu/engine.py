"""
Aggregation and dispatch engine for NetMenu.

One Dispatcher.run() is one full cycle:

    Idle -> Querying -> Presenting -> (Cancelled | Selected)
         -> Executing -> (Succeeded | Failed)

Backends are queried concurrently and joined before anything is shown.
A backend that fails or times out contributes nothing; it never aborts
the cycle. Exactly one action is executed per cycle.
"""

import dataclasses
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Dict, List

from .errors import ApplyFailed, BackendUnavailable, ExecutionError, WrongCredentials
from .external import report_connectivity
from .logging_config import get_logger
from .models import Action, ApplyRecipe, BackendOption, CycleResult, CycleState
from .normalizer import normalize_option, static_actions
from .notify import send_notification
from .sink import ExecutionSink

logger = get_logger(__name__)


def order_group(actions: List[Action]) -> List[Action]:
    """Move the active option to the front of its group, keeping the rest in order."""
    return sorted(actions, key=lambda action: not action.is_active)


def disambiguate(actions: List[Action]) -> List[Action]:
    """
    Make every display string unique without dropping any action.

    The first occurrence keeps its display; later ones get their source tag
    appended, and a counter if that still collides.
    """
    seen = set()
    unique = []
    for action in actions:
        display = action.display
        if display in seen:
            tagged = f"{action.display} [{action.source.value}]"
            display = tagged
            counter = 2
            while display in seen:
                display = f"{tagged} ({counter})"
                counter += 1
            logger.debug(f"Renamed duplicate entry {action.display!r} to {display!r}")
            action = dataclasses.replace(action, display=display)
        seen.add(display)
        unique.append(action)
    return unique


class Dispatcher:
    """Collects actions from all sources, lets the user pick one and runs it."""

    def __init__(self, cfg, backends, picker, sink=None, notifier=send_notification):
        self.cfg = cfg
        self.backends = list(backends)
        self.picker = picker
        self.sink = sink or ExecutionSink(self.backends)
        self.notifier = notifier
        self.state = CycleState.IDLE

    def _transition(self, state):
        logger.debug(f"Dispatcher state: {self.state.value} -> {state.value}")
        self.state = state

    def query_backends(self) -> Dict[str, List[BackendOption]]:
        """
        Ask every backend for its options concurrently.

        Returns a mapping of backend name to options for the backends that
        answered in time. The others are logged and left out.
        """
        results = {}
        if not self.backends:
            return results

        timeout = self.cfg.backend_timeout
        executor = ThreadPoolExecutor(
            max_workers=len(self.backends), thread_name_prefix="netmenu-backend"
        )
        try:
            futures = [(backend, executor.submit(backend.list_options)) for backend in self.backends]
            started = time.monotonic()
            for backend, future in futures:
                # Each query of a backend gets the full timeout
                budget = timeout * backend.query_steps
                remaining = max(0.0, started + budget - time.monotonic())
                try:
                    results[backend.name] = list(future.result(timeout=remaining))
                except FuturesTimeoutError:
                    logger.warning(f"Skipping {backend.name}: no answer within {budget}s")
                except BackendUnavailable as e:
                    logger.warning(f"Skipping {e}")
                except Exception as e:
                    # Any fault inside a backend only removes that backend's options
                    logger.warning(f"Skipping {backend.name}: failed to list options: {e}")
                    logger.debug("Backend failure details", exc_info=True)
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        return results

    def collect_actions(self) -> List[Action]:
        """Static actions first, then one group per backend in registry order."""
        actions = static_actions(self.cfg)
        options = self.query_backends()

        for backend in self.backends:
            group = [
                normalize_option(option, backend.source, backend.name)
                for option in options.get(backend.name, [])
            ]
            actions.extend(order_group(group))

        actions = disambiguate(actions)
        logger.debug(f"Collected {len(actions)} actions")
        return actions

    def run(self) -> CycleResult:
        """Run one selection/execution cycle."""
        self._transition(CycleState.QUERYING)
        actions = self.collect_actions()
        displays = [action.display for action in actions]

        while True:
            self._transition(CycleState.PRESENTING)
            index = self.picker.choose(displays)
            if index is None or not 0 <= index < len(actions):
                self._transition(CycleState.CANCELLED)
                logger.info("Selection cancelled")
                return CycleResult(CycleState.CANCELLED)

            action = actions[index]
            self._transition(CycleState.SELECTED)
            logger.info(f"Selected: {action.display}")

            result = self.execute(action)
            if result.state is CycleState.FAILED:
                self.report_failure(result)
                if isinstance(result.error, WrongCredentials):
                    # Let the user pick again, e.g. to retype the passphrase
                    continue
            return result

    def execute(self, action: Action) -> CycleResult:
        self._transition(CycleState.EXECUTING)
        try:
            output = self.sink.run(action.recipe)
        except (ApplyFailed, ExecutionError) as e:
            self._transition(CycleState.FAILED)
            return CycleResult(CycleState.FAILED, action=action, error=e)

        self._transition(CycleState.SUCCEEDED)
        if output:
            logger.info(output)
        self._after_success(action)
        return CycleResult(CycleState.SUCCEEDED, action=action, output=output)

    def _after_success(self, action: Action):
        if not isinstance(action.recipe, ApplyRecipe) or not self.cfg.check_mullvad:
            return
        backend = next((b for b in self.backends if b.name == action.recipe.backend), None)
        if backend is not None and backend.changes_route(action.recipe.target):
            report_connectivity(notifications=self.cfg.notifications)

    def report_failure(self, result: CycleResult):
        label = result.action.label or result.action.display
        # The caller prints the final failure; only a retried one is shown here
        level = logging.WARNING if isinstance(result.error, WrongCredentials) else logging.DEBUG
        logger.log(level, f"Action '{label}' failed: {result.error}")
        if self.cfg.notifications and self.notifier is not None:
            self.notifier(f"Failed: {label}", str(result.error))
