"""
Pytest configuration and shared fixtures for NetMenu tests.

This module provides reusable fixtures and configuration for all tests.
"""

import subprocess
import time
from unittest.mock import patch

import pytest


def make_result(stdout="", returncode=0, stderr=""):
    """Build a CompletedProcess like run_process() returns."""
    return subprocess.CompletedProcess(
        args=[], returncode=returncode, stdout=stdout, stderr=stderr
    )


class FakeCommands:
    """Canned command output keyed by argv, standing in for run_process()."""

    def __init__(self):
        self.outputs = {}
        self.calls = []
        self.inputs = []

    def add(self, command, stdout="", returncode=0, stderr=""):
        """Queue a result for command. Queued results are used in order; the last one repeats."""
        self.outputs.setdefault(tuple(command), []).append(
            make_result(stdout, returncode, stderr)
        )

    def __call__(self, command, input=None, timeout=None, secret=None, **kwargs):
        self.calls.append(list(command))
        self.inputs.append(input)
        results = self.outputs.get(tuple(command))
        if not results:
            raise FileNotFoundError(command[0])
        if len(results) > 1:
            return results.pop(0)
        return results[0]

    def called(self, command):
        return list(command) in self.calls


@pytest.fixture
def fake_commands():
    """Replace process spawning in the backend drivers with canned output."""
    fake = FakeCommands()
    with (
        patch("netmenu.backends.base.run_process", side_effect=fake),
        patch("netmenu.backends.base.is_command_installed", return_value=True),
    ):
        yield fake


@pytest.fixture
def make_config():
    """Factory for Configuration objects with notifications and network checks off."""
    from netmenu.config import Configuration, StaticActionConfig

    def factory(actions=(), **kwargs):
        kwargs.setdefault("notifications", False)
        kwargs.setdefault("check_mullvad", False)
        return Configuration(
            actions=tuple(StaticActionConfig(display, cmd) for display, cmd in actions),
            **kwargs,
        )

    return factory


@pytest.fixture
def stub_driver():
    """Factory for in-memory backend drivers that count their apply calls."""
    from netmenu.backends.base import BackendDriver
    from netmenu.models import BackendOption, Source

    class StubDriver(BackendDriver):
        def __init__(
            self,
            name,
            source=Source.SYSTEM,
            options=(),
            error=None,
            delay=0,
            apply_error=None,
            checks_connectivity=False,
        ):
            super().__init__()
            self.name = name
            self.source = source
            self.options = [
                option
                if isinstance(option, BackendOption)
                else BackendOption(identifier=option, label=option, kind=name)
                for option in options
            ]
            self.error = error
            self.delay = delay
            self.apply_error = apply_error
            self.checks_connectivity = checks_connectivity
            self.applied = []

        def list_options(self):
            if self.delay:
                time.sleep(self.delay)
            if self.error:
                raise self.error
            return list(self.options)

        def current_active(self):
            for option in self.options:
                if option.is_active:
                    return option.identifier
            return None

        def apply(self, identifier):
            self.applied.append(identifier)
            if self.apply_error:
                raise self.apply_error
            return f"applied {identifier}"

    return StubDriver


@pytest.fixture
def stub_picker():
    """Factory for pickers that answer with scripted indices and record what they showed."""

    class StubPicker:
        def __init__(self, *choices):
            self.choices = list(choices)
            self.shown = []

        def choose(self, entries):
            self.shown.append(list(entries))
            if not self.choices:
                return None
            return self.choices.pop(0)

    return StubPicker


@pytest.fixture
def tailscale_exit_node_list():
    """Provide mock output of `tailscale exit-node list`."""
    return """
 IP                  HOSTNAME                                   COUNTRY            CITY                   STATUS
 100.64.0.1          homebox.tail1234.ts.net                    -                  -
 100.90.10.20        se-got-wg-001.mullvad.ts.net               Sweden             Gothenburg
 100.90.10.21        us-nyc-wg-301.mullvad.ts.net               USA                New York, NY
 100.90.10.22        xx-abc-wg-001.mullvad.ts.net               Atlantis           Poseidonia

# To use an exit node, run `tailscale set --exit-node=<name>`
"""


@pytest.fixture
def tailscale_status_json():
    """Provide mock `tailscale status --json` output with an active Mullvad exit node."""
    return """{
  "BackendState": "Running",
  "Peer": {
    "nodekey:aaa": {
      "DNSName": "homebox.tail1234.ts.net.",
      "Active": false,
      "ExitNode": false
    },
    "nodekey:bbb": {
      "DNSName": "se-got-wg-001.mullvad.ts.net.",
      "Active": true,
      "ExitNode": true
    }
  }
}"""


@pytest.fixture
def temp_config_dir(tmp_path):
    """Provide a temporary config directory."""
    config_dir = tmp_path / ".config" / "netmenu"
    config_dir.mkdir(parents=True)
    return config_dir


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration between tests."""
    import logging

    # Clear all handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    # Reset to default level
    root_logger.setLevel(logging.WARNING)
    yield
    # Cleanup after test
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
