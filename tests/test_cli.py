"""
Unit tests for the command line entry point (netmenu/cli.py)
"""

from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

CONFIG = """
dmenu_cmd = "dmenu"
dmenu_args = "-i -l 10"

[settings]
notifications = false
check_mullvad = false

[[actions]]
display = "Disable tailscale"
cmd = "tailscale down"
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(CONFIG)
    return path


@pytest.fixture
def cli_env(stub_picker):
    """Patch out logging setup, picker lookup and backend construction."""

    def factory(*choices, installed=True):
        picker = stub_picker(*choices)
        build = MagicMock(return_value=[])
        patches = (
            patch("netmenu.cli.setup_logging"),
            patch("netmenu.cli.is_command_installed", return_value=installed),
            patch("netmenu.cli.build_backends", build),
            patch("netmenu.cli.DmenuPicker", return_value=picker),
        )
        return patches, picker, build

    return factory


def invoke(patches, args):
    from netmenu.cli import cli

    with patches[0], patches[1], patches[2], patches[3]:
        return CliRunner().invoke(cli, args)


@pytest.mark.unit
class TestCli:
    """Tests for the netmenu command."""

    def test_cancel_exits_zero(self, cli_env, config_file):
        patches, picker, build = cli_env()

        result = invoke(patches, ["--config", str(config_file)])

        assert result.exit_code == 0
        build.assert_called_once()
        assert picker.shown == [["action    - Disable tailscale"]]

    def test_malformed_config_exits_before_querying(self, cli_env, tmp_path):
        bad = tmp_path / "config.toml"
        bad.write_text("actions = [ this is not toml")
        patches, picker, build = cli_env()

        result = invoke(patches, ["--config", str(bad)])

        assert result.exit_code == 2
        assert "Configuration error" in result.output
        build.assert_not_called()
        assert picker.shown == []

    def test_unsplittable_dmenu_args_is_config_error(self, cli_env, tmp_path):
        bad = tmp_path / "config.toml"
        bad.write_text("dmenu_args = \"-p 'Pick\"\n")
        patches, picker, build = cli_env()

        result = invoke(patches, ["--config", str(bad)])

        assert result.exit_code == 2
        assert "dmenu_args" in result.output
        build.assert_not_called()

    def test_missing_picker_is_config_error(self, cli_env, config_file):
        patches, picker, build = cli_env(installed=False)

        result = invoke(patches, ["--config", str(config_file)])

        assert result.exit_code == 2
        assert "dmenu" in result.output
        build.assert_not_called()

    def test_failing_static_command_mirrors_exit_code(self, cli_env, config_file):
        patches, picker, build = cli_env(0)

        with patch("netmenu.sink.subprocess.Popen") as mock_popen:
            process = mock_popen.return_value.__enter__.return_value
            process.communicate.return_value = ("", "not logged in")
            process.returncode = 3

            result = invoke(patches, ["--config", str(config_file)])

        assert result.exit_code == 3
        assert result.output.count("Failed: Disable tailscale") == 1
        mock_popen.assert_called_once()

    def test_successful_command_prints_output(self, cli_env, config_file):
        patches, picker, build = cli_env(0)

        with patch("netmenu.sink.subprocess.Popen") as mock_popen:
            process = mock_popen.return_value.__enter__.return_value
            process.communicate.return_value = ("Success.\n", "")
            process.returncode = 0

            result = invoke(patches, ["--config", str(config_file)])

        assert result.exit_code == 0
        assert "Success." in result.output

    def test_wifi_interface_override(self, cli_env, config_file):
        patches, picker, build = cli_env()

        invoke(patches, ["--config", str(config_file), "-w", "wlp3s0"])

        cfg = build.call_args[0][0]
        assert cfg.wifi_interface == "wlp3s0"
        assert cfg.dmenu_args == "-i -l 10"

    def test_version(self):
        from netmenu import __version__
        from netmenu.cli import cli

        result = CliRunner().invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output
