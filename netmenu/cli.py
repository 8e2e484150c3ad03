"""
Command line entry point for NetMenu.

Running `netmenu` performs exactly one cycle: query the backends, show the
picker, run the chosen action and exit with its outcome.
"""

import dataclasses
import signal
import sys
from pathlib import Path

import click

from . import __version__, config
from .backends import build_backends
from .engine import Dispatcher
from .errors import ConfigError
from .logging_config import get_logger, set_debug, setup_logging
from .models import CycleState
from .picker import DmenuPicker
from .utils import is_command_installed

EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130


def signal_handler(signum, frame):
    """Handle interrupt signals gracefully."""
    signal_name = signal.Signals(signum).name
    click.echo(f"\nReceived {signal_name}. Exiting.", err=True)
    sys.exit(EXIT_INTERRUPTED)


def load_configuration(config_file=None, wifi_interface=None, debug=False):
    """Load the config file and apply command line overrides."""
    cfg = config.load_config(config_file)

    overrides = {}
    if wifi_interface:
        overrides["wifi_interface"] = wifi_interface
    if debug:
        overrides["debug"] = True
    if overrides:
        cfg = dataclasses.replace(cfg, **overrides)

    if not is_command_installed(cfg.dmenu_cmd):
        raise ConfigError(f"picker command '{cfg.dmenu_cmd}' is not installed")
    return cfg


@click.command()
@click.option(
    "-w",
    "--wifi-interface",
    default=None,
    help="Wi-Fi interface to manage (default from config, usually wlan0).",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to the configuration file (default: ~/.config/netmenu/config.toml).",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Enable verbose debug logging of backend queries and commands.",
)
@click.version_option(__version__, prog_name=config.APP_NAME)
def cli(wifi_interface, config_file, debug):
    """
    NetMenu - pick a VPN exit node, Wi-Fi network, Bluetooth device or
    custom action from a single dmenu-style menu.

    \b
    1. Query tailscale, NetworkManager/iwd, bluetoothctl and system switches
    2. Merge their options with the actions from the config file
    3. Show everything in the picker (dmenu_cmd / dmenu_args)
    4. Run the chosen entry and report the outcome

    Exits 0 on success or when the menu is dismissed.
    """
    setup_logging(debug=debug, force_reinit=True)
    logger = get_logger(__name__)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        cfg = load_configuration(config_file, wifi_interface, debug)
    except ConfigError as e:
        click.echo(click.style(f"Configuration error: {e}", fg="red"), err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    if cfg.debug:
        set_debug(True)
    logger.debug(f"Using configuration {cfg.path}")

    dispatcher = Dispatcher(
        cfg,
        build_backends(cfg),
        DmenuPicker(cfg.dmenu_cmd, cfg.dmenu_args),
    )
    result = dispatcher.run()

    if result.state is CycleState.FAILED:
        label = result.action.label or result.action.display
        click.echo(click.style(f"Failed: {label}: {result.error}", fg="red"), err=True)
    elif result.state is CycleState.SUCCEEDED and result.output:
        click.echo(result.output)

    sys.exit(result.exit_code)
