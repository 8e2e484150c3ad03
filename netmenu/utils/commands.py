"""
Command execution utilities for NetMenu.

This module is the central place where NetMenu spawns external tools, so
every invocation is logged the same way.
"""

import os
import shlex
import shutil
import subprocess

from ..logging_config import get_logger

# Get module logger
logger = get_logger(__name__)

# Scraped tools get an untranslated, UTF-8 locale so their output is stable
SCRAPE_ENV = {**os.environ, "LC_ALL": "C.UTF-8"}


def is_command_installed(name):
    """Check whether an executable is available on PATH."""
    return shutil.which(name) is not None


def _describe(command, secret=None):
    text = command if isinstance(command, str) else shlex.join(command)
    if secret:
        text = text.replace(secret, "****")
    return text


def run_process(command, input=None, timeout=None, shell=False, scrape=True, secret=None):
    """
    Run a command and return the completed process.

    Unlike run_command(), failures to spawn the command are not swallowed:
    FileNotFoundError and subprocess.TimeoutExpired propagate so callers can
    translate them into their own error types.

    Args:
        command: Argument list (or a string if shell=True)
        input: Optional text to send to the command's stdin
        timeout: Optional timeout in seconds
        shell: If True, execute through the shell
        scrape: If True, force a C locale so output can be parsed reliably
        secret: Optional string masked out of the logged command line

    Returns:
        subprocess.CompletedProcess with text stdout and stderr
    """
    if shell and isinstance(command, list):
        command = shlex.join(command)

    logger.debug(f"Running command ({'shell' if shell else 'list'}): {_describe(command, secret)}")

    result = subprocess.run(
        command,
        shell=shell,
        check=False,
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        input=input,
        timeout=timeout,
        env=SCRAPE_ENV if scrape else None,
    )

    if result.returncode != 0:
        logger.debug(
            f"Command '{_describe(command, secret)}' failed with status {result.returncode}"
        )
        if result.stderr:
            logger.debug(f"Stderr: {result.stderr.strip()}")

    return result


def run_command(command, capture=False, input=None, timeout=None, quiet_on_error=False):
    """
    Execute a command with error handling and logging.

    Args:
        command: Command to execute as a list of strings
        capture: If True, return command output; if False, return success status
        input: Optional input to send to the command's stdin
        timeout: Optional timeout in seconds
        quiet_on_error: If True, log failures at debug level only

    Returns:
        If capture=True: Command output string or None on error
        If capture=False: True on success, False on failure
    """
    try:
        result = run_process(command, input=input, timeout=timeout, scrape=False)
    except FileNotFoundError:
        logger.error(f"Command not found: {command[0]}")
        return None if capture else False
    except subprocess.TimeoutExpired:
        logger.error(f"Command '{_describe(command)}' timed out after {timeout}s")
        return None if capture else False
    except OSError as e:
        logger.error(f"Unexpected error running command '{_describe(command)}': {e}")
        return None if capture else False

    if result.returncode != 0:
        log = logger.debug if quiet_on_error else logger.warning
        log(f"Command '{_describe(command)}' failed with status {result.returncode}")
        return None if capture else False

    return result.stdout.strip() if capture else True
