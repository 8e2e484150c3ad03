"""
Execution sink for NetMenu.

Runs the recipe of the chosen action: static shell commands are spawned
through `sh -c`, backend options are handed back to their driver.
"""

import subprocess

from .errors import ApplyFailed, ExecutionError
from .logging_config import get_logger
from .models import ApplyRecipe, ShellRecipe

logger = get_logger(__name__)

SHELL = "sh"


class ExecutionSink:
    """Executes recipes and converts every failure into ApplyFailed or ExecutionError."""

    def __init__(self, backends=()):
        self._drivers = {backend.name: backend for backend in backends}

    def run(self, recipe) -> str:
        if isinstance(recipe, ShellRecipe):
            return self.run_shell(recipe.cmd)
        if isinstance(recipe, ApplyRecipe):
            return self.apply(recipe)
        raise TypeError(f"unsupported recipe: {recipe!r}")

    def apply(self, recipe: ApplyRecipe) -> str:
        driver = self._drivers.get(recipe.backend)
        if driver is None:
            raise ApplyFailed(f"no backend named '{recipe.backend}'")
        logger.debug(f"Applying '{recipe.target}' via {recipe.backend}")
        return driver.apply(recipe.target) or ""

    def run_shell(self, cmd: str) -> str:
        logger.info(f"Running: {cmd}")
        try:
            with subprocess.Popen(
                [SHELL, "-c", cmd],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            ) as process:
                stdout, stderr = process.communicate()
        except (OSError, ValueError) as e:
            # ValueError: arguments Popen refuses, such as an embedded NUL
            raise ExecutionError(127, str(e)) from e

        if process.returncode != 0:
            logger.debug(f"Command '{cmd}' failed with status {process.returncode}")
            raise ExecutionError(process.returncode, stderr.strip())
        return stdout.strip()
