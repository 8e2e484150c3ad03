"""
Error taxonomy for NetMenu.

Backend-level errors never escape the aggregation step; only the outcome
of the chosen action is surfaced to the user. Cancelling the picker is not
an error and has no exception type.
"""


class NetMenuError(Exception):
    """Base class for all NetMenu errors."""


class ConfigError(NetMenuError):
    """The configuration file is missing required tools, unreadable or malformed."""


class BackendUnavailable(NetMenuError):
    """A backend's external tool is not installed, not reachable or timed out."""

    def __init__(self, backend, reason):
        self.backend = backend
        self.reason = reason
        super().__init__(f"{backend} unavailable: {reason}")


class ApplyFailed(NetMenuError):
    """A backend could not apply the chosen option."""

    def __init__(self, reason):
        self.reason = reason
        super().__init__(reason)


class WrongCredentials(ApplyFailed):
    """The secret supplied for a secured network was rejected."""


class ExecutionError(NetMenuError):
    """A shell command exited non-zero or could not be spawned."""

    def __init__(self, exit_code, stderr=""):
        self.exit_code = exit_code
        self.stderr = stderr
        message = f"command exited with status {exit_code}"
        if stderr:
            message += f": {stderr}"
        super().__init__(message)
