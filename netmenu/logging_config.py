"""
Logging setup for NetMenu.

NetMenu is usually started from a window manager keybinding, so stderr
often goes nowhere. Everything is therefore also written to a rotating
file under $XDG_STATE_HOME/netmenu, at DEBUG level regardless of --debug.
Modules call get_logger(__name__) and never configure handlers themselves.
"""

import logging
import logging.handlers
import sys
from typing import Optional

from . import config


class NetMenuLogger:
    """Owns the root logger's handlers for the lifetime of one run."""

    _initialized = False
    _debug_enabled = False
    _console_handler: Optional[logging.Handler] = None

    @classmethod
    def setup(cls, debug: bool = False, force_reinit: bool = False) -> None:
        """
        Attach the file and stderr handlers to the root logger.

        Args:
            debug: Show DEBUG records on stderr (the file always gets them)
            force_reinit: Replace handlers installed by an earlier call
        """
        if cls._initialized and not force_reinit:
            return

        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
            handler.close()
        root_logger.setLevel(logging.DEBUG)

        cls._debug_enabled = debug
        file_handler = cls._file_handler()
        if file_handler is not None:
            root_logger.addHandler(file_handler)
        cls._console_handler = cls._stderr_handler(debug)
        root_logger.addHandler(cls._console_handler)

        cls._initialized = True
        logging.getLogger(__name__).debug(
            f"Logging to {config.LOG_FILE if file_handler else 'stderr only'} (debug={debug})"
        )

    @staticmethod
    def _file_handler() -> Optional[logging.Handler]:
        try:
            config.LOG_DIR.mkdir(parents=True, exist_ok=True)
            handler = logging.handlers.RotatingFileHandler(
                config.LOG_FILE,
                maxBytes=config.LOG_MAX_BYTES,
                backupCount=config.LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        except OSError as e:
            print(f"netmenu: cannot write {config.LOG_FILE}: {e}", file=sys.stderr)
            return None
        handler.setFormatter(logging.Formatter(config.LOG_FORMAT, datefmt=config.LOG_DATE_FORMAT))
        handler.setLevel(logging.DEBUG)
        return handler

    @staticmethod
    def _stderr_handler(debug: bool) -> logging.Handler:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(config.CONSOLE_LOG_FORMAT))
        handler.setLevel(logging.DEBUG if debug else logging.INFO)
        return handler

    @classmethod
    def get_logger(cls, name: Optional[str] = None) -> logging.Logger:
        if not cls._initialized:
            cls.setup()
        return logging.getLogger(name)

    @classmethod
    def set_debug(cls, debug: bool) -> None:
        """Switch stderr verbosity, e.g. once the config file turned debug on."""
        if not cls._initialized:
            cls.setup(debug=debug)
            return
        cls._debug_enabled = debug
        if cls._console_handler is not None:
            cls._console_handler.setLevel(logging.DEBUG if debug else logging.INFO)


def setup_logging(debug: bool = False, force_reinit: bool = False) -> None:
    NetMenuLogger.setup(debug=debug, force_reinit=force_reinit)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return NetMenuLogger.get_logger(name)


def set_debug(debug: bool) -> None:
    NetMenuLogger.set_debug(debug)
