"""
Centralized logging configuration for DNS Switcher.

Every module asks this one for its logger, so the menu-bar app, the CLI and
the profile store all write the same format to the same places: a rotating
file under ~/Library/Logs and stderr.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

from . import config

# Rotate at 1 MiB, keeping three old files
LOG_MAX_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 3


class DNSSwitcherLogger:
    """Centralized logger configuration for DNS Switcher."""

    _initialized = False
    _debug_enabled = False
    _log_file: Optional[Path] = None

    @classmethod
    def setup(
        cls,
        debug: bool = False,
        force_reinit: bool = False,
        log_file: Optional[Path] = None,
    ) -> None:
        """
        Set up logging for the whole application.

        Args:
            debug: If True, the console handler shows DEBUG messages as well
            force_reinit: If True, rebuild the handlers even if already set up
            log_file: Override for the log file location (defaults to config.LOG_FILE)
        """
        if cls._initialized and not force_reinit:
            return

        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
            handler.close()

        cls._debug_enabled = debug
        cls._log_file = Path(log_file) if log_file else config.LOG_FILE
        root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

        formatter = logging.Formatter(config.LOG_FORMAT, datefmt=config.LOG_DATE_FORMAT)
        cls._add_file_handler(root_logger, formatter)
        cls._add_console_handler(root_logger, formatter)

        cls._initialized = True

        logger = logging.getLogger(__name__)
        logger.debug(
            f"DNS Switcher logging initialized (debug={'on' if debug else 'off'}, file={cls._log_file})"
        )

    @classmethod
    def _add_file_handler(cls, logger: logging.Logger, formatter: logging.Formatter) -> None:
        """Add the rotating file handler used by 'Open Log'."""
        try:
            cls._log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                cls._log_file, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT
            )
            file_handler.setFormatter(formatter)
            file_handler.setLevel(logging.DEBUG)
            logger.addHandler(file_handler)
        except OSError as e:
            # Still usable with console output only
            print(f"Warning: Could not set up file logging: {e}", file=sys.stderr)

    @classmethod
    def _add_console_handler(cls, logger: logging.Logger, formatter: logging.Formatter) -> None:
        """Add a stderr handler; it is silent when the app is launched from Finder."""
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(logging.DEBUG if cls._debug_enabled else logging.INFO)
        logger.addHandler(console_handler)

    @classmethod
    def get_logger(cls, name: Optional[str] = None) -> logging.Logger:
        """
        Get a logger instance, initializing logging on first use.

        Args:
            name: Logger name (typically __name__)
        """
        if not cls._initialized:
            cls.setup()

        return logging.getLogger(name)

    @classmethod
    def get_log_file(cls) -> Path:
        """Path of the file the handlers write to."""
        return cls._log_file or config.LOG_FILE


def setup_logging(
    debug: bool = False, force_reinit: bool = False, log_file: Optional[Path] = None
) -> None:
    """Set up centralized logging. Wrapper for DNSSwitcherLogger.setup()."""
    DNSSwitcherLogger.setup(debug=debug, force_reinit=force_reinit, log_file=log_file)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance. Wrapper for DNSSwitcherLogger.get_logger()."""
    return DNSSwitcherLogger.get_logger(name)


def get_log_file() -> Path:
    return DNSSwitcherLogger.get_log_file()
