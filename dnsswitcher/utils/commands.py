"""
Command execution utilities for DNS Switcher.

Every external program (networksetup, a profile's load command, `open`) is
run through here so that exit codes and output are captured and logged in
one place.
"""

import shlex
import subprocess
from typing import NamedTuple

from ..logging_config import get_logger

# Get module logger
logger = get_logger(__name__)

# Exit status used by shells when the executable cannot be found
COMMAND_NOT_FOUND = 127


class CommandResult(NamedTuple):
    """Exit code and combined stdout/stderr of a finished command."""

    returncode: int
    output: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def run_command(command, input=None) -> CommandResult:
    """
    Execute a command and wait for it to finish.

    Args:
        command: Command to execute, as a list of strings
        input: Optional text to send to the command's stdin

    Returns:
        CommandResult with the exit code and the stripped stdout followed by
        stderr. Launch failures are reported as a non-zero result, never
        raised.
    """
    printable = shlex.join(command)
    logger.debug(f"Running command: {printable}")

    try:
        result = subprocess.run(
            command,
            check=False,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="ignore",
            input=input,
        )
    except FileNotFoundError:
        logger.error(f"Command not found: {command[0]}")
        return CommandResult(COMMAND_NOT_FOUND, f"Command not found: {command[0]}")
    except OSError as e:
        logger.error(f"Unexpected error running command '{printable}': {e}")
        return CommandResult(1, str(e))

    output = ((result.stdout or "") + (result.stderr or "")).strip()

    if result.returncode != 0:
        logger.warning(f"Command '{printable}' failed with status {result.returncode}")
        if output:
            logger.debug(f"Output: {output}")
    elif result.stderr:
        logger.debug(f"Command succeeded with stderr: {result.stderr.strip()}")

    return CommandResult(result.returncode, output)
