"""
Utility functions for DNS Switcher.

This module provides common utility functions used throughout the application.
"""

from .commands import run_command, CommandResult, COMMAND_NOT_FOUND

__all__ = [
    "run_command",
    "CommandResult",
    "COMMAND_NOT_FOUND",
]
