"""
DNS Switcher - switch between DNS server profiles from the macOS menu bar.

Profiles are kept in ~/.dnsswitcher.json and applied to the selected
network service with networksetup.
"""

__version__ = "1.0.0"
__license__ = "MIT"

# Make key components available at package level
from . import config, logging_config, profiles

__all__ = ["config", "logging_config", "profiles"]
