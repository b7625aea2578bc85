"""
Network module for DNS Switcher.

This module wraps the networksetup operations the app relies on:
- Listing the available network services
- Reading the DNS servers set on a service
- Applying a DNS profile (load command, then servers)
"""

from .interfaces import (
    NetworkCommandError,
    networksetup_command,
    parse_network_services,
    list_network_services,
)
from .detection import (
    parse_dns_servers,
    get_dns_servers,
)
from .configuration import (
    set_dns_servers,
    run_load_command,
    apply_profile,
)

__all__ = [
    "NetworkCommandError",
    "networksetup_command",
    "parse_network_services",
    "list_network_services",
    "parse_dns_servers",
    "get_dns_servers",
    "set_dns_servers",
    "run_load_command",
    "apply_profile",
]
