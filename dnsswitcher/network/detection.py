"""
DNS state detection for DNS Switcher.

This module reads the DNS servers currently set on a network service so
the menu can tick the matching profile.
"""

import logging
import re

from ..logging_config import get_logger
from ..utils import run_command
from .interfaces import networksetup_command

# Get module logger
logger = get_logger(__name__)

NO_SERVERS_PATTERN = re.compile(r"There aren't any DNS Servers set", re.IGNORECASE)


def parse_dns_servers(output):
    """Extract server addresses from -getdnsservers output."""
    if not output or NO_SERVERS_PATTERN.search(output):
        return []
    return [line.strip() for line in output.splitlines() if line.strip()]


def get_dns_servers(service_name, preferences=None, log_level=logging.DEBUG):
    """
    Get the DNS servers manually configured on a network service.

    Returns an empty list when the service uses DHCP-provided servers or
    the query fails.
    """
    if not service_name:
        return []

    result = run_command(
        networksetup_command(preferences) + ["-getdnsservers", service_name]
    )
    if not result.ok:
        logger.error(f"Error fetching current DNS servers for '{service_name}'")
        return []

    servers = parse_dns_servers(result.output)
    if servers:
        logger.log(log_level, f"Found DNS servers for '{service_name}': {servers}")
    else:
        logger.log(log_level, f"No DNS servers set for '{service_name}'")
    return servers
