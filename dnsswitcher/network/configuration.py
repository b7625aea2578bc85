"""
Network configuration functions for DNS Switcher.

This module applies a DNS profile: it runs the profile's load command (for
example to bring a VPN up) and then points the selected network service at
the profile's servers.
"""

from ..logging_config import get_logger
from ..utils import run_command, CommandResult
from .interfaces import networksetup_command

# Get module logger
logger = get_logger(__name__)

# networksetup keyword that clears manual servers and falls back to DHCP
EMPTY_SERVERS = "Empty"


def set_dns_servers(service_name, dns_servers, preferences=None) -> CommandResult:
    """Sets the DNS servers for a network service."""
    dns_list = [str(d) for d in dns_servers]
    if dns_list:
        logger.info(f"Setting DNS servers for '{service_name}' to: {dns_list}")
    else:
        logger.info(f"Clearing DNS servers for '{service_name}', leaving DHCP in control")
        dns_list = [EMPTY_SERVERS]

    # List form so service names with spaces survive intact
    cmd = networksetup_command(preferences) + ["-setdnsservers", service_name] + dns_list
    return run_command(cmd)


def run_load_command(load_cmd) -> CommandResult:
    """Run a profile's load command, split on whitespace."""
    args = load_cmd.split()
    if not args:
        return CommandResult(0, "")
    logger.info(f"Running load command: {load_cmd}")
    return run_command(args)


def describe_failure(step, result):
    """User-facing message for a failed load command or DNS change."""
    return f"{step} failed with exit code {result.returncode}: {result.output}"


def apply_profile(service_name, profile, preferences=None):
    """
    Apply a DNS profile to a network service.

    The load command, if any, runs first; when it fails the servers are left
    untouched.

    Returns:
        (CommandResult, message) where message is None on success and a
        description of the failed step otherwise.
    """
    if profile.load_cmd:
        result = run_load_command(profile.load_cmd)
        if not result.ok:
            logger.error(f"Load command for profile '{profile.name}' failed")
            return result, describe_failure("Load command", result)

    result = set_dns_servers(service_name, profile.servers, preferences)
    if not result.ok:
        logger.error(f"Failed to apply profile '{profile.name}' to '{service_name}'")
        return result, describe_failure("DNS change", result)

    logger.info(f"Applied profile '{profile.name}' to '{service_name}'")
    return result, None
