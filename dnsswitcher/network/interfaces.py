"""
Network service discovery for DNS Switcher.

This module lists the network services known to networksetup and builds
the base networksetup invocation the other network modules share.
"""

from .. import config
from ..logging_config import get_logger
from ..utils import run_command

logger = get_logger(__name__)

# First line of `networksetup -listallnetworkservices`
SERVICES_HEADER_PREFIX = "An asterisk"
DISABLED_SERVICE_MARKER = "*"


class NetworkCommandError(RuntimeError):
    """A networksetup query that the app cannot work without has failed."""

    def __init__(self, message, returncode=None, output=""):
        super().__init__(message)
        self.returncode = returncode
        self.output = output


def networksetup_command(preferences=None):
    """Return the networksetup argv prefix, with `sudo -n` if configured."""
    path = config.get_setting(preferences, "networksetup_path")
    if config.get_setting(preferences, "use_sudo"):
        return ["sudo", "-n", path]
    return [path]


def parse_network_services(output):
    """Extract the enabled service names from -listallnetworkservices output."""
    services = []
    for line in output.splitlines():
        line = line.strip()
        if not line or line.startswith(SERVICES_HEADER_PREFIX):
            continue
        # Disabled services are listed with a leading asterisk
        if DISABLED_SERVICE_MARKER in line:
            continue
        services.append(line)
    return services


def list_network_services(preferences=None):
    """
    List the enabled network services (Wi-Fi, Ethernet, ...).

    Raises:
        NetworkCommandError: If networksetup fails.
    """
    result = run_command(networksetup_command(preferences) + ["-listallnetworkservices"])
    if not result.ok:
        raise NetworkCommandError(
            f"Could not load network services (exit code {result.returncode})",
            returncode=result.returncode,
            output=result.output,
        )

    services = parse_network_services(result.output)
    logger.debug(f"Found network services: {services}")
    return services
