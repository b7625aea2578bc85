"""
DNS profile data model.

Turns the JSON profiles document into typed objects and back. Loading is
lenient about individual profiles (bad entries are logged and skipped) but
strict about the document itself: anything that is not a JSON object raises
MalformedDocumentError and the caller decides what to do.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .. import config
from ..logging_config import get_logger

logger = get_logger(__name__)

UNNAMED_PROFILE = "<unnamed>"


class ConfigurationError(ValueError):
    """Base class for problems with the profiles document or file."""


class MalformedDocumentError(ConfigurationError):
    """The profiles document is not valid JSON, or not a JSON object."""


class ConfigFileError(ConfigurationError):
    """The profiles file could not be read, created or written."""


@dataclass
class DNSProfile:
    """A named list of DNS servers, optionally with a command to run first."""

    name: str
    servers: List[str]
    load_cmd: Optional[str] = None

    @classmethod
    def from_dict(cls, item: Any) -> Optional["DNSProfile"]:
        """
        Build a profile from one element of the 'settings' array.

        Returns None (after logging) when the element lacks a usable name or
        server list.
        """
        if not isinstance(item, dict):
            logger.warning(f"Error parsing server item: {UNNAMED_PROFILE} (not an object)")
            return None

        name = item.get("name")
        if not isinstance(name, str) or not name:
            name = None

        servers = item.get("servers")
        if not isinstance(servers, list):
            servers = None

        if name is None or servers is None:
            logger.warning(f"Error parsing server item: {name or UNNAMED_PROFILE}")
            return None

        clean_servers = []
        for server in servers:
            if isinstance(server, str) and server:
                clean_servers.append(server)
            else:
                logger.warning(f"Ignoring invalid server {server!r} in profile '{name}'")

        load_cmd = item.get("loadCmd")
        if not isinstance(load_cmd, str) or not load_cmd.strip():
            load_cmd = None

        return cls(name=name, servers=clean_servers, load_cmd=load_cmd)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "servers": list(self.servers)}
        if self.load_cmd is not None:
            data["loadCmd"] = self.load_cmd
        return data


@dataclass
class Configuration:
    """The selected interface plus the ordered list of DNS profiles."""

    interface: str = config.DEFAULT_INTERFACE
    settings: List[DNSProfile] = field(default_factory=list)

    def find_profile(self, name: str) -> Optional[DNSProfile]:
        """Return the first profile called ``name``, if any."""
        for profile in self.settings:
            if profile.name == name:
                return profile
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "interface": self.interface,
            "settings": [profile.to_dict() for profile in self.settings],
        }

    def export(self) -> Optional[str]:
        """
        Serialize the configuration to JSON text.

        Returns:
            The JSON document, or None if it could not be serialized. None
            means there is nothing to persist.
        """
        try:
            return json.dumps(self.to_dict(), indent=4, ensure_ascii=False) + "\n"
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to serialize configuration: {e}")
            return None


def load(data: Union[bytes, str]) -> Configuration:
    """
    Parse a profiles document.

    Args:
        data: Raw JSON document (bytes are decoded as UTF-8)

    Returns:
        A Configuration holding only the valid profiles, in document order.

    Raises:
        MalformedDocumentError: If the document is not a JSON object.
    """
    try:
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        document = json.loads(data)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedDocumentError(f"Configuration file is not valid JSON: {e}") from e

    if not isinstance(document, dict):
        raise MalformedDocumentError(
            f"Configuration file must contain a JSON object, got {type(document).__name__}"
        )

    interface = document.get("interface")
    if not isinstance(interface, str) or not interface:
        interface = config.DEFAULT_INTERFACE

    configuration = Configuration(interface=interface)

    settings = document.get("settings")
    if not isinstance(settings, list):
        logger.info("No configuration settings found")
        return configuration

    for item in settings:
        profile = DNSProfile.from_dict(item)
        if profile is not None:
            configuration.settings.append(profile)

    logger.debug(
        f"Loaded {len(configuration.settings)} DNS profiles for interface '{configuration.interface}'"
    )
    return configuration
