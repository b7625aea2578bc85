"""
DNS profile storage for DNS Switcher.

This package handles the JSON profiles document:
- Parsing it into typed profiles and serializing it back (model)
- Seeding, reading, saving and watching the file on disk (store)
"""

from .model import (
    ConfigurationError,
    MalformedDocumentError,
    ConfigFileError,
    DNSProfile,
    Configuration,
    load,
)
from .store import (
    get_config_path,
    default_document,
    ensure_config_file,
    restore_defaults,
    read_configuration,
    save_configuration,
    ConfigFileMonitor,
)

__all__ = [
    # Model
    "ConfigurationError",
    "MalformedDocumentError",
    "ConfigFileError",
    "DNSProfile",
    "Configuration",
    "load",
    # File handling
    "get_config_path",
    "default_document",
    "ensure_config_file",
    "restore_defaults",
    "read_configuration",
    "save_configuration",
    "ConfigFileMonitor",
]
