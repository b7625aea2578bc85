"""
Pytest configuration and shared fixtures for DNS Switcher tests.

This module provides reusable fixtures and configuration for all tests.
"""

import json

import pytest
from unittest.mock import MagicMock


@pytest.fixture
def profiles_document():
    """Provide a profiles document with three valid profiles."""
    return {
        "interface": "Ethernet",
        "settings": [
            {"name": "Cloudflare", "servers": ["1.1.1.1", "1.0.0.1"]},
            {
                "name": "Office",
                "servers": ["10.1.1.10", "10.1.1.11"],
                "loadCmd": "/usr/local/bin/vpnctl connect office",
            },
            {"name": "DHCP", "servers": []},
        ],
    }


@pytest.fixture
def profiles_bytes(profiles_document):
    """The profiles document as raw JSON bytes."""
    return json.dumps(profiles_document).encode("utf-8")


@pytest.fixture
def profiles_file(tmp_path, profiles_bytes):
    """A profiles file on disk holding profiles_document."""
    path = tmp_path / ".dnsswitcher.json"
    path.write_bytes(profiles_bytes)
    return path


@pytest.fixture
def preferences():
    """Preferences with every setting at its default."""
    from dnsswitcher import config
    import copy

    return copy.deepcopy(config.DEFAULT_PREFERENCES)


@pytest.fixture
def mock_networksetup_outputs():
    """Provide mock outputs from networksetup commands."""
    return {
        "services": """An asterisk (*) denotes that a network service is disabled.
USB 10/100/1000 LAN
Wi-Fi
*Thunderbolt Bridge
iPhone USB
""",
        "dns_servers": "1.1.1.1\n1.0.0.1\n",
        "no_dns_servers": "There aren't any DNS Servers set on Wi-Fi.\n",
    }


@pytest.fixture
def mock_run_command():
    """Provide a mock for run_command that always succeeds."""
    from dnsswitcher.utils import CommandResult

    mock = MagicMock()
    mock.return_value = CommandResult(0, "")
    return mock


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep log and preference files out of the real home directory."""
    from dnsswitcher import config

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr(config, "LOG_FILE", home / "Library" / "Logs" / "dnsswitcher.log")
    return home


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration between tests."""
    import logging

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(logging.WARNING)
    yield
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
