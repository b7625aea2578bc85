"""
Unit tests for dnsswitcher/profiles/model.py

Tests parsing of the profiles document, per-profile validation and export.
"""

import json
import logging

import pytest


@pytest.mark.unit
class TestLoad:
    """Tests for the load function."""

    def test_valid_profiles_keep_document_order(self, profiles_bytes):
        from dnsswitcher.profiles import load

        configuration = load(profiles_bytes)

        assert configuration.interface == "Ethernet"
        assert [p.name for p in configuration.settings] == ["Cloudflare", "Office", "DHCP"]
        assert configuration.settings[0].servers == ["1.1.1.1", "1.0.0.1"]
        assert configuration.settings[1].load_cmd == "/usr/local/bin/vpnctl connect office"
        assert configuration.settings[2].servers == []

    def test_accepts_text(self, profiles_document):
        from dnsswitcher.profiles import load

        configuration = load(json.dumps(profiles_document))

        assert len(configuration.settings) == 3

    def test_missing_interface_defaults_to_wifi(self):
        from dnsswitcher.profiles import load

        configuration = load(b'{"settings": []}')

        assert configuration.interface == "Wi-Fi"

    def test_non_string_interface_defaults_to_wifi(self):
        from dnsswitcher.profiles import load

        assert load(b'{"interface": 3, "settings": []}').interface == "Wi-Fi"
        assert load(b'{"interface": "", "settings": []}').interface == "Wi-Fi"

    def test_empty_settings_with_explicit_interface(self):
        from dnsswitcher.profiles import load

        configuration = load(b'{"interface": "Ethernet", "settings": []}')

        assert configuration.interface == "Ethernet"
        assert configuration.settings == []

    def test_missing_settings_is_not_an_error(self, caplog):
        from dnsswitcher.profiles import load

        with caplog.at_level(logging.INFO):
            configuration = load(b'{"interface": "Wi-Fi"}')

        assert configuration.settings == []
        assert "No configuration settings found" in caplog.text

    def test_profile_with_null_servers_is_dropped(self, caplog):
        """The second profile has null servers and must be the only one skipped."""
        from dnsswitcher.profiles import load

        document = {
            "settings": [
                {"name": "A", "servers": ["1.1.1.1", "1.0.0.1"]},
                {"name": "B", "servers": None},
            ]
        }

        with caplog.at_level(logging.WARNING):
            configuration = load(json.dumps(document).encode())

        assert configuration.interface == "Wi-Fi"
        assert len(configuration.settings) == 1
        assert configuration.settings[0].name == "A"
        assert configuration.settings[0].servers == ["1.1.1.1", "1.0.0.1"]
        assert configuration.settings[0].load_cmd is None
        assert "Error parsing server item: B" in caplog.text

    def test_partial_validity(self):
        """Three profiles, the middle one without servers: the outer two survive."""
        from dnsswitcher.profiles import load

        document = {
            "settings": [
                {"name": "first", "servers": ["9.9.9.9"]},
                {"name": "second"},
                {"name": "third", "servers": ["8.8.8.8"]},
            ]
        }

        configuration = load(json.dumps(document))

        assert [p.name for p in configuration.settings] == ["first", "third"]

    def test_profile_without_name_is_dropped(self, caplog):
        from dnsswitcher.profiles import load

        document = {"settings": [{"servers": ["1.1.1.1"]}, {"name": "ok", "servers": []}]}

        with caplog.at_level(logging.WARNING):
            configuration = load(json.dumps(document))

        assert [p.name for p in configuration.settings] == ["ok"]
        assert "<unnamed>" in caplog.text

    def test_non_object_entries_are_skipped(self):
        from dnsswitcher.profiles import load

        document = {"settings": ["oops", 42, {"name": "ok", "servers": ["1.1.1.1"]}]}

        configuration = load(json.dumps(document))

        assert [p.name for p in configuration.settings] == ["ok"]

    def test_invalid_server_values_are_ignored(self):
        from dnsswitcher.profiles import load

        document = {"settings": [{"name": "mixed", "servers": ["1.1.1.1", None, 5, ""]}]}

        configuration = load(json.dumps(document))

        assert configuration.settings[0].servers == ["1.1.1.1"]

    def test_blank_load_command_is_treated_as_absent(self):
        from dnsswitcher.profiles import load

        document = {"settings": [{"name": "x", "servers": [], "loadCmd": "  "}]}

        assert load(json.dumps(document)).settings[0].load_cmd is None

    @pytest.mark.parametrize(
        "data",
        [b"{not json", b"", b"[1, 2]", b'"text"', b"\xff\xfe"],
    )
    def test_malformed_document_raises(self, data):
        from dnsswitcher.profiles import MalformedDocumentError, load

        with pytest.raises(MalformedDocumentError):
            load(data)

    def test_malformed_document_is_a_configuration_error(self):
        from dnsswitcher.profiles import ConfigurationError, load

        with pytest.raises(ConfigurationError):
            load(b"{")


@pytest.mark.unit
class TestExport:
    """Tests for Configuration.export."""

    def test_round_trip(self, profiles_bytes):
        from dnsswitcher.profiles import load

        configuration = load(profiles_bytes)

        assert load(configuration.export()) == configuration

    def test_round_trip_after_dropping_invalid_profiles(self):
        from dnsswitcher.profiles import load

        document = {
            "settings": [
                {"name": "A", "servers": ["1.1.1.1"]},
                {"name": "B"},
                {"name": "C", "servers": ["2.2.2.2"], "loadCmd": "true"},
            ]
        }
        configuration = load(json.dumps(document))

        reloaded = load(configuration.export())

        assert reloaded == configuration
        assert reloaded.interface == "Wi-Fi"
        assert [p.name for p in reloaded.settings] == ["A", "C"]

    def test_load_cmd_only_exported_when_present(self, profiles_bytes):
        from dnsswitcher.profiles import load

        exported = json.loads(load(profiles_bytes).export())

        assert "loadCmd" not in exported["settings"][0]
        assert exported["settings"][1]["loadCmd"] == "/usr/local/bin/vpnctl connect office"
        assert "loadCmd" not in exported["settings"][2]

    def test_export_shape(self):
        from dnsswitcher.profiles import Configuration, DNSProfile

        configuration = Configuration(
            interface="Wi-Fi", settings=[DNSProfile("Google", ["8.8.8.8", "8.8.4.4"])]
        )

        assert json.loads(configuration.export()) == {
            "interface": "Wi-Fi",
            "settings": [{"name": "Google", "servers": ["8.8.8.8", "8.8.4.4"]}],
        }

    def test_export_keeps_interface_changes(self, profiles_bytes):
        from dnsswitcher.profiles import load

        configuration = load(profiles_bytes)
        configuration.interface = "Wi-Fi"

        assert json.loads(configuration.export())["interface"] == "Wi-Fi"

    def test_unserializable_data_returns_none(self, caplog):
        from dnsswitcher.profiles import Configuration, DNSProfile

        configuration = Configuration(settings=[DNSProfile("bad", [object()])])

        with caplog.at_level(logging.ERROR):
            assert configuration.export() is None
        assert "Failed to serialize configuration" in caplog.text


@pytest.mark.unit
class TestFindProfile:
    def test_returns_first_match(self, profiles_bytes):
        from dnsswitcher.profiles import load

        configuration = load(profiles_bytes)

        assert configuration.find_profile("Office").servers == ["10.1.1.10", "10.1.1.11"]
        assert configuration.find_profile("Missing") is None
