"""
Unit tests for dnsswitcher/logging_config.py
"""

import logging

import pytest


@pytest.mark.unit
class TestSetupLogging:
    def test_writes_to_log_file(self, tmp_path):
        from dnsswitcher.logging_config import get_log_file, get_logger, setup_logging

        log_file = tmp_path / "logs" / "dnsswitcher.log"
        setup_logging(force_reinit=True, log_file=log_file)

        get_logger("dnsswitcher.test").info("profile applied")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert get_log_file() == log_file
        assert "INFO - profile applied" in log_file.read_text()

    def test_debug_flag_sets_console_level(self, tmp_path):
        from dnsswitcher.logging_config import setup_logging

        setup_logging(debug=True, force_reinit=True, log_file=tmp_path / "x.log")

        console = [
            h
            for h in logging.getLogger().handlers
            if type(h) is logging.StreamHandler
        ]
        assert len(console) == 1
        assert console[0].level == logging.DEBUG

    def test_reinit_does_not_duplicate_handlers(self, tmp_path):
        from dnsswitcher.logging_config import setup_logging

        setup_logging(force_reinit=True, log_file=tmp_path / "x.log")
        setup_logging(force_reinit=True, log_file=tmp_path / "x.log")

        assert len(logging.getLogger().handlers) == 2

    def test_defaults_to_configured_log_file(self, isolated_home):
        from dnsswitcher import config
        from dnsswitcher.logging_config import get_log_file, setup_logging

        setup_logging(force_reinit=True)

        assert get_log_file() == config.LOG_FILE
        assert config.LOG_FILE.parent.is_dir()
