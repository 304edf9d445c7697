"""Tests for passprobe.utils.logger module."""

import logging

import pytest

from passprobe.utils.logger import get_logger, get_module_logger, setup_logging


@pytest.mark.unit
class TestLogger:
    """Test logger naming and configuration."""

    def test_get_logger_prefixes_name(self):
        assert get_logger("services.report").name == "passprobe.services.report"

    def test_get_logger_keeps_prefixed_name(self):
        assert get_logger("passprobe.main").name == "passprobe.main"

    def test_get_module_logger(self):
        assert get_module_logger("passprobe.database.adapter").name == "passprobe.database.adapter"

    def test_setup_logging_sets_levels(self):
        setup_logging("debug")

        assert logging.getLogger("passprobe").level == logging.DEBUG
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

        setup_logging("INFO")
        assert logging.getLogger("passprobe").level == logging.INFO

    def test_setup_logging_rejects_unknown_level(self):
        with pytest.raises(ValueError, match="Invalid log level: LOUD"):
            setup_logging("LOUD")
