"""Tests for the package logger helper."""

import logging

from pump_launch.utils.logger import PACKAGE_LOGGER_NAME, get_logger


class TestGetLogger:
    def test_module_name_kept(self) -> None:
        assert get_logger("pump_launch.core.client").name == "pump_launch.core.client"

    def test_foreign_name_nested(self) -> None:
        assert get_logger("AuditLogger").name == "pump_launch.AuditLogger"

    def test_single_package_handler(self) -> None:
        get_logger("a")
        get_logger("b")
        assert len(logging.getLogger(PACKAGE_LOGGER_NAME).handlers) == 1
