"""Tests for the logging helpers."""

import logging

from api.shared import logger as logger_module


class TestLogging:
    def test_get_logger_is_module_scoped(self):
        assert logger_module.get_logger("api.batching.scheduler").name == "api.batching.scheduler"

    def test_setup_logging_is_noop_once_configured(self, monkeypatch):
        monkeypatch.setattr(logger_module, "_configured", True)
        root = logging.getLogger()
        level_before = root.level
        handlers_before = list(root.handlers)

        logger_module.setup_logging("DEBUG")

        assert root.level == level_before
        assert root.handlers == handlers_before
