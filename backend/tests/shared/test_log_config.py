"""Tests for shared/log_config.py."""

import logging
from unittest.mock import patch

from shared.log_config import LOG_FORMAT, configure_logging


class TestConfigureLogging:
    @patch("shared.log_config.logging.basicConfig")
    def test_configures_root_logger(self, mock_basic_config):
        configure_logging("debug")

        kwargs = mock_basic_config.call_args.kwargs
        assert kwargs["level"] == logging.DEBUG
        assert kwargs["format"] == LOG_FORMAT

    @patch("shared.log_config.logging.basicConfig")
    def test_unknown_level_falls_back_to_info(self, mock_basic_config):
        configure_logging("chatty")

        assert mock_basic_config.call_args.kwargs["level"] == logging.INFO

    @patch("shared.log_config.logging.basicConfig")
    def test_quiets_httpx(self, mock_basic_config):
        configure_logging()

        assert logging.getLogger("httpx").level == logging.WARNING
