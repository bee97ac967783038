"""Tests for structlog configuration and credential masking."""

import logging

import pytest
import structlog

from krakenapi.logging import MASKED, get_logger, mask_credentials, setup_logging


class TestMaskCredentials:
    def test_masks_sensitive_keys(self) -> None:
        event = {"event": "kraken_request", "api_key": "k", "api_sign": "s", "secret": "x"}
        masked = mask_credentials(None, "debug", event)
        assert masked["api_key"] == MASKED
        assert masked["api_sign"] == MASKED
        assert masked["secret"] == MASKED

    def test_leaves_other_keys(self) -> None:
        event = {"event": "kraken_request", "method": "Balance", "params": 2}
        assert mask_credentials(None, "debug", dict(event)) == event


@pytest.fixture
def restore_logging():
    root_logger = logging.getLogger()
    handlers, level = list(root_logger.handlers), root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()


@pytest.mark.usefixtures("restore_logging")
class TestSetupLogging:
    def test_sets_root_level(self) -> None:
        setup_logging("DEBUG")
        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self) -> None:
        setup_logging("chatty")
        assert logging.getLogger().level == logging.INFO

    def test_json_output_is_masked(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
        monkeypatch.setenv("LOG_FORMAT", "json")
        setup_logging("DEBUG")
        get_logger("krakenapi.test").warning("login", api_secret="hunter2")
        output = capsys.readouterr().err
        assert "hunter2" not in output
        assert MASKED in output
