"""Unit tests for structured logging helpers."""

import json
import logging

import pytest
import structlog

from stockcharts.utils.structured_logging import (
    configure_structured_logging,
    get_logger,
    log_duration,
)
from stockcharts.utils.validation import is_valid_symbol, normalize_symbol


@pytest.fixture
def json_logging():
    configure_structured_logging(log_level="INFO", json_output=True)
    yield
    configure_structured_logging(log_level="WARNING")


@pytest.mark.unit
class TestStructuredLogging:
    def test_configure_sets_root_level(self):
        configure_structured_logging(log_level="ERROR")
        assert logging.getLogger().level == logging.ERROR
        configure_structured_logging(log_level="WARNING")

    def test_json_output(self, json_logging, capsys):
        get_logger("tests").info("chart_built", bars=3)

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["event"] == "chart_built"
        assert record["bars"] == 3
        assert record["level"] == "info"
        assert "timestamp" in record

    def test_log_duration_reports_elapsed_ms(self, json_logging, capsys):
        logger = get_logger("tests")
        with log_duration(logger, "tool_executed", tool="calculate_ratio"):
            pass

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["event"] == "tool_executed"
        assert record["tool"] == "calculate_ratio"
        assert record["duration_ms"] >= 0

    def test_log_duration_logs_on_error(self, json_logging):
        with structlog.testing.capture_logs() as captured:
            with pytest.raises(RuntimeError):
                with log_duration(get_logger("tests"), "tool_executed", tool="x"):
                    raise RuntimeError("boom")

        assert captured[0]["event"] == "tool_executed"


@pytest.mark.unit
class TestSymbolValidation:
    @pytest.mark.parametrize("symbol", ["AAPL", "BRK.B", "^GSPC", "BF-B", "SPY"])
    def test_valid_symbols(self, symbol):
        assert is_valid_symbol(symbol)

    @pytest.mark.parametrize("symbol", ["", "XLK/SPY", "AB CD", "ABCDEFGHIJK", "$$$"])
    def test_invalid_symbols(self, symbol):
        assert not is_valid_symbol(symbol)

    def test_normalize_symbol(self):
        assert normalize_symbol("  aapl ") == "AAPL"
