"""Test suite for report configuration."""

import logging
import pytest
import yaml
from ledgerprint import ReportEngine
from ledgerprint.constants import DEFAULT_CONFIGURATION
from .base_ledger import sample_ledger


def test_default_configuration():
    assert ReportEngine().configuration == DEFAULT_CONFIGURATION


def test_partial_configuration_is_completed():
    engine = ReportEngine({"color": True})
    assert engine.configuration == {"color": True, "max_decimal_places": 8}


def test_configuration_is_returned_as_copy():
    engine = ReportEngine()
    engine.configuration["color"] = True
    assert engine.configuration["color"] is False


@pytest.mark.parametrize(
    "configuration",
    [
        "color: true",
        {"colour": True},
        {"color": "yes"},
        {"max_decimal_places": -1},
        {"max_decimal_places": 2.5},
        {"max_decimal_places": True},
    ]
)
def test_invalid_configuration(configuration):
    with pytest.raises(ValueError):
        ReportEngine(configuration)


def test_read_configuration_file(tmp_path):
    file = tmp_path / "configuration.yml"
    file.write_text("color: true\nmax_decimal_places: 3\n")
    engine = ReportEngine()
    result = engine.read_configuration_file(file)
    assert result == {"color": True, "max_decimal_places": 3}
    assert engine.configuration == result


def test_read_empty_configuration_file(tmp_path):
    file = tmp_path / "configuration.yml"
    file.write_text("")
    assert ReportEngine().read_configuration_file(file) == DEFAULT_CONFIGURATION


def test_missing_configuration_file_falls_back_to_defaults(tmp_path, caplog):
    engine = ReportEngine({"color": True})
    with caplog.at_level(logging.WARNING, logger="ledgerprint"):
        result = engine.read_configuration_file(tmp_path / "missing.yml")
    assert result == DEFAULT_CONFIGURATION
    assert "configuration file missing" in caplog.text


def test_write_configuration_file(tmp_path):
    file = tmp_path / "configuration.yml"
    ReportEngine({"max_decimal_places": 4}).write_configuration_file(file)
    with open(file, "r") as f:
        assert yaml.safe_load(f) == {"color": False, "max_decimal_places": 4}


def test_reports_log_sizes(caplog):
    engine = ReportEngine()
    with caplog.at_level(logging.DEBUG, logger="ledgerprint"):
        engine.flat_balance(sample_ledger())
        engine.register(sample_ledger())
    assert "Flat balance: 6 postings, 3 accounts, 2 commodities, width 7." in caplog.text
    assert "Register: 3 rows" in caplog.text
