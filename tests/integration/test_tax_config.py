"""Integration tests for loading stored tax configuration"""

import logging
import pytest
from family_finance.domain.exceptions import ConfigurationError
from family_finance.domain.income import compute_net_income_with
from family_finance.domain.tax_tables import (
    DEFAULT_TAX_CONFIGURATION_2025,
    resolve_tax_configuration,
)
from family_finance.infrastructure.tax_config import (
    load_tax_configuration,
    parse_tax_configuration,
)


def test_stored_2025_configuration_matches_defaults(tax_config_document):
    """Rows are ordered by "order" and inactive rows dropped"""
    config = parse_tax_configuration(tax_config_document)

    assert config == DEFAULT_TAX_CONFIGURATION_2025
    assert config.inss_table.brackets[-1].upper_cents is None
    assert len(config.irpf_table) == 5


def test_load_from_file(tax_config_file, salaried_income):
    config = load_tax_configuration(tax_config_file)

    assert config.year == 2025
    assert config.dependent_deduction_cents == 18_959
    assert compute_net_income_with(salaried_income, config).net_cents == 463_568


def test_load_logs_summary(tax_config_file, caplog):
    with caplog.at_level(logging.INFO, logger="family_finance.infrastructure.tax_config"):
        load_tax_configuration(tax_config_file)

    assert "Tax configuration loaded" in caplog.text


def test_rate_out_of_range_rejected(tax_config_document):
    tax_config_document["irpf_brackets"][1]["rate"] = 7.5
    with pytest.raises(ConfigurationError):
        parse_tax_configuration(tax_config_document)


def test_gap_in_brackets_rejected(tax_config_document):
    tax_config_document["inss_brackets"][0]["min_value"] = 1500.00
    with pytest.raises(ConfigurationError):
        parse_tax_configuration(tax_config_document)


def test_only_inactive_rows_rejected(tax_config_document):
    for row in tax_config_document["inss_brackets"]:
        row["is_active"] = False
    with pytest.raises(ConfigurationError):
        parse_tax_configuration(tax_config_document)


def test_missing_field_rejected(tax_config_document):
    del tax_config_document["fgts_rate"]
    with pytest.raises(ConfigurationError):
        parse_tax_configuration(tax_config_document)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_tax_configuration(tmp_path / "missing.json")


def test_malformed_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_tax_configuration(path)


def test_resolve_prefers_configured(tax_config_document):
    configured = parse_tax_configuration(tax_config_document)
    assert resolve_tax_configuration(configured, DEFAULT_TAX_CONFIGURATION_2025) is configured


def test_resolve_falls_back_with_warning(caplog):
    with caplog.at_level(logging.WARNING):
        config = resolve_tax_configuration(None, DEFAULT_TAX_CONFIGURATION_2025)

    assert config is DEFAULT_TAX_CONFIGURATION_2025
    assert "using fallback tables" in caplog.text
