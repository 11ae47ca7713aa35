"""Pytest fixtures for testing"""

import json
import pytest
from pathlib import Path
from family_finance.domain.models import (
    InvestmentPosition,
    SalariedIncome,
    SelfEmployedIncome,
    TaxBracket,
    TaxBracketTable,
)


@pytest.fixture
def simple_table() -> TaxBracketTable:
    """{0-1000: 10%, 1000-2000: 20%, 2000+: 30%}"""
    return TaxBracketTable(
        (
            TaxBracket(0, 1000, 0.10),
            TaxBracket(1000, 2000, 0.20),
            TaxBracket(2000, None, 0.30),
        ),
        name="simple",
    )


@pytest.fixture
def salaried_income() -> SalariedIncome:
    """R$ 5.000,00 gross with R$ 500,00 in benefits"""
    return SalariedIncome(
        gross_monthly_cents=500_000,
        food_voucher_cents=30_000,
        transport_voucher_cents=10_000,
        bonus_cents=10_000,
    )


@pytest.fixture
def self_employed_income() -> SelfEmployedIncome:
    """R$ 10.000,00 invoiced at 6% Simples with R$ 1.518,00 pro-labore"""
    return SelfEmployedIncome(
        gross_monthly_cents=1_000_000,
        flat_rate_percent=6.0,
        fixed_draw_cents=151_800,
        food_voucher_cents=20_000,
    )


@pytest.fixture
def sample_positions() -> list[InvestmentPosition]:
    """Fixed income plus equities, both with monthly contributions"""
    return [
        InvestmentPosition(
            current_balance_cents=1_000_000,  # R$ 10.000
            monthly_contribution_cents=50_000,  # R$ 500
            annual_return_rate_percent=12.0,
        ),
        InvestmentPosition(
            current_balance_cents=500_000,  # R$ 5.000
            monthly_contribution_cents=20_000,  # R$ 200
            annual_return_rate_percent=8.0,
        ),
    ]


@pytest.fixture
def tax_config_document() -> dict:
    """Stored 2025 configuration, rows deliberately out of order"""
    return {
        "year": 2025,
        "inss_deduction_per_dependent": 189.59,
        "fgts_rate": 0.08,
        "inss_brackets": [
            {"min_value": 1412.00, "max_value": 2666.68, "rate": 0.09, "order": 2},
            {"min_value": 0, "max_value": 1412.00, "rate": 0.075, "order": 1},
            {"min_value": 2666.68, "max_value": 4000.03, "rate": 0.12, "order": 3},
            {"min_value": 4000.03, "max_value": 7786.02, "rate": 0.14, "order": 4},
            {"min_value": 7786.02, "max_value": 0, "rate": 0.0, "order": 5},
        ],
        "irpf_brackets": [
            {"min_value": 0, "max_value": 2259.20, "rate": 0.0, "deduction": 0, "order": 1},
            {"min_value": 2259.20, "max_value": 2826.65, "rate": 0.075, "deduction": 169.44, "order": 2},
            {"min_value": 2826.65, "max_value": 3751.05, "rate": 0.15, "deduction": 381.44, "order": 3},
            {"min_value": 3751.05, "max_value": 4664.68, "rate": 0.225, "deduction": 662.77, "order": 4},
            {"min_value": 4664.68, "max_value": 0, "rate": 0.275, "deduction": 896.00, "order": 5},
            # Superseded row, must be ignored
            {"min_value": 0, "max_value": 0, "rate": 0.5, "order": 6, "is_active": False},
        ],
    }


@pytest.fixture
def tax_config_file(tmp_path: Path, tax_config_document: dict) -> Path:
    path = tmp_path / "tax_2025.json"
    path.write_text(json.dumps(tax_config_document), encoding="utf-8")
    return path
