"""Unit tests for money helpers"""

import pytest
from decimal import Decimal
from family_finance.domain.exceptions import InvalidAmount
from family_finance.utils.money import (
    cents_to_reais,
    format_brl,
    format_compact,
    parse_money_string,
    percentage_of,
    percentage_of_cents,
    reais_to_cents,
    round_half_away,
    sum_cents,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (2.5, 3),
        (-2.5, -3),
        (2.4999, 2),
        (Decimal("0.5"), 1),
        (Decimal("-0.5"), -1),
        (7, 7),
        (0.0, 0),
    ],
)
def test_round_half_away(value, expected):
    assert round_half_away(value) == expected


def test_cents_reais_conversion():
    assert cents_to_reais(150_000) == Decimal("1500.00")
    assert cents_to_reais(5) == Decimal("0.05")
    assert reais_to_cents(Decimal("1500.005")) == 150_001
    assert reais_to_cents("189.59") == 18_959
    assert reais_to_cents(189.59) == 18_959


@pytest.mark.parametrize(
    "cents, expected",
    [
        (150_000, "R$ 1.500,00"),
        (5, "R$ 0,05"),
        (0, "R$ 0,00"),
        (99_999, "R$ 999,99"),
        (123_456_789, "R$ 1.234.567,89"),
        (-150_000, "-R$ 1.500,00"),
    ],
)
def test_format_brl(cents, expected):
    assert format_brl(cents) == expected


def test_format_compact():
    assert format_compact(150_000) == "1.500,00"
    assert format_compact(-1) == "-0,01"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("R$ 1.500,00", 150_000),
        ("1.500,00", 150_000),
        ("1500", 150_000),
        ("0,5", 50),
        ("-R$ 10,00", -1_000),
    ],
)
def test_parse_money_string(text, expected):
    assert parse_money_string(text) == expected


@pytest.mark.parametrize("text", ["", "R$", "abc"])
def test_parse_money_string_rejects_garbage(text):
    with pytest.raises(InvalidAmount):
        parse_money_string(text)


def test_format_parse_round_trip():
    for cents in (0, 1, 99, 150_000, 123_456_789):
        assert parse_money_string(format_brl(cents)) == cents


def test_percentage_helpers():
    assert percentage_of_cents(100_000, 10.5) == 10_500
    assert percentage_of_cents(101, 50) == 51
    assert percentage_of(50_000, 100_000) == 50.0
    assert percentage_of(1, 0) == 0.0
    assert sum_cents(1, 2, 3) == 6
    assert sum_cents() == 0
