"""Money helpers - integer cents in, integer cents out"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from family_finance.domain.exceptions import InvalidAmount

Number = Union[int, float, Decimal]

CENTS_PER_REAL = 100


def to_decimal(value: Number | str) -> Decimal:
    """Convert to Decimal, going through str for floats so 0.075 stays 0.075"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_half_away(value: Number) -> int:
    """
    Round to the nearest integer, ties away from zero.

    This is the single rounding rule used across the engine.
    Floats are rounded on their exact binary value.

    Example:
        2.5 -> 3, -2.5 -> -3, 2.4999 -> 2
    """
    if isinstance(value, int):
        return value
    exact = value if isinstance(value, Decimal) else Decimal(value)
    return int(exact.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def cents_to_reais(cents: int) -> Decimal:
    """150000 -> Decimal('1500.00')"""
    return (Decimal(cents) / CENTS_PER_REAL).quantize(Decimal("0.01"))


def reais_to_cents(value: Number | str) -> int:
    """Decimal('1500.005') -> 150001"""
    return round_half_away(to_decimal(value) * CENTS_PER_REAL)


def _group_thousands(n: int) -> str:
    digits = str(n)
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return ".".join(groups)


def format_compact(cents: int) -> str:
    """Brazilian format without currency symbol: 150000 -> '1.500,00'"""
    sign = "-" if cents < 0 else ""
    reais, centavos = divmod(abs(cents), CENTS_PER_REAL)
    return f"{sign}{_group_thousands(reais)},{centavos:02d}"


def format_brl(cents: int) -> str:
    """Brazilian currency format: 150000 -> 'R$ 1.500,00'"""
    compact = format_compact(abs(cents))
    return f"-R$ {compact}" if cents < 0 else f"R$ {compact}"


def parse_money_string(text: str) -> int:
    """
    Parse a Brazilian money string into cents.

    Dots are thousands separators, the first comma is the decimal separator.
    Anything else (currency symbol, spaces) is ignored.

    Example:
        'R$ 1.500,00' -> 150000
        '1500' -> 150000
    """
    cleaned = []
    has_comma = False
    for char in text:
        if char.isdigit():
            cleaned.append(char)
        elif char == "," and not has_comma:
            cleaned.append(".")
            has_comma = True

    number = "".join(cleaned)
    if not number.strip("."):
        raise InvalidAmount(f"Not a money value: {text!r}")

    negative = text.strip().startswith("-")
    cents = reais_to_cents(Decimal(number))
    return -cents if negative else cents


def percentage_of_cents(cents: int, percentage: Number) -> int:
    """10.5% of 100000 -> 10500"""
    return round_half_away(Decimal(cents) * to_decimal(percentage) / 100)


def percentage_of(part: int, total: int) -> float:
    """What percentage part is of total (0.0 when total is 0)"""
    if total == 0:
        return 0.0
    return part / total * 100.0


def sum_cents(*values: int) -> int:
    return sum(values)
