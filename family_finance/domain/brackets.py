"""Progressive bracket engine - marginal tax and contribution withholding"""

from decimal import Decimal
from enum import Enum
from typing import Sequence, Union

from family_finance.domain.exceptions import ConfigurationError, InvalidAmount
from family_finance.domain.models import TaxBracket, TaxBracketTable
from family_finance.utils.money import round_half_away, to_decimal

BracketsLike = Union[TaxBracketTable, Sequence[TaxBracket]]


class BracketMode(str, Enum):
    MARGINAL_SUM = "marginal_sum"  # INSS
    MARGINAL_WITH_DEDUCTION = "marginal_with_deduction"  # IRPF


def as_table(brackets: BracketsLike) -> TaxBracketTable:
    """Wrap a plain sequence of brackets, validating it on the way"""
    if isinstance(brackets, TaxBracketTable):
        return brackets
    return TaxBracketTable(tuple(brackets))


def _marginal_sum(base: Decimal, table: TaxBracketTable) -> Decimal:
    total = Decimal(0)
    for bracket in table:
        if base <= bracket.lower_cents:
            break
        ceiling = base if bracket.is_unbounded else min(base, Decimal(bracket.upper_cents))
        total += (ceiling - bracket.lower_cents) * to_decimal(bracket.rate)
    return total


def _marginal_with_deduction(base: Decimal, table: TaxBracketTable) -> Decimal:
    for bracket in table:
        if bracket.contains(base):
            return max(Decimal(0), base * to_decimal(bracket.rate) - bracket.deduction_cents)

    raise ConfigurationError(f"{table.name}: no bracket contains base {base}")


def apply_progressive_brackets(
    base_cents: int,
    brackets: BracketsLike,
    mode: Union[BracketMode, str],
) -> int:
    """
    Compute the amount withheld from base_cents under a progressive table.

    MARGINAL_SUM (INSS):
        Each band taxes only the slice of base inside it:
        sum(min(base, upper) - lower) * rate for every band below base.

    MARGINAL_WITH_DEDUCTION (IRPF):
        Pick the first band whose upper edge is >= base and compute
        base * rate - deduction, floored at 0. Equivalent to the marginal
        sum when deductions are the cumulative lower-band tax.

    Fractional cents are kept until the end, then rounded once half away
    from zero.

    Example:
        {0-1000: 10%, 1000-2000: 20%, 2000+: 30%}, base 2500, MARGINAL_SUM
        100 + 200 + 150 = 450
    """
    if base_cents < 0:
        raise InvalidAmount(f"Bracket base cannot be negative: {base_cents}")

    # Accepts the plain value too, e.g. "marginal_sum" from stored config
    try:
        mode = BracketMode(mode)
    except ValueError as e:
        raise ConfigurationError(f"Unknown bracket mode: {mode!r}") from e

    table = as_table(brackets)
    if base_cents == 0:
        return 0

    base = Decimal(base_cents)
    if mode is BracketMode.MARGINAL_SUM:
        withheld = _marginal_sum(base, table)
    else:
        withheld = _marginal_with_deduction(base, table)

    return round_half_away(withheld)


def with_cumulative_deductions(brackets: BracketsLike) -> TaxBracketTable:
    """
    Derive deduction constants so a marginal table can be evaluated in
    MARGINAL_WITH_DEDUCTION mode with the same result.

    d[0] = lower[0] * rate[0]
    d[i] = d[i-1] + lower[i] * (rate[i] - rate[i-1])

    Deductions are rounded to whole cents. Rates must not decrease from one
    band to the next, otherwise a deduction would turn negative.
    """
    table = as_table(brackets)
    derived = []
    deduction = Decimal(0)
    previous_rate = Decimal(0)
    for bracket in table:
        rate = to_decimal(bracket.rate)
        if rate < previous_rate:
            raise ConfigurationError(f"{table.name}: rates decrease, no deduction form exists")
        deduction += bracket.lower_cents * (rate - previous_rate)
        previous_rate = rate
        derived.append(
            TaxBracket(
                lower_cents=bracket.lower_cents,
                upper_cents=bracket.upper_cents,
                rate=bracket.rate,
                deduction_cents=round_half_away(deduction),
            )
        )
    return TaxBracketTable(tuple(derived), name=f"{table.name} (deduction form)")


def effective_rate(base_cents: int, withheld_cents: int) -> float:
    """Withheld share of base as a fraction (0.0 for a zero base)"""
    if base_cents <= 0:
        return 0.0
    return withheld_cents / base_cents
