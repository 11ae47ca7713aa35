"""Net income calculation for salaried (CLT) and self-employed (PJ) income"""

from decimal import Decimal

from family_finance.domain.brackets import BracketMode, BracketsLike, apply_progressive_brackets
from family_finance.domain.exceptions import InvalidAmount, InvalidIncomeKind, InvalidRate
from family_finance.domain.models import (
    IncomeRecord,
    NetIncome,
    SalariedIncome,
    SelfEmployedIncome,
    TaxBreakdown,
    TaxConfiguration,
)
from family_finance.utils.money import round_half_away, to_decimal


def _require_non_negative(value: int, name: str) -> None:
    if value < 0:
        raise InvalidAmount(f"{name} cannot be negative: {value}")


def compute_inss(gross_cents: int, inss_table: BracketsLike) -> int:
    """Social security contribution, marginal across every band"""
    return apply_progressive_brackets(gross_cents, inss_table, BracketMode.MARGINAL_SUM)


def irpf_base(
    gross_cents: int,
    inss_cents: int,
    dependents: int,
    dependent_deduction_cents: int,
) -> int:
    """Taxable base: gross - INSS - dependent deductions, floored at 0"""
    return max(0, gross_cents - inss_cents - dependents * dependent_deduction_cents)


def compute_irpf(taxable_base_cents: int, irpf_table: BracketsLike) -> int:
    """Income tax on an already reduced base"""
    return apply_progressive_brackets(
        taxable_base_cents, irpf_table, BracketMode.MARGINAL_WITH_DEDUCTION
    )


def compute_welfare_fund(gross_cents: int, rate: float) -> int:
    """Employer FGTS deposit; informational, never taken out of net pay"""
    if not 0 <= rate <= 1:
        raise InvalidRate(f"Welfare fund rate must be within [0, 1]: {rate}")
    return round_half_away(Decimal(gross_cents) * to_decimal(rate))


def compute_flat_tax(gross_cents: int, rate_percent: float) -> int:
    """Simples Nacional tax for PJ income"""
    if not 0 <= rate_percent <= 100:
        raise InvalidRate(f"Flat rate must be within [0, 100]: {rate_percent}")
    return round_half_away(Decimal(gross_cents) * to_decimal(rate_percent) / 100)


def _salaried_net(
    record: SalariedIncome,
    inss_table: BracketsLike,
    irpf_table: BracketsLike,
    dependent_deduction_cents: int,
    welfare_fund_rate: float,
) -> NetIncome:
    _require_non_negative(record.dependents, "dependents")
    _require_non_negative(dependent_deduction_cents, "dependent_deduction_cents")
    welfare_fund = compute_welfare_fund(record.gross_monthly_cents, welfare_fund_rate)

    gross = record.gross_monthly_cents
    inss = max(0, compute_inss(gross, inss_table))
    base = irpf_base(gross, inss, record.dependents, dependent_deduction_cents)
    irpf = max(0, compute_irpf(base, irpf_table))

    return NetIncome(
        kind=record.kind,
        gross_cents=gross,
        benefits_cents=record.benefits_cents,
        net_cents=gross - inss - irpf + record.benefits_cents,
        breakdown=TaxBreakdown(
            inss_cents=inss,
            irpf_cents=irpf,
            irpf_base_cents=base,
            welfare_fund_cents=welfare_fund,
        ),
    )


def _self_employed_net(record: SelfEmployedIncome) -> NetIncome:
    _require_non_negative(record.fixed_draw_cents, "fixed_draw_cents")
    flat_tax = max(0, compute_flat_tax(record.gross_monthly_cents, record.flat_rate_percent))

    gross = record.gross_monthly_cents
    return NetIncome(
        kind=record.kind,
        gross_cents=gross,
        benefits_cents=record.benefits_cents,
        net_cents=gross - flat_tax - record.fixed_draw_cents + record.benefits_cents,
        breakdown=TaxBreakdown(
            flat_tax_cents=flat_tax,
            fixed_draw_cents=record.fixed_draw_cents,
        ),
    )


def compute_net_income(
    record: IncomeRecord,
    inss_table: BracketsLike,
    irpf_table: BracketsLike,
    dependent_deduction_cents: int,
    welfare_fund_rate: float = 0.08,
) -> NetIncome:
    """
    Derive net monthly pay from an income record.

    Salaried (CLT):
        inss  = marginal sum over the INSS table
        base  = gross - inss - dependents * deduction (>= 0)
        irpf  = base * rate - deduction over the IRPF table (>= 0)
        net   = gross - inss - irpf + benefits
        The FGTS deposit is reported but not subtracted.

    Self-employed (PJ):
        flat  = gross * flat_rate / 100
        net   = gross - flat - fixed_draw + benefits
        Bracket tables are not consulted.

    Benefits are food/transport vouchers plus bonus.
    """
    if not isinstance(record, (SalariedIncome, SelfEmployedIncome)):
        raise InvalidIncomeKind(f"Unsupported income record: {type(record).__name__}")

    _require_non_negative(record.gross_monthly_cents, "gross_monthly_cents")
    _require_non_negative(record.food_voucher_cents, "food_voucher_cents")
    _require_non_negative(record.transport_voucher_cents, "transport_voucher_cents")
    _require_non_negative(record.bonus_cents, "bonus_cents")

    if isinstance(record, SalariedIncome):
        return _salaried_net(
            record, inss_table, irpf_table, dependent_deduction_cents, welfare_fund_rate
        )
    return _self_employed_net(record)


def compute_net_income_with(record: IncomeRecord, config: TaxConfiguration) -> NetIncome:
    """compute_net_income using every parameter from one tax configuration"""
    return compute_net_income(
        record,
        config.inss_table,
        config.irpf_table,
        config.dependent_deduction_cents,
        config.welfare_fund_rate,
    )
