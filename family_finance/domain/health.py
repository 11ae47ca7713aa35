"""Financial health - 0-100 budget score and threshold alerts"""

from typing import List, Optional

from family_finance.domain.exceptions import InvalidAmount, InvalidRate
from family_finance.domain.models import Alert, AlertSeverity, AlertType, FinancialHealth
from family_finance.utils.money import percentage_of


def _validate(
    net_income_cents: int,
    monthly_expenses_cents: int,
    monthly_investments_cents: int,
    emergency_completion_percent: Optional[float],
) -> None:
    for name, value in (
        ("net_income_cents", net_income_cents),
        ("monthly_expenses_cents", monthly_expenses_cents),
        ("monthly_investments_cents", monthly_investments_cents),
    ):
        if value < 0:
            raise InvalidAmount(f"{name} cannot be negative: {value}")

    if emergency_completion_percent is not None and not 0 <= emergency_completion_percent <= 100:
        raise InvalidRate(
            f"Emergency fund completion outside [0, 100]: {emergency_completion_percent}"
        )


def _below(part: int, whole: int, percent: int) -> bool:
    """part < percent% of whole, compared on integers"""
    return part * 100 < whole * percent


def _above(part: int, whole: int, percent: int) -> bool:
    return part * 100 > whole * percent


def _ratio(part: int, whole: int) -> Optional[float]:
    return percentage_of(part, whole) if whole > 0 else None


def available_cents(
    net_income_cents: int, monthly_expenses_cents: int, monthly_investments_cents: int = 0
) -> int:
    """What is left of net income after expenses and investments, may be negative"""
    return net_income_cents - monthly_expenses_cents - monthly_investments_cents


def financial_health_score(
    net_income_cents: int,
    monthly_expenses_cents: int,
    monthly_investments_cents: int = 0,
    emergency_completion_percent: Optional[float] = None,
) -> int:
    """
    Score the monthly budget from 0 (worst) to 100 (best).

    Points:
    - 30: expenses below 50% of net income (20 below 70%, 10 below 90%);
      no points without net income
    - 25: investing 20% or more of net income (15 from 10%, 5 for any
      positive amount)
    - 25: emergency fund complete (15 from 50%, 5 for any progress);
      no points when there is no fund (completion None)
    - 20: something left after expenses and investments

    Example:
        net 10000, expenses 4000, investments 2000, fund 100% -> 100
    """
    _validate(
        net_income_cents,
        monthly_expenses_cents,
        monthly_investments_cents,
        emergency_completion_percent,
    )
    score = 0

    if net_income_cents > 0:
        if _below(monthly_expenses_cents, net_income_cents, 50):
            score += 30
        elif _below(monthly_expenses_cents, net_income_cents, 70):
            score += 20
        elif _below(monthly_expenses_cents, net_income_cents, 90):
            score += 10

    if monthly_investments_cents > 0:
        if not _below(monthly_investments_cents, net_income_cents, 20):
            score += 25
        elif not _below(monthly_investments_cents, net_income_cents, 10):
            score += 15
        else:
            score += 5

    if emergency_completion_percent is not None:
        if emergency_completion_percent >= 100:
            score += 25
        elif emergency_completion_percent >= 50:
            score += 15
        elif emergency_completion_percent > 0:
            score += 5

    if available_cents(net_income_cents, monthly_expenses_cents, monthly_investments_cents) > 0:
        score += 20

    return score


def generate_alerts(
    net_income_cents: int,
    monthly_expenses_cents: int,
    monthly_investments_cents: int = 0,
    emergency_completion_percent: Optional[float] = None,
) -> List[Alert]:
    """
    Budget alerts, in this order when present:

    - HIGH_EXPENSES: critical above 100% of net income, warning above 80%,
      info above 70%
    - EMERGENCY_FUND: warning without a fund or below 30% complete, info
      while incomplete
    - INVESTMENT: info when nothing is invested or less than 10% of net
      income is
    - NEGATIVE_BALANCE: critical when expenses and investments exceed
      net income
    """
    _validate(
        net_income_cents,
        monthly_expenses_cents,
        monthly_investments_cents,
        emergency_completion_percent,
    )
    alerts = []
    expense_ratio = _ratio(monthly_expenses_cents, net_income_cents)

    if monthly_expenses_cents > net_income_cents:
        alerts.append(Alert(
            type=AlertType.HIGH_EXPENSES,
            severity=AlertSeverity.CRITICAL,
            title="Expenses exceed income",
            message="Monthly expenses are higher than net income. Cut spending now.",
            value=expense_ratio,
        ))
    elif _above(monthly_expenses_cents, net_income_cents, 80):
        alerts.append(Alert(
            type=AlertType.HIGH_EXPENSES,
            severity=AlertSeverity.WARNING,
            title="Expenses are very high",
            message="Expenses take more than 80% of net income. Consider cutting back.",
            value=expense_ratio,
        ))
    elif _above(monthly_expenses_cents, net_income_cents, 70):
        alerts.append(Alert(
            type=AlertType.HIGH_EXPENSES,
            severity=AlertSeverity.INFO,
            title="Watch your spending",
            message="Expenses are above 70% of net income. Try to keep them below that.",
            value=expense_ratio,
        ))

    if emergency_completion_percent is None:
        alerts.append(Alert(
            type=AlertType.EMERGENCY_FUND,
            severity=AlertSeverity.WARNING,
            title="No emergency fund",
            message="Set up an emergency fund of at least 6 months of expenses.",
            value=0.0,
        ))
    elif emergency_completion_percent < 100:
        alerts.append(Alert(
            type=AlertType.EMERGENCY_FUND,
            severity=(
                AlertSeverity.WARNING if emergency_completion_percent < 30 else AlertSeverity.INFO
            ),
            title="Emergency fund incomplete",
            message="Keep building your emergency fund.",
            value=emergency_completion_percent,
        ))

    if monthly_investments_cents == 0:
        alerts.append(Alert(
            type=AlertType.INVESTMENT,
            severity=AlertSeverity.INFO,
            title="Start investing",
            message="Nothing is being invested. Consider investing at least 10% of income.",
            value=0.0,
        ))
    elif _below(monthly_investments_cents, net_income_cents, 10):
        alerts.append(Alert(
            type=AlertType.INVESTMENT,
            severity=AlertSeverity.INFO,
            title="Low investments",
            message="Try to raise investments to at least 10% of income.",
            value=_ratio(monthly_investments_cents, net_income_cents),
        ))

    available = available_cents(
        net_income_cents, monthly_expenses_cents, monthly_investments_cents
    )
    if available < 0:
        alerts.append(Alert(
            type=AlertType.NEGATIVE_BALANCE,
            severity=AlertSeverity.CRITICAL,
            title="Negative balance",
            message="Expenses and investments exceed income. Review the budget urgently.",
            value=float(available),
        ))

    return alerts


def assess_financial_health(
    net_income_cents: int,
    monthly_expenses_cents: int,
    monthly_investments_cents: int = 0,
    emergency_completion_percent: Optional[float] = None,
) -> FinancialHealth:
    """Score and alerts for one month of family budget"""
    return FinancialHealth(
        score=financial_health_score(
            net_income_cents,
            monthly_expenses_cents,
            monthly_investments_cents,
            emergency_completion_percent,
        ),
        available_cents=available_cents(
            net_income_cents, monthly_expenses_cents, monthly_investments_cents
        ),
        expense_ratio_percent=_ratio(monthly_expenses_cents, net_income_cents),
        investment_ratio_percent=_ratio(monthly_investments_cents, net_income_cents),
        alerts=generate_alerts(
            net_income_cents,
            monthly_expenses_cents,
            monthly_investments_cents,
            emergency_completion_percent,
        ),
    )
