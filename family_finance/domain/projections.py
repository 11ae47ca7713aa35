"""Investment growth projection with monthly compounding"""

import math
from typing import Dict, Iterable, Iterator, List, Sequence

from family_finance.domain.exceptions import InvalidAmount, InvalidRate
from family_finance.domain.models import InvestmentPosition, ProjectionPoint, ProjectionResult
from family_finance.utils.money import round_half_away

DEFAULT_CHECKPOINTS = (12, 36, 60)  # 1, 3 and 5 years

MIN_ANNUAL_RATE_PERCENT = -100.0
MAX_ANNUAL_RATE_PERCENT = 1000.0


def monthly_rate(annual_rate_percent: float) -> float:
    """
    Effective monthly rate equivalent to an annual rate.

    True compounding, not annual / 12:
        (1 + 12%)^(1/12) - 1 = 0.9489%
    """
    return math.pow(1 + annual_rate_percent / 100.0, 1.0 / 12.0) - 1


def validate_position(position: InvestmentPosition) -> None:
    if position.current_balance_cents < 0:
        raise InvalidAmount(f"Balance cannot be negative: {position.current_balance_cents}")
    if position.monthly_contribution_cents < 0:
        raise InvalidAmount(
            f"Contribution cannot be negative: {position.monthly_contribution_cents}"
        )
    rate = position.annual_return_rate_percent
    if not MIN_ANNUAL_RATE_PERCENT <= rate <= MAX_ANNUAL_RATE_PERCENT:
        raise InvalidRate(
            f"Annual return rate {rate}% outside "
            f"[{MIN_ANNUAL_RATE_PERCENT}, {MAX_ANNUAL_RATE_PERCENT}]"
        )


def _validate_months(months: int) -> None:
    if months < 0:
        raise InvalidAmount(f"Projection horizon cannot be negative: {months}")


def _simulate(position: InvestmentPosition, months: int) -> Iterator[ProjectionPoint]:
    rate = monthly_rate(position.annual_return_rate_percent)
    contribution = float(position.monthly_contribution_cents)

    # Float accumulators; cents are only rounded on the emitted points
    balance = float(position.current_balance_cents)
    total_contributed = 0.0
    total_returns = 0.0

    for month in range(1, months + 1):
        monthly_return = balance * rate
        balance = balance + monthly_return + contribution
        total_contributed += contribution
        total_returns += monthly_return

        yield ProjectionPoint(
            month=month,
            balance_cents=round_half_away(balance),
            total_contributed_cents=round_half_away(total_contributed),
            total_returns_cents=round_half_away(total_returns),
        )


def iter_projection(position: InvestmentPosition, months: int) -> Iterator[ProjectionPoint]:
    """
    Lazily project one position month by month (months 1..months).

    Inputs are validated before the generator is returned, so bad input
    fails at call time rather than on first iteration.
    """
    validate_position(position)
    _validate_months(months)
    return _simulate(position, months)


def summarize(
    points: Sequence[ProjectionPoint],
    checkpoints: Iterable[int] = DEFAULT_CHECKPOINTS,
) -> Dict[int, ProjectionPoint]:
    """Pick checkpoint months out of a projection; months past the horizon are omitted"""
    return {
        checkpoint: points[checkpoint - 1]
        for checkpoint in checkpoints
        if 0 < checkpoint <= len(points)
    }


def project_single(
    position: InvestmentPosition,
    months: int,
    checkpoints: Iterable[int] = DEFAULT_CHECKPOINTS,
) -> ProjectionResult:
    """Materialized projection for one position, with checkpoint summary"""
    points = list(iter_projection(position, months))
    return ProjectionResult(
        current_balance_cents=position.current_balance_cents,
        points=points,
        summary=summarize(points, checkpoints),
    )


def project_many(
    positions: Sequence[InvestmentPosition],
    months: int,
    checkpoints: Iterable[int] = DEFAULT_CHECKPOINTS,
) -> ProjectionResult:
    """
    Combined projection for several positions.

    Each position compounds on its own; the rounded monthly figures are
    then added up per month. Rates are never averaged.
    """
    _validate_months(months)
    for position in positions:
        validate_position(position)

    balances = [0] * months
    contributed = [0] * months
    returns = [0] * months

    for position in positions:
        for index, point in enumerate(_simulate(position, months)):
            balances[index] += point.balance_cents
            contributed[index] += point.total_contributed_cents
            returns[index] += point.total_returns_cents

    points: List[ProjectionPoint] = [
        ProjectionPoint(
            month=index + 1,
            balance_cents=balances[index],
            total_contributed_cents=contributed[index],
            total_returns_cents=returns[index],
        )
        for index in range(months)
    ]

    return ProjectionResult(
        current_balance_cents=sum(p.current_balance_cents for p in positions),
        points=points,
        summary=summarize(points, checkpoints),
    )
