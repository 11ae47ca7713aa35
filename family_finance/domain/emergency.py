"""Emergency fund planning - target, progress and monthly contribution"""

from decimal import Decimal
from typing import List

from family_finance.domain.exceptions import InvalidAmount, InvalidTargetMonths
from family_finance.domain.models import (
    EmergencyFundPlan,
    GoalProjectionPoint,
    MonthlyGoalSuggestion,
)
from family_finance.utils.money import percentage_of, round_half_away

MIN_TARGET_MONTHS = 3
MAX_TARGET_MONTHS = 24

# Share of available income a suggested contribution may take
MAX_SAVINGS_SHARE = Decimal("0.30")
DEFAULT_SAVINGS_SHARE = Decimal("0.15")


def _validate_target_months(target_months: int) -> None:
    if not MIN_TARGET_MONTHS <= target_months <= MAX_TARGET_MONTHS:
        raise InvalidTargetMonths(
            f"Target months must be within [{MIN_TARGET_MONTHS}, {MAX_TARGET_MONTHS}]: "
            f"{target_months}"
        )


def _validate_amounts(**amounts: int) -> None:
    for name, value in amounts.items():
        if value < 0:
            raise InvalidAmount(f"{name} cannot be negative: {value}")


def plan_goal(
    target_months: int,
    monthly_expenses_cents: int,
    current_amount_cents: int,
    monthly_goal_cents: int,
) -> EmergencyFundPlan:
    """
    Evaluate an emergency fund goal.

    - target = monthly expenses x target months
    - remaining = target - current, never below 0
    - estimated months = ceil(remaining / monthly goal); 0 when nothing
      remains, None when a positive remainder can never be reached
    - completion = current / target as a percentage, capped at 100

    Example:
        6 months of R$ 2.000,00, nothing saved, R$ 500,00/month
        -> target R$ 12.000,00, 24 months, 0%
    """
    _validate_target_months(target_months)
    _validate_amounts(
        monthly_expenses_cents=monthly_expenses_cents,
        current_amount_cents=current_amount_cents,
        monthly_goal_cents=monthly_goal_cents,
    )

    target_amount = monthly_expenses_cents * target_months
    remaining = max(0, target_amount - current_amount_cents)

    if remaining == 0:
        estimated_months = 0
    elif monthly_goal_cents <= 0:
        estimated_months = None
    else:
        estimated_months = -(-remaining // monthly_goal_cents)

    completion = 0.0
    if target_amount > 0:
        completion = min(100.0, current_amount_cents / target_amount * 100.0)

    return EmergencyFundPlan(
        target_months=target_months,
        monthly_expenses_cents=monthly_expenses_cents,
        target_amount_cents=target_amount,
        current_amount_cents=current_amount_cents,
        remaining_amount_cents=remaining,
        monthly_goal_cents=monthly_goal_cents,
        estimated_months=estimated_months,
        completion_percent=completion,
    )


def suggest_monthly_goal(
    total_income_cents: int,
    total_expenses_cents: int,
    investments_cents: int,
    target_months: int,
    desired_months_to_complete: int = 0,
) -> MonthlyGoalSuggestion:
    """
    Suggest a monthly contribution from what is left after expenses and
    investments.

    With a desired completion horizon the contribution is the target spread
    over that many months, capped at 30% of available income. Without one
    it defaults to 15% of available income. Nothing is suggested when
    nothing is available.

    percentage_of_income is the suggestion as a share of available income.
    """
    _validate_target_months(target_months)
    _validate_amounts(
        total_income_cents=total_income_cents,
        total_expenses_cents=total_expenses_cents,
        investments_cents=investments_cents,
    )

    available = total_income_cents - total_expenses_cents - investments_cents
    if available <= 0:
        suggested = 0
    elif desired_months_to_complete > 0:
        target_amount = total_expenses_cents * target_months
        monthly_goal = round_half_away(Decimal(target_amount) / desired_months_to_complete)
        max_safe_goal = round_half_away(available * MAX_SAVINGS_SHARE)
        suggested = min(monthly_goal, max_safe_goal)
    else:
        suggested = round_half_away(available * DEFAULT_SAVINGS_SHARE)

    return MonthlyGoalSuggestion(
        suggested_cents=suggested,
        total_income_cents=total_income_cents,
        total_expenses_cents=total_expenses_cents,
        investments_cents=investments_cents,
        available_cents=available,
        percentage_of_income=percentage_of(suggested, available) if available > 0 else 0.0,
    )


def project_goal(
    current_cents: int,
    monthly_goal_cents: int,
    target_cents: int,
    months: int,
) -> List[GoalProjectionPoint]:
    """
    Month-by-month fund balance while contributing monthly_goal_cents.

    The balance stops at the target instead of overshooting it.
    """
    _validate_amounts(
        current_cents=current_cents,
        monthly_goal_cents=monthly_goal_cents,
        target_cents=target_cents,
        months=months,
    )

    balance = current_cents
    projection = []
    for month in range(1, months + 1):
        if balance < target_cents:
            balance = min(balance + monthly_goal_cents, target_cents)

        projection.append(
            GoalProjectionPoint(
                month=month,
                balance_cents=balance,
                is_complete=balance >= target_cents,
            )
        )

    return projection
