"""Expense split allocation across family members"""

from decimal import ROUND_CEILING, Decimal
from typing import List, Sequence

from family_finance.domain.exceptions import (
    DuplicateParticipant,
    EmptySplit,
    InvalidAmount,
    InvalidRate,
    SplitSumMismatch,
)
from family_finance.domain.models import ExpenseSplitShare, SplitAllocation
from family_finance.utils.money import Number, percentage_of_cents, to_decimal

SPLIT_SUM_TOLERANCE = Decimal("0.01")


def percentage_total(shares: Sequence[ExpenseSplitShare]) -> Decimal:
    # Decimal sum so 33.33 + 33.33 + 33.34 is exactly 100
    return sum((to_decimal(share.percentage) for share in shares), Decimal(0))


def max_rounding_drift(
    participants: int,
    total_amount_cents: int = 0,
    percentage_sum: Number = 100,
) -> int:
    """
    Worst-case |sum(allocated) - total| with independent per-share rounding.

    Rounding contributes at most participants - 1 cents. Shares that sum
    to something other than 100 (allowed within the tolerance) add
    ceil(total * |sum - 100| / 100) on top of that.

    Example:
        3 participants, any total, shares summing to 100 -> 2
        2 participants, 1000000, shares summing to 100.01 -> 1 + 100
    """
    excess = Decimal(abs(total_amount_cents)) * abs(to_decimal(percentage_sum) - 100) / 100
    return max(0, participants - 1) + int(excess.to_integral_value(rounding=ROUND_CEILING))


def rounding_drift(total_amount_cents: int, allocations: Sequence[SplitAllocation]) -> int:
    """Signed difference between what was allocated and the expense total"""
    return sum(a.amount_cents for a in allocations) - total_amount_cents


def validate_shares(shares: Sequence[ExpenseSplitShare]) -> None:
    """
    Reject a split before any money is allocated.

    Checks, in order: at least one share, each share within [0, 100],
    no repeated participant, shares sum to 100 within +/- 0.01.
    """
    if not shares:
        raise EmptySplit("At least one participant must be included")

    seen = set()
    for share in shares:
        if not 0 <= share.percentage <= 100:
            raise InvalidRate(
                f"Share for {share.participant_id} outside [0, 100]: {share.percentage}"
            )
        if share.participant_id in seen:
            raise DuplicateParticipant(f"Participant {share.participant_id} appears twice")
        seen.add(share.participant_id)

    total = percentage_total(shares)
    if abs(total - 100) > SPLIT_SUM_TOLERANCE:
        raise SplitSumMismatch(f"Split percentages sum to {total}, expected 100")


def _largest_remainder(total_amount_cents: int, shares: Sequence[ExpenseSplitShare]) -> List[int]:
    """
    Hamilton apportionment of total_amount_cents by share weight.

    Every share gets the floor of its proportional amount, then the cents
    left over go one each to the largest fractional remainders. Ties go to
    the earlier share. Results are never negative and a 0% share gets 0.
    """
    weights = [to_decimal(share.percentage) for share in shares]
    weight_sum = sum(weights, Decimal(0))
    if weight_sum == 0:
        return [0] * len(shares)

    exact = [total_amount_cents * weight / weight_sum for weight in weights]
    amounts = [int(value) for value in exact]

    leftover = total_amount_cents - sum(amounts)
    # sorted() is stable, so equal remainders keep their input order
    by_remainder = sorted(range(len(shares)), key=lambda i: exact[i] - amounts[i], reverse=True)
    for i in by_remainder[:leftover]:
        amounts[i] += 1

    return amounts


def allocate_split(
    total_amount_cents: int,
    shares: Sequence[ExpenseSplitShare],
    conserve_total: bool = False,
) -> List[SplitAllocation]:
    """
    Distribute an expense across participants by percentage.

    Each share is rounded independently (half away from zero), so the
    allocations may miss the total by up to
    max_rounding_drift(len(shares), total_amount_cents, percentage_total(shares))
    cents.

    With conserve_total=True the total is apportioned by largest remainder
    instead: allocations sum to the total exactly, none is negative, and
    each is within one cent of its proportional amount.

    Example:
        10000 split 33.33/33.33/33.34 -> [3333, 3333, 3334]
    """
    if total_amount_cents < 0:
        raise InvalidAmount(f"Expense amount cannot be negative: {total_amount_cents}")
    validate_shares(shares)

    if conserve_total:
        amounts = _largest_remainder(total_amount_cents, shares)
    else:
        amounts = [
            percentage_of_cents(total_amount_cents, share.percentage) for share in shares
        ]

    return [
        SplitAllocation(
            participant_id=share.participant_id,
            percentage=share.percentage,
            amount_cents=amount,
        )
        for share, amount in zip(shares, amounts)
    ]


def equal_shares(participant_ids: Sequence[str]) -> List[ExpenseSplitShare]:
    """
    Equal percentages for every participant, two decimals each.

    The last participant absorbs the remainder so the shares sum to 100.

    Example:
        3 participants -> 33.33, 33.33, 33.34
    """
    if not participant_ids:
        raise EmptySplit("At least one participant must be included")

    count = len(participant_ids)
    base_hundredths, remainder = divmod(10_000, count)

    shares = []
    for i, participant_id in enumerate(participant_ids):
        hundredths = base_hundredths + (remainder if i == count - 1 else 0)
        shares.append(ExpenseSplitShare(participant_id, hundredths / 100))
    return shares
