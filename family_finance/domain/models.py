"""Domain models - immutable dataclasses passed into and out of the engine"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from family_finance.domain.exceptions import ConfigurationError


@dataclass(frozen=True)
class TaxBracket:
    """One band of a progressive table; upper_cents=None means unbounded"""

    lower_cents: int
    upper_cents: Optional[int]
    rate: float  # 0.075 = 7.5%
    deduction_cents: int = 0

    @property
    def is_unbounded(self) -> bool:
        return self.upper_cents is None

    def contains(self, amount_cents: int) -> bool:
        """Upper edge is inclusive, unbounded compares as +infinity"""
        return self.is_unbounded or amount_cents <= self.upper_cents


@dataclass(frozen=True)
class TaxBracketTable:
    """
    Ordered, validated bracket table.

    Invariants checked on construction:
    - at least one bracket, first lower bound >= 0
    - contiguous: each lower bound equals the previous upper bound
    - every bounded bracket has upper > lower
    - exactly one unbounded bracket, and it is the last one
    - rate in [0, 1], deduction >= 0
    """

    brackets: Tuple[TaxBracket, ...]
    name: str = "table"

    def __post_init__(self) -> None:
        # Stored as a tuple, callers may pass a list
        object.__setattr__(self, "brackets", tuple(self.brackets))

        if not self.brackets:
            raise ConfigurationError(f"{self.name}: bracket table is empty")

        if self.brackets[0].lower_cents < 0:
            raise ConfigurationError(f"{self.name}: first lower bound is negative")

        for index, bracket in enumerate(self.brackets):
            if not 0 <= bracket.rate <= 1:
                raise ConfigurationError(
                    f"{self.name}: bracket {index} rate {bracket.rate} outside [0, 1]"
                )
            if bracket.deduction_cents < 0:
                raise ConfigurationError(f"{self.name}: bracket {index} has negative deduction")

            is_last = index == len(self.brackets) - 1
            if bracket.is_unbounded != is_last:
                raise ConfigurationError(
                    f"{self.name}: exactly the last bracket must be unbounded"
                )
            if not bracket.is_unbounded and bracket.upper_cents <= bracket.lower_cents:
                raise ConfigurationError(f"{self.name}: bracket {index} upper <= lower")

            if index > 0:
                previous = self.brackets[index - 1]
                if bracket.lower_cents != previous.upper_cents:
                    raise ConfigurationError(
                        f"{self.name}: bracket {index} is not contiguous with bracket {index - 1}"
                    )

    def __iter__(self):
        return iter(self.brackets)

    def __len__(self) -> int:
        return len(self.brackets)


@dataclass(frozen=True)
class TaxConfiguration:
    """Yearly tax parameters the income calculator needs"""

    year: int
    inss_table: TaxBracketTable
    irpf_table: TaxBracketTable
    dependent_deduction_cents: int
    welfare_fund_rate: float  # FGTS, 0.08 = 8%


class IncomeKind(str, Enum):
    SALARIED = "salaried"  # CLT
    SELF_EMPLOYED = "self_employed"  # PJ


@dataclass(frozen=True)
class SalariedIncome:
    """CLT-style employment income"""

    gross_monthly_cents: int
    food_voucher_cents: int = 0
    transport_voucher_cents: int = 0
    bonus_cents: int = 0
    dependents: int = 0

    kind = IncomeKind.SALARIED

    @property
    def benefits_cents(self) -> int:
        return self.food_voucher_cents + self.transport_voucher_cents + self.bonus_cents


@dataclass(frozen=True)
class SelfEmployedIncome:
    """PJ-style business income taxed at a flat Simples Nacional rate"""

    gross_monthly_cents: int
    flat_rate_percent: float  # 6.0 = 6%
    fixed_draw_cents: int = 0  # pro-labore
    food_voucher_cents: int = 0
    transport_voucher_cents: int = 0
    bonus_cents: int = 0

    kind = IncomeKind.SELF_EMPLOYED

    @property
    def benefits_cents(self) -> int:
        return self.food_voucher_cents + self.transport_voucher_cents + self.bonus_cents


IncomeRecord = Union[SalariedIncome, SelfEmployedIncome]


@dataclass(frozen=True)
class TaxBreakdown:
    """Per-tax figures behind a net income; unused components stay 0"""

    inss_cents: int = 0
    irpf_cents: int = 0
    irpf_base_cents: int = 0
    welfare_fund_cents: int = 0  # informational, never deducted
    flat_tax_cents: int = 0
    fixed_draw_cents: int = 0


@dataclass(frozen=True)
class NetIncome:
    """Result of the net-pay calculation"""

    kind: IncomeKind
    gross_cents: int
    benefits_cents: int
    net_cents: int
    breakdown: TaxBreakdown

    @property
    def withheld_cents(self) -> int:
        b = self.breakdown
        return b.inss_cents + b.irpf_cents + b.flat_tax_cents


@dataclass(frozen=True)
class ExpenseSplitShare:
    """A participant's percentage of one expense"""

    participant_id: str
    percentage: float  # 50.0 = 50%


@dataclass(frozen=True)
class SplitAllocation:
    participant_id: str
    percentage: float
    amount_cents: int


@dataclass(frozen=True)
class InvestmentPosition:
    """One investment held by the family"""

    current_balance_cents: int
    monthly_contribution_cents: int
    annual_return_rate_percent: float  # 12.0 = 12% a.a.


@dataclass(frozen=True)
class ProjectionPoint:
    """Balance at the end of a projected month"""

    month: int
    balance_cents: int
    total_contributed_cents: int
    total_returns_cents: int


@dataclass(frozen=True)
class ProjectionResult:
    current_balance_cents: int
    points: List[ProjectionPoint]
    summary: Dict[int, ProjectionPoint] = field(default_factory=dict)

    @property
    def final(self) -> Optional[ProjectionPoint]:
        return self.points[-1] if self.points else None


@dataclass(frozen=True)
class EmergencyFundPlan:
    """Emergency fund goal with the figures derived from it"""

    target_months: int
    monthly_expenses_cents: int
    target_amount_cents: int
    current_amount_cents: int
    remaining_amount_cents: int
    monthly_goal_cents: int
    estimated_months: Optional[int]  # None = unreachable at this monthly goal
    completion_percent: float

    @property
    def is_reachable(self) -> bool:
        return self.estimated_months is not None


@dataclass(frozen=True)
class GoalProjectionPoint:
    month: int
    balance_cents: int
    is_complete: bool


@dataclass(frozen=True)
class MonthlyGoalSuggestion:
    """Suggested emergency fund contribution and the income figures behind it"""

    suggested_cents: int
    total_income_cents: int
    total_expenses_cents: int
    investments_cents: int
    available_cents: int  # may be negative
    percentage_of_income: float  # suggested / available x 100, 0 when nothing is available


class AlertSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class AlertType(str, Enum):
    HIGH_EXPENSES = "high_expenses"
    EMERGENCY_FUND = "emergency_fund"
    INVESTMENT = "investment"
    NEGATIVE_BALANCE = "negative_balance"


@dataclass(frozen=True)
class Alert:
    """
    A threshold crossed by the family budget.

    value is a percentage for ratio alerts, cents for NEGATIVE_BALANCE,
    and None when the ratio is undefined (no net income).
    """

    type: AlertType
    severity: AlertSeverity
    title: str
    message: str
    value: Optional[float] = None


@dataclass(frozen=True)
class FinancialHealth:
    score: int  # 0-100
    available_cents: int
    expense_ratio_percent: Optional[float]
    investment_ratio_percent: Optional[float]
    alerts: List[Alert] = field(default_factory=list)
