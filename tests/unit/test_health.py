"""Unit tests for the financial health score and budget alerts"""

import pytest
from family_finance.domain.exceptions import InvalidAmount, InvalidRate
from family_finance.domain.health import (
    assess_financial_health,
    financial_health_score,
    generate_alerts,
)
from family_finance.domain.models import AlertSeverity, AlertType


def test_healthy_budget_scores_full_marks():
    """Expenses 40%, investments 20%, fund complete, money left over"""
    assert financial_health_score(1_000_000, 400_000, 200_000, 100.0) == 100
    assert generate_alerts(1_000_000, 400_000, 200_000, 100.0) == []


@pytest.mark.parametrize(
    "expenses,expected",
    [
        (499_999, 30 + 20),
        (500_000, 20 + 20),
        (699_999, 20 + 20),
        (700_000, 10 + 20),
        (899_999, 10 + 20),
        (900_000, 0 + 20),
        (1_000_000, 0),
    ],
)
def test_expense_ratio_tiers(expenses, expected):
    """Thresholds are strict: exactly 50% of net income is the 20-point tier"""
    assert financial_health_score(1_000_000, expenses) == expected


@pytest.mark.parametrize(
    "investments,points",
    [(0, 0), (99_999, 5), (100_000, 15), (199_999, 15), (200_000, 25)],
)
def test_investment_ratio_tiers(investments, points):
    """No expenses: 30 for the expense ratio and 20 for the balance"""
    assert financial_health_score(1_000_000, 0, investments) == 30 + points + 20


@pytest.mark.parametrize(
    "completion,points",
    [(None, 0), (0.0, 0), (0.1, 5), (49.9, 5), (50.0, 15), (99.9, 15), (100.0, 25)],
)
def test_emergency_fund_tiers(completion, points):
    """Zero budget isolates the emergency fund points"""
    assert financial_health_score(0, 0, 0, completion) == points


def test_no_net_income_earns_no_expense_points():
    assert financial_health_score(0, 0) == 0


def test_expenses_exceed_income_alerts():
    alerts = generate_alerts(100_000, 150_000)

    assert [a.type for a in alerts] == [
        AlertType.HIGH_EXPENSES,
        AlertType.EMERGENCY_FUND,
        AlertType.INVESTMENT,
        AlertType.NEGATIVE_BALANCE,
    ]
    high_expenses, emergency, investment, balance = alerts
    assert high_expenses.severity is AlertSeverity.CRITICAL
    assert high_expenses.value == 150.0
    assert emergency.severity is AlertSeverity.WARNING
    assert investment.title == "Start investing"
    assert balance.severity is AlertSeverity.CRITICAL
    assert balance.value == -50_000.0


@pytest.mark.parametrize(
    "expenses,severity",
    [(85_000, AlertSeverity.WARNING), (80_000, AlertSeverity.INFO), (75_000, AlertSeverity.INFO)],
)
def test_high_expense_severity(expenses, severity):
    alerts = generate_alerts(100_000, expenses, 10_000, 100.0)

    assert len(alerts) == 1
    assert alerts[0].type is AlertType.HIGH_EXPENSES
    assert alerts[0].severity is severity
    assert alerts[0].value == pytest.approx(expenses / 1_000)


def test_expenses_at_seventy_percent_do_not_alert():
    assert generate_alerts(100_000, 70_000, 10_000, 100.0) == []


@pytest.mark.parametrize(
    "completion,severity",
    [(0.0, AlertSeverity.WARNING), (29.9, AlertSeverity.WARNING), (30.0, AlertSeverity.INFO)],
)
def test_incomplete_emergency_fund(completion, severity):
    alerts = generate_alerts(100_000, 10_000, 10_000, completion)

    assert len(alerts) == 1
    assert alerts[0].type is AlertType.EMERGENCY_FUND
    assert alerts[0].severity is severity
    assert alerts[0].value == completion


def test_low_investments():
    alerts = generate_alerts(100_000, 10_000, 5_000, 100.0)

    assert len(alerts) == 1
    assert alerts[0].type is AlertType.INVESTMENT
    assert alerts[0].title == "Low investments"
    assert alerts[0].value == pytest.approx(5.0)


def test_expense_ratio_undefined_without_income():
    alerts = generate_alerts(0, 100, 0, 100.0)

    assert alerts[0].type is AlertType.HIGH_EXPENSES
    assert alerts[0].value is None


@pytest.mark.parametrize(
    "args,error",
    [
        ((-1, 0, 0, None), InvalidAmount),
        ((0, -1, 0, None), InvalidAmount),
        ((0, 0, -1, None), InvalidAmount),
        ((0, 0, 0, -0.1), InvalidRate),
        ((0, 0, 0, 100.1), InvalidRate),
    ],
)
def test_rejects_bad_input(args, error):
    with pytest.raises(error):
        financial_health_score(*args)
    with pytest.raises(error):
        generate_alerts(*args)


def test_assess_combines_score_and_alerts():
    health = assess_financial_health(1_000_000, 750_000, 50_000, 40.0)

    # 10 (expenses 75%) + 5 (investments 5%) + 5 (fund 40%) + 20 (200000 left)
    assert health.score == 40
    assert health.available_cents == 200_000
    assert health.expense_ratio_percent == pytest.approx(75.0)
    assert health.investment_ratio_percent == pytest.approx(5.0)
    assert [(a.type, a.severity) for a in health.alerts] == [
        (AlertType.HIGH_EXPENSES, AlertSeverity.INFO),
        (AlertType.EMERGENCY_FUND, AlertSeverity.INFO),
        (AlertType.INVESTMENT, AlertSeverity.INFO),
    ]


def test_assess_without_income_has_no_ratios():
    health = assess_financial_health(0, 0)

    assert health.expense_ratio_percent is None
    assert health.investment_ratio_percent is None
