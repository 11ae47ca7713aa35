"""Command-line entry point for running the engine by hand"""

import argparse
import json
import logging
import sys
import time
from dataclasses import asdict
from typing import Any, Callable, Dict, Optional, Sequence

from family_finance.config import settings
from family_finance.domain.emergency import plan_goal, project_goal, suggest_monthly_goal
from family_finance.domain.exceptions import ConfigurationError, InvalidAmount, ValidationError
from family_finance.domain.health import assess_financial_health
from family_finance.domain.income import compute_net_income_with
from family_finance.domain.models import (
    ExpenseSplitShare,
    InvestmentPosition,
    SalariedIncome,
    SelfEmployedIncome,
    TaxConfiguration,
)
from family_finance.domain.projections import project_single
from family_finance.domain.splits import (
    allocate_split,
    max_rounding_drift,
    percentage_total,
    rounding_drift,
)
from family_finance.domain.tax_tables import (
    DEFAULT_TAX_CONFIGURATION_2025,
    resolve_tax_configuration,
)
from family_finance.infrastructure.observability.logging import log_calculation, setup_logging
from family_finance.infrastructure.tax_config import load_tax_configuration
from family_finance.utils.money import format_brl, parse_money_string

logger = logging.getLogger(__name__)


def _money(text: str) -> int:
    """argparse type: Brazilian money string -> cents"""
    try:
        return parse_money_string(text)
    except InvalidAmount as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _share(text: str) -> ExpenseSplitShare:
    """argparse type: 'participant=percentage'"""
    participant, sep, percentage = text.partition("=")
    if not sep or not participant:
        raise argparse.ArgumentTypeError(f"Expected participant=percentage, got {text!r}")
    try:
        return ExpenseSplitShare(participant, float(percentage.replace(",", ".")))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid percentage in {text!r}") from e


def _tax_configuration() -> TaxConfiguration:
    configured = None
    if settings.tax_config_path:
        configured = load_tax_configuration(settings.tax_config_path)
    return resolve_tax_configuration(configured, DEFAULT_TAX_CONFIGURATION_2025)


def _check_horizon(months: int) -> None:
    if months > settings.max_projection_months:
        raise InvalidAmount(
            f"Projection horizon {months} exceeds {settings.max_projection_months} months"
        )


def run_net_income(args: argparse.Namespace) -> Dict[str, Any]:
    benefits = dict(
        food_voucher_cents=args.food_voucher,
        transport_voucher_cents=args.transport_voucher,
        bonus_cents=args.bonus,
    )
    if args.kind == "self-employed":
        record = SelfEmployedIncome(
            gross_monthly_cents=args.gross,
            flat_rate_percent=args.flat_rate,
            fixed_draw_cents=args.fixed_draw,
            **benefits,
        )
    else:
        record = SalariedIncome(
            gross_monthly_cents=args.gross,
            dependents=args.dependents,
            **benefits,
        )

    result = compute_net_income_with(record, _tax_configuration())
    output = asdict(result)
    output["withheld_cents"] = result.withheld_cents
    output["net_formatted"] = format_brl(result.net_cents)
    return output


def run_split(args: argparse.Namespace) -> Dict[str, Any]:
    allocations = allocate_split(args.total, args.shares, conserve_total=args.conserve)
    if args.conserve:
        max_drift = 0
    else:
        max_drift = max_rounding_drift(
            len(allocations), args.total, percentage_total(args.shares)
        )
    return {
        "total_cents": args.total,
        "allocated_cents": sum(a.amount_cents for a in allocations),
        "drift_cents": rounding_drift(args.total, allocations),
        "max_drift_cents": max_drift,
        "allocations": [asdict(a) for a in allocations],
    }


def run_project(args: argparse.Namespace) -> Dict[str, Any]:
    _check_horizon(args.months)
    position = InvestmentPosition(
        current_balance_cents=args.balance,
        monthly_contribution_cents=args.contribution,
        annual_return_rate_percent=args.rate,
    )
    result = project_single(position, args.months, settings.projection_checkpoints)
    output = asdict(result)
    if args.summary_only:
        del output["points"]
    return output


def run_emergency(args: argparse.Namespace) -> Dict[str, Any]:
    _check_horizon(args.projection_months)
    plan = plan_goal(args.target_months, args.monthly_expenses, args.current, args.monthly_goal)
    output = asdict(plan)
    output["completion_formatted"] = f"{plan.completion_percent:.1f}%"

    if args.income is not None:
        suggestion = suggest_monthly_goal(
            args.income,
            args.monthly_expenses,
            args.investments,
            args.target_months,
            args.desired_months,
        )
        output["suggestion"] = asdict(suggestion)
    if args.projection_months:
        output["projection"] = [
            asdict(point)
            for point in project_goal(
                args.current, args.monthly_goal, plan.target_amount_cents, args.projection_months
            )
        ]
    return output


def run_health(args: argparse.Namespace) -> Dict[str, Any]:
    health = assess_financial_health(
        args.net_income, args.expenses, args.investments, args.emergency_completion
    )
    output = asdict(health)
    output["available_formatted"] = format_brl(health.available_cents)
    return output


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="family-finance",
        description="Family finance calculations (amounts in BRL, e.g. '5.000,00')",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    income = commands.add_parser("net-income", help="Net monthly pay (CLT or PJ)")
    income.add_argument("--gross", type=_money, required=True)
    income.add_argument("--kind", choices=["salaried", "self-employed"], default="salaried")
    income.add_argument("--dependents", type=int, default=0)
    income.add_argument("--food-voucher", type=_money, default=0)
    income.add_argument("--transport-voucher", type=_money, default=0)
    income.add_argument("--bonus", type=_money, default=0)
    income.add_argument("--flat-rate", type=float, default=6.0, help="Simples Nacional %% (PJ)")
    income.add_argument("--fixed-draw", type=_money, default=0, help="Pro-labore (PJ)")
    income.set_defaults(handler=run_net_income)

    split = commands.add_parser("split", help="Split an expense by percentage")
    split.add_argument("--total", type=_money, required=True)
    split.add_argument("--share", dest="shares", type=_share, action="append", required=True)
    split.add_argument(
        "--conserve",
        action="store_true",
        help="Apportion by largest remainder so shares sum to the total",
    )
    split.set_defaults(handler=run_split)

    project = commands.add_parser("project", help="Compound growth of an investment")
    project.add_argument("--balance", type=_money, default=0)
    project.add_argument("--contribution", type=_money, default=0)
    project.add_argument("--rate", type=float, required=True, help="Annual return %%")
    project.add_argument("--months", type=int, default=60)
    project.add_argument("--summary-only", action="store_true")
    project.set_defaults(handler=run_project)

    emergency = commands.add_parser("emergency", help="Emergency fund goal")
    emergency.add_argument("--target-months", type=int, default=6)
    emergency.add_argument("--monthly-expenses", type=_money, required=True)
    emergency.add_argument("--current", type=_money, default=0)
    emergency.add_argument("--monthly-goal", type=_money, default=0)
    emergency.add_argument("--income", type=_money, default=None)
    emergency.add_argument("--investments", type=_money, default=0)
    emergency.add_argument("--desired-months", type=int, default=0)
    emergency.add_argument("--projection-months", type=int, default=0)
    emergency.set_defaults(handler=run_emergency)

    health = commands.add_parser("health", help="Budget health score and alerts")
    health.add_argument("--net-income", type=_money, required=True)
    health.add_argument("--expenses", type=_money, required=True)
    health.add_argument("--investments", type=_money, default=0)
    health.add_argument(
        "--emergency-completion", type=float, default=None, help="Emergency fund %% complete"
    )
    health.set_defaults(handler=run_health)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    setup_logging(settings.log_level)
    args = build_parser().parse_args(argv)
    handler: Callable[[argparse.Namespace], Dict[str, Any]] = args.handler

    start_time = time.perf_counter()
    try:
        output = handler(args)
    except ValidationError as e:
        logger.warning("Invalid input", extra={"operation": args.command, "error": str(e)})
        print(json.dumps({"error": type(e).__name__, "detail": str(e)}), file=sys.stderr)
        return 2
    except ConfigurationError as e:
        logger.error("Configuration error", extra={"operation": args.command, "error": str(e)})
        print(json.dumps({"error": type(e).__name__, "detail": str(e)}), file=sys.stderr)
        return 1

    duration_ms = (time.perf_counter() - start_time) * 1000
    log_calculation(args.command, round(duration_ms, 3))

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
