"""Command line front-end for the payoff engine."""

from __future__ import annotations

import math
from typing import Sequence

import click

from .config import BaseConfig
from .logging_config import get_logger, setup_logging
from .models.debt import Debt, DebtType
from .services import advice as advice_service
from .services.debts import (
    PROJECTION_ISOLATED,
    PROJECTION_SIMULATED,
    DebtStrategy,
    StrategyType,
    calculate_strategy,
    compare_strategies,
)

logger = get_logger(__name__)

DEBT_SPEC_HELP = "Debt as name:balance:rate:payment[:type[:minimum]]. Repeatable."


def parse_debt_spec(spec: str) -> Debt:
    """Turn ``name:balance:rate:payment[:type[:minimum]]`` into a :class:`Debt`."""

    parts = [part.strip() for part in spec.split(":")]
    if len(parts) < 4 or len(parts) > 6:
        raise ValueError(f"Expected name:balance:rate:payment[:type[:minimum]], got {spec!r}")

    name = parts[0]
    if not name:
        raise ValueError(f"Debt name is empty in {spec!r}")
    try:
        balance, rate, payment = (float(value) for value in parts[1:4])
        minimum = float(parts[5]) if len(parts) == 6 else payment
    except ValueError as exc:
        raise ValueError(f"Non-numeric amount in {spec!r}") from exc

    debt_type = DebtType.OTHER
    if len(parts) >= 5 and parts[4]:
        try:
            debt_type = DebtType(parts[4])
        except ValueError as exc:
            choices = ", ".join(t.value for t in DebtType)
            raise ValueError(f"Unknown debt type {parts[4]!r}; choose from {choices}") from exc

    return Debt(
        id=name,
        name=name,
        type=debt_type,
        total_amount=balance,
        current_balance=balance,
        interest_rate=rate,
        minimum_payment=minimum,
        monthly_payment=payment,
    )


def _parse_debts(ctx: click.Context, param: click.Parameter, value: Sequence[str]) -> list[Debt]:
    try:
        return [parse_debt_spec(spec) for spec in value]
    except ValueError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param=param) from exc


def _format_months(months: float) -> str:
    return "never" if math.isinf(months) else f"{int(months)} months"


def _echo_strategy(strategy: DebtStrategy) -> None:
    click.echo(f"Strategy: {strategy.type.value}")
    for debt in strategy.debts:
        click.echo(
            f"  {debt.order}. {debt.name}: balance {debt.current_balance:,.2f} "
            f"@ {debt.interest_rate:g}% -> {_format_months(debt.payoff_month)}, "
            f"interest {debt.total_interest_paid:,.2f}"
        )
    if not strategy.converged:
        click.echo(
            f"Debt-free date: does not converge within {strategy.months_to_payoff} months"
        )
    else:
        click.echo(f"Debt-free in: {strategy.months_to_payoff} months")
    click.echo(f"Total interest: {strategy.total_interest:,.2f}")
    click.echo(f"Total paid: {strategy.total_paid:,.2f}")


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Plan debt payoff with the avalanche, snowball or a custom order."""

    config = BaseConfig()
    setup_logging(config)
    ctx.obj = config


debt_option = click.option(
    "--debt", "debts", multiple=True, required=True, callback=_parse_debts, help=DEBT_SPEC_HELP
)
extra_option = click.option(
    "--extra", type=float, default=0.0, show_default=True, help="Extra monthly payment."
)


@cli.command("plan")
@debt_option
@extra_option
@click.option(
    "--strategy",
    type=click.Choice([s.value for s in StrategyType]),
    default=StrategyType.AVALANCHE.value,
    show_default=True,
)
@click.option("--order", "custom_order", multiple=True, help="Debt name, in priority order.")
@click.option(
    "--simulated", is_flag=True, default=False, help="Per-debt figures from the simulation."
)
@click.pass_obj
def plan_command(
    config: BaseConfig,
    debts: list[Debt],
    extra: float,
    strategy: str,
    custom_order: tuple[str, ...],
    simulated: bool,
) -> None:
    """Show the payoff plan for one strategy."""

    if strategy == StrategyType.CUSTOM.value and not custom_order:
        raise click.UsageError("--strategy custom needs at least one --order.")

    result = calculate_strategy(
        strategy,
        debts,
        extra,
        custom_order=custom_order or None,
        projection=PROJECTION_SIMULATED if simulated else PROJECTION_ISOLATED,
        max_months=config.MAX_SIMULATION_MONTHS,
    )
    logger.info("Plan computed", extra={"strategy": strategy, "debts": len(debts)})
    _echo_strategy(result)


@cli.command("compare")
@debt_option
@extra_option
@click.pass_obj
def compare_command(config: BaseConfig, debts: list[Debt], extra: float) -> None:
    """Compare avalanche against snowball."""

    comparison = compare_strategies(debts, extra, max_months=config.MAX_SIMULATION_MONTHS)
    _echo_strategy(comparison.avalanche)
    click.echo("")
    _echo_strategy(comparison.snowball)
    click.echo("")
    click.echo(f"Avalanche saves {comparison.savings:,.2f} in interest")
    click.echo(f"Avalanche saves {comparison.months_saved} months")


@cli.command("advice")
@debt_option
@click.option("--income", type=float, required=True, help="Monthly income.")
@click.pass_obj
def advice_command(config: BaseConfig, debts: list[Debt], income: float) -> None:
    """Restructuring suggestions and debt-to-income summary."""

    advisor = config.advisor()
    summary = advice_service.summarize_debts(debts, income, config=advisor)
    result = advice_service.restructuring_advice(
        debts, income, config=advisor, max_months=config.MAX_SIMULATION_MONTHS
    )

    click.echo(f"Total balance: {summary.total_balance:,.2f}")
    click.echo(f"Monthly payments: {summary.total_monthly_payments:,.2f}")
    click.echo(f"Weighted average rate: {summary.weighted_average_rate:.2f}%")
    click.echo(
        f"Debt-to-income: {summary.debt_to_income_ratio:.1f}% "
        f"({summary.debt_to_income_status.value})"
    )
    click.echo(f"Consolidate: {'yes' if result.consolidation_suggestion else 'no'}")
    click.echo(f"Refinance: {'yes' if result.refinancing_suggestion else 'no'}")
    if result.consolidation_suggestion:
        click.echo(f"Potential savings: {result.potential_savings:,.2f}")
    for reason in result.reasons:
        click.echo(f"- {reason}")
    for resource in result.resources:
        click.echo(f"* {resource.name}: {resource.url or resource.description}")


if __name__ == "__main__":  # pragma: no cover
    cli()
