"""Rich rendering for calcdeck results.

All display formatting (currency, fixed decimals, labels) lives here; the
formula modules return raw floats.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from rich.console import Console
from rich.table import Table

from calcdeck.arith import format_number
from calcdeck.models import (
    AgeDetails,
    AmortizationResult,
    BMIResult,
    CalorieResult,
    DateInterval,
    GPAResult,
    HistoryEntry,
    InvestmentGrowth,
    ScheduleEntry,
    StatisticsResult,
)


def fmt_money(value: float, decimals: int = 2) -> str:
    """Format a currency amount: $1,234.57."""
    if value != value:  # nan
        return "--"
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.{decimals}f}"


def fmt_num(value: float, decimals: int = 2) -> str:
    """Fixed-decimal number, '--' for nan."""
    if value != value:
        return "--"
    return f"{value:,.{decimals}f}"


def _plural(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


def _key_value_table(title: str, rows: Iterable[tuple[str, str]]) -> Table:
    table = Table(title=title, show_header=False)
    table.add_column("Metric", style="dim", min_width=18)
    table.add_column("Value", justify="right", min_width=12)
    for label, value in rows:
        table.add_row(label, value)
    return table


def _print(console: Console, table: Table) -> None:
    console.print()
    console.print(table)
    console.print()


def render_value(console: Console, title: str, label: str, value: str) -> None:
    _print(console, _key_value_table(title, [(label, value)]))


def render_amortization(
    console: Console, title: str, result: AmortizationResult, decimals: int = 2
) -> None:
    _print(console, _key_value_table(title, [
        ("Principal", fmt_money(result.principal, decimals)),
        ("Monthly payment", f"[green]{fmt_money(result.monthly_payment, decimals)}[/green]"),
        ("Total payments", fmt_money(result.total_payments, decimals)),
        ("Total interest", fmt_money(result.total_interest, decimals)),
    ]))


def render_schedule(console: Console, schedule: list[ScheduleEntry], decimals: int = 2) -> None:
    table = Table(title="Amortization Schedule", show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Payment", justify="right")
    table.add_column("Principal", justify="right", style="green")
    table.add_column("Interest", justify="right", style="yellow")
    table.add_column("Balance", justify="right")
    for entry in schedule:
        table.add_row(
            str(entry.period),
            fmt_money(entry.payment, decimals),
            fmt_money(entry.principal_paid, decimals),
            fmt_money(entry.interest_paid, decimals),
            fmt_money(entry.balance, decimals),
        )
    _print(console, table)


def render_investment(console: Console, result: InvestmentGrowth, decimals: int = 2) -> None:
    _print(console, _key_value_table("Investment Growth", [
        ("Initial investment", fmt_money(result.principal, decimals)),
        ("Monthly contribution", fmt_money(result.monthly_contribution, decimals)),
        ("Total contributions", fmt_money(result.total_contributions, decimals)),
        ("Total gains", fmt_money(result.total_gains, decimals)),
        ("Final value", f"[green]{fmt_money(result.total_value, decimals)}[/green]"),
    ]))


_BMI_COLORS = {
    "Underweight": "yellow",
    "Normal weight": "green",
    "Overweight": "yellow",
    "Obese": "red",
}


def render_bmi(console: Console, result: BMIResult) -> None:
    color = _BMI_COLORS.get(result.category, "white")
    _print(console, _key_value_table("BMI", [
        ("BMI", fmt_num(result.bmi, 1)),
        ("Category", f"[{color}]{result.category}[/{color}]"),
    ]))


def render_calories(console: Console, result: CalorieResult) -> None:
    _print(console, _key_value_table("Daily Calories", [
        ("BMR", fmt_num(result.bmr, 0)),
        ("Maintenance", f"[green]{fmt_num(result.maintenance_calories, 0)}[/green]"),
        ("Weight loss", fmt_num(result.weight_loss_calories, 0)),
        ("Weight gain", fmt_num(result.weight_gain_calories, 0)),
    ]))


def render_statistics(console: Console, result: StatisticsResult, decimals: int = 2) -> None:
    mode = ", ".join(format_number(m) for m in result.mode) or "--"
    _print(console, _key_value_table("Statistics", [
        ("Count", str(result.count)),
        ("Mean", fmt_num(result.mean, decimals)),
        ("Median", fmt_num(result.median, decimals)),
        ("Mode", mode),
        ("Min", fmt_num(result.minimum, decimals)),
        ("Max", fmt_num(result.maximum, decimals)),
        ("Range", fmt_num(result.range, decimals)),
        ("Variance", fmt_num(result.variance, decimals)),
        ("Std. deviation", fmt_num(result.standard_deviation, decimals)),
    ]))


def render_interval(console: Console, title: str, interval: DateInterval) -> None:
    _print(console, _key_value_table(title, [
        ("Difference", ", ".join([
            _plural(interval.years, "year"),
            _plural(interval.months, "month"),
            _plural(interval.days, "day"),
        ])),
        ("Total days", f"{interval.total_days:,}"),
    ]))


def render_age(console: Console, details: AgeDetails) -> None:
    rows = [
        ("Age", ", ".join([
            _plural(details.years, "year"),
            _plural(details.months, "month"),
            _plural(details.days, "day"),
        ])),
        ("Total months", f"{details.total_months:,}"),
        ("Total weeks", f"{details.total_weeks:,}"),
        ("Total days", f"{details.total_days:,}"),
    ]
    if details.next_birthday:
        nb = details.next_birthday
        rows.append(("Next birthday", f"{nb.date.isoformat()} (in {_plural(nb.days_until, 'day')})"))
    _print(console, _key_value_table("Age", rows))


def render_gpa(console: Console, result: GPAResult) -> None:
    table = _key_value_table("GPA", [
        ("GPA", f"[green]{result.gpa:.2f}[/green]"),
        ("Courses", str(result.course_count)),
        ("Total credits", format_number(result.total_credits)),
        ("Quality points", fmt_num(result.quality_points, 2)),
    ])
    for grade, count in sorted(result.grade_distribution.items()):
        table.add_row(f"  {grade}", str(count))
    _print(console, table)


def render_history(console: Console, history: Sequence[HistoryEntry]) -> None:
    if not history:
        console.print("[dim]No calculations yet.[/dim]")
        return
    for i, entry in enumerate(history, 1):
        console.print(f"  [dim]{i:3d}[/dim]  {entry}")
