"""CLI for calcdeck.

Usage:
    python -m calcdeck list                          # Show calculators
    python -m calcdeck mortgage 300000 6.5 30        # Monthly payment
    python -m calcdeck bmi 70 175                    # BMI and category
    python -m calcdeck stats 1 2 2 3 4               # Descriptive statistics
    python -m calcdeck keys 5 + 3 =                  # Run keypad tokens
    python -m calcdeck sci                           # Interactive calculator
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import date
from typing import Iterator, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from calcdeck import arith, dates, finance, grades, health, render
from calcdeck.config import Settings, load_settings
from calcdeck.errors import CalcError, InvalidInput
from calcdeck.evaluator import ChainedEvaluator
from calcdeck.models import ActivityLevel, Sex, UnitSystem

app = typer.Typer(
    name="calcdeck",
    help="Financial, health, date, grade and scientific calculators",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

CALCULATORS = {
    "percent": "Percentage of a value",
    "percent-change": "Percentage change between two values",
    "mortgage": "Mortgage payment, total paid and interest",
    "loan": "Loan payment, total paid and interest",
    "invest": "Investment growth with monthly contributions",
    "compound": "Compound interest future value",
    "simple-interest": "Simple interest future value",
    "bmi": "Body mass index and category",
    "calories": "BMR and daily calorie needs",
    "body-fat": "Estimated body-fat percentage",
    "fraction": "Add, subtract, multiply or divide fractions",
    "stats": "Mean, median, mode, variance, std. deviation",
    "age": "Age in years, months, days and next birthday",
    "date-diff": "Calendar difference between two dates",
    "gpa": "Credit-weighted grade point average",
    "keys": "Run keypad tokens through the scientific calculator",
    "sci": "Interactive scientific calculator",
}

_FRACTION_SYMBOLS = {"+": "add", "-": "subtract", "*": "multiply", "x": "multiply", "/": "divide"}


def _settings(ctx: typer.Context) -> Settings:
    """Resolved settings for this run; logs the command inputs under --verbose."""
    settings = ctx.obj if isinstance(ctx.obj, Settings) else load_settings()
    if settings.verbose:
        err_console.log(f"{ctx.info_name}: {ctx.params}", markup=False)
    return settings


@contextmanager
def _reporting_errors() -> Iterator[None]:
    """Turn calcdeck errors into a red message and exit code 1."""
    try:
        yield
    except CalcError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    strict: bool = typer.Option(False, "--strict", help="Reject undefined results instead of printing NaN/Infinity"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log resolved settings and command inputs to stderr"),
) -> None:
    """Financial, health, date, grade and scientific calculators."""
    settings = load_settings()
    if strict:
        settings.strict = True
    if verbose:
        settings.verbose = True
        err_console.log(f"settings: {settings}", markup=False)
    ctx.obj = settings


@app.command("list")
def cmd_list() -> None:
    """Show available calculators."""
    table = Table(title="Calculators", show_header=True, header_style="bold")
    table.add_column("Command", style="green", min_width=15)
    table.add_column("Description", min_width=30)
    for name, description in CALCULATORS.items():
        table.add_row(name, description)

    console.print()
    console.print(table)
    console.print()


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------

@app.command("percent")
def cmd_percent(
    ctx: typer.Context,
    value: float = typer.Argument(help="Base value"),
    percentage: float = typer.Argument(help="Percentage to take"),
) -> None:
    """Compute PERCENTAGE percent of VALUE."""
    settings = _settings(ctx)
    result = arith.calculate_percentage(value, percentage)
    render.render_value(console, "Percentage", f"{percentage:g}% of {value:g}",
                        render.fmt_num(result, settings.decimals))


@app.command("percent-change")
def cmd_percent_change(
    ctx: typer.Context,
    old: float = typer.Argument(help="Starting value"),
    new: float = typer.Argument(help="Ending value"),
) -> None:
    """Percentage change from OLD to NEW."""
    settings = _settings(ctx)
    with _reporting_errors():
        result = arith.calculate_percentage_change(old, new, strict=settings.strict)
    render.render_value(console, "Percentage Change", "Change",
                        f"{render.fmt_num(result, settings.decimals)}%")


@app.command("fraction")
def cmd_fraction(
    ctx: typer.Context,
    left: str = typer.Argument(help="First fraction, e.g. 1/2"),
    operation: str = typer.Argument(help="add, subtract, multiply, divide (or + - * /)"),
    right: str = typer.Argument(help="Second fraction, e.g. 3/4"),
) -> None:
    """Combine two fractions and reduce the result."""
    settings = _settings(ctx)
    op = _FRACTION_SYMBOLS.get(operation, operation.lower())
    with _reporting_errors():
        n1, d1 = arith.parse_fraction(left)
        n2, d2 = arith.parse_fraction(right)
        result = arith.calculate_fraction(n1, d1, n2, d2, op, strict=settings.strict)
    render.render_value(console, "Fraction", f"{left} {operation} {right}", str(result))


@app.command("stats")
def cmd_stats(
    ctx: typer.Context,
    numbers: List[float] = typer.Argument(help="Numbers to summarize"),
) -> None:
    """Descriptive statistics for a list of numbers."""
    settings = _settings(ctx)
    with _reporting_errors():
        result = arith.calculate_statistics(numbers, strict=settings.strict)
    render.render_statistics(console, result, settings.decimals)


# ---------------------------------------------------------------------------
# Finance
# ---------------------------------------------------------------------------

@app.command("mortgage")
def cmd_mortgage(
    ctx: typer.Context,
    principal: float = typer.Argument(help="Loan amount"),
    rate: float = typer.Argument(help="Annual interest rate in percent"),
    years: int = typer.Argument(help="Term in years"),
    schedule: bool = typer.Option(False, "--schedule", "-s", help="Show the full amortization schedule"),
) -> None:
    """Monthly payment, total paid and total interest for a mortgage."""
    settings = _settings(ctx)
    with _reporting_errors():
        result = finance.calculate_mortgage_details(principal, rate, years, strict=settings.strict)
        entries = finance.amortization_schedule(principal, rate, years, strict=settings.strict) if schedule else []
    render.render_amortization(console, "Mortgage", result, settings.decimals)
    if schedule:
        render.render_schedule(console, entries, settings.decimals)


@app.command("loan")
def cmd_loan(
    ctx: typer.Context,
    principal: float = typer.Argument(help="Loan amount"),
    rate: float = typer.Argument(help="Annual interest rate in percent"),
    years: int = typer.Argument(help="Term in years"),
    schedule: bool = typer.Option(False, "--schedule", "-s", help="Show the full amortization schedule"),
) -> None:
    """Monthly payment, total paid and total interest for a loan."""
    settings = _settings(ctx)
    with _reporting_errors():
        result = finance.calculate_loan_details(principal, rate, years, strict=settings.strict)
        entries = finance.amortization_schedule(principal, rate, years, strict=settings.strict) if schedule else []
    render.render_amortization(console, "Loan", result, settings.decimals)
    if schedule:
        render.render_schedule(console, entries, settings.decimals)


@app.command("invest")
def cmd_invest(
    ctx: typer.Context,
    principal: float = typer.Argument(help="Initial investment"),
    rate: float = typer.Argument(help="Annual return in percent"),
    years: int = typer.Argument(help="Years invested"),
    contribution: float = typer.Option(0.0, "--contribution", "-c", help="Monthly contribution"),
) -> None:
    """Investment growth compounded monthly, with optional contributions."""
    settings = _settings(ctx)
    with _reporting_errors():
        result = finance.calculate_investment_growth(
            principal, rate, years, contribution, strict=settings.strict
        )
    render.render_investment(console, result, settings.decimals)


@app.command("compound")
def cmd_compound(
    ctx: typer.Context,
    principal: float = typer.Argument(help="Starting amount"),
    rate: float = typer.Argument(help="Annual interest rate in percent"),
    time: float = typer.Argument(help="Time in years"),
    frequency: Optional[int] = typer.Option(None, "--frequency", "-f", help="Compounding periods per year"),
) -> None:
    """Future value under compound interest."""
    settings = _settings(ctx)
    k = frequency if frequency is not None else settings.compound_frequency
    with _reporting_errors():
        result = finance.calculate_compound_interest(principal, rate, time, k, strict=settings.strict)
    render.render_value(console, "Compound Interest", f"Future value ({k}x/year)",
                        render.fmt_money(result, settings.decimals))


@app.command("simple-interest")
def cmd_simple_interest(
    ctx: typer.Context,
    principal: float = typer.Argument(help="Starting amount"),
    rate: float = typer.Argument(help="Annual interest rate in percent"),
    time: float = typer.Argument(help="Time in years"),
) -> None:
    """Future value under simple interest."""
    settings = _settings(ctx)
    result = finance.calculate_simple_interest(principal, rate, time)
    render.render_value(console, "Simple Interest", "Future value",
                        render.fmt_money(result, settings.decimals))


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------

@app.command("bmi")
def cmd_bmi(
    ctx: typer.Context,
    weight: float = typer.Argument(help="Weight (kg, or lb with --unit imperial)"),
    height: float = typer.Argument(help="Height (cm, or in with --unit imperial)"),
    unit: Optional[UnitSystem] = typer.Option(None, "--unit", "-u", help="metric or imperial"),
) -> None:
    """Body mass index and its category."""
    settings = _settings(ctx)
    result = health.calculate_bmi_details(weight, height, unit or settings.unit)
    render.render_bmi(console, result)


@app.command("calories")
def cmd_calories(
    ctx: typer.Context,
    weight: float = typer.Argument(help="Weight (kg, or lb with --unit imperial)"),
    height: float = typer.Argument(help="Height (cm, or in with --unit imperial)"),
    age: float = typer.Argument(help="Age in years"),
    sex: Sex = typer.Option(..., "--sex", help="male or female"),
    activity: ActivityLevel = typer.Option(ActivityLevel.SEDENTARY, "--activity", "-a", help="Activity level"),
    unit: Optional[UnitSystem] = typer.Option(None, "--unit", "-u", help="metric or imperial"),
) -> None:
    """Basal metabolic rate and daily calorie targets."""
    settings = _settings(ctx)
    result = health.calculate_daily_calories(weight, height, age, sex, activity, unit or settings.unit)
    render.render_calories(console, result)


@app.command("body-fat")
def cmd_body_fat(
    ctx: typer.Context,
    weight: float = typer.Argument(help="Weight (kg, or lb with --unit imperial)"),
    height: float = typer.Argument(help="Height (cm, or in with --unit imperial)"),
    age: float = typer.Argument(help="Age in years"),
    sex: Sex = typer.Option(..., "--sex", help="male or female"),
    unit: Optional[UnitSystem] = typer.Option(None, "--unit", "-u", help="metric or imperial"),
) -> None:
    """Estimated body-fat percentage from BMI and age."""
    settings = _settings(ctx)
    bmi = health.calculate_bmi(weight, height, unit or settings.unit)
    result = health.calculate_body_fat(sex, age, bmi)
    render.render_value(console, "Body Fat", f"Estimate (BMI {render.fmt_num(bmi, 1)})",
                        f"{render.fmt_num(result, 1)}%")


# ---------------------------------------------------------------------------
# Dates and grades
# ---------------------------------------------------------------------------

@app.command("age")
def cmd_age(
    ctx: typer.Context,
    birth_date: str = typer.Argument(help="Birth date, YYYY-MM-DD"),
    today: Optional[str] = typer.Option(None, "--today", help="Reference date, YYYY-MM-DD (default: today)"),
) -> None:
    """Age in years, months and days, plus the next birthday."""
    _settings(ctx)
    with _reporting_errors():
        reference = dates.as_date(today) if today else date.today()
        details = dates.calculate_age_details(birth_date, reference)
    render.render_age(console, details)


@app.command("date-diff")
def cmd_date_diff(
    ctx: typer.Context,
    first: str = typer.Argument(help="First date, YYYY-MM-DD"),
    second: str = typer.Argument(help="Second date, YYYY-MM-DD"),
) -> None:
    """Calendar difference between two dates."""
    _settings(ctx)
    with _reporting_errors():
        interval = dates.calculate_date_difference(first, second)
    render.render_interval(console, "Date Difference", interval)


@app.command("gpa")
def cmd_gpa(
    ctx: typer.Context,
    courses: List[str] = typer.Argument(help="Courses as GRADE:CREDITS, e.g. A:3 B+:4"),
) -> None:
    """Credit-weighted GPA on the 4.0 scale."""
    settings = _settings(ctx)
    with _reporting_errors():
        parsed = [grades.parse_course(c) for c in courses]
        unknown = sorted({c.grade for c in parsed if c.grade not in grades.GRADE_POINTS})
        if unknown and not settings.strict:
            err_console.print(
                f"[yellow]Unknown grades count as 0 points: {', '.join(unknown)}[/yellow]"
            )
        result = grades.calculate_gpa_details(parsed, strict=settings.strict)
    render.render_gpa(console, result)


# ---------------------------------------------------------------------------
# Scientific calculator
# ---------------------------------------------------------------------------

def _press_all(calc: ChainedEvaluator, tokens: List[str]) -> None:
    for token in tokens:
        calc.press(token)


@app.command("keys")
def cmd_keys(
    ctx: typer.Context,
    tokens: List[str] = typer.Argument(help="Keypad tokens, e.g. 5 + 3 ="),
    history: bool = typer.Option(False, "--history", help="Also print each evaluation"),
) -> None:
    """Run keypad tokens through the scientific calculator and print the display."""
    settings = _settings(ctx)
    calc = ChainedEvaluator(strict=settings.strict)
    with _reporting_errors():
        _press_all(calc, tokens)
    if history:
        render.render_history(console, calc.history)
    console.print(calc.display)


@app.command("sci")
def cmd_sci(ctx: typer.Context) -> None:
    """Interactive scientific calculator.

    Type space-separated keys (digits, + - × ÷ ^ mod, =, sin cos tan log ln
    sqrt square factorial, C MC MR M+ M-). 'history' shows past results,
    'quit' exits.
    """
    settings = _settings(ctx)
    frames: list[str] = []
    calc = ChainedEvaluator(strict=settings.strict, on_change=frames.append)

    err_console.print("[dim]Scientific calculator: 'history' lists results, 'quit' exits.[/dim]")
    console.print(f"[bold]{calc.display}[/bold]")
    while True:
        try:
            line = console.input("[green]>[/green] ").strip()
        except (EOFError, KeyboardInterrupt):
            break
        if line in ("quit", "exit", "q"):
            break
        if line == "history":
            render.render_history(console, calc.history)
            continue
        if not line:
            continue

        frames.clear()
        try:
            _press_all(calc, line.split())
        except InvalidInput as e:
            err_console.print(f"[yellow]{e}[/yellow]")
        except CalcError as e:
            err_console.print(f"[red]{e}[/red]")
            calc.clear()
        if frames:
            console.print(f"[bold]{frames[-1]}[/bold]")


if __name__ == "__main__":
    app()
