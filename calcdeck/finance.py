"""Loan, mortgage, interest and investment formulas.

Rates are annual percentages (6.5 means 6.5%). Payments are monthly, so the
monthly rate is ``rate / 1200`` and a term of ``years`` has ``years * 12``
periods.

Degenerate input (a zero term, zero compounding frequency, growth too large
for a float) yields nan/inf unless ``strict=True`` is passed.
"""

from __future__ import annotations

import math

from calcdeck.arith import power, quotient_by_zero
from calcdeck.errors import DivisionByZero, InvalidInput
from calcdeck.models import AmortizationResult, InvestmentGrowth, ScheduleEntry

MONTHS_PER_YEAR = 12


def _monthly_rate(annual_rate: float) -> float:
    return annual_rate / 100 / MONTHS_PER_YEAR


def _growth(base: float, periods: float, strict: bool, allow_inf: bool = False) -> float:
    """``base ** periods``; nan for a negative base with fractional periods."""
    try:
        value = power(base, periods)
    except ValueError:
        if strict:
            raise InvalidInput(f"Growth factor {base} ^ {periods} is not a real number") from None
        return float("nan")
    if strict and not allow_inf and math.isinf(value):
        raise InvalidInput("Growth factor is too large to represent")
    return value


def amortized_payment(
    principal: float, annual_rate: float, years: float, strict: bool = False
) -> float:
    """Fixed monthly payment that repays ``principal`` over ``years``.

    Standard annuity formula ``P·r(1+r)^n / ((1+r)^n − 1)``.  A zero rate,
    or one too small to move ``(1+r)^n`` off 1.0, pays the principal back in
    equal parts.  When ``(1+r)^n`` overflows the payment is its limit,
    ``P·r``.  A zero term has no payment: ±inf, or DivisionByZero if strict.

    Args:
        principal: Amount borrowed.
        annual_rate: Annual interest rate in percent.
        years: Term in years.
        strict: Raise instead of returning nan/inf.

    Returns:
        Monthly payment.
    """
    monthly_rate = _monthly_rate(annual_rate)
    number_of_payments = years * MONTHS_PER_YEAR

    if number_of_payments == 0:
        if strict:
            raise DivisionByZero("Loan term must be longer than zero")
        return quotient_by_zero(principal)

    if monthly_rate == 0:
        return principal / number_of_payments

    growth = _growth(1 + monthly_rate, number_of_payments, strict, allow_inf=True)
    if growth == 1:
        return principal / number_of_payments
    if math.isinf(growth):
        return principal * monthly_rate
    return principal * (monthly_rate * growth) / (growth - 1)


# Mortgages and plain loans share the same annuity math.
calculate_mortgage = amortized_payment
calculate_loan = amortized_payment


def calculate_mortgage_details(
    principal: float, rate: float, years: float, strict: bool = False
) -> AmortizationResult:
    """Monthly payment, total paid and total interest for a mortgage."""
    monthly_payment = calculate_mortgage(principal, rate, years, strict=strict)
    total_payments = monthly_payment * years * MONTHS_PER_YEAR
    return AmortizationResult(
        monthly_payment=monthly_payment,
        total_payments=total_payments,
        total_interest=total_payments - principal,
        principal=principal,
    )


def calculate_loan_details(
    principal: float, rate: float, years: float, strict: bool = False
) -> AmortizationResult:
    """Monthly payment, total paid and total interest for a loan."""
    monthly_payment = calculate_loan(principal, rate, years, strict=strict)
    total_payments = monthly_payment * years * MONTHS_PER_YEAR
    return AmortizationResult(
        monthly_payment=monthly_payment,
        total_payments=total_payments,
        total_interest=total_payments - principal,
        principal=principal,
    )


def amortization_schedule(
    principal: float, annual_rate: float, years: int, strict: bool = False
) -> list[ScheduleEntry]:
    """Period-by-period split of each payment into interest and principal.

    The last period absorbs float drift so the final balance is exactly zero.
    A zero term has no periods.
    """
    payment = amortized_payment(principal, annual_rate, years, strict=strict)
    monthly_rate = _monthly_rate(annual_rate)
    periods = int(years * MONTHS_PER_YEAR)

    schedule: list[ScheduleEntry] = []
    balance = principal
    for period in range(1, periods + 1):
        interest = balance * monthly_rate
        principal_paid = payment - interest
        balance -= principal_paid
        if period == periods:
            principal_paid += balance
            balance = 0.0
        schedule.append(ScheduleEntry(
            period=period,
            payment=interest + principal_paid,
            principal_paid=principal_paid,
            interest_paid=interest,
            balance=balance,
        ))
    return schedule


def calculate_compound_interest(
    principal: float, rate: float, time: float, frequency: int = 12, strict: bool = False
) -> float:
    """Future value of ``principal`` compounded ``frequency`` times a year.

    A zero frequency compounds zero times, leaving ``principal`` unchanged
    (DivisionByZero if strict).  Overflowing growth gives inf.
    """
    if frequency == 0:
        if strict:
            raise DivisionByZero("Compounding frequency must be non-zero")
        return float(principal)
    return principal * _growth(1 + (rate / 100) / frequency, frequency * time, strict)


def calculate_simple_interest(principal: float, rate: float, time: float) -> float:
    """Future value of ``principal`` under simple (non-compounding) interest."""
    return principal * (1 + (rate / 100) * time)


def calculate_investment_growth(
    principal: float,
    rate: float,
    years: float,
    monthly_contribution: float = 0,
    strict: bool = False,
) -> InvestmentGrowth:
    """Grow a lump sum plus end-of-month contributions, compounded monthly.

    The contribution stream uses the ordinary-annuity future value
    ``C·((1+r)^n − 1)/r``; when ``(1+r)^n`` is indistinguishable from 1 it
    is just ``C·n``.  Overflowing growth gives inf (InvalidInput if strict).
    """
    monthly_rate = _monthly_rate(rate)
    total_months = years * MONTHS_PER_YEAR
    growth = _growth(1 + monthly_rate, total_months, strict)

    future_value_initial = principal * growth if principal else 0.0
    if monthly_contribution == 0:
        future_value_contributions = 0.0
    elif monthly_rate == 0 or growth == 1:
        future_value_contributions = monthly_contribution * total_months
    else:
        future_value_contributions = monthly_contribution * ((growth - 1) / monthly_rate)

    total_value = future_value_initial + future_value_contributions
    total_contributions = principal + monthly_contribution * total_months

    return InvestmentGrowth(
        total_value=total_value,
        future_value_initial=future_value_initial,
        future_value_contributions=future_value_contributions,
        total_contributions=total_contributions,
        total_gains=total_value - total_contributions,
        principal=principal,
        monthly_contribution=monthly_contribution,
    )
