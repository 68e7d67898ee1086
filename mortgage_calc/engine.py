"""Core calculation engine for the mortgage calculator.

This module turns a fixed-rate loan (principal, annual rate, term) into a
month-by-month amortization schedule, a yearly sample of that schedule for
charting, and the handful of summary values shown next to the charts.

Everything here is a pure function of its inputs. The generator does not
validate or clamp its arguments; that is the job of
:mod:`mortgage_calc.validation`.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, Sequence, Tuple

from .data_models import LoanParameters, PeriodRecord

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12

Schedule = Tuple[PeriodRecord, ...]


def calculate_level_payment(principal: float, monthly_rate: float, number_of_payments: int) -> float:
    """Return the level (annuity) monthly payment for a loan.

    The formula is:

        payment = P * (i * (1 + i)^n) / ((1 + i)^n - 1)
                = P * i / (1 - (1 + i)^-n)

    where ``P`` is the principal, ``i`` is the monthly interest rate and
    ``n`` is the number of payments. The second form is evaluated through
    ``log1p``/``expm1`` so that it neither overflows for long terms nor
    collapses to ``0 / 0`` for rates too small to change ``1 + i``. When the
    interest rate is zero the payment simplifies to ``P / n``.
    """
    if number_of_payments <= 0:
        raise ValueError("Number of payments must be positive")
    log_growth = math.log1p(monthly_rate)
    if log_growth == 0:
        return principal / number_of_payments
    return principal * monthly_rate / -math.expm1(-number_of_payments * log_growth)


def _balance_after(principal: float, log_growth: float, number_of_payments: int, month: int) -> float:
    """Outstanding balance after ``month`` level payments.

    Closed form of the amortization recurrence,
    ``P * (1 - (1 + i)^(m - n)) / (1 - (1 + i)^-n)``, so rounding errors do
    not compound from one month to the next.
    """
    if log_growth == 0:
        return principal * (number_of_payments - month) / number_of_payments
    return (
        principal
        * math.expm1((month - number_of_payments) * log_growth)
        / math.expm1(-number_of_payments * log_growth)
    )


def yearly_sample(full_schedule: Sequence[PeriodRecord], interval: int = MONTHS_PER_YEAR) -> Schedule:
    """Downsample a monthly schedule for display.

    Keeps every record whose month is a multiple of ``interval`` plus the
    final record, so the last month is present even when the term is not a
    whole number of intervals.
    """
    if not full_schedule:
        return ()
    last_month = full_schedule[-1].month
    return tuple(
        record
        for record in full_schedule
        if record.month % interval == 0 or record.month == last_month
    )


def generate_schedule(
    principal: float, annual_rate_percent: float, term_years: int
) -> Tuple[Schedule, Schedule]:
    """Compute the amortization schedule of a fixed-rate loan.

    Parameters
    ----------
    principal: float
        Loan amount at origination.
    annual_rate_percent: float
        Nominal annual rate in percent.
    term_years: int
        Term in years. A term of zero yields only the month-0 record.

    Returns
    -------
    full_schedule: tuple of PeriodRecord
        One record per month from 0 to ``term_years * 12`` inclusive. The
        balance of the last record is exactly zero.
    yearly: tuple of PeriodRecord
        The records at each year boundary plus the final record.
    """
    params = LoanParameters(principal, annual_rate_percent, term_years)
    monthly_rate = params.monthly_rate
    number_of_payments = params.number_of_payments

    if number_of_payments == 0:
        initial = PeriodRecord(
            month=0,
            remaining_balance=principal,
            interest_paid=0.0,
            principal_paid=0.0,
            total_interest_paid=0.0,
            total_principal_paid=0.0,
            monthly_payment=0.0,
        )
        return (initial,), (initial,)

    payment = calculate_level_payment(principal, monthly_rate, number_of_payments)

    records = [
        PeriodRecord(
            month=0,
            remaining_balance=principal,
            interest_paid=0.0,
            principal_paid=0.0,
            total_interest_paid=0.0,
            total_principal_paid=0.0,
            monthly_payment=payment,
        )
    ]
    log_growth = math.log1p(monthly_rate)
    remaining_balance = principal

    for month in range(1, number_of_payments + 1):
        interest_for_month = remaining_balance * monthly_rate
        if month == number_of_payments:
            # Final payment clears the balance exactly.
            balance_after = 0.0
        else:
            balance_after = _balance_after(principal, log_growth, number_of_payments, month)
        # payment - interest, taken from the balance so it never drifts
        principal_for_month = remaining_balance - balance_after
        remaining_balance = balance_after

        previous = records[-1]
        records.append(
            PeriodRecord(
                month=month,
                remaining_balance=max(0.0, remaining_balance),
                interest_paid=interest_for_month,
                principal_paid=principal_for_month,
                total_interest_paid=previous.total_interest_paid + interest_for_month,
                total_principal_paid=previous.total_principal_paid + principal_for_month,
                monthly_payment=payment,
            )
        )

    full_schedule = tuple(records)
    logger.debug(
        "Generated %d-month schedule: principal=%s rate=%s%% payment=%.2f",
        number_of_payments,
        principal,
        annual_rate_percent,
        payment,
    )
    return full_schedule, yearly_sample(full_schedule)


def summarize(full_schedule: Sequence[PeriodRecord], principal: float) -> Dict[str, object]:
    """Return the aggregate values shown alongside the schedule."""
    if not full_schedule:
        raise ValueError("Cannot summarize an empty schedule")
    last = full_schedule[-1]
    total_interest = last.total_interest_paid
    return {
        "principal": float(principal),
        "monthly_payment": last.monthly_payment,
        "total_interest": total_interest,
        "total_paid": principal + total_interest,
        "number_of_payments": last.month,
        "term_years": last.month // MONTHS_PER_YEAR,
    }


def compute_schedule(params: LoanParameters) -> Tuple[Schedule, Schedule, Dict[str, object]]:
    """Compute the full schedule, its yearly sample and summary for ``params``."""
    full_schedule, yearly = generate_schedule(
        params.principal, params.annual_rate_percent, params.term_years
    )
    return full_schedule, yearly, summarize(full_schedule, params.principal)
