"""Output helpers for the mortgage calculator.

This module formats amounts for display and renders schedules and summaries
as plain text for the terminal. The web front end reuses the same formatting
functions as Jinja filters so both surfaces show identical numbers.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable

from .data_models import PeriodRecord
from .engine import MONTHS_PER_YEAR


def format_currency(value: float) -> str:
    """Format ``value`` as whole US dollars, e.g. ``"$1,520"``.

    Halves round away from zero, and a value that rounds to zero never
    carries a minus sign.
    """
    rounded = Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,}"


def format_percentage(value: float) -> str:
    """Format a percent value with two decimals, e.g. ``"4.50%"``."""
    return f"{value:.2f}%"


def year_tick(month: int) -> int:
    """Return the year number used as a chart axis tick for ``month``."""
    return month // MONTHS_PER_YEAR


def period_label(month: int) -> str:
    """Return a label such as ``"Year 3"`` or ``"Year 29 Month 11"``."""
    year = month // MONTHS_PER_YEAR
    remaining_months = month % MONTHS_PER_YEAR
    if remaining_months:
        return f"Year {year} Month {remaining_months}"
    return f"Year {year}"


def print_summary(summary: Dict[str, object]) -> None:
    """Print the loan summary in a human-readable format."""
    print("Summary")
    print("-" * 72)
    print(f"Loan amount        : {format_currency(summary['principal'])}")
    print(f"Monthly payment    : {format_currency(summary['monthly_payment'])}")
    print(f"Total interest     : {format_currency(summary['total_interest'])}")
    print(f"Total amount paid  : {format_currency(summary['total_paid'])}")
    print(f"Payments           : {summary['number_of_payments']}")
    print("-" * 72)


def print_schedule(schedule: Iterable[PeriodRecord]) -> None:
    """Print schedule records as a tab separated table."""
    headers = [
        "Month",
        "Period",
        "Payment",
        "Principal",
        "Interest",
        "TotPrincipal",
        "TotInterest",
        "Balance",
    ]
    print("\t".join(headers))
    for record in schedule:
        row = [
            str(record.month),
            period_label(record.month),
            f"{record.payment_amount:.2f}",
            f"{record.principal_paid:.2f}",
            f"{record.interest_paid:.2f}",
            f"{record.total_principal_paid:.2f}",
            f"{record.total_interest_paid:.2f}",
            f"{record.remaining_balance:.2f}",
        ]
        print("\t".join(row))
