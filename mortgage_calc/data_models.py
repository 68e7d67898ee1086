"""Data models for the mortgage calculator.

This module defines the dataclasses passed between the schedule generator and
its callers: the loan parameters entered by the user and the per-month records
of the amortization schedule. Both are frozen so a computed schedule can be
shared (and cached) without anyone mutating it in place.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LoanParameters:
    """Inputs of a single schedule computation.

    Attributes
    ----------
    principal: float
        Loan amount at origination.
    annual_rate_percent: float
        Nominal annual interest rate in percent (``4.5`` means 4.5 %).
    term_years: int
        Loan term in whole years.
    """

    principal: float
    annual_rate_percent: float
    term_years: int

    @property
    def monthly_rate(self) -> float:
        return self.annual_rate_percent / 100 / 12

    @property
    def number_of_payments(self) -> int:
        return self.term_years * 12


@dataclass(frozen=True)
class PeriodRecord:
    """One month of the amortization schedule.

    Month 0 is the state before the first payment: the balance equals the
    principal and all paid amounts are zero. ``monthly_payment`` carries the
    level payment on every record so presentation code can read it from any
    row.
    """

    month: int
    remaining_balance: float
    interest_paid: float
    principal_paid: float
    total_interest_paid: float
    total_principal_paid: float
    monthly_payment: float

    @property
    def payment_amount(self) -> float:
        """Cash actually paid this month (differs from the level payment only on the last month)."""
        return self.interest_paid + self.principal_paid
