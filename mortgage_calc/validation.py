"""Input layer for the mortgage calculator.

The schedule generator trusts its arguments, so every caller goes through one
of the two functions here first:

* :func:`validate_parameters` rejects values the generator cannot handle
  (used by the command line and the JSON API).
* :func:`clamp_parameters` forces raw form values into the ranges offered by
  the web form.
"""

from __future__ import annotations

import math
from typing import Tuple, Union

from .data_models import LoanParameters

DEFAULT_PRINCIPAL = 300_000.0
DEFAULT_RATE = 4.5
DEFAULT_TERM = 30

MIN_PRINCIPAL = 10_000.0
MAX_PRINCIPAL = 10_000_000.0
MIN_RATE = 0.1
MAX_RATE = 20.0
RATE_STEP = 0.1
ALLOWED_TERMS: Tuple[int, ...] = (10, 15, 20, 25, 30)
# upper bound for validated (CLI and API) terms; the form uses ALLOWED_TERMS
MAX_TERM = 100

Number = Union[int, float]


class InvalidLoanParameters(ValueError):
    """Raised when loan parameters are outside the domain of the generator."""


def _require_finite(name: str, value: Number) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidLoanParameters(f"{name} must be a number; got {value!r}")
    if not math.isfinite(value):
        raise InvalidLoanParameters(f"{name} must be finite; got {value!r}")
    return float(value)


def _require_whole_years(value: Number) -> int:
    years = _require_finite("Term", value)
    if not years.is_integer():
        raise InvalidLoanParameters(f"Term must be a whole number of years; got {value!r}")
    return int(years)


def validate_parameters(principal: Number, annual_rate_percent: Number, term_years: Number) -> LoanParameters:
    """Return ``LoanParameters`` or raise ``InvalidLoanParameters``.

    Principal must be positive, the rate non-negative and the term a positive
    whole number of years no longer than ``MAX_TERM``. A zero rate is valid.
    """
    principal_value = _require_finite("Principal", principal)
    rate_value = _require_finite("Interest rate", annual_rate_percent)
    term_value = _require_whole_years(term_years)
    if principal_value <= 0:
        raise InvalidLoanParameters("Principal must be positive")
    if rate_value < 0:
        raise InvalidLoanParameters("Interest rate cannot be negative")
    if term_value <= 0:
        raise InvalidLoanParameters("Term must be at least one year")
    if term_value > MAX_TERM:
        raise InvalidLoanParameters(f"Term cannot exceed {MAX_TERM} years")
    return LoanParameters(
        principal=principal_value,
        annual_rate_percent=rate_value,
        term_years=term_value,
    )


def _nearest_term(years: float) -> int:
    # ties resolve to the shorter term
    return min(ALLOWED_TERMS, key=lambda allowed: (abs(allowed - years), allowed))


def clamp_parameters(principal: Number, annual_rate_percent: Number, term_years: Number) -> LoanParameters:
    """Force raw form values into the ranges the form offers.

    Principal is clamped to ``[MIN_PRINCIPAL, MAX_PRINCIPAL]``, the rate to
    ``[MIN_RATE, MAX_RATE]`` and the term snaps to the nearest entry of
    ``ALLOWED_TERMS``. Non-numeric or non-finite values still raise
    ``InvalidLoanParameters``.
    """
    principal_value = _require_finite("Principal", principal)
    rate_value = _require_finite("Interest rate", annual_rate_percent)
    term_value = _require_finite("Term", term_years)
    return LoanParameters(
        principal=min(max(principal_value, MIN_PRINCIPAL), MAX_PRINCIPAL),
        annual_rate_percent=min(max(rate_value, MIN_RATE), MAX_RATE),
        term_years=_nearest_term(term_value),
    )
