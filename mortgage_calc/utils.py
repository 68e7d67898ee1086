"""Utility functions for the mortgage calculator.

Helpers for turning raw user input (form fields, command line options) into
numbers before they reach the input validation layer.
"""

from __future__ import annotations

import math


def float_from_str(value: str) -> float:
    """Convert a numeric string into a finite ``float``.

    Thousands separators (commas and underscores) and surrounding whitespace
    are ignored. Raises ``ValueError`` if conversion fails.
    """
    try:
        cleaned = value.strip().replace(",", "").replace("_", "")
        number = float(cleaned)
    except (AttributeError, ValueError) as exc:
        raise ValueError(f"Invalid numeric value: {value}") from exc
    if not math.isfinite(number):
        raise ValueError(f"Invalid numeric value: {value}")
    return number


def parse_amount(value: str) -> float:
    """Parse an amount with optional ``k``/``m`` suffixes.

    Accepts plain numbers ("300000", "300,000") and shorthand such as "300k"
    (300 000) or "1.2m" (1 200 000).
    """
    text = value.strip().lower()
    factor = 1.0
    if text.endswith("k"):
        factor = 1_000.0
        text = text[:-1]
    elif text.endswith("m"):
        factor = 1_000_000.0
        text = text[:-1]
    return float_from_str(text) * factor


def parse_percent(value: str) -> float:
    """Parse a percentage string such as "4.5" or "4.5%"."""
    text = value.strip()
    if text.endswith("%"):
        text = text[:-1]
    return float_from_str(text)
