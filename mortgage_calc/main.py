"""Command-line interface for the mortgage calculator.

This module uses the ``click`` library to implement a small multi-command
interface. Users can print the yearly (or full monthly) amortization schedule
or just the summary of a fixed-rate loan. Results can be printed to the
terminal or exported to JSON/CSV files.
"""

from __future__ import annotations

import csv
import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import click

from .data_models import LoanParameters, PeriodRecord
from .engine import compute_schedule
from .formatter import print_schedule, print_summary
from .utils import parse_amount, parse_percent
from .validation import validate_parameters

CSV_HEADER = [
    "Month",
    "Remaining_Balance",
    "Interest_Paid",
    "Principal_Paid",
    "Total_Interest_Paid",
    "Total_Principal_Paid",
    "Monthly_Payment",
]


def build_parameters_from_options(principal: str, rate: str, term: int) -> LoanParameters:
    """Parse raw option strings and validate them into ``LoanParameters``."""
    try:
        return validate_parameters(parse_amount(principal), parse_percent(rate), term)
    except ValueError as exc:
        raise click.BadParameter(str(exc))


def schedule_to_dicts(schedule: Iterable[PeriodRecord]) -> List[Dict[str, Any]]:
    """Convert schedule records into JSON-serialisable dictionaries."""
    return [asdict(record) for record in schedule]


def export_to_json(path: Path, params: LoanParameters, schedule: Iterable[PeriodRecord], summary: Dict[str, Any]) -> None:
    """Export parameters, summary and schedule to a JSON file."""
    data = {
        "parameters": asdict(params),
        "summary": summary,
        "schedule": schedule_to_dicts(schedule),
    }
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_to_csv(path: Path, schedule: Iterable[PeriodRecord]) -> None:
    """Export schedule records to a CSV file."""
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)
        for r in schedule:
            writer.writerow(
                [
                    r.month,
                    r.remaining_balance,
                    r.interest_paid,
                    r.principal_paid,
                    r.total_interest_paid,
                    r.total_principal_paid,
                    r.monthly_payment,
                ]
            )


@click.group()
def cli() -> None:
    """A command-line calculator for fixed-rate mortgage schedules."""
    pass


@cli.command()
@click.option("--principal", "-p", "principal", required=True, help="Loan amount (e.g. 300000 or 300k)")
@click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)")
@click.option("--term", "-t", "term", required=True, type=int, help="Loan term in years")
@click.option("--full", "full", is_flag=True, help="Use every month instead of the yearly sample")
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
def schedule(principal: str, rate: str, term: int, full: bool, output: Optional[str]) -> None:
    """Compute and print the amortization schedule."""
    params = build_parameters_from_options(principal, rate, term)
    full_schedule, yearly, summary_data = compute_schedule(params)
    records = full_schedule if full else yearly
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, params, records, summary_data)
            click.echo(f"Schedule exported to {path}")
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, records)
            click.echo(f"Schedule exported to {path}")
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
    else:
        print_summary(summary_data)
        print_schedule(records)


@cli.command()
@click.option("--principal", "-p", "principal", required=True, help="Loan amount (e.g. 300000 or 300k)")
@click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)")
@click.option("--term", "-t", "term", required=True, type=int, help="Loan term in years")
@click.option("--output", "output", type=str, help="Output file path (.json)")
def summary(principal: str, rate: str, term: int, output: Optional[str]) -> None:
    """Compute and print only the summary of a loan."""
    params = build_parameters_from_options(principal, rate, term)
    _, _, summary_data = compute_schedule(params)
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Summary export must use .json extension")
        with path.open("w", encoding="utf-8") as f:
            json.dump({"parameters": asdict(params), "summary": summary_data}, f, indent=2)
        click.echo(f"Summary exported to {path}")
    else:
        print_summary(summary_data)


if __name__ == "__main__":
    cli()
