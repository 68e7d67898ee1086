import json
import os
from functools import lru_cache

from flask import Flask, jsonify, render_template, request

from mortgage_calc.data_models import LoanParameters
from mortgage_calc.engine import compute_schedule
from mortgage_calc.formatter import format_currency, format_percentage, period_label, year_tick
from mortgage_calc.main import schedule_to_dicts
from mortgage_calc.utils import float_from_str
from mortgage_calc.validation import (
    ALLOWED_TERMS,
    DEFAULT_PRINCIPAL,
    DEFAULT_RATE,
    DEFAULT_TERM,
    MAX_PRINCIPAL,
    MAX_RATE,
    MIN_PRINCIPAL,
    MIN_RATE,
    RATE_STEP,
    clamp_parameters,
    validate_parameters,
)

app = Flask(__name__)
app.config["ASSET_VERSION"] = os.environ.get("ASSET_VERSION", "1")
app.config["SCHEDULE_CACHE_SIZE"] = int(os.environ.get("SCHEDULE_CACHE_SIZE", "128"))

app.add_template_filter(format_currency, "currency")
app.add_template_filter(format_percentage, "percentage")
app.add_template_filter(period_label, "period_label")

CHART_FIELDS = (
    "month",
    "remaining_balance",
    "total_principal_paid",
    "total_interest_paid",
    "interest_paid",
    "principal_paid",
    "monthly_payment",
)


@lru_cache(maxsize=app.config["SCHEDULE_CACHE_SIZE"])
def cached_schedule(principal: float, annual_rate_percent: float, term_years: int):
    """Return ``compute_schedule`` for the triple, reusing earlier results."""
    return compute_schedule(LoanParameters(principal, annual_rate_percent, term_years))


def _schedule_for(params: LoanParameters):
    return cached_schedule(params.principal, params.annual_rate_percent, params.term_years)


def _chart_payload(records) -> list[dict]:
    """Reduce records to the series the charts plot, plus the axis tick."""
    payload = []
    for row in schedule_to_dicts(records):
        point = {field: row[field] for field in CHART_FIELDS}
        point["year"] = year_tick(row["month"])
        payload.append(point)
    return payload


def _form_to_params(form) -> LoanParameters:
    principal = float_from_str(form.get("principal", str(DEFAULT_PRINCIPAL)))
    rate = float_from_str(form.get("rate", str(DEFAULT_RATE)))
    term = float_from_str(form.get("term", str(DEFAULT_TERM)))
    return clamp_parameters(principal, rate, term)


def _query_to_params(args) -> LoanParameters:
    principal = float_from_str(args.get("principal", str(DEFAULT_PRINCIPAL)))
    rate = float_from_str(args.get("rate", str(DEFAULT_RATE)))
    term = float_from_str(args.get("term", str(DEFAULT_TERM)))
    return validate_parameters(principal, rate, term)


@app.route("/", methods=["GET", "POST"])
def index():
    error = None
    summary = None
    yearly = []
    params = LoanParameters(DEFAULT_PRINCIPAL, DEFAULT_RATE, DEFAULT_TERM)

    if request.method == "POST":
        try:
            params = _form_to_params(request.form)
        except ValueError as exc:
            app.logger.info("Rejected form input: %s", exc)
            error = str(exc)

    if error is None:
        _, yearly, summary = _schedule_for(params)

    return render_template(
        "index.html",
        params=params,
        summary=summary,
        yearly=yearly,
        chart_payload=json.dumps(_chart_payload(yearly)),
        error=error,
        allowed_terms=ALLOWED_TERMS,
        min_principal=MIN_PRINCIPAL,
        max_principal=MAX_PRINCIPAL,
        min_rate=MIN_RATE,
        max_rate=MAX_RATE,
        rate_step=RATE_STEP,
        asset_version=app.config["ASSET_VERSION"],
    )


@app.get("/api/schedule")
def api_schedule():
    try:
        params = _query_to_params(request.args)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    full_schedule, yearly, summary = _schedule_for(params)
    records = full_schedule if request.args.get("full") == "1" else yearly
    return jsonify(
        {
            "parameters": {
                "principal": params.principal,
                "annual_rate_percent": params.annual_rate_percent,
                "term_years": params.term_years,
            },
            "summary": summary,
            "schedule": schedule_to_dicts(records),
        }
    )


if __name__ == "__main__":
    print("Starting Mortgage Calculator web app...")
    app.run(host="0.0.0.0", port=int(os.environ.get("MORTGAGE_CALC_PORT", "8710")), debug=True)
