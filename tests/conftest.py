"""Shared fixtures.

Scenario A: $300K at 4.5% for 30 years (the calculator's default loan).
Scenario B: $120K at 0% for 10 years.
Scenario C: $50K at 5% for 1 year.
"""

import pytest

from mortgage_calc.engine import generate_schedule
from mortgage_calc_web.app import app, cached_schedule


@pytest.fixture
def scenario_a():
    return generate_schedule(300000, 4.5, 30)


@pytest.fixture
def scenario_b():
    return generate_schedule(120000, 0, 10)


@pytest.fixture
def scenario_c():
    return generate_schedule(50000, 5, 1)


@pytest.fixture
def client():
    app.config["TESTING"] = True
    cached_schedule.cache_clear()
    with app.test_client() as test_client:
        yield test_client
