import json
import re

import pytest

from mortgage_calc_web.app import cached_schedule


def _chart_data(html: str):
    match = re.search(r'<script id="chart-data" type="application/json">(.*?)</script>', html, re.S)
    return json.loads(match.group(1))


class TestIndexPage:
    def test_defaults(self, client):
        response = client.get("/")
        assert response.status_code == 200
        html = response.get_data(as_text=True)
        assert "$1,520" in html
        assert "$247,220" in html
        assert "Year 30" in html
        chart = _chart_data(html)
        assert len(chart) == 31
        assert chart[-1]["month"] == 360
        assert chart[-1]["year"] == 30
        assert chart[-1]["remaining_balance"] == 0.0
        assert set(chart[0]) == {
            "month",
            "year",
            "remaining_balance",
            "total_principal_paid",
            "total_interest_paid",
            "interest_paid",
            "principal_paid",
            "monthly_payment",
        }

    def test_post_values(self, client):
        response = client.post("/", data={"principal": "120000", "rate": "1.2", "term": "10"})
        assert response.status_code == 200
        chart = _chart_data(response.get_data(as_text=True))
        assert len(chart) == 11
        assert chart[0]["remaining_balance"] == 120000.0

    def test_post_values_are_clamped(self, client):
        response = client.post("/", data={"principal": "500", "rate": "0", "term": "12"})
        html = response.get_data(as_text=True)
        assert 'value="10000.0"' in html
        assert 'value="0.1"' in html
        chart = _chart_data(html)
        assert chart[0]["remaining_balance"] == 10000.0
        assert chart[-1]["month"] == 120

    def test_post_invalid_number(self, client):
        response = client.post("/", data={"principal": "lots", "rate": "4.5", "term": "30"})
        assert response.status_code == 200
        html = response.get_data(as_text=True)
        assert "Invalid numeric value: lots" in html
        assert _chart_data(html) == []


class TestScheduleApi:
    def test_yearly_by_default(self, client):
        response = client.get("/api/schedule?principal=120000&rate=0&term=10")
        assert response.status_code == 200
        data = response.get_json()
        assert data["parameters"] == {"principal": 120000.0, "annual_rate_percent": 0.0, "term_years": 10}
        assert data["summary"]["monthly_payment"] == 1000.0
        assert data["summary"]["total_interest"] == 0.0
        assert [row["month"] for row in data["schedule"]] == list(range(0, 121, 12))

    def test_full_schedule(self, client):
        data = client.get("/api/schedule?principal=50000&rate=5&term=1&full=1").get_json()
        assert len(data["schedule"]) == 13
        assert data["schedule"][-1]["remaining_balance"] == 0.0

    def test_invalid_term(self, client):
        response = client.get("/api/schedule?principal=50000&rate=5&term=0")
        assert response.status_code == 400
        assert response.get_json() == {"error": "Term must be at least one year"}

    def test_invalid_number(self, client):
        response = client.get("/api/schedule?principal=abc")
        assert response.status_code == 400
        assert "Invalid numeric value" in response.get_json()["error"]

    def test_repeated_requests_reuse_schedule(self, client):
        client.get("/api/schedule?principal=200000&rate=3&term=15")
        client.get("/api/schedule?principal=200000&rate=3&term=15&full=1")
        info = cached_schedule.cache_info()
        assert info.misses == 1
        assert info.hits == 1

    def test_oversized_term_rejected(self, client):
        response = client.get("/api/schedule?principal=100000&rate=20&term=100000000")
        assert response.status_code == 400
        assert response.get_json() == {"error": "Term cannot exceed 100 years"}
        assert cached_schedule.cache_info().currsize == 0

    def test_rate_below_float_resolution(self, client):
        response = client.get("/api/schedule?principal=100000&rate=0.00000000000001&term=30&full=1")
        assert response.status_code == 200
        data = response.get_json()
        assert data["summary"]["monthly_payment"] == pytest.approx(100000 / 360, rel=1e-9)
        assert data["schedule"][-1]["remaining_balance"] == 0.0

    def test_longest_term_at_high_rate(self, client):
        response = client.get("/api/schedule?principal=100000&rate=20&term=100")
        assert response.status_code == 200
        assert len(response.get_json()["schedule"]) == 101
