"""
Integration tests - Report endpoints over a seeded in-memory database.
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from finreports.infrastructure.database import get_db
from finreports.main import app

YEAR_2024 = {"from_date": "2024-01-01", "to_date": "2024-12-31"}


def amount(value) -> Decimal:
    return Decimal(str(value))


class TestApp:
    """Test root and health endpoints."""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}


class TestStatementEndpoints:
    """Test statement endpoints."""

    def test_profit_loss(self, client):
        response = client.get("/api/v1/reports/profit-loss", params=YEAR_2024)
        assert response.status_code == 200
        body = response.json()
        assert amount(body["revenue"]) == Decimal("30000")
        assert amount(body["costOfGoodsSold"]) == Decimal("12000")
        assert amount(body["netIncome"]) == Decimal("3500")
        assert body["period"] == {"fromDate": "2024-01-01", "toDate": "2024-12-31"}
        assert body["accounts"][0]["accountNumber"] == 3010
        assert body["accounts"][0]["category"] == "Revenue"
        assert body["previousPeriod"] is None

    def test_omit_nulls(self, client):
        response = client.get("/api/v1/reports/profit-loss", params={**YEAR_2024, "omitNulls": "true"})
        assert "previousPeriod" not in response.json()

    def test_profit_loss_previous_period(self, client):
        response = client.get("/api/v1/reports/profit-loss", params={
            "from_date": "2024-04-01",
            "to_date": "2024-06-30",
            "prior_from_date": "2024-01-01",
            "prior_to_date": "2024-03-31",
        })
        body = response.json()
        assert amount(body["netIncome"]) == Decimal("10000")
        assert amount(body["previousPeriod"]["netIncome"]) == Decimal("-6500")

    def test_balance_sheet(self, client):
        response = client.get("/api/v1/reports/balance-sheet", params={"as_of_date": "2023-12-31"})
        body = response.json()
        assert body["asOfDate"] == "2023-12-31"
        assert amount(body["assets"]["total"]) == Decimal("180000")
        assert amount(body["liabilities"]["total"]) == Decimal("130000")
        assert amount(body["equity"]["total"]) == Decimal("50000")
        assert body["isBalanced"] is True
        assert body["summary"]["assetAccounts"] == 3

    def test_balance_sheet_reports_imbalance(self, client):
        body = client.get("/api/v1/reports/balance-sheet", params={"as_of_date": "2024-12-31"}).json()
        assert body["isBalanced"] is False
        assert amount(body["balanceCheck"]) == Decimal("3500")

    def test_cash_flow(self, client):
        body = client.get("/api/v1/reports/cash-flow", params={"from_date": "2023-01-01", "to_date": "2023-12-31"}).json()
        assert amount(body["investingActivities"]["total"]) == Decimal("-60000")
        assert amount(body["financingActivities"]["total"]) == Decimal("100000")
        assert amount(body["netCashFlow"]) == amount(body["cashAccountsChange"])
        assert body["isReconciled"] is True

    def test_ratios(self, client):
        body = client.get("/api/v1/reports/ratios", params={"as_of_date": "2024-12-31"}).json()
        assert amount(body["liquidityRatios"]["currentRatio"]) == Decimal("6.34")
        assert amount(body["profitabilityRatios"]["profitMargin"]) == Decimal("11.67")
        assert body["interpretation"] == {
            "currentRatioInterpretation": "Strong",
            "debtLevelInterpretation": "High",
            "profitabilityInterpretation": "Good",
        }
        assert amount(body["underlyingData"]["inventory"]) == Decimal("18000")


class TestSubLedgerEndpoints:
    """Test aging, profitability, variance and dimension endpoints."""

    def test_aging(self, client):
        body = client.get("/api/v1/reports/aging", params={"as_of_date": "2024-03-15"}).json()
        assert [c["customerId"] for c in body["customers"]] == ["C001", "C002", "C003"]
        nordic = body["customers"][1]
        assert nordic["customerName"] == "Nordic Retail AB"
        assert amount(nordic["days61to90"]) == Decimal("4000")
        assert amount(nordic["over90Days"]) == Decimal("3000")
        assert body["summary"]["collectionRisk"] == "Medium"
        assert body["riskAnalysis"]["highRiskCustomers"] == 1

    @pytest.mark.parametrize("limit, returned", [(1, 1), (0, 3), (100000, 3)])
    def test_aging_limit_clamped(self, client, limit, returned):
        body = client.get("/api/v1/reports/aging", params={"as_of_date": "2024-03-15", "limit": limit}).json()
        assert len(body["customers"]) == returned

    def test_profitability_by_product(self, client):
        body = client.get("/api/v1/reports/profitability", params={"analysis_type": "product"}).json()
        assert body["analysisType"] == "product"
        assert [row["key"] for row in body["results"]] == ["P300", "P200", "P100"]
        assert body["results"][1]["name"] == "Skrivbord"
        assert amount(body["results"][1]["estimatedCost"]) == Decimal("6000")

    def test_profitability_invalid_type(self, client):
        response = client.get("/api/v1/reports/profitability", params={"analysis_type": "region"})
        assert response.status_code == 400
        assert response.json()["error"] == "InvalidParameter"

    def test_budget_variance(self, client):
        body = client.get("/api/v1/reports/budget-variance", params=YEAR_2024).json()
        assert body["budgetYear"] == 2024
        assert [row["accountNumber"] for row in body["variances"]] == [7010, 3010, 4010]
        assert body["variances"][0]["varianceStatus"] == "Favorable"
        assert body["summary"]["significantVariances"] == 1
        assert body["summary"]["note"]

    def test_budget_variance_threshold(self, client):
        body = client.get("/api/v1/reports/budget-variance", params={**YEAR_2024, "threshold": "50"}).json()
        assert [row["accountNumber"] for row in body["variances"]] == [7010]

    def test_dimensions(self, client):
        body = client.get("/api/v1/reports/dimensions/R2", params=YEAR_2024).json()
        assert body["level"] == "R2"
        assert [row["key"] for row in body["rows"]] == ["P2", "P1"]
        assert body["rows"][0]["parentKey"] == "P1"

    def test_dimensions_unknown_level(self, client):
        response = client.get("/api/v1/reports/dimensions/R13")
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "InvalidParameter"
        assert "R12" in body["message"]


class TestDataUnavailable:
    """Test failed data feeds over HTTP."""

    @pytest.fixture
    def broken_client(self):
        """Database without tables: every query fails."""
        engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)

        def override_get_db():
            db = Session(engine)
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        yield TestClient(app)
        app.dependency_overrides.clear()
        engine.dispose()

    def test_service_unavailable(self, broken_client):
        response = broken_client.get("/api/v1/reports/balance-sheet", params={"as_of_date": "2024-12-31"})
        assert response.status_code == 503
        assert response.json()["error"] == "DataUnavailable"
        assert response.json()["operation"] == "fetch_accounts"
