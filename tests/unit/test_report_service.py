"""
Unit tests - Report use cases over an in-memory repository.
"""

from datetime import date
from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from finreports.application import ReportService
from finreports.domain.errors import DataUnavailable, InvalidParameter
from finreports.domain.repositories import IFinancialDataRepository
from finreports.domain.value_objects import DimensionLevel, Period, ProfitabilityDimension
from finreports.infrastructure.database.seed import SAMPLE_BUDGET


class InMemoryRepository(IFinancialDataRepository):
    """Repository over fixture data; records every call."""

    def __init__(self, accounts, entries, receivables=(), lines=(), dimension_values=(), budget=()):
        self.accounts = list(accounts)
        self.entries = list(entries)
        self.receivables = list(receivables)
        self.lines = list(lines)
        self.dimension_values = list(dimension_values)
        self.budget = {(number, year): Decimal(amount) for number, year, amount in budget}
        self.calls: list[str] = []

    def fetch_accounts(self):
        self.calls.append("fetch_accounts")
        return self.accounts

    def fetch_ledger_entries(self, from_date=None, to_date=None):
        self.calls.append("fetch_ledger_entries")
        period = Period(from_date, to_date)
        return [e for e in self.entries if period.contains(e.voucher_date)]

    def fetch_receivables(self, as_of_date):
        self.calls.append("fetch_receivables")
        return [r for r in self.receivables if r.invoice_date <= as_of_date]

    def fetch_revenue_cost_lines(self, from_date=None, to_date=None):
        self.calls.append("fetch_revenue_cost_lines")
        return self.lines

    def fetch_budget_target(self, account_number, budget_year=None):
        self.calls.append("fetch_budget_target")
        return self.budget.get((account_number, budget_year), Decimal("0"))

    def fetch_dimension_values(self, level):
        self.calls.append("fetch_dimension_values")
        return [v for v in self.dimension_values if v.level == level]


class FailingRepository(InMemoryRepository):
    """Every feed fails the way the SQL repository reports it."""

    def __init__(self):
        super().__init__([], [])

    def fetch_accounts(self):
        raise DataUnavailable("fetch_accounts", "OperationalError")

    def fetch_receivables(self, as_of_date):
        raise DataUnavailable("fetch_receivables", "OperationalError")


@pytest.fixture
def repository(chart, ledger, receivables, order_lines, dimension_values) -> InMemoryRepository:
    return InMemoryRepository(chart, ledger, receivables, order_lines, dimension_values, SAMPLE_BUDGET)


@pytest.fixture
def service(repository) -> ReportService:
    return ReportService(repository)


class TestStatements:
    """Test statement use cases."""

    def test_profit_loss_logs_report(self, service):
        with capture_logs() as logs:
            statement = service.profit_loss(date(2024, 1, 1), date(2024, 12, 31))
        assert statement.net_income == Decimal("3500")
        generated = [log for log in logs if log["event"] == "report.generated"]
        assert generated[0]["report"] == "profit_loss"

    def test_profit_loss_with_prior_period(self, service):
        statement = service.profit_loss(
            date(2024, 4, 1), date(2024, 6, 30), date(2024, 1, 1), date(2024, 3, 31)
        )
        assert statement.net_income == Decimal("10000")
        assert statement.previous_period.net_income == Decimal("-6500")

    def test_balance_sheet(self, service):
        sheet = service.balance_sheet(date(2023, 12, 31))
        assert sheet.is_balanced is True

    def test_cash_flow(self, service):
        assert service.cash_flow(date(2024, 1, 1), date(2024, 12, 31)).is_reconciled is True

    def test_ratios_default_to_year_to_date(self, service):
        ratios = service.ratios(date(2024, 12, 31))
        assert ratios.underlying_data.total_revenue == Decimal("30000")
        assert ratios.liquidity_ratios.current_ratio == Decimal("6.34")


class TestSubLedgers:
    """Test aging, profitability and dimension use cases."""

    def test_aging(self, service):
        report = service.aging(date(2024, 3, 15))
        assert report.summary.total_outstanding == Decimal("19000")

    def test_aging_skips_invoices_after_as_of(self, service):
        report = service.aging(date(2024, 2, 15))
        assert "C003" not in [c.customer_id for c in report.customers]
        assert report.summary.total_customers == 2

    def test_profitability(self, service):
        result = service.profitability("product", limit=2)
        assert result.analysis_type == ProfitabilityDimension.PRODUCT
        assert len(result.results) == 2

    def test_invalid_dimension_rejected_before_fetch(self, service, repository):
        with pytest.raises(InvalidParameter):
            service.profitability("region")
        with pytest.raises(InvalidParameter):
            service.dimension_analysis("R0")
        assert repository.calls == []

    def test_dimension_analysis(self, service):
        analysis = service.dimension_analysis("R1", date(2024, 1, 1), date(2024, 12, 31))
        assert analysis.level == DimensionLevel.R1
        assert [row.name for row in analysis.rows] == ["Försäljning", "Administration"]


class TestBudgetVariance:
    """Test actual vs authored budget."""

    def test_variance_against_authored_budget(self, service):
        result = service.budget_variance(date(2024, 1, 1), date(2024, 12, 31))
        assert result.budget_year == 2024
        assert result.actual_period == Period(date(2024, 1, 1), date(2024, 12, 31))
        assert [row.account_number for row in result.variances] == [7010, 3010, 4010]
        assert result.variances[1].actual_amount == Decimal("30000")

    def test_budget_year_without_authored_values(self, service):
        """No authored budget: every budget is 0 and every percentage is 0."""
        result = service.budget_variance(date(2024, 1, 1), date(2024, 12, 31), budget_year=2030)
        assert result.variances == []

    def test_budget_fetched_per_profit_and_loss_account(self, service, repository):
        service.budget_variance(date(2024, 1, 1), date(2024, 12, 31))
        assert repository.calls.count("fetch_budget_target") == 5


class TestDataUnavailable:
    """Test failed feeds."""

    def test_failure_propagates(self):
        service = ReportService(FailingRepository())
        with pytest.raises(DataUnavailable) as exc_info:
            service.balance_sheet(date(2024, 12, 31))
        assert exc_info.value.operation == "fetch_accounts"
        assert exc_info.value.to_dict()["error"] == "DataUnavailable"

    def test_failure_of_one_report_only(self):
        service = ReportService(FailingRepository())
        with pytest.raises(DataUnavailable):
            service.aging(date(2024, 3, 15))
        assert service.profitability("customer").results == []
