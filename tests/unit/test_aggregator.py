"""
Unit tests - Ledger aggregation and account tagging.
"""

from datetime import date
from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from finreports.domain.entities import Account, LedgerEntry
from finreports.domain.services import LedgerAggregator
from finreports.domain.value_objects import Category, DimensionLevel, ReportOptions


def entry(number: int, amount: str, day: date, is_credit: bool = False, **tags: str) -> LedgerEntry:
    return LedgerEntry(
        account_number=number,
        voucher_date=day,
        is_credit=is_credit,
        amount=Decimal(amount),
        dimension_tags={DimensionLevel(k.upper()): v for k, v in tags.items()},
    )


@pytest.fixture
def aggregator() -> LedgerAggregator:
    return LedgerAggregator()


class TestLedgerEntry:
    """Test ledger entry sign convention."""

    def test_debit_positive_credit_negative(self):
        assert entry(1930, "100", date(2024, 1, 1)).signed_amount == Decimal("100")
        assert entry(3010, "100", date(2024, 1, 1), is_credit=True).signed_amount == Decimal("-100")

    def test_negative_amount_rejected(self):
        """Ledger amounts are stored unsigned."""
        with pytest.raises(ValueError):
            entry(1930, "-1", date(2024, 1, 1))


class TestAggregate:
    """Test signed totals per account."""

    def test_sums_debits_minus_credits(self, aggregator):
        entries = [
            entry(1930, "1000", date(2024, 1, 1)),
            entry(1930, "300", date(2024, 1, 2), is_credit=True),
            entry(3010, "700", date(2024, 1, 2), is_credit=True),
        ]
        totals = aggregator.aggregate(entries)
        assert totals == {1930: Decimal("700"), 3010: Decimal("-700")}

    def test_window_bounds_inclusive(self, aggregator):
        entries = [
            entry(1930, "1", date(2023, 12, 31)),
            entry(1930, "10", date(2024, 1, 1)),
            entry(1930, "100", date(2024, 1, 31)),
            entry(1930, "1000", date(2024, 2, 1)),
        ]
        totals = aggregator.aggregate(entries, date(2024, 1, 1), date(2024, 1, 31))
        assert totals[1930] == Decimal("110")

    def test_open_bounds(self, aggregator):
        entries = [entry(1930, "1", date(2000, 1, 1)), entry(1930, "2", date(2030, 1, 1))]
        assert aggregator.aggregate(entries, None, date(2024, 1, 1))[1930] == Decimal("1")
        assert aggregator.aggregate(entries, date(2024, 1, 1), None)[1930] == Decimal("2")

    def test_account_filter(self, aggregator):
        entries = [entry(1930, "5", date(2024, 1, 1)), entry(5010, "5", date(2024, 1, 1))]
        totals = aggregator.aggregate(entries, account_filter=lambda n: n >= 3000)
        assert list(totals) == [5010]

    def test_tiny_entries_still_contribute(self, aggregator):
        """Materiality never drops entries from totals."""
        entries = [entry(5010, "0.004", date(2024, 1, 1)) for _ in range(5)]
        assert aggregator.aggregate(entries)[5010] == Decimal("0.020")

    def test_by_dimension(self, aggregator):
        entries = [
            entry(5010, "100", date(2024, 1, 1), r1="200"),
            entry(5010, "50", date(2024, 1, 1), r1="200"),
            entry(3010, "300", date(2024, 1, 1), is_credit=True, r1="100"),
            entry(1930, "150", date(2024, 1, 1), is_credit=True),
        ]
        totals = aggregator.aggregate_by_dimension(entries, DimensionLevel.R1)
        assert totals["200"] == {5010: Decimal("150")}
        assert totals["100"] == {3010: Decimal("-300")}
        assert totals[None] == {1930: Decimal("-150")}


class TestTag:
    """Test attaching account data to totals."""

    def test_orphan_entries_logged_and_skipped(self, aggregator):
        accounts = {3010: Account(3010, "Försäljning")}
        totals = {3010: Decimal("-100"), 3999: Decimal("-50")}
        with capture_logs() as logs:
            lines = aggregator.tag(accounts, totals)
        assert [line.account_number for line in lines] == [3010]
        assert logs[0]["event"] == "ledger.orphan_entries"
        assert logs[0]["account_numbers"] == [3999]

    def test_immaterial_lines_hidden(self, aggregator):
        accounts = {5010: Account(5010, "Lokalhyra"), 5020: Account(5020, "El")}
        totals = {5010: Decimal("0.01"), 5020: Decimal("0.02")}
        lines = aggregator.tag(accounts, totals)
        assert [line.account_number for line in lines] == [5020]

    def test_include_zero_lists_all_reportable(self, aggregator):
        accounts = {
            1930: Account(1930, "Bank"),
            2081: Account(2081, "Aktiekapital"),
            9999: Account(9999, "Spärrkonto"),
        }
        lines = aggregator.tag(accounts, {1930: Decimal("5")}, include_zero=True)
        assert [(line.account_number, line.amount) for line in lines] == [
            (1930, Decimal("5")),
            (2081, Decimal("0")),
        ]

    def test_sorted_by_category_then_number(self, aggregator):
        accounts = {n: Account(n, f"Konto {n}") for n in (5010, 3020, 3010, 4010)}
        totals = {n: Decimal("10") for n in accounts}
        lines = aggregator.tag(accounts, totals, options=ReportOptions())
        assert [line.account_number for line in lines] == [3010, 3020, 4010, 5010]
        assert lines[0].category == Category.REVENUE

    def test_category_totals_include_immaterial(self, aggregator):
        accounts = {5010: Account(5010, "Lokalhyra"), 5020: Account(5020, "El")}
        totals = {5010: Decimal("0.005"), 5020: Decimal("100")}
        assert aggregator.category_totals(accounts, totals)[Category.OPERATING_EXPENSES] == Decimal("100.005")
