"""
Unit tests - Account classification by BAS number ranges.
"""

from decimal import Decimal

import pytest

from finreports.domain.entities import Account
from finreports.domain.services import AccountClassifier
from finreports.domain.value_objects import AccountNature, Category, Statement


@pytest.fixture
def classifier() -> AccountClassifier:
    return AccountClassifier()


class TestClassify:
    """Test mapping account numbers to categories."""

    @pytest.mark.parametrize("number, category", [
        (1200, Category.FIXED_ASSETS),
        (1399, Category.FIXED_ASSETS),
        (1400, Category.CURRENT_ASSETS),
        (1930, Category.CURRENT_ASSETS),
        (2081, Category.EQUITY),
        (2150, Category.UNTAXED_RESERVES),
        (2350, Category.LONG_TERM_LIABILITIES),
        (2440, Category.CURRENT_LIABILITIES),
        (3050, Category.REVENUE),
        (4500, Category.COST_OF_GOODS_SOLD),
        (5200, Category.OPERATING_EXPENSES),
        (6100, Category.FINANCIAL_ITEMS),
        (7010, Category.OTHER_INCOME_EXPENSE),
        (8410, Category.EXTRAORDINARY_ITEMS),
        (999, Category.OTHER),
        (9999, Category.OTHER),
    ])
    def test_category_by_range(self, classifier, number, category):
        """Each range maps to its category; outside the ranges is Other."""
        assert classifier.classify(number) == category

    def test_every_number_has_exactly_one_category(self, classifier):
        """Ranges are mutually exclusive and cover 1000-8999."""
        for number in range(1000, 9000):
            matches = [r for r in classifier.ranges if number in r]
            assert len(matches) == 1

    def test_rank_puts_other_last(self, classifier):
        """Presentation order follows the ranges, Other last."""
        assert classifier.rank(Category.FIXED_ASSETS) < classifier.rank(Category.EQUITY)
        assert classifier.rank(Category.REVENUE) < classifier.rank(Category.EXTRAORDINARY_ITEMS)
        assert classifier.rank(Category.OTHER) > classifier.rank(Category.EXTRAORDINARY_ITEMS)


class TestReportable:
    """Test which accounts can appear on a statement."""

    def test_account_9999_excluded(self, classifier):
        """Account 9999 is outside the reportable range."""
        assert classifier.is_reportable(Account(9999, "Spärrkonto")) is False

    def test_blank_name_excluded(self, classifier):
        """Placeholder accounts with a blank name are excluded."""
        assert classifier.is_reportable(Account(3010, " ")) is False
        assert classifier.is_reportable(Account(3010, "")) is False

    def test_named_account_in_range_included(self, classifier):
        assert classifier.is_reportable(Account(3010, "Försäljning varor")) is True


class TestNatureAndSign:
    """Test statement membership and display sign."""

    def test_statement_of(self, classifier):
        assert classifier.statement_of(Category.REVENUE) == Statement.PROFIT_AND_LOSS
        assert classifier.statement_of(Category.EQUITY) == Statement.BALANCE_SHEET
        assert classifier.statement_of(Category.OTHER) is None

    def test_nature_of(self, classifier):
        assert classifier.nature_of(Category.REVENUE) == AccountNature.REVENUE
        assert classifier.nature_of(Category.OPERATING_EXPENSES) == AccountNature.EXPENSE
        assert classifier.nature_of(Category.UNTAXED_RESERVES) == AccountNature.LIABILITY
        assert classifier.nature_of(Category.OTHER) is None

    def test_credit_natured_balances_negated(self, classifier):
        """Revenue, liabilities and equity show their credit balance as positive."""
        assert classifier.display_amount(Category.REVENUE, Decimal("-1000")) == Decimal("1000")
        assert classifier.display_amount(Category.CURRENT_LIABILITIES, Decimal("-600")) == Decimal("600")
        assert classifier.display_amount(Category.EQUITY, Decimal("-400")) == Decimal("400")

    def test_debit_natured_balances_unchanged(self, classifier):
        assert classifier.display_amount(Category.CURRENT_ASSETS, Decimal("1000")) == Decimal("1000")
        assert classifier.display_amount(Category.OPERATING_EXPENSES, Decimal("400")) == Decimal("400")

    def test_cash_and_inventory_ranges(self, classifier):
        assert classifier.is_cash_account(1910) is True
        assert classifier.is_cash_account(1999) is True
        assert classifier.is_cash_account(1510) is False
        assert classifier.is_inventory_account(1460) is True
        assert classifier.is_inventory_account(1510) is False
