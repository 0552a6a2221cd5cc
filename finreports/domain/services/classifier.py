"""
Service - Account classification by account number (BAS ranges).
"""

from decimal import Decimal
from typing import NamedTuple

from ..entities import Account
from ..value_objects import AccountNature, Category, Statement


class AccountRange(NamedTuple):
    """Half-open numeric range [start, stop) mapped to a category."""
    start: int
    stop: int
    category: Category

    def __contains__(self, number: object) -> bool:
        return isinstance(number, int) and self.start <= number < self.stop


# Ordered, mutually exclusive by construction
CATEGORY_RANGES: tuple[AccountRange, ...] = (
    AccountRange(1000, 1400, Category.FIXED_ASSETS),
    AccountRange(1400, 2000, Category.CURRENT_ASSETS),
    AccountRange(2000, 2100, Category.EQUITY),
    AccountRange(2100, 2200, Category.UNTAXED_RESERVES),
    AccountRange(2200, 2400, Category.LONG_TERM_LIABILITIES),
    AccountRange(2400, 3000, Category.CURRENT_LIABILITIES),
    AccountRange(3000, 4000, Category.REVENUE),
    AccountRange(4000, 5000, Category.COST_OF_GOODS_SOLD),
    AccountRange(5000, 6000, Category.OPERATING_EXPENSES),
    AccountRange(6000, 7000, Category.FINANCIAL_ITEMS),
    AccountRange(7000, 8000, Category.OTHER_INCOME_EXPENSE),
    AccountRange(8000, 9000, Category.EXTRAORDINARY_ITEMS),
)

REPORTABLE_RANGE = AccountRange(1000, 9000, Category.OTHER)
CASH_RANGE = AccountRange(1910, 2000, Category.CURRENT_ASSETS)
INVENTORY_RANGE = AccountRange(1400, 1500, Category.CURRENT_ASSETS)

PROFIT_AND_LOSS_CATEGORIES = (
    Category.REVENUE,
    Category.COST_OF_GOODS_SOLD,
    Category.OPERATING_EXPENSES,
    Category.FINANCIAL_ITEMS,
    Category.OTHER_INCOME_EXPENSE,
    Category.EXTRAORDINARY_ITEMS,
)

BALANCE_SHEET_CATEGORIES = (
    Category.FIXED_ASSETS,
    Category.CURRENT_ASSETS,
    Category.EQUITY,
    Category.UNTAXED_RESERVES,
    Category.LONG_TERM_LIABILITIES,
    Category.CURRENT_LIABILITIES,
)

_NATURES: dict[Category, AccountNature] = {
    Category.REVENUE: AccountNature.REVENUE,
    Category.COST_OF_GOODS_SOLD: AccountNature.EXPENSE,
    Category.OPERATING_EXPENSES: AccountNature.EXPENSE,
    Category.FINANCIAL_ITEMS: AccountNature.EXPENSE,
    Category.OTHER_INCOME_EXPENSE: AccountNature.EXPENSE,
    Category.EXTRAORDINARY_ITEMS: AccountNature.EXPENSE,
    Category.FIXED_ASSETS: AccountNature.ASSET,
    Category.CURRENT_ASSETS: AccountNature.ASSET,
    Category.EQUITY: AccountNature.EQUITY,
    Category.UNTAXED_RESERVES: AccountNature.LIABILITY,
    Category.LONG_TERM_LIABILITIES: AccountNature.LIABILITY,
    Category.CURRENT_LIABILITIES: AccountNature.LIABILITY,
}

# Credit-natured balances are negated for display
_CREDIT_NATURES = (AccountNature.REVENUE, AccountNature.LIABILITY, AccountNature.EQUITY)


class AccountClassifier:
    """
    Service - Maps account numbers to statement categories.
    Pure and total: every number maps to exactly one category, Other as fallback.
    """

    def __init__(self, ranges: tuple[AccountRange, ...] = CATEGORY_RANGES):
        self.ranges = ranges
        self._rank = {r.category: idx for idx, r in enumerate(ranges)}

    def classify(self, account_number: int) -> Category:
        for account_range in self.ranges:
            if account_number in account_range:
                return account_range.category
        return Category.OTHER

    def is_reportable(self, account: Account) -> bool:
        """Accounts outside 1000-8999 or without a name never reach a statement."""
        return account.number in REPORTABLE_RANGE and account.has_name

    def statement_of(self, category: Category) -> Statement | None:
        if category in PROFIT_AND_LOSS_CATEGORIES:
            return Statement.PROFIT_AND_LOSS
        if category in BALANCE_SHEET_CATEGORIES:
            return Statement.BALANCE_SHEET
        return None

    def nature_of(self, category: Category) -> AccountNature | None:
        return _NATURES.get(category)

    def display_amount(self, category: Category, signed_total: Decimal) -> Decimal:
        if self.nature_of(category) in _CREDIT_NATURES:
            return -signed_total
        return signed_total

    def rank(self, category: Category) -> int:
        """Presentation order of a category (Other last)."""
        return self._rank.get(category, len(self.ranges))

    @staticmethod
    def is_cash_account(account_number: int) -> bool:
        return account_number in CASH_RANGE

    @staticmethod
    def is_inventory_account(account_number: int) -> bool:
        return account_number in INVENTORY_RANGE
