"""
Domain Layer - Value objects for statement derivation.
Chart of accounts follows the BAS numbering (1xxx assets ... 8xxx extraordinary items).
"""

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_EVEN, Decimal
from enum import Enum

ZERO = Decimal("0")
HUNDRED = Decimal("100")


class Category(str, Enum):
    """Statement category of an account (derived from the account number)."""
    REVENUE = "Revenue"
    COST_OF_GOODS_SOLD = "CostOfGoodsSold"
    OPERATING_EXPENSES = "OperatingExpenses"
    FINANCIAL_ITEMS = "FinancialItems"
    OTHER_INCOME_EXPENSE = "OtherIncomeExpense"
    EXTRAORDINARY_ITEMS = "ExtraordinaryItems"
    FIXED_ASSETS = "FixedAssets"
    CURRENT_ASSETS = "CurrentAssets"
    EQUITY = "Equity"
    UNTAXED_RESERVES = "UntaxedReserves"
    LONG_TERM_LIABILITIES = "LongTermLiabilities"
    CURRENT_LIABILITIES = "CurrentLiabilities"
    OTHER = "Other"


class Statement(str, Enum):
    PROFIT_AND_LOSS = "ProfitAndLoss"
    BALANCE_SHEET = "BalanceSheet"


class AccountNature(str, Enum):
    """Normal balance nature of an account."""
    REVENUE = "Revenue"
    EXPENSE = "Expense"
    ASSET = "Asset"
    LIABILITY = "Liability"
    EQUITY = "Equity"


class CashFlowActivity(str, Enum):
    OPERATING = "Operating"
    INVESTING = "Investing"
    FINANCING = "Financing"
    CASH = "Cash"  # Cash & bank accounts, excluded from categorisation


class AgingBucket(str, Enum):
    """Aging brackets for receivables (days overdue)."""
    CURRENT = "Current"
    DAYS_1_30 = "1-30"
    DAYS_31_60 = "31-60"
    DAYS_61_90 = "61-90"
    OVER_90 = "Over90"


class CollectionRisk(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class ProfitabilityDimension(str, Enum):
    CUSTOMER = "customer"
    PRODUCT = "product"


class VarianceStatus(str, Enum):
    FAVORABLE = "Favorable"
    UNFAVORABLE = "Unfavorable"
    ON_TARGET = "OnTarget"


class DimensionLevel(str, Enum):
    """Organizational dimensions R1-R12 (cost center, project, department, ...)."""
    R1 = "R1"
    R2 = "R2"
    R3 = "R3"
    R4 = "R4"
    R5 = "R5"
    R6 = "R6"
    R7 = "R7"
    R8 = "R8"
    R9 = "R9"
    R10 = "R10"
    R11 = "R11"
    R12 = "R12"

    @property
    def column(self) -> str:
        """Tag column name on ledger rows (r1 ... r12)."""
        return self.value.lower()


@dataclass(frozen=True, slots=True)
class Period:
    """Inclusive date window; a missing bound is unbounded on that side."""
    from_date: date | None = None
    to_date: date | None = None

    def contains(self, day: date) -> bool:
        if self.from_date is not None and day < self.from_date:
            return False
        if self.to_date is not None and day > self.to_date:
            return False
        return True


@dataclass(frozen=True, slots=True)
class ReportOptions:
    """Per-call formatting options (no process-wide state)."""
    precision: int = 2
    materiality: Decimal = Decimal("0.01")
    rounding: str = ROUND_HALF_EVEN

    def round(self, value: Decimal, places: int | None = None) -> Decimal:
        digits = self.precision if places is None else places
        return value.quantize(Decimal(1).scaleb(-digits), rounding=self.rounding)

    def is_material(self, value: Decimal) -> bool:
        return abs(value) > self.materiality


def safe_divide(numerator: Decimal, denominator: Decimal) -> Decimal:
    """Division guarded against a zero denominator (returns 0)."""
    if denominator == 0:
        return ZERO
    return numerator / denominator
