"""
Repository interfaces - the data feeds the report engine reads from.
Implementations live in the infrastructure layer.
"""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal

from .entities import Account, DimensionValue, LedgerEntry, ReceivableInvoice, RevenueCostLine
from .value_objects import DimensionLevel


class IFinancialDataRepository(ABC):

    @abstractmethod
    def fetch_accounts(self) -> list[Account]:
        ...

    @abstractmethod
    def fetch_ledger_entries(
        self, from_date: date | None = None, to_date: date | None = None
    ) -> list[LedgerEntry]:
        ...

    @abstractmethod
    def fetch_receivables(self, as_of_date: date) -> list[ReceivableInvoice]:
        """Customer invoices dated on or before as_of_date."""
        ...

    @abstractmethod
    def fetch_revenue_cost_lines(
        self, from_date: date | None = None, to_date: date | None = None
    ) -> list[RevenueCostLine]:
        ...

    @abstractmethod
    def fetch_budget_target(self, account_number: int, budget_year: int | None = None) -> Decimal:
        """Authored budget amount for an account (0 when none is authored)."""
        ...

    @abstractmethod
    def fetch_dimension_values(self, level: DimensionLevel) -> list[DimensionValue]:
        ...
