"""
Domain Entities - Immutable snapshot records read once per request.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from .value_objects import ZERO, DimensionLevel


@dataclass(frozen=True, slots=True)
class Account:
    """
    Entity - Ledger account (chart of accounts).
    Reference data, never mutated by the engine.
    """
    number: int
    name: str
    group: str = ""
    suspended: bool = False

    @property
    def has_name(self) -> bool:
        # Placeholder accounts carry a single blank as name
        return bool(self.name and self.name.strip())


@dataclass(frozen=True, slots=True)
class LedgerEntry:
    """
    Entity - General ledger posting.
    Signed value is debit-positive: +amount for debit, -amount for credit.
    """
    account_number: int
    voucher_date: date
    is_credit: bool
    amount: Decimal
    # Part of equality, excluded from the hash
    dimension_tags: dict[DimensionLevel, str] = field(default_factory=dict, hash=False)
    voucher_number: int | None = None
    description: str = ""

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError(f"Ledger amount must be non-negative: {self.amount}")

    @property
    def signed_amount(self) -> Decimal:
        return -self.amount if self.is_credit else self.amount

    def tag(self, level: DimensionLevel) -> str | None:
        return self.dimension_tags.get(level)


@dataclass(frozen=True, slots=True)
class ReceivableInvoice:
    """Entity - Open (or paid) customer invoice."""
    customer_id: str
    invoice_date: date
    due_date: date
    amount_due: Decimal
    amount_paid: Decimal = ZERO
    customer_name: str = ""
    invoice_number: str | None = None

    @property
    def outstanding(self) -> Decimal:
        return self.amount_due - (self.amount_paid or ZERO)

    def days_overdue(self, as_of: date) -> int:
        return (as_of - self.due_date).days


@dataclass(frozen=True, slots=True)
class RevenueCostLine:
    """Entity - Sales order line used for margin analysis."""
    customer_id: str
    product_id: str
    order_id: str
    quantity: Decimal
    unit_price: Decimal
    unit_cost: Decimal | None = None
    order_date: date | None = None
    customer_name: str = ""
    product_description: str = ""

    @property
    def revenue(self) -> Decimal:
        return self.quantity * self.unit_price

    def cost(self, estimate_ratio: Decimal) -> Decimal:
        """Line cost; estimated from the selling price when no cost price is known."""
        unit_cost = self.unit_cost if self.unit_cost is not None else self.unit_price * estimate_ratio
        return self.quantity * unit_cost


@dataclass(frozen=True, slots=True)
class DimensionValue:
    """Uniform accessor for one row of any dimension table R1-R12."""
    level: DimensionLevel
    key: str
    name: str = ""
    description: str = ""
    parent_key: str | None = None
