"""
Infrastructure - SQLModel database models (BAS chart of accounts, ledger and
sub-ledger tables).
"""

from datetime import date
from decimal import Decimal
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class Account(SQLModel, table=True):
    """Konto - ledger account."""

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    account_number: int = Field(unique=True, index=True)
    name: str
    account_group: str = ""
    suspended: bool = False


class LedgerTransaction(SQLModel, table=True):
    """Verifikationsrad - one posted ledger line, tagged on up to twelve dimensions."""

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    voucher_number: int | None = Field(default=None, index=True)
    voucher_date: date = Field(index=True)
    account_number: int = Field(index=True)
    is_credit: bool = False
    amount: Decimal = Field(default=Decimal("0"), max_digits=18, decimal_places=2)
    description: str | None = None
    r1: str | None = None  # Cost center
    r2: str | None = None  # Project
    r3: str | None = None
    r4: str | None = None
    r5: str | None = None
    r6: str | None = None
    r7: str | None = None
    r8: str | None = None
    r9: str | None = None
    r10: str | None = None
    r11: str | None = None
    r12: str | None = None


class Customer(SQLModel, table=True):
    """Kund."""

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    customer_code: str = Field(unique=True, index=True)
    customer_name: str
    credit_term_days: int = 30
    is_active: bool = True


class CustomerTransaction(SQLModel, table=True):
    """Kundfaktura - receivable invoice."""

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    invoice_number: str = Field(index=True)
    customer_code: str = Field(index=True)
    invoice_date: date = Field(index=True)
    due_date: date
    amount_due: Decimal = Field(default=Decimal("0"), max_digits=18, decimal_places=2)
    amount_paid: Decimal = Field(default=Decimal("0"), max_digits=18, decimal_places=2)


class Product(SQLModel, table=True):
    """Artikel."""

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    product_code: str = Field(unique=True, index=True)
    description: str
    cost_price: Decimal | None = Field(default=None, max_digits=18, decimal_places=2)
    is_active: bool = True


class OrderLine(SQLModel, table=True):
    """Orderrad - sales order line."""

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    order_number: str = Field(index=True)
    order_date: date = Field(index=True)
    customer_code: str = Field(index=True)
    product_code: str = Field(index=True)
    quantity: Decimal = Field(default=Decimal("0"), max_digits=18, decimal_places=4)
    unit_price: Decimal = Field(default=Decimal("0"), max_digits=18, decimal_places=2)


class DimensionValue(SQLModel, table=True):
    """Dimension value of any level R1-R12 (cost center, project, ...)."""

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    level: str = Field(index=True)  # R1 ... R12
    key: str = Field(index=True)
    name: str = ""
    description: str = ""
    parent_key: str | None = None


class BudgetLine(SQLModel, table=True):
    """Budgetrad - authored budget amount per account and year."""

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    account_number: int = Field(index=True)
    budget_year: int = Field(index=True)
    amount: Decimal = Field(default=Decimal("0"), max_digits=18, decimal_places=2)
