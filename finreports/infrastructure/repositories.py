"""
Infrastructure - SQL implementation of the financial data feeds.
"""

from collections.abc import Callable
from datetime import date
from decimal import Decimal
from functools import wraps
from typing import TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from finreports.core.logging import get_logger
from finreports.domain.entities import (
    Account,
    DimensionValue,
    LedgerEntry,
    ReceivableInvoice,
    RevenueCostLine,
)
from finreports.domain.errors import DataUnavailable
from finreports.domain.repositories import IFinancialDataRepository
from finreports.domain.value_objects import ZERO, DimensionLevel
from finreports.infrastructure.database import models

logger = get_logger(__name__)

T = TypeVar("T")


def data_operation(operation: str) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Translate database failures of a feed into DataUnavailable(operation)."""

    def decorator(method: Callable[..., T]) -> Callable[..., T]:
        @wraps(method)
        def wrapper(*args, **kwargs) -> T:
            try:
                return method(*args, **kwargs)
            except SQLAlchemyError as exc:
                logger.error("data.unavailable", operation=operation, error=str(exc))
                raise DataUnavailable(operation, type(exc).__name__) from exc

        return wrapper

    return decorator


def _tags(row: models.LedgerTransaction) -> dict[DimensionLevel, str]:
    tags = {}
    for level in DimensionLevel:
        value = getattr(row, level.column)
        if value:
            tags[level] = value.strip()
    return tags


class SqlFinancialDataRepository(IFinancialDataRepository):
    """Reads accounts, ledger, receivables, order lines and budgets through one session."""

    def __init__(self, session: Session):
        self.session = session

    @data_operation("fetch_accounts")
    def fetch_accounts(self) -> list[Account]:
        rows = self.session.execute(
            select(models.Account).order_by(models.Account.account_number)
        ).scalars()
        return [
            Account(
                number=row.account_number,
                name=row.name,
                group=row.account_group or "",
                suspended=row.suspended,
            )
            for row in rows
        ]

    @data_operation("fetch_ledger_entries")
    def fetch_ledger_entries(
        self, from_date: date | None = None, to_date: date | None = None
    ) -> list[LedgerEntry]:
        query = select(models.LedgerTransaction)
        if from_date is not None:
            query = query.where(models.LedgerTransaction.voucher_date >= from_date)
        if to_date is not None:
            query = query.where(models.LedgerTransaction.voucher_date <= to_date)
        query = query.order_by(models.LedgerTransaction.voucher_date, models.LedgerTransaction.voucher_number)
        return [
            LedgerEntry(
                account_number=row.account_number,
                voucher_date=row.voucher_date,
                is_credit=row.is_credit,
                amount=row.amount,
                dimension_tags=_tags(row),
                voucher_number=row.voucher_number,
                description=row.description or "",
            )
            for row in self.session.execute(query).scalars()
        ]

    @data_operation("fetch_receivables")
    def fetch_receivables(self, as_of_date: date) -> list[ReceivableInvoice]:
        query = (
            select(models.CustomerTransaction, models.Customer.customer_name)
            .outerjoin(
                models.Customer,
                models.Customer.customer_code == models.CustomerTransaction.customer_code,
            )
            .where(models.CustomerTransaction.invoice_date <= as_of_date)
        )
        return [
            ReceivableInvoice(
                customer_id=invoice.customer_code,
                invoice_date=invoice.invoice_date,
                due_date=invoice.due_date,
                amount_due=invoice.amount_due,
                amount_paid=invoice.amount_paid or ZERO,
                customer_name=customer_name or "",
                invoice_number=invoice.invoice_number,
            )
            for invoice, customer_name in self.session.execute(query)
        ]

    @data_operation("fetch_revenue_cost_lines")
    def fetch_revenue_cost_lines(
        self, from_date: date | None = None, to_date: date | None = None
    ) -> list[RevenueCostLine]:
        query = (
            select(
                models.OrderLine,
                models.Customer.customer_name,
                models.Product.description,
                models.Product.cost_price,
            )
            .outerjoin(models.Customer, models.Customer.customer_code == models.OrderLine.customer_code)
            .outerjoin(models.Product, models.Product.product_code == models.OrderLine.product_code)
        )
        if from_date is not None:
            query = query.where(models.OrderLine.order_date >= from_date)
        if to_date is not None:
            query = query.where(models.OrderLine.order_date <= to_date)
        return [
            RevenueCostLine(
                customer_id=line.customer_code,
                product_id=line.product_code,
                order_id=line.order_number,
                quantity=line.quantity,
                unit_price=line.unit_price,
                unit_cost=cost_price,
                order_date=line.order_date,
                customer_name=customer_name or "",
                product_description=description or "",
            )
            for line, customer_name, description, cost_price in self.session.execute(query)
        ]

    @data_operation("fetch_budget_target")
    def fetch_budget_target(self, account_number: int, budget_year: int | None = None) -> Decimal:
        query = select(func.sum(models.BudgetLine.amount)).where(
            models.BudgetLine.account_number == account_number
        )
        if budget_year is not None:
            query = query.where(models.BudgetLine.budget_year == budget_year)
        total = self.session.execute(query).scalar()
        return Decimal(total) if total is not None else ZERO

    @data_operation("fetch_dimension_values")
    def fetch_dimension_values(self, level: DimensionLevel) -> list[DimensionValue]:
        rows = self.session.execute(
            select(models.DimensionValue)
            .where(models.DimensionValue.level == level.value)
            .order_by(models.DimensionValue.key)
        ).scalars()
        return [
            DimensionValue(
                level=level,
                key=row.key,
                name=row.name,
                description=row.description,
                parent_key=row.parent_key,
            )
            for row in rows
        ]
