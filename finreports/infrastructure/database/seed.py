"""
Demo dataset - small BAS chart of accounts with one closed opening year (2023)
and trading activity in 2024.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from finreports.infrastructure.database.models import (
    Account,
    BudgetLine,
    Customer,
    CustomerTransaction,
    DimensionValue,
    LedgerTransaction,
    OrderLine,
    Product,
)

SAMPLE_ACCOUNTS = [
    (1220, "Inventarier och verktyg", "Materiella anläggningstillgångar"),
    (1460, "Lager av handelsvaror", "Varulager"),
    (1510, "Kundfordringar", "Kortfristiga fordringar"),
    (1930, "Företagskonto", "Kassa och bank"),
    (2081, "Aktiekapital", "Eget kapital"),
    (2350, "Andra långfristiga skulder till kreditinstitut", "Långfristiga skulder"),
    (2440, "Leverantörsskulder", "Kortfristiga skulder"),
    (2610, "Utgående moms, 25 %", "Kortfristiga skulder"),
    (3010, "Försäljning varor", "Nettoomsättning"),
    (4010, "Inköp av handelsvaror", "Varuinköp"),
    (5010, "Lokalhyra", "Övriga externa kostnader"),
    (7010, "Löner till kollektivanställda", "Personalkostnader"),
    (8410, "Räntekostnader för långfristiga skulder", "Finansiella kostnader"),
    (9999, "Spärrkonto", ""),
]

# (voucher, date, description, [(account, is_credit, amount, r1, r2), ...])
SAMPLE_VOUCHERS = [
    (1, date(2023, 12, 1), "Aktiekapital", [
        (1930, False, "50000", None, None),
        (2081, True, "50000", None, None),
    ]),
    (2, date(2023, 12, 5), "Banklån", [
        (1930, False, "100000", None, None),
        (2350, True, "100000", None, None),
    ]),
    (3, date(2023, 12, 10), "Inköp inventarier", [
        (1220, False, "60000", None, None),
        (1930, True, "60000", None, None),
    ]),
    (4, date(2023, 12, 15), "Varuinköp på kredit", [
        (1460, False, "30000", None, None),
        (2440, True, "30000", None, None),
    ]),
    (5, date(2024, 2, 1), "Försäljning på faktura F1001", [
        (1510, False, "25000", None, None),
        (3010, True, "20000", "100", "P1"),
        (2610, True, "5000", None, None),
    ]),
    (6, date(2024, 2, 1), "Varukostnad F1001", [
        (4010, False, "12000", "100", "P1"),
        (1460, True, "12000", None, None),
    ]),
    (7, date(2024, 2, 28), "Lokalhyra", [
        (5010, False, "8000", "200", None),
        (1930, True, "8000", None, None),
    ]),
    (8, date(2024, 3, 15), "Inbetalning kund", [
        (1930, False, "15000", None, None),
        (1510, True, "15000", None, None),
    ]),
    (9, date(2024, 3, 31), "Löner mars", [
        (7010, False, "5000", "200", None),
        (1930, True, "5000", None, None),
    ]),
    (10, date(2024, 3, 31), "Ränta banklån", [
        (8410, False, "1500", None, None),
        (1930, True, "1500", None, None),
    ]),
    (11, date(2024, 4, 10), "Kontantförsäljning", [
        (1930, False, "12500", None, None),
        (3010, True, "10000", "100", "P2"),
        (2610, True, "2500", None, None),
    ]),
    (12, date(2024, 4, 20), "Betalning leverantör", [
        (2440, False, "20000", None, None),
        (1930, True, "20000", None, None),
    ]),
]

SAMPLE_DIMENSIONS = [
    ("R1", "100", "Försäljning", "Säljavdelningen", None),
    ("R1", "200", "Administration", "Ekonomi och ledning", None),
    ("R2", "P1", "Projekt Alfa", "", None),
    ("R2", "P2", "Projekt Beta", "", "P1"),
]

SAMPLE_CUSTOMERS = [
    ("C001", "Acme AB"),
    ("C002", "Nordic Retail AB"),
    ("C003", "Småland Bygg AB"),
]

# (invoice, customer, invoice date, due date, amount due, amount paid)
SAMPLE_INVOICES = [
    ("F1001", "C001", date(2024, 2, 1), date(2024, 3, 2), "25000", "15000"),
    ("F1002", "C002", date(2023, 12, 2), date(2024, 1, 1), "4000", "0"),
    ("F1003", "C002", date(2023, 10, 16), date(2023, 11, 15), "3000", "0"),
    ("F1004", "C003", date(2024, 3, 2), date(2024, 4, 1), "2000", "0"),
    ("F1005", "C003", date(2024, 1, 2), date(2024, 2, 1), "5000", "5000"),
]

SAMPLE_PRODUCTS = [
    ("P100", "Kontorsstol", "600"),
    ("P200", "Skrivbord", None),
    ("P300", "Skrivbordslampa", "150"),
]

# (order, date, customer, product, quantity, unit price)
SAMPLE_ORDER_LINES = [
    ("O1", date(2024, 2, 1), "C001", "P100", "10", "1000"),
    ("O1", date(2024, 2, 1), "C001", "P200", "5", "2000"),
    ("O2", date(2024, 4, 10), "C002", "P300", "20", "500"),
    ("O3", date(2024, 4, 12), "C003", "P100", "1", "0"),
]

# (account, year, amount)
SAMPLE_BUDGET = [
    (3010, 2024, "25000"),
    (4010, 2024, "10000"),
    (5010, 2024, "8000"),
    (7010, 2024, "15000"),
]


def seed_sample_data(session: Session) -> None:
    """Load the demo dataset into an empty database."""
    for number, name, group in SAMPLE_ACCOUNTS:
        session.add(Account(account_number=number, name=name, account_group=group))

    for voucher_number, voucher_date, description, lines in SAMPLE_VOUCHERS:
        for account_number, is_credit, amount, r1, r2 in lines:
            session.add(LedgerTransaction(
                voucher_number=voucher_number,
                voucher_date=voucher_date,
                account_number=account_number,
                is_credit=is_credit,
                amount=Decimal(amount),
                description=description,
                r1=r1,
                r2=r2,
            ))

    for level, key, name, description, parent_key in SAMPLE_DIMENSIONS:
        session.add(DimensionValue(
            level=level, key=key, name=name, description=description, parent_key=parent_key
        ))

    for code, name in SAMPLE_CUSTOMERS:
        session.add(Customer(customer_code=code, customer_name=name))

    for invoice_number, customer_code, invoice_date, due_date, amount_due, amount_paid in SAMPLE_INVOICES:
        session.add(CustomerTransaction(
            invoice_number=invoice_number,
            customer_code=customer_code,
            invoice_date=invoice_date,
            due_date=due_date,
            amount_due=Decimal(amount_due),
            amount_paid=Decimal(amount_paid),
        ))

    for code, description, cost_price in SAMPLE_PRODUCTS:
        session.add(Product(
            product_code=code,
            description=description,
            cost_price=Decimal(cost_price) if cost_price is not None else None,
        ))

    for order_number, order_date, customer_code, product_code, quantity, unit_price in SAMPLE_ORDER_LINES:
        session.add(OrderLine(
            order_number=order_number,
            order_date=order_date,
            customer_code=customer_code,
            product_code=product_code,
            quantity=Decimal(quantity),
            unit_price=Decimal(unit_price),
        ))

    for account_number, budget_year, amount in SAMPLE_BUDGET:
        session.add(BudgetLine(account_number=account_number, budget_year=budget_year, amount=Decimal(amount)))

    session.commit()

