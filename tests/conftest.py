"""
Pytest configuration and fixtures.
"""

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from finreports.domain.entities import (
    Account,
    DimensionValue,
    LedgerEntry,
    ReceivableInvoice,
    RevenueCostLine,
)
from finreports.domain.value_objects import DimensionLevel
from finreports.infrastructure.database import get_db, init_db
from finreports.infrastructure.database.seed import (
    SAMPLE_ACCOUNTS,
    SAMPLE_DIMENSIONS,
    SAMPLE_VOUCHERS,
    seed_sample_data,
)
from finreports.main import app


@pytest.fixture
def chart() -> list[Account]:
    """BAS demo chart of accounts."""
    return [Account(number=n, name=name, group=group) for n, name, group in SAMPLE_ACCOUNTS]


@pytest.fixture
def ledger() -> list[LedgerEntry]:
    """Demo ledger: opening year 2023, trading in 2024."""
    entries = []
    for voucher_number, voucher_date, description, lines in SAMPLE_VOUCHERS:
        for account_number, is_credit, amount, r1, r2 in lines:
            tags = {}
            if r1:
                tags[DimensionLevel.R1] = r1
            if r2:
                tags[DimensionLevel.R2] = r2
            entries.append(LedgerEntry(
                account_number=account_number,
                voucher_date=voucher_date,
                is_credit=is_credit,
                amount=Decimal(amount),
                dimension_tags=tags,
                voucher_number=voucher_number,
                description=description,
            ))
    return entries


@pytest.fixture
def dimension_values() -> list[DimensionValue]:
    return [
        DimensionValue(level=DimensionLevel(level), key=key, name=name, description=desc, parent_key=parent)
        for level, key, name, desc, parent in SAMPLE_DIMENSIONS
    ]


@pytest.fixture
def receivables() -> list[ReceivableInvoice]:
    return [
        ReceivableInvoice("C001", date(2024, 2, 1), date(2024, 3, 2), Decimal("25000"), Decimal("15000"), "Acme AB"),
        ReceivableInvoice("C002", date(2023, 12, 2), date(2024, 1, 1), Decimal("4000"), customer_name="Nordic Retail AB"),
        ReceivableInvoice("C002", date(2023, 10, 16), date(2023, 11, 15), Decimal("3000"), customer_name="Nordic Retail AB"),
        ReceivableInvoice("C003", date(2024, 3, 2), date(2024, 4, 1), Decimal("2000"), customer_name="Småland Bygg AB"),
        ReceivableInvoice("C003", date(2024, 1, 2), date(2024, 2, 1), Decimal("5000"), Decimal("5000"), "Småland Bygg AB"),
    ]


@pytest.fixture
def order_lines() -> list[RevenueCostLine]:
    return [
        RevenueCostLine("C001", "P100", "O1", Decimal("10"), Decimal("1000"), Decimal("600"),
                        date(2024, 2, 1), "Acme AB", "Kontorsstol"),
        RevenueCostLine("C001", "P200", "O1", Decimal("5"), Decimal("2000"), None,
                        date(2024, 2, 1), "Acme AB", "Skrivbord"),
        RevenueCostLine("C002", "P300", "O2", Decimal("20"), Decimal("500"), Decimal("150"),
                        date(2024, 4, 10), "Nordic Retail AB", "Skrivbordslampa"),
        RevenueCostLine("C003", "P100", "O3", Decimal("1"), Decimal("0"), Decimal("600"),
                        date(2024, 4, 12), "Småland Bygg AB", "Kontorsstol"),
    ]


@pytest.fixture
def db_engine():
    """In-memory SQLite database loaded with the demo dataset."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    with Session(engine) as session:
        seed_sample_data(session)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    session = Session(db_engine)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
