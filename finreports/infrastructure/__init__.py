"""Infrastructure layer."""

from finreports.infrastructure.database import SessionLocal, get_db, init_db
from finreports.infrastructure.repositories import SqlFinancialDataRepository
