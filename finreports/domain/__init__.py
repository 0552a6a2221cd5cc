"""Domain layer - Pure Python statement and ratio derivation."""

from finreports.domain.entities import Account, DimensionValue, LedgerEntry, ReceivableInvoice, RevenueCostLine
from finreports.domain.errors import DataUnavailable, InvalidParameter, ReportError
from finreports.domain.repositories import IFinancialDataRepository
from finreports.domain.services import (
    AccountClassifier,
    AgingEngine,
    DimensionAnalyzer,
    LedgerAggregator,
    ProfitabilityAnalyzer,
    RatioCalculator,
    StatementBuilder,
    VarianceAnalyzer,
)
from finreports.domain.value_objects import (
    Category,
    DimensionLevel,
    Period,
    ProfitabilityDimension,
    ReportOptions,
)
