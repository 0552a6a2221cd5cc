"""
API Routers - Financial reports endpoints.
"""

from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from finreports.application.dto.report_dto import (
    AgingReportDTO,
    BalanceSheetDTO,
    CashFlowDTO,
    DimensionAnalysisDTO,
    ErrorDTO,
    FinancialRatiosDTO,
    ProfitabilityResultDTO,
    ProfitLossDTO,
    ReportDTO,
    VarianceResultDTO,
)
from finreports.application.report_service import ReportService
from finreports.core.config import Settings, clamp_limit, get_settings
from finreports.domain.value_objects import ReportOptions
from finreports.infrastructure.database import get_db
from finreports.infrastructure.repositories import SqlFinancialDataRepository

ERROR_RESPONSES = {
    400: {"model": ErrorDTO, "description": "Invalid enumerated parameter"},
    503: {"model": ErrorDTO, "description": "Data feed unavailable"},
}

router = APIRouter(prefix="/api/v1/reports", tags=["Financial reports"], responses=ERROR_RESPONSES)


def get_report_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ReportService:
    """Dependency - Report service over a request-scoped session."""
    options = ReportOptions(precision=settings.precision, materiality=settings.materiality)
    return ReportService(
        SqlFinancialDataRepository(db),
        options=options,
        cost_estimate_ratio=settings.cost_estimate_ratio,
    )


def render(dto: ReportDTO, omit_nulls: bool) -> JSONResponse:
    return JSONResponse(content=dto.model_dump(mode="json", by_alias=True, exclude_none=omit_nulls))


@router.get("/profit-loss", response_model=ProfitLossDTO)
def get_profit_loss(
    from_date: date | None = Query(None, description="Period start (inclusive)"),
    to_date: date | None = Query(None, description="Period end (inclusive)"),
    prior_from_date: date | None = Query(None, description="Comparison period start"),
    prior_to_date: date | None = Query(None, description="Comparison period end"),
    omit_nulls: bool = Query(False, alias="omitNulls"),
    service: ReportService = Depends(get_report_service),
):
    """
    Resultaträkning - Profit & Loss over a period.

    Revenue is shown positive; netIncome = revenue - totalExpenses.
    """
    statement = service.profit_loss(from_date, to_date, prior_from_date, prior_to_date)
    return render(ProfitLossDTO.model_validate(statement), omit_nulls)


@router.get("/balance-sheet", response_model=BalanceSheetDTO)
def get_balance_sheet(
    as_of_date: date | None = Query(None, description="Balance date (cumulative since inception)"),
    include_zero_balances: bool = Query(False, description="List accounts without balance"),
    omit_nulls: bool = Query(False, alias="omitNulls"),
    service: ReportService = Depends(get_report_service),
):
    """Balansräkning - Balance Sheet as of a date."""
    sheet = service.balance_sheet(as_of_date, include_zero_balances)
    return render(BalanceSheetDTO.model_validate(sheet), omit_nulls)


@router.get("/cash-flow", response_model=CashFlowDTO)
def get_cash_flow(
    from_date: date | None = Query(None),
    to_date: date | None = Query(None),
    omit_nulls: bool = Query(False, alias="omitNulls"),
    service: ReportService = Depends(get_report_service),
):
    """Kassaflödesanalys - operating, investing and financing activities."""
    statement = service.cash_flow(from_date, to_date)
    return render(CashFlowDTO.model_validate(statement), omit_nulls)


@router.get("/ratios", response_model=FinancialRatiosDTO)
def get_financial_ratios(
    as_of_date: date | None = Query(None, description="Defaults to today"),
    from_date: date | None = Query(None, description="P&L start, defaults to 1 January of the as-of year"),
    omit_nulls: bool = Query(False, alias="omitNulls"),
    service: ReportService = Depends(get_report_service),
):
    """Nyckeltal - liquidity, leverage, profitability and efficiency ratios."""
    ratios = service.ratios(as_of_date, from_date)
    return render(FinancialRatiosDTO.model_validate(ratios), omit_nulls)


@router.get("/aging", response_model=AgingReportDTO)
def get_receivables_aging(
    as_of_date: date | None = Query(None, description="Defaults to today"),
    include_paid: bool = Query(False),
    limit: int | None = Query(None, description="Customers returned (out-of-range values use the default)"),
    omit_nulls: bool = Query(False, alias="omitNulls"),
    service: ReportService = Depends(get_report_service),
    settings: Settings = Depends(get_settings),
):
    """Kundreskontra - receivables aging per customer."""
    limit = clamp_limit(limit, settings.aging_limit, settings.aging_max_limit)
    report = service.aging(as_of_date, include_paid, limit)
    return render(AgingReportDTO.model_validate(report), omit_nulls)


@router.get("/profitability", response_model=ProfitabilityResultDTO)
def get_profitability(
    analysis_type: str = Query("customer", description="customer or product"),
    from_date: date | None = Query(None),
    to_date: date | None = Query(None),
    limit: int | None = Query(None),
    omit_nulls: bool = Query(False, alias="omitNulls"),
    service: ReportService = Depends(get_report_service),
    settings: Settings = Depends(get_settings),
):
    """Täckningsbidrag - gross margin per customer or product."""
    limit = clamp_limit(limit, settings.profitability_limit, settings.profitability_max_limit)
    result = service.profitability(analysis_type, from_date, to_date, limit)
    return render(ProfitabilityResultDTO.model_validate(result), omit_nulls)


@router.get("/budget-variance", response_model=VarianceResultDTO)
def get_budget_variance(
    from_date: date | None = Query(None),
    to_date: date | None = Query(None),
    budget_year: int | None = Query(None, description="Defaults to the year of the period"),
    threshold: Decimal | None = Query(None, ge=0, description="Minimum |variance %| to report"),
    limit: int | None = Query(None),
    omit_nulls: bool = Query(False, alias="omitNulls"),
    service: ReportService = Depends(get_report_service),
    settings: Settings = Depends(get_settings),
):
    """Budgetuppföljning - actual vs authored budget per P&L account."""
    limit = clamp_limit(limit, settings.variance_limit, settings.variance_max_limit)
    threshold_pct = settings.variance_threshold if threshold is None else threshold
    result = service.budget_variance(from_date, to_date, budget_year, threshold_pct, limit)
    return render(VarianceResultDTO.model_validate(result), omit_nulls)


@router.get("/dimensions/{level}", response_model=DimensionAnalysisDTO)
def get_dimension_analysis(
    level: str,
    from_date: date | None = Query(None),
    to_date: date | None = Query(None),
    limit: int | None = Query(None),
    omit_nulls: bool = Query(False, alias="omitNulls"),
    service: ReportService = Depends(get_report_service),
    settings: Settings = Depends(get_settings),
):
    """Ledger totals per dimension value (R1-R12)."""
    limit = clamp_limit(limit, settings.dimension_limit, settings.dimension_max_limit)
    analysis = service.dimension_analysis(level, from_date, to_date, limit)
    return render(DimensionAnalysisDTO.model_validate(analysis), omit_nulls)
