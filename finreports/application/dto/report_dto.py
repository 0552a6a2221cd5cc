"""
API DTOs - camelCase response bodies for the report endpoints.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from finreports.domain.value_objects import (
    Category,
    CollectionRisk,
    DimensionLevel,
    ProfitabilityDimension,
    VarianceStatus,
)


class ReportDTO(BaseModel):
    """Base DTO - built from domain results, serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class PeriodDTO(ReportDTO):
    from_date: date | None = None
    to_date: date | None = None


class AccountLineDTO(ReportDTO):
    account_number: int
    account_name: str
    account_group: str = ""
    category: Category
    amount: Decimal


class StatementSectionDTO(ReportDTO):
    total: Decimal
    accounts: list[AccountLineDTO] = []


# ---------------------------------------------------------------- Statements

class ProfitLossSummaryDTO(ReportDTO):
    total_accounts: int
    revenue_accounts: int
    cogs_accounts: int
    operating_expense_accounts: int
    financial_accounts: int
    other_accounts: int
    extraordinary_accounts: int


class ProfitLossDTO(ReportDTO):
    """DTO - Resultaträkning (Profit & Loss)."""
    period: PeriodDTO
    revenue: Decimal
    cost_of_goods_sold: Decimal
    gross_profit: Decimal
    operating_expenses: Decimal
    operating_income: Decimal
    financial_items: Decimal
    other_income_expense: Decimal
    extraordinary_items: Decimal
    total_expenses: Decimal
    net_income: Decimal
    accounts: list[AccountLineDTO]
    summary: ProfitLossSummaryDTO
    previous_period: "ProfitLossDTO | None" = None


class BalanceSheetSummaryDTO(ReportDTO):
    total_accounts: int
    asset_accounts: int
    liability_accounts: int
    equity_accounts: int


class BalanceSheetDTO(ReportDTO):
    """DTO - Balansräkning (Balance Sheet)."""
    as_of_date: date | None = None
    assets: StatementSectionDTO
    liabilities: StatementSectionDTO
    equity: StatementSectionDTO
    balance_check: Decimal
    is_balanced: bool
    summary: BalanceSheetSummaryDTO


class CashFlowDTO(ReportDTO):
    """DTO - Kassaflödesanalys (Cash Flow)."""
    period: PeriodDTO
    operating_activities: StatementSectionDTO
    investing_activities: StatementSectionDTO
    financing_activities: StatementSectionDTO
    net_cash_flow: Decimal
    cash_accounts_change: Decimal
    is_reconciled: bool


# ---------------------------------------------------------------- Ratios

class RatioInputsDTO(ReportDTO):
    current_assets: Decimal
    current_liabilities: Decimal
    total_assets: Decimal
    total_liabilities: Decimal
    total_equity: Decimal
    total_revenue: Decimal
    total_expenses: Decimal
    inventory: Decimal
    cost_of_goods_sold: Decimal | None = None


class LiquidityRatiosDTO(ReportDTO):
    current_ratio: Decimal
    quick_ratio: Decimal
    working_capital: Decimal


class LeverageRatiosDTO(ReportDTO):
    debt_to_equity_ratio: Decimal
    debt_ratio: Decimal
    equity_ratio: Decimal


class ProfitabilityRatiosDTO(ReportDTO):
    return_on_assets: Decimal
    return_on_equity: Decimal
    profit_margin: Decimal
    gross_profit_margin: Decimal


class EfficiencyRatiosDTO(ReportDTO):
    asset_turnover: Decimal
    inventory_turnover: Decimal


class RatioInterpretationDTO(ReportDTO):
    current_ratio_interpretation: str
    debt_level_interpretation: str
    profitability_interpretation: str


class FinancialRatiosDTO(ReportDTO):
    """DTO - Nyckeltal (financial ratios)."""
    as_of_date: date | None = None
    liquidity_ratios: LiquidityRatiosDTO
    leverage_ratios: LeverageRatiosDTO
    profitability_ratios: ProfitabilityRatiosDTO
    efficiency_ratios: EfficiencyRatiosDTO
    interpretation: RatioInterpretationDTO
    underlying_data: RatioInputsDTO


# ---------------------------------------------------------------- Aging

class AgingBreakdownDTO(ReportDTO):
    current: Decimal
    days_1_to_30: Decimal = Field(alias="days1to30")
    days_31_to_60: Decimal = Field(alias="days31to60")
    days_61_to_90: Decimal = Field(alias="days61to90")
    over_90_days: Decimal = Field(alias="over90Days")


class CustomerAgingDTO(AgingBreakdownDTO):
    customer_id: str
    customer_name: str
    invoice_count: int
    total_outstanding: Decimal
    avg_days_overdue: Decimal
    max_days_overdue: int


class AgingSummaryDTO(ReportDTO):
    total_customers: int
    customers_returned: int
    total_outstanding: Decimal
    aging_breakdown: AgingBreakdownDTO
    percentage_breakdown: AgingBreakdownDTO
    collection_risk: CollectionRisk


class AgingRiskAnalysisDTO(ReportDTO):
    high_risk_customers: int
    overdue_percentage: Decimal
    average_collection_risk: CollectionRisk


class AgingReportDTO(ReportDTO):
    """DTO - Kundreskontra, åldersanalys (receivables aging)."""
    as_of_date: date
    customers: list[CustomerAgingDTO]
    summary: AgingSummaryDTO
    risk_analysis: AgingRiskAnalysisDTO


# ---------------------------------------------------------------- Profitability

class ProfitabilityRowDTO(ReportDTO):
    key: str
    name: str
    order_count: int
    line_item_count: int
    total_quantity: Decimal
    revenue: Decimal
    estimated_cost: Decimal
    gross_profit: Decimal
    gross_profit_margin: Decimal
    average_selling_price: Decimal


class ProfitabilitySummaryDTO(ReportDTO):
    total_items: int
    ranked_items: int
    excluded_items: int
    total_revenue: Decimal
    total_estimated_cost: Decimal
    total_gross_profit: Decimal
    overall_gross_profit_margin: Decimal


class ProfitabilityInsightsDTO(ReportDTO):
    top_performers: list[ProfitabilityRowDTO]
    profitable_items_count: int
    high_margin_items_count: int


class ProfitabilityResultDTO(ReportDTO):
    analysis_type: ProfitabilityDimension
    period: PeriodDTO
    results: list[ProfitabilityRowDTO]
    summary: ProfitabilitySummaryDTO
    insights: ProfitabilityInsightsDTO


# ---------------------------------------------------------------- Variance

class VarianceRowDTO(ReportDTO):
    account_number: int
    account_name: str
    account_type: Category
    actual_amount: Decimal
    budget_amount: Decimal
    variance: Decimal
    variance_percentage: Decimal
    variance_status: VarianceStatus


class VarianceSummaryDTO(ReportDTO):
    total_accounts_analyzed: int
    total_actual_amount: Decimal
    total_budget_amount: Decimal
    total_variance: Decimal
    overall_variance_percentage: Decimal
    favorable_variances: int
    unfavorable_variances: int
    significant_variances: int
    note: str


class VarianceResultDTO(ReportDTO):
    """DTO - Budgetuppföljning (budget vs actual)."""
    budget_year: int | None = None
    actual_period: PeriodDTO
    variances: list[VarianceRowDTO]
    summary: VarianceSummaryDTO


# ---------------------------------------------------------------- Dimensions

class DimensionRowDTO(ReportDTO):
    key: str
    name: str
    parent_key: str | None = None
    total_amount: Decimal
    debit_total: Decimal
    credit_total: Decimal
    entry_count: int
    account_count: int


class DimensionAnalysisDTO(ReportDTO):
    level: DimensionLevel
    period: PeriodDTO
    rows: list[DimensionRowDTO]
    unassigned_amount: Decimal
    total_amount: Decimal


class ErrorDTO(BaseModel):
    error: str
    message: str
    operation: str | None = None
