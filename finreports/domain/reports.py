"""
Domain report structures - one fixed schema per report.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from .value_objects import (
    ZERO,
    CashFlowActivity,
    Category,
    CollectionRisk,
    DimensionLevel,
    Period,
    ProfitabilityDimension,
    VarianceStatus,
)


@dataclass(frozen=True, slots=True)
class AccountLine:
    account_number: int
    account_name: str
    account_group: str
    category: Category
    amount: Decimal


@dataclass(frozen=True, slots=True)
class StatementSection:
    total: Decimal
    accounts: list[AccountLine]


# ---------------------------------------------------------------- P&L

@dataclass(frozen=True, slots=True)
class ProfitLossSummary:
    total_accounts: int
    revenue_accounts: int
    cogs_accounts: int
    operating_expense_accounts: int
    financial_accounts: int
    other_accounts: int
    extraordinary_accounts: int


@dataclass(frozen=True, slots=True)
class ProfitLossStatement:
    period: Period
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
    accounts: list[AccountLine]
    summary: ProfitLossSummary
    previous_period: "ProfitLossStatement | None" = None


# ---------------------------------------------------------------- Balance sheet

@dataclass(frozen=True, slots=True)
class BalanceSheetSummary:
    total_accounts: int
    asset_accounts: int
    liability_accounts: int
    equity_accounts: int


@dataclass(frozen=True, slots=True)
class BalanceSheet:
    as_of_date: date | None
    assets: StatementSection
    liabilities: StatementSection
    equity: StatementSection
    balance_check: Decimal
    is_balanced: bool
    summary: BalanceSheetSummary
    # Display-signed, immaterial balances included
    category_totals: dict[Category, Decimal] = field(default_factory=dict)
    inventory: Decimal = ZERO


# ---------------------------------------------------------------- Cash flow

@dataclass(frozen=True, slots=True)
class CashFlowStatement:
    period: Period
    operating_activities: StatementSection
    investing_activities: StatementSection
    financing_activities: StatementSection
    net_cash_flow: Decimal
    cash_accounts_change: Decimal
    is_reconciled: bool

    def section(self, activity: CashFlowActivity) -> StatementSection:
        return {
            CashFlowActivity.OPERATING: self.operating_activities,
            CashFlowActivity.INVESTING: self.investing_activities,
            CashFlowActivity.FINANCING: self.financing_activities,
        }[activity]


# ---------------------------------------------------------------- Ratios

@dataclass(frozen=True, slots=True)
class RatioInputs:
    """Pre-aggregated balances the ratios are derived from."""
    current_assets: Decimal = ZERO
    current_liabilities: Decimal = ZERO
    total_assets: Decimal = ZERO
    total_liabilities: Decimal = ZERO
    total_equity: Decimal = ZERO
    total_revenue: Decimal = ZERO
    total_expenses: Decimal = ZERO
    inventory: Decimal = ZERO
    cost_of_goods_sold: Decimal | None = None


@dataclass(frozen=True, slots=True)
class LiquidityRatios:
    current_ratio: Decimal
    quick_ratio: Decimal
    working_capital: Decimal


@dataclass(frozen=True, slots=True)
class LeverageRatios:
    debt_to_equity_ratio: Decimal
    debt_ratio: Decimal
    equity_ratio: Decimal


@dataclass(frozen=True, slots=True)
class ProfitabilityRatios:
    return_on_assets: Decimal
    return_on_equity: Decimal
    profit_margin: Decimal
    gross_profit_margin: Decimal


@dataclass(frozen=True, slots=True)
class EfficiencyRatios:
    asset_turnover: Decimal
    inventory_turnover: Decimal


@dataclass(frozen=True, slots=True)
class RatioInterpretation:
    current_ratio_interpretation: str
    debt_level_interpretation: str
    profitability_interpretation: str


@dataclass(frozen=True, slots=True)
class FinancialRatios:
    liquidity_ratios: LiquidityRatios
    leverage_ratios: LeverageRatios
    profitability_ratios: ProfitabilityRatios
    efficiency_ratios: EfficiencyRatios
    interpretation: RatioInterpretation
    underlying_data: RatioInputs
    as_of_date: date | None = None


# ---------------------------------------------------------------- Aging

@dataclass(frozen=True, slots=True)
class AgingBreakdown:
    current: Decimal = ZERO
    days_1_to_30: Decimal = ZERO
    days_31_to_60: Decimal = ZERO
    days_61_to_90: Decimal = ZERO
    over_90_days: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.current + self.days_1_to_30 + self.days_31_to_60 + self.days_61_to_90 + self.over_90_days


@dataclass(frozen=True, slots=True)
class CustomerAging:
    customer_id: str
    customer_name: str
    invoice_count: int
    total_outstanding: Decimal
    current: Decimal
    days_1_to_30: Decimal
    days_31_to_60: Decimal
    days_61_to_90: Decimal
    over_90_days: Decimal
    avg_days_overdue: Decimal
    max_days_overdue: int


@dataclass(frozen=True, slots=True)
class AgingSummary:
    total_customers: int
    customers_returned: int
    total_outstanding: Decimal
    aging_breakdown: AgingBreakdown
    percentage_breakdown: AgingBreakdown
    collection_risk: CollectionRisk


@dataclass(frozen=True, slots=True)
class AgingRiskAnalysis:
    high_risk_customers: int
    overdue_percentage: Decimal
    average_collection_risk: CollectionRisk


@dataclass(frozen=True, slots=True)
class AgingReport:
    as_of_date: date
    customers: list[CustomerAging]
    summary: AgingSummary
    risk_analysis: AgingRiskAnalysis


# ---------------------------------------------------------------- Profitability

@dataclass(frozen=True, slots=True)
class ProfitabilityRow:
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


@dataclass(frozen=True, slots=True)
class ProfitabilitySummary:
    total_items: int
    ranked_items: int
    excluded_items: int
    total_revenue: Decimal
    total_estimated_cost: Decimal
    total_gross_profit: Decimal
    overall_gross_profit_margin: Decimal


@dataclass(frozen=True, slots=True)
class ProfitabilityInsights:
    top_performers: list[ProfitabilityRow]
    profitable_items_count: int
    high_margin_items_count: int


@dataclass(frozen=True, slots=True)
class ProfitabilityResult:
    analysis_type: ProfitabilityDimension
    period: Period
    results: list[ProfitabilityRow]
    summary: ProfitabilitySummary
    insights: ProfitabilityInsights


# ---------------------------------------------------------------- Variance

@dataclass(frozen=True, slots=True)
class VarianceRow:
    account_number: int
    account_name: str
    account_type: Category
    actual_amount: Decimal
    budget_amount: Decimal
    variance: Decimal
    variance_percentage: Decimal
    variance_status: VarianceStatus


@dataclass(frozen=True, slots=True)
class VarianceSummary:
    total_accounts_analyzed: int
    total_actual_amount: Decimal
    total_budget_amount: Decimal
    total_variance: Decimal
    overall_variance_percentage: Decimal
    favorable_variances: int
    unfavorable_variances: int
    significant_variances: int
    note: str


@dataclass(frozen=True, slots=True)
class VarianceResult:
    variances: list[VarianceRow]
    summary: VarianceSummary
    budget_year: int | None = None
    actual_period: Period = field(default_factory=Period)


# ---------------------------------------------------------------- Dimensions

@dataclass(frozen=True, slots=True)
class DimensionRow:
    key: str
    name: str
    parent_key: str | None
    total_amount: Decimal
    debit_total: Decimal
    credit_total: Decimal
    entry_count: int
    account_count: int


@dataclass(frozen=True, slots=True)
class DimensionAnalysis:
    level: DimensionLevel
    period: Period
    rows: list[DimensionRow]
    unassigned_amount: Decimal
    total_amount: Decimal
