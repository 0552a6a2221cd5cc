"""
Application service - fetches one data snapshot per request and runs the
domain services over it.
"""

from datetime import date
from decimal import Decimal

from finreports.core.logging import get_logger
from finreports.domain.reports import (
    AgingReport,
    BalanceSheet,
    CashFlowStatement,
    DimensionAnalysis,
    FinancialRatios,
    ProfitabilityResult,
    ProfitLossStatement,
    VarianceResult,
)
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
from finreports.domain.services.dimensions import parse_level
from finreports.domain.services.profitability import DEFAULT_COST_ESTIMATE_RATIO, parse_dimension
from finreports.domain.value_objects import (
    DimensionLevel,
    Period,
    ProfitabilityDimension,
    ReportOptions,
    Statement,
)

logger = get_logger(__name__)


def _earliest(*days: date | None) -> date | None:
    # An open lower bound wins
    if any(day is None for day in days):
        return None
    return min(days)


def _latest(*days: date | None) -> date | None:
    if any(day is None for day in days):
        return None
    return max(days)


class ReportService:
    """
    Use cases - one method per report.
    Repository failures surface as DataUnavailable; enumerated parameters are
    validated before anything is fetched.
    """

    def __init__(
        self,
        repository: IFinancialDataRepository,
        options: ReportOptions | None = None,
        cost_estimate_ratio: Decimal = DEFAULT_COST_ESTIMATE_RATIO,
    ):
        self.repository = repository
        self.options = options or ReportOptions()
        self.classifier = AccountClassifier()
        self.aggregator = LedgerAggregator(self.classifier)
        self.statements = StatementBuilder(self.aggregator, self.options)
        self.ratio_calculator = RatioCalculator(self.options)
        self.aging_engine = AgingEngine(self.options)
        self.profitability_analyzer = ProfitabilityAnalyzer(self.options, cost_estimate_ratio)
        self.variance_analyzer = VarianceAnalyzer(self.classifier, self.options)
        self.dimension_analyzer = DimensionAnalyzer()

    def profit_loss(
        self,
        from_date: date | None = None,
        to_date: date | None = None,
        prior_from_date: date | None = None,
        prior_to_date: date | None = None,
    ) -> ProfitLossStatement:
        has_prior = prior_from_date is not None or prior_to_date is not None
        window_from, window_to = from_date, to_date
        if has_prior:
            window_from = _earliest(from_date, prior_from_date)
            window_to = _latest(to_date, prior_to_date)

        accounts = self.repository.fetch_accounts()
        entries = self.repository.fetch_ledger_entries(window_from, window_to)
        statement = self.statements.profit_loss(
            accounts, entries, from_date, to_date, prior_from_date, prior_to_date
        )
        logger.info(
            "report.generated",
            report="profit_loss",
            accounts=len(statement.accounts),
            net_income=str(statement.net_income),
        )
        return statement

    def balance_sheet(
        self,
        as_of_date: date | None = None,
        include_zero_balances: bool = False,
    ) -> BalanceSheet:
        accounts = self.repository.fetch_accounts()
        entries = self.repository.fetch_ledger_entries(None, as_of_date)
        sheet = self.statements.balance_sheet(accounts, entries, as_of_date, include_zero_balances)
        logger.info(
            "report.generated",
            report="balance_sheet",
            accounts=sheet.summary.total_accounts,
            is_balanced=sheet.is_balanced,
        )
        return sheet

    def cash_flow(self, from_date: date | None = None, to_date: date | None = None) -> CashFlowStatement:
        accounts = self.repository.fetch_accounts()
        entries = self.repository.fetch_ledger_entries(from_date, to_date)
        statement = self.statements.cash_flow(accounts, entries, from_date, to_date)
        logger.info(
            "report.generated",
            report="cash_flow",
            net_cash_flow=str(statement.net_cash_flow),
            is_reconciled=statement.is_reconciled,
        )
        return statement

    def ratios(self, as_of_date: date | None = None, from_date: date | None = None) -> FinancialRatios:
        """Ratios from the balance sheet at as_of_date and the year-to-date P&L."""
        as_of_date = as_of_date or date.today()
        from_date = from_date or date(as_of_date.year, 1, 1)

        accounts = self.repository.fetch_accounts()
        entries = self.repository.fetch_ledger_entries(None, as_of_date)
        sheet = self.statements.balance_sheet(accounts, entries, as_of_date)
        profit_loss = self.statements.profit_loss(accounts, entries, from_date, as_of_date)
        inputs = self.ratio_calculator.inputs_from_statements(sheet, profit_loss)
        ratios = self.ratio_calculator.calculate(inputs, as_of_date)
        logger.info(
            "report.generated",
            report="ratios",
            current_ratio=str(ratios.liquidity_ratios.current_ratio),
        )
        return ratios

    def aging(
        self,
        as_of_date: date | None = None,
        include_paid: bool = False,
        limit: int = 100,
    ) -> AgingReport:
        as_of_date = as_of_date or date.today()
        invoices = self.repository.fetch_receivables(as_of_date)
        report = self.aging_engine.age(invoices, as_of_date, include_paid, limit)
        logger.info(
            "report.generated",
            report="aging",
            customers=report.summary.total_customers,
            collection_risk=report.summary.collection_risk.value,
        )
        return report

    def profitability(
        self,
        dimension: ProfitabilityDimension | str = ProfitabilityDimension.CUSTOMER,
        from_date: date | None = None,
        to_date: date | None = None,
        limit: int = 50,
    ) -> ProfitabilityResult:
        dimension = parse_dimension(dimension)
        lines = self.repository.fetch_revenue_cost_lines(from_date, to_date)
        result = self.profitability_analyzer.analyze(lines, dimension, from_date, to_date, limit)
        logger.info(
            "report.generated",
            report="profitability",
            analysis_type=dimension.value,
            items=result.summary.total_items,
        )
        return result

    def budget_variance(
        self,
        from_date: date | None = None,
        to_date: date | None = None,
        budget_year: int | None = None,
        threshold_pct: Decimal = Decimal("5"),
        limit: int = 100,
    ) -> VarianceResult:
        """Actual P&L amounts over the window against the authored budget of budget_year."""
        if budget_year is None:
            budget_year = (from_date or to_date or date.today()).year

        accounts = [
            account for account in self.repository.fetch_accounts()
            if self.classifier.is_reportable(account)
            and self.classifier.statement_of(self.classifier.classify(account.number))
            == Statement.PROFIT_AND_LOSS
        ]
        numbers = {account.number for account in accounts}
        entries = self.repository.fetch_ledger_entries(from_date, to_date)
        totals = self.aggregator.aggregate(
            entries, from_date, to_date, account_filter=lambda number: number in numbers
        )
        actual = {
            number: self.classifier.display_amount(self.classifier.classify(number), amount)
            for number, amount in totals.items()
        }
        budget = {
            account.number: self.repository.fetch_budget_target(account.number, budget_year)
            for account in accounts
        }

        result = self.variance_analyzer.compare(
            actual,
            budget,
            threshold_pct,
            accounts,
            limit,
            budget_year=budget_year,
            actual_period=Period(from_date, to_date),
        )
        logger.info(
            "report.generated",
            report="budget_variance",
            budget_year=budget_year,
            variances=result.summary.total_accounts_analyzed,
        )
        return result

    def dimension_analysis(
        self,
        level: DimensionLevel | str,
        from_date: date | None = None,
        to_date: date | None = None,
        limit: int = 50,
    ) -> DimensionAnalysis:
        level = parse_level(level)
        values = self.repository.fetch_dimension_values(level)
        entries = self.repository.fetch_ledger_entries(from_date, to_date)
        analysis = self.dimension_analyzer.analyze(entries, level, values, from_date, to_date, limit)
        logger.info(
            "report.generated",
            report="dimensions",
            level=level.value,
            rows=len(analysis.rows),
        )
        return analysis
