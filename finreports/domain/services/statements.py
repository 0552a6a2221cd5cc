"""
Service - Financial statements: Profit & Loss, Balance Sheet, Cash Flow.
"""

from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import replace
from datetime import date

from finreports.core.logging import get_logger
from ..entities import Account, LedgerEntry
from ..reports import (
    AccountLine,
    BalanceSheet,
    BalanceSheetSummary,
    CashFlowStatement,
    ProfitLossStatement,
    ProfitLossSummary,
    StatementSection,
)
from ..value_objects import ZERO, CashFlowActivity, Category, Period, ReportOptions, Statement
from .aggregator import LedgerAggregator
from .classifier import PROFIT_AND_LOSS_CATEGORIES, AccountClassifier

logger = get_logger(__name__)

ASSET_CATEGORIES = (Category.FIXED_ASSETS, Category.CURRENT_ASSETS)
LIABILITY_CATEGORIES = (
    Category.LONG_TERM_LIABILITIES,
    Category.CURRENT_LIABILITIES,
    Category.UNTAXED_RESERVES,
)
EQUITY_CATEGORIES = (Category.EQUITY,)


def _index(accounts: Iterable[Account]) -> dict[int, Account]:
    return {account.number: account for account in accounts}


class StatementBuilder:
    """
    Service - Assembles statements from aggregated ledger balances.
    Stateless: each call is a transform over the given snapshot.
    """

    def __init__(
        self,
        aggregator: LedgerAggregator | None = None,
        options: ReportOptions | None = None,
    ):
        self.aggregator = aggregator or LedgerAggregator()
        self.classifier: AccountClassifier = self.aggregator.classifier
        self.options = options or ReportOptions()

    def _is_profit_loss(self, account_number: int) -> bool:
        return self.classifier.statement_of(self.classifier.classify(account_number)) == Statement.PROFIT_AND_LOSS

    def _is_balance_sheet(self, account_number: int) -> bool:
        return self.classifier.statement_of(self.classifier.classify(account_number)) == Statement.BALANCE_SHEET

    def _display(self, lines: Iterable[AccountLine]) -> list[AccountLine]:
        return [
            replace(line, amount=self.classifier.display_amount(line.category, line.amount))
            for line in lines
        ]

    # ------------------------------------------------------------ P&L

    def profit_loss(
        self,
        accounts: Iterable[Account],
        entries: Sequence[LedgerEntry],
        from_date: date | None = None,
        to_date: date | None = None,
        prior_from_date: date | None = None,
        prior_to_date: date | None = None,
    ) -> ProfitLossStatement:
        """
        Profit & Loss over [from_date, to_date].

        Revenue aggregates negative under the debit-positive convention and is
        negated for display. A prior window, when given, is computed the same
        way and attached as previous_period.
        """
        index = _index(accounts)
        previous = None
        if prior_from_date is not None or prior_to_date is not None:
            previous = self._profit_loss(index, entries, prior_from_date, prior_to_date)
        statement = self._profit_loss(index, entries, from_date, to_date)
        return replace(statement, previous_period=previous)

    def _profit_loss(
        self,
        accounts: Mapping[int, Account],
        entries: Sequence[LedgerEntry],
        from_date: date | None,
        to_date: date | None,
    ) -> ProfitLossStatement:
        totals = self.aggregator.aggregate(entries, from_date, to_date, account_filter=self._is_profit_loss)
        by_category = self.aggregator.category_totals(accounts, totals)
        lines = self._display(self.aggregator.tag(accounts, totals, options=self.options))

        revenue = -by_category[Category.REVENUE]
        cogs = by_category[Category.COST_OF_GOODS_SOLD]
        operating_expenses = by_category[Category.OPERATING_EXPENSES]
        financial_items = by_category[Category.FINANCIAL_ITEMS]
        other_income_expense = by_category[Category.OTHER_INCOME_EXPENSE]
        extraordinary_items = by_category[Category.EXTRAORDINARY_ITEMS]

        total_expenses = (
            cogs
            + operating_expenses
            + abs(financial_items)
            + abs(other_income_expense)
            + abs(extraordinary_items)
        )
        gross_profit = revenue - cogs

        counts: dict[Category, int] = defaultdict(int)
        for line in lines:
            counts[line.category] += 1

        return ProfitLossStatement(
            period=Period(from_date, to_date),
            revenue=revenue,
            cost_of_goods_sold=cogs,
            gross_profit=gross_profit,
            operating_expenses=operating_expenses,
            operating_income=gross_profit - operating_expenses,
            financial_items=financial_items,
            other_income_expense=other_income_expense,
            extraordinary_items=extraordinary_items,
            total_expenses=total_expenses,
            net_income=revenue - total_expenses,
            accounts=lines,
            summary=ProfitLossSummary(
                total_accounts=len(lines),
                revenue_accounts=counts[Category.REVENUE],
                cogs_accounts=counts[Category.COST_OF_GOODS_SOLD],
                operating_expense_accounts=counts[Category.OPERATING_EXPENSES],
                financial_accounts=counts[Category.FINANCIAL_ITEMS],
                other_accounts=counts[Category.OTHER_INCOME_EXPENSE],
                extraordinary_accounts=counts[Category.EXTRAORDINARY_ITEMS],
            ),
        )

    # ------------------------------------------------------------ Balance sheet

    def balance_sheet(
        self,
        accounts: Iterable[Account],
        entries: Sequence[LedgerEntry],
        as_of_date: date | None = None,
        include_zero_balances: bool = False,
    ) -> BalanceSheet:
        """
        Balance Sheet as of a date; balances are cumulative since inception.
        Liabilities and equity are shown as positive credit balances.
        An imbalance is reported through is_balanced, never corrected.
        """
        index = {
            number: account
            for number, account in _index(accounts).items()
            if self._is_balance_sheet(number)
        }
        totals = self.aggregator.aggregate(entries, None, as_of_date, account_filter=self._is_balance_sheet)
        lines = self._display(self.aggregator.tag(
            index, totals, include_zero=include_zero_balances, options=self.options
        ))
        by_category = self.aggregator.category_totals(index, totals)
        inventory = sum(
            (amount for number, amount in totals.items()
             if number in index and self.classifier.is_reportable(index[number])
             and self.classifier.is_inventory_account(number)),
            ZERO,
        )

        def section(categories: tuple[Category, ...]) -> StatementSection:
            total = sum(
                (self.classifier.display_amount(c, by_category[c]) for c in categories), ZERO
            )
            return StatementSection(
                total=total,
                accounts=[line for line in lines if line.category in categories],
            )

        assets = section(ASSET_CATEGORIES)
        liabilities = section(LIABILITY_CATEGORIES)
        equity = section(EQUITY_CATEGORIES)
        balance_check = assets.total - liabilities.total - equity.total
        is_balanced = abs(balance_check) < self.options.materiality
        if not is_balanced:
            logger.warning(
                "balance_sheet.imbalanced",
                as_of_date=str(as_of_date) if as_of_date else None,
                balance_check=str(balance_check),
            )

        return BalanceSheet(
            as_of_date=as_of_date,
            assets=assets,
            liabilities=liabilities,
            equity=equity,
            balance_check=balance_check,
            is_balanced=is_balanced,
            summary=BalanceSheetSummary(
                total_accounts=len(assets.accounts) + len(liabilities.accounts) + len(equity.accounts),
                asset_accounts=len(assets.accounts),
                liability_accounts=len(liabilities.accounts),
                equity_accounts=len(equity.accounts),
            ),
            category_totals={
                category: self.classifier.display_amount(category, amount)
                for category, amount in by_category.items()
            },
            inventory=inventory,
        )

    # ------------------------------------------------------------ Cash flow

    def activity_of(self, account_number: int) -> CashFlowActivity:
        """Cash-flow activity of an account (account-number heuristics)."""
        if self.classifier.is_cash_account(account_number):
            return CashFlowActivity.CASH
        category = self.classifier.classify(account_number)
        if category in PROFIT_AND_LOSS_CATEGORIES:
            return CashFlowActivity.OPERATING
        if category == Category.FIXED_ASSETS:
            return CashFlowActivity.INVESTING
        if category == Category.LONG_TERM_LIABILITIES:
            return CashFlowActivity.FINANCING
        return CashFlowActivity.OPERATING

    def cash_flow(
        self,
        accounts: Iterable[Account],
        entries: Sequence[LedgerEntry],
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> CashFlowStatement:
        """
        Cash Flow over a window (indirect, from counter-postings).

        The cash effect of a non-cash posting is the negation of its signed
        amount; cash & bank postings are only used to reconcile the net change.
        """
        index = _index(accounts)
        totals = self.aggregator.aggregate(
            entries, from_date, to_date,
            account_filter=lambda number: number in index and self.classifier.is_reportable(index[number]),
        )

        grouped: dict[CashFlowActivity, list[AccountLine]] = defaultdict(list)
        cash_change = ZERO
        for number in sorted(totals):
            amount = totals[number]
            activity = self.activity_of(number)
            if activity == CashFlowActivity.CASH:
                cash_change += amount
                continue
            account = index[number]
            grouped[activity].append(AccountLine(
                account_number=number,
                account_name=account.name,
                account_group=account.group,
                category=self.classifier.classify(number),
                amount=-amount,
            ))

        def section(activity: CashFlowActivity) -> StatementSection:
            activity_lines = grouped[activity]
            return StatementSection(
                total=sum((line.amount for line in activity_lines), ZERO),
                accounts=[line for line in activity_lines if self.options.is_material(line.amount)],
            )

        operating = section(CashFlowActivity.OPERATING)
        investing = section(CashFlowActivity.INVESTING)
        financing = section(CashFlowActivity.FINANCING)
        net_cash_flow = operating.total + investing.total + financing.total
        is_reconciled = abs(net_cash_flow - cash_change) < self.options.materiality
        if not is_reconciled:
            logger.warning(
                "cash_flow.unreconciled",
                net_cash_flow=str(net_cash_flow),
                cash_accounts_change=str(cash_change),
            )

        return CashFlowStatement(
            period=Period(from_date, to_date),
            operating_activities=operating,
            investing_activities=investing,
            financing_activities=financing,
            net_cash_flow=net_cash_flow,
            cash_accounts_change=cash_change,
            is_reconciled=is_reconciled,
        )
