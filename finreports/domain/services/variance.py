"""
Service - Budget vs actual variance per P&L account.
"""

from collections.abc import Iterable, Mapping
from decimal import Decimal

from ..entities import Account
from ..reports import VarianceResult, VarianceRow, VarianceSummary
from ..value_objects import HUNDRED, ZERO, AccountNature, Period, ReportOptions, Statement, VarianceStatus, safe_divide
from .classifier import AccountClassifier

SIGNIFICANT_VARIANCE_PCT = Decimal("20")
BUDGET_NOTE = "Budget figures are authored targets; variances are only as meaningful as the budget data."


class VarianceAnalyzer:
    """
    Service - Compares actual and budgeted amounts per account.
    Both sides are expected in display sign (revenue positive).
    """

    def __init__(
        self,
        classifier: AccountClassifier | None = None,
        options: ReportOptions | None = None,
    ):
        self.classifier = classifier or AccountClassifier()
        self.options = options or ReportOptions()

    def status_of(self, account_number: int, variance: Decimal) -> VarianceStatus:
        if variance == 0:
            return VarianceStatus.ON_TARGET
        nature = self.classifier.nature_of(self.classifier.classify(account_number))
        above_budget = variance > 0
        if nature == AccountNature.REVENUE:
            return VarianceStatus.FAVORABLE if above_budget else VarianceStatus.UNFAVORABLE
        return VarianceStatus.UNFAVORABLE if above_budget else VarianceStatus.FAVORABLE

    def compare(
        self,
        actual_per_account: Mapping[int, Decimal],
        budget_per_account: Mapping[int, Decimal],
        threshold_pct: Decimal = Decimal("5"),
        accounts: Iterable[Account] = (),
        limit: int = 100,
        budget_year: int | None = None,
        actual_period: Period | None = None,
    ) -> VarianceResult:
        opts = self.options
        names = {account.number: account for account in accounts}
        rows: list[VarianceRow] = []
        for number in sorted(set(actual_per_account) | set(budget_per_account)):
            category = self.classifier.classify(number)
            if self.classifier.statement_of(category) != Statement.PROFIT_AND_LOSS:
                continue
            actual = actual_per_account.get(number, ZERO)
            budget = budget_per_account.get(number, ZERO)
            if not opts.is_material(actual) and not opts.is_material(budget):
                continue
            variance = actual - budget
            variance_pct = safe_divide(variance, abs(budget)) * HUNDRED
            if abs(variance_pct) < threshold_pct:
                continue
            account = names.get(number)
            rows.append(VarianceRow(
                account_number=number,
                account_name=account.name if account else "",
                account_type=category,
                actual_amount=actual,
                budget_amount=budget,
                variance=variance,
                variance_percentage=opts.round(variance_pct, 1),
                variance_status=self.status_of(number, variance),
            ))

        rows.sort(key=lambda row: (-abs(row.variance), row.account_number))
        rows = rows[:limit]

        total_actual = sum((row.actual_amount for row in rows), ZERO)
        total_budget = sum((row.budget_amount for row in rows), ZERO)
        total_variance = total_actual - total_budget
        return VarianceResult(
            variances=rows,
            budget_year=budget_year,
            actual_period=actual_period or Period(),
            summary=VarianceSummary(
                total_accounts_analyzed=len(rows),
                total_actual_amount=total_actual,
                total_budget_amount=total_budget,
                total_variance=total_variance,
                overall_variance_percentage=opts.round(
                    safe_divide(total_variance, abs(total_budget)) * HUNDRED, 1
                ),
                favorable_variances=sum(1 for r in rows if r.variance_status == VarianceStatus.FAVORABLE),
                unfavorable_variances=sum(1 for r in rows if r.variance_status == VarianceStatus.UNFAVORABLE),
                significant_variances=sum(
                    1 for r in rows if abs(r.variance_percentage) > SIGNIFICANT_VARIANCE_PCT
                ),
                note=BUDGET_NOTE,
            ),
        )
