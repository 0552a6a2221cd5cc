"""
Service - Financial ratios and KPIs with qualitative interpretation.
"""

from datetime import date
from decimal import Decimal

from ..reports import (
    BalanceSheet,
    EfficiencyRatios,
    FinancialRatios,
    LeverageRatios,
    LiquidityRatios,
    ProfitabilityRatios,
    ProfitLossStatement,
    RatioInputs,
    RatioInterpretation,
)
from ..value_objects import HUNDRED, ZERO, Category, ReportOptions, safe_divide


def interpret_current_ratio(current_ratio: Decimal) -> str:
    if current_ratio >= 2:
        return "Strong"
    if current_ratio > 1:
        return "Adequate"
    return "Weak"


def interpret_debt_level(debt_to_equity: Decimal) -> str:
    if debt_to_equity < Decimal("0.5"):
        return "Conservative"
    if debt_to_equity < 1:
        return "Moderate"
    return "High"


def interpret_profit_margin(profit_margin: Decimal) -> str:
    if profit_margin > Decimal("0.2"):
        return "Excellent"
    if profit_margin > Decimal("0.1"):
        return "Good"
    if profit_margin > 0:
        return "Marginal"
    return "Loss"


class RatioCalculator:
    """
    Service - Liquidity, leverage, profitability and efficiency ratios.
    Every zero denominator yields 0 instead of an error.
    """

    def __init__(self, options: ReportOptions | None = None):
        self.options = options or ReportOptions()

    def inputs_from_statements(
        self,
        balance_sheet: BalanceSheet,
        profit_loss: ProfitLossStatement,
    ) -> RatioInputs:
        """Ratio inputs from a balance sheet and the P&L of the matching period."""
        return RatioInputs(
            current_assets=balance_sheet.category_totals.get(Category.CURRENT_ASSETS, ZERO),
            current_liabilities=balance_sheet.category_totals.get(Category.CURRENT_LIABILITIES, ZERO),
            total_assets=balance_sheet.assets.total,
            total_liabilities=balance_sheet.liabilities.total,
            total_equity=balance_sheet.equity.total,
            total_revenue=profit_loss.revenue,
            total_expenses=profit_loss.total_expenses,
            inventory=balance_sheet.inventory,
            cost_of_goods_sold=profit_loss.cost_of_goods_sold,
        )

    def calculate(self, inputs: RatioInputs, as_of_date: date | None = None) -> FinancialRatios:
        opts = self.options
        ca, cl = inputs.current_assets, inputs.current_liabilities
        ta, tl, te = inputs.total_assets, inputs.total_liabilities, inputs.total_equity
        revenue, expenses = inputs.total_revenue, inputs.total_expenses
        net = revenue - expenses

        current_ratio = safe_divide(ca, cl)
        debt_to_equity = safe_divide(tl, te)
        profit_margin = safe_divide(net, revenue)
        if inputs.cost_of_goods_sold is None:
            gross_margin = profit_margin
        else:
            gross_margin = safe_divide(revenue - inputs.cost_of_goods_sold, revenue)

        return FinancialRatios(
            as_of_date=as_of_date,
            liquidity_ratios=LiquidityRatios(
                current_ratio=opts.round(current_ratio),
                quick_ratio=opts.round(safe_divide(ca - inputs.inventory, cl)),
                working_capital=ca - cl,
            ),
            leverage_ratios=LeverageRatios(
                debt_to_equity_ratio=opts.round(debt_to_equity),
                debt_ratio=opts.round(safe_divide(tl, ta)),
                equity_ratio=opts.round(safe_divide(te, ta)),
            ),
            profitability_ratios=ProfitabilityRatios(
                return_on_assets=opts.round(safe_divide(net, ta) * HUNDRED),
                return_on_equity=opts.round(safe_divide(net, te) * HUNDRED),
                profit_margin=opts.round(profit_margin * HUNDRED),
                gross_profit_margin=opts.round(gross_margin * HUNDRED),
            ),
            efficiency_ratios=EfficiencyRatios(
                asset_turnover=opts.round(safe_divide(revenue, ta)),
                inventory_turnover=opts.round(safe_divide(expenses, inputs.inventory)),
            ),
            interpretation=RatioInterpretation(
                current_ratio_interpretation=interpret_current_ratio(current_ratio),
                debt_level_interpretation=interpret_debt_level(debt_to_equity),
                profitability_interpretation=interpret_profit_margin(profit_margin),
            ),
            underlying_data=inputs,
        )
