"""
Service - Gross-margin analysis per customer or per product.
"""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from ..entities import RevenueCostLine
from ..errors import InvalidParameter
from ..reports import ProfitabilityInsights, ProfitabilityResult, ProfitabilityRow, ProfitabilitySummary
from ..value_objects import HUNDRED, ZERO, Period, ProfitabilityDimension, ReportOptions, safe_divide

DEFAULT_COST_ESTIMATE_RATIO = Decimal("0.6")
TOP_PERFORMERS = 5
HIGH_MARGIN_PCT = Decimal("30")


def parse_dimension(value: ProfitabilityDimension | str) -> ProfitabilityDimension:
    if isinstance(value, ProfitabilityDimension):
        return value
    try:
        return ProfitabilityDimension(str(value).lower())
    except ValueError:
        raise InvalidParameter(
            "analysisType", value, [d.value for d in ProfitabilityDimension]
        ) from None


class _KeyTotals:
    __slots__ = ("key", "name", "orders", "line_items", "quantity", "price_sum", "revenue", "cost")

    def __init__(self, key: str, name: str):
        self.key = key
        self.name = name
        self.orders: set[str] = set()
        self.line_items = 0
        self.quantity = ZERO
        self.price_sum = ZERO
        self.revenue = ZERO
        self.cost = ZERO


class ProfitabilityAnalyzer:
    """
    Service - Revenue, cost and gross profit aggregated per key.
    Lines without a cost price are costed at a share of the selling price.
    """

    def __init__(
        self,
        options: ReportOptions | None = None,
        cost_estimate_ratio: Decimal = DEFAULT_COST_ESTIMATE_RATIO,
    ):
        self.options = options or ReportOptions()
        self.cost_estimate_ratio = cost_estimate_ratio

    def analyze(
        self,
        lines: Iterable[RevenueCostLine],
        dimension: ProfitabilityDimension | str = ProfitabilityDimension.CUSTOMER,
        from_date: date | None = None,
        to_date: date | None = None,
        limit: int = 50,
    ) -> ProfitabilityResult:
        dimension = parse_dimension(dimension)
        period = Period(from_date, to_date)

        per_key: dict[str, _KeyTotals] = {}
        for line in lines:
            if line.order_date is not None and not period.contains(line.order_date):
                continue
            if dimension == ProfitabilityDimension.CUSTOMER:
                key, name = line.customer_id, line.customer_name
            else:
                key, name = line.product_id, line.product_description
            totals = per_key.get(key)
            if totals is None:
                totals = per_key[key] = _KeyTotals(key, name)
            totals.orders.add(line.order_id)
            totals.line_items += 1
            totals.quantity += line.quantity
            totals.price_sum += line.unit_price
            totals.revenue += line.revenue
            totals.cost += line.cost(self.cost_estimate_ratio)

        rows = [self._row(totals) for totals in per_key.values()]
        ranked = sorted(
            (row for row in rows if row.revenue > 0),
            key=lambda row: (-row.gross_profit, row.key),
        )
        results = ranked[:limit]

        total_revenue = sum((row.revenue for row in rows), ZERO)
        total_cost = sum((row.estimated_cost for row in rows), ZERO)
        total_profit = total_revenue - total_cost

        return ProfitabilityResult(
            analysis_type=dimension,
            period=period,
            results=results,
            summary=ProfitabilitySummary(
                total_items=len(rows),
                ranked_items=len(results),
                excluded_items=len(rows) - len(ranked),
                total_revenue=total_revenue,
                total_estimated_cost=total_cost,
                total_gross_profit=total_profit,
                overall_gross_profit_margin=self.options.round(
                    safe_divide(total_profit, total_revenue) * HUNDRED
                ),
            ),
            insights=ProfitabilityInsights(
                top_performers=results[:TOP_PERFORMERS],
                profitable_items_count=sum(1 for row in ranked if row.gross_profit > 0),
                high_margin_items_count=sum(1 for row in ranked if row.gross_profit_margin > HIGH_MARGIN_PCT),
            ),
        )

    def _row(self, totals: _KeyTotals) -> ProfitabilityRow:
        gross_profit = totals.revenue - totals.cost
        return ProfitabilityRow(
            key=totals.key,
            name=totals.name,
            order_count=len(totals.orders),
            line_item_count=totals.line_items,
            total_quantity=totals.quantity,
            revenue=totals.revenue,
            estimated_cost=totals.cost,
            gross_profit=gross_profit,
            gross_profit_margin=self.options.round(safe_divide(gross_profit, totals.revenue) * HUNDRED),
            # Mean of line prices, not weighted by quantity
            average_selling_price=self.options.round(
                safe_divide(totals.price_sum, Decimal(totals.line_items))
            ),
        )
