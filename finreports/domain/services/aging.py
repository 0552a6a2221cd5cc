"""
Service - Accounts-receivable aging by days overdue.
"""

from collections import defaultdict
from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from ..entities import ReceivableInvoice
from ..reports import AgingBreakdown, AgingReport, AgingRiskAnalysis, AgingSummary, CustomerAging
from ..value_objects import HUNDRED, ZERO, AgingBucket, CollectionRisk, ReportOptions, safe_divide

HIGH_RISK_SHARE = Decimal("20")
MEDIUM_RISK_SHARE = Decimal("10")
HIGH_RISK_OVER_90 = Decimal("1000")


def bucket_of(days_overdue: int) -> AgingBucket:
    if days_overdue <= 0:
        return AgingBucket.CURRENT
    if days_overdue <= 30:
        return AgingBucket.DAYS_1_30
    if days_overdue <= 60:
        return AgingBucket.DAYS_31_60
    if days_overdue <= 90:
        return AgingBucket.DAYS_61_90
    return AgingBucket.OVER_90


def risk_of(over_90_share: Decimal) -> CollectionRisk:
    """Collection risk from the Over90 share of the outstanding total (in percent)."""
    if over_90_share > HIGH_RISK_SHARE:
        return CollectionRisk.HIGH
    if over_90_share > MEDIUM_RISK_SHARE:
        return CollectionRisk.MEDIUM
    return CollectionRisk.LOW


def _breakdown(buckets: dict[AgingBucket, Decimal]) -> AgingBreakdown:
    return AgingBreakdown(
        current=buckets[AgingBucket.CURRENT],
        days_1_to_30=buckets[AgingBucket.DAYS_1_30],
        days_31_to_60=buckets[AgingBucket.DAYS_31_60],
        days_61_to_90=buckets[AgingBucket.DAYS_61_90],
        over_90_days=buckets[AgingBucket.OVER_90],
    )


class _CustomerBalance:
    """Running per-customer totals while bucketing invoices."""

    __slots__ = ("customer_id", "customer_name", "buckets", "days", "total")

    def __init__(self, customer_id: str, customer_name: str):
        self.customer_id = customer_id
        self.customer_name = customer_name
        self.buckets: dict[AgingBucket, Decimal] = defaultdict(lambda: ZERO)
        self.days: list[int] = []
        self.total = ZERO

    def add(self, days_overdue: int, outstanding: Decimal) -> None:
        self.buckets[bucket_of(days_overdue)] += outstanding
        self.days.append(days_overdue)
        self.total += outstanding


class AgingEngine:
    """
    Service - Buckets open receivables per customer as of a date.
    Bucket sums always equal the customer's total outstanding.
    """

    def __init__(self, options: ReportOptions | None = None):
        self.options = options or ReportOptions()

    def age(
        self,
        invoices: Iterable[ReceivableInvoice],
        as_of_date: date,
        include_paid: bool = False,
        limit: int = 100,
    ) -> AgingReport:
        opts = self.options
        balances: dict[str, _CustomerBalance] = {}
        for invoice in invoices:
            outstanding = invoice.outstanding
            if not include_paid and not opts.is_material(outstanding):
                continue
            balance = balances.get(invoice.customer_id)
            if balance is None:
                balance = balances[invoice.customer_id] = _CustomerBalance(
                    invoice.customer_id, invoice.customer_name
                )
            balance.add(invoice.days_overdue(as_of_date), outstanding)

        ranked = sorted(
            (b for b in balances.values() if b.total > opts.materiality),
            key=lambda b: (-b.total, b.customer_id),
        )

        totals: dict[AgingBucket, Decimal] = defaultdict(lambda: ZERO)
        for balance in ranked:
            for bucket, amount in balance.buckets.items():
                totals[bucket] += amount
        aging_breakdown = _breakdown(totals)
        total_outstanding = aging_breakdown.total

        def share(amount: Decimal) -> Decimal:
            return opts.round(safe_divide(amount, total_outstanding) * HUNDRED, 1)

        percentage_breakdown = AgingBreakdown(
            current=share(aging_breakdown.current),
            days_1_to_30=share(aging_breakdown.days_1_to_30),
            days_31_to_60=share(aging_breakdown.days_31_to_60),
            days_61_to_90=share(aging_breakdown.days_61_to_90),
            over_90_days=share(aging_breakdown.over_90_days),
        )
        collection_risk = risk_of(safe_divide(aging_breakdown.over_90_days, total_outstanding) * HUNDRED)

        customers = [self._customer(balance) for balance in ranked[:limit]]

        return AgingReport(
            as_of_date=as_of_date,
            customers=customers,
            summary=AgingSummary(
                total_customers=len(ranked),
                customers_returned=len(customers),
                total_outstanding=total_outstanding,
                aging_breakdown=aging_breakdown,
                percentage_breakdown=percentage_breakdown,
                collection_risk=collection_risk,
            ),
            risk_analysis=AgingRiskAnalysis(
                high_risk_customers=sum(
                    1 for b in ranked if b.buckets[AgingBucket.OVER_90] > HIGH_RISK_OVER_90
                ),
                overdue_percentage=share(total_outstanding - aging_breakdown.current),
                average_collection_risk=collection_risk,
            ),
        )

    def _customer(self, balance: _CustomerBalance) -> CustomerAging:
        breakdown = _breakdown(balance.buckets)
        avg_days = Decimal(sum(balance.days)) / Decimal(len(balance.days))
        return CustomerAging(
            customer_id=balance.customer_id,
            customer_name=balance.customer_name,
            invoice_count=len(balance.days),
            total_outstanding=balance.total,
            current=breakdown.current,
            days_1_to_30=breakdown.days_1_to_30,
            days_31_to_60=breakdown.days_31_to_60,
            days_61_to_90=breakdown.days_61_to_90,
            over_90_days=breakdown.over_90_days,
            avg_days_overdue=self.options.round(avg_days, 1),
            max_days_overdue=max(balance.days),
        )
