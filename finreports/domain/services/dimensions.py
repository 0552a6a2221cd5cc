"""
Service - Ledger totals per organizational dimension value (R1-R12).
"""

from collections import defaultdict
from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from ..entities import DimensionValue, LedgerEntry
from ..errors import InvalidParameter
from ..reports import DimensionAnalysis, DimensionRow
from ..value_objects import ZERO, DimensionLevel, Period


def parse_level(value: DimensionLevel | str) -> DimensionLevel:
    if isinstance(value, DimensionLevel):
        return value
    try:
        return DimensionLevel(str(value).upper())
    except ValueError:
        raise InvalidParameter("level", value, [level.value for level in DimensionLevel]) from None


class DimensionAnalyzer:
    """Service - Aggregates postings by the tag they carry on one dimension level."""

    def analyze(
        self,
        entries: Iterable[LedgerEntry],
        level: DimensionLevel | str,
        dimension_values: Iterable[DimensionValue] = (),
        from_date: date | None = None,
        to_date: date | None = None,
        limit: int = 50,
    ) -> DimensionAnalysis:
        level = parse_level(level)
        period = Period(from_date, to_date)
        values = {value.key: value for value in dimension_values if value.level == level}

        debits: dict[str, Decimal] = defaultdict(lambda: ZERO)
        credits: dict[str, Decimal] = defaultdict(lambda: ZERO)
        counts: dict[str, int] = defaultdict(int)
        accounts: dict[str, set[int]] = defaultdict(set)
        unassigned = ZERO
        for entry in entries:
            if not period.contains(entry.voucher_date):
                continue
            key = entry.tag(level)
            if not key:
                unassigned += entry.signed_amount
                continue
            if entry.is_credit:
                credits[key] += entry.amount
            else:
                debits[key] += entry.amount
            counts[key] += 1
            accounts[key].add(entry.account_number)

        rows = []
        for key in counts:
            value = values.get(key)
            rows.append(DimensionRow(
                key=key,
                name=value.name if value else "",
                parent_key=value.parent_key if value else None,
                total_amount=debits[key] - credits[key],
                debit_total=debits[key],
                credit_total=credits[key],
                entry_count=counts[key],
                account_count=len(accounts[key]),
            ))
        rows.sort(key=lambda row: (-abs(row.total_amount), row.key))

        return DimensionAnalysis(
            level=level,
            period=period,
            rows=rows[:limit],
            unassigned_amount=unassigned,
            total_amount=sum((row.total_amount for row in rows), ZERO) + unassigned,
        )
