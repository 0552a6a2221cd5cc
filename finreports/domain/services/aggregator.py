"""
Service - Ledger aggregation (debit-positive signed totals per account).
"""

from collections import defaultdict
from collections.abc import Callable, Iterable, Mapping
from datetime import date
from decimal import Decimal

from finreports.core.logging import get_logger
from ..entities import Account, LedgerEntry
from ..reports import AccountLine
from ..value_objects import ZERO, Category, DimensionLevel, Period, ReportOptions
from .classifier import AccountClassifier

logger = get_logger(__name__)

AccountFilter = Callable[[int], bool]


class LedgerAggregator:
    """
    Service - Sums signed ledger amounts per account over a date window.
    Every entry contributes; materiality applies only to listed line items.
    """

    def __init__(self, classifier: AccountClassifier | None = None):
        self.classifier = classifier or AccountClassifier()

    def _select(
        self,
        entries: Iterable[LedgerEntry],
        from_date: date | None,
        to_date: date | None,
        account_filter: AccountFilter | None,
    ) -> Iterable[LedgerEntry]:
        period = Period(from_date, to_date)
        for entry in entries:
            if not period.contains(entry.voucher_date):
                continue
            if account_filter is not None and not account_filter(entry.account_number):
                continue
            yield entry

    def aggregate(
        self,
        entries: Iterable[LedgerEntry],
        from_date: date | None = None,
        to_date: date | None = None,
        account_filter: AccountFilter | None = None,
    ) -> dict[int, Decimal]:
        """Signed total per account: sum(debits) - sum(credits), bounds inclusive."""
        totals: dict[int, Decimal] = defaultdict(lambda: ZERO)
        for entry in self._select(entries, from_date, to_date, account_filter):
            totals[entry.account_number] += entry.signed_amount
        return dict(totals)

    def aggregate_by_dimension(
        self,
        entries: Iterable[LedgerEntry],
        level: DimensionLevel,
        from_date: date | None = None,
        to_date: date | None = None,
        account_filter: AccountFilter | None = None,
    ) -> dict[str | None, dict[int, Decimal]]:
        """Signed totals per dimension value and account; untagged entries under None."""
        totals: dict[str | None, dict[int, Decimal]] = defaultdict(lambda: defaultdict(lambda: ZERO))
        for entry in self._select(entries, from_date, to_date, account_filter):
            totals[entry.tag(level)][entry.account_number] += entry.signed_amount
        return {key: dict(per_account) for key, per_account in totals.items()}

    def tag(
        self,
        accounts: Mapping[int, Account],
        totals: Mapping[int, Decimal],
        include_zero: bool = False,
        options: ReportOptions | None = None,
    ) -> list[AccountLine]:
        """
        Attach account data and category to totals of reportable accounts.
        With include_zero every reportable account is listed, even without postings.
        """
        options = options or ReportOptions()
        orphans = sorted(number for number in totals if number not in accounts)
        if orphans:
            logger.warning("ledger.orphan_entries", account_numbers=orphans)

        numbers = set(accounts) if include_zero else set(totals)
        lines = []
        for number in numbers:
            account = accounts.get(number)
            if account is None or not self.classifier.is_reportable(account):
                continue
            amount = totals.get(number, ZERO)
            if not include_zero and not options.is_material(amount):
                continue
            lines.append(AccountLine(
                account_number=number,
                account_name=account.name,
                account_group=account.group,
                category=self.classifier.classify(number),
                amount=amount,
            ))
        lines.sort(key=lambda line: (self.classifier.rank(line.category), line.account_number))
        return lines

    def category_totals(
        self,
        accounts: Mapping[int, Account],
        totals: Mapping[int, Decimal],
    ) -> dict[Category, Decimal]:
        """Signed totals per category over all reportable accounts (immaterial ones included)."""
        result: dict[Category, Decimal] = defaultdict(lambda: ZERO)
        for number, amount in totals.items():
            account = accounts.get(number)
            if account is None or not self.classifier.is_reportable(account):
                continue
            result[self.classifier.classify(number)] += amount
        return result
