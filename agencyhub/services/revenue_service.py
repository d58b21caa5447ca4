"""Revenue aggregation over financial records."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional, Sequence

from ..domain.enums import FinancialStatus
from ..domain.periods import DateRange, MonthBucket
from ..schemas.dashboard import FinancialSummary
from ..schemas.records import FinancialRecord

CENTS = Decimal("0.01")
ONE_DECIMAL = Decimal("0.1")
NO_PRIOR_DATA = "Sem dados anteriores"


def to_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def is_recognized_revenue(record: FinancialRecord, window: DateRange) -> bool:
    """A record counts as revenue only when paid, dated inside the window and positive."""
    if record.status != FinancialStatus.PAID.value or record.paid_date is None:
        return False
    return window.contains(record.paid_date) and record.amount > 0


def total_revenue(records: Iterable[FinancialRecord], window: DateRange) -> Decimal:
    """
    Sum recognized revenue inside a date window.

    Args:
        records: Financial records as served by the upstream API
        window: Inclusive date range

    Returns:
        Decimal total rounded to cents
    """
    total = sum(
        (record.amount for record in records if is_recognized_revenue(record, window)),
        Decimal("0"),
    )
    return to_cents(total)


def revenue_by_bucket(records: Sequence[FinancialRecord], buckets: Sequence[MonthBucket]) -> List[Decimal]:
    """Revenue totals parallel to the given month buckets."""
    return [total_revenue(records, bucket.range) for bucket in buckets]


def percent_change(current: Decimal, previous: Optional[Decimal]) -> Optional[Decimal]:
    """
    Percentage change from previous to current, rounded to one decimal.

    Returns None when there is no usable baseline (absent, zero or negative).
    """
    if previous is None or previous <= 0:
        return None
    change = (current - previous) / previous * 100
    return change.quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)


def format_change(change: Optional[Decimal]) -> str:
    if change is None:
        return NO_PRIOR_DATA
    sign = "+" if change > 0 else ""
    return f"{sign}{change}%"


def financial_summary(records: Iterable[FinancialRecord]) -> FinancialSummary:
    """Totals and counts by payment status, across all records."""
    paid_total = Decimal("0")
    pending_total = Decimal("0")
    overdue_total = Decimal("0")
    pending_count = 0
    overdue_count = 0

    for record in records:
        if record.status == FinancialStatus.PAID.value:
            paid_total += record.amount
        elif record.status == FinancialStatus.PENDING.value:
            pending_total += record.amount
            pending_count += 1
        elif record.status == FinancialStatus.OVERDUE.value:
            overdue_total += record.amount
            overdue_count += 1

    return FinancialSummary(
        paid_total=to_cents(paid_total),
        pending_total=to_cents(pending_total),
        overdue_total=to_cents(overdue_total),
        pending_count=pending_count,
        overdue_count=overdue_count,
    )
