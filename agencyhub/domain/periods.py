"""
Period tokens and their resolution into concrete date windows.

Tokens arrive from query strings. An unknown token never fails a request:
each period type has a documented default (``CURRENT_MONTH``, ``SIX_MONTHS``
and ``ALL``) that is used instead, with a warning logged.
"""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum as PyEnum
from typing import List, Optional, Tuple

import structlog

logger = structlog.get_logger()


DEFAULT_LOCALE = "pt-BR"

MONTH_ABBREVIATIONS = {
    "pt-BR": ("Jan", "Fev", "Mar", "Abr", "Mai", "Jun", "Jul", "Ago", "Set", "Out", "Nov", "Dez"),
    "en-US": ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
}


def _parse_token(enum_cls, token: Optional[str], default):
    if token is None or token == "":
        return default
    try:
        return enum_cls(token)
    except ValueError:
        logger.warning(
            "Unknown period token, using default",
            token=token,
            period_type=enum_cls.__name__,
            default=default.value,
        )
        return default


class ReportingPeriod(str, PyEnum):
    """Scalar reporting window selected on the dashboard."""
    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"
    LAST_90_DAYS = "90d"
    CURRENT_MONTH = "current_month"
    LAST_MONTH = "last_month"
    CURRENT_YEAR = "current_year"

    @classmethod
    def parse(cls, token: Optional[str]) -> "ReportingPeriod":
        """Parse a token, falling back to CURRENT_MONTH."""
        return _parse_token(cls, token, cls.CURRENT_MONTH)


class BucketPeriod(str, PyEnum):
    """Month-over-month chart window."""
    SIX_MONTHS = "6months"
    TWELVE_MONTHS = "12months"

    @classmethod
    def parse(cls, token: Optional[str]) -> "BucketPeriod":
        """Parse a token, falling back to SIX_MONTHS."""
        return _parse_token(cls, token, cls.SIX_MONTHS)

    @property
    def months(self) -> int:
        return 12 if self is BucketPeriod.TWELVE_MONTHS else 6


class PipelinePeriod(str, PyEnum):
    """Window on an opportunity's expected close date."""
    ALL = "all"
    CURRENT_MONTH = "current_month"
    NEXT_MONTH = "next_month"
    THIS_QUARTER = "this_quarter"
    OVERDUE = "overdue"
    NO_DUE_DATE = "no_due_date"

    @classmethod
    def parse(cls, token: Optional[str]) -> "PipelinePeriod":
        """Parse a token, falling back to ALL."""
        return _parse_token(cls, token, cls.ALL)


_ROLLING_DAYS = {
    ReportingPeriod.LAST_7_DAYS: 7,
    ReportingPeriod.LAST_30_DAYS: 30,
    ReportingPeriod.LAST_90_DAYS: 90,
}


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of calendar dates."""
    start: date
    end: date

    def contains(self, value: Optional[date]) -> bool:
        if value is None:
            return False
        return self.start <= value <= self.end

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


@dataclass(frozen=True)
class MonthBucket:
    """One labeled month of a multi-month report."""
    label: str
    start: date
    end: date

    @property
    def range(self) -> DateRange:
        return DateRange(self.start, self.end)


def first_of_month(value: date) -> date:
    return value.replace(day=1)


def last_of_month(value: date) -> date:
    return value.replace(day=calendar.monthrange(value.year, value.month)[1])


def add_months(value: date, months: int) -> date:
    """Shift a first-of-month date by a number of months."""
    index = value.year * 12 + (value.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def quarter_bounds(value: date) -> Tuple[date, date]:
    start = date(value.year, (value.month - 1) // 3 * 3 + 1, 1)
    return start, last_of_month(add_months(start, 2))


def month_label(value: date, locale: str = DEFAULT_LOCALE) -> str:
    """Capitalized three-letter month abbreviation for a locale."""
    names = MONTH_ABBREVIATIONS.get(locale)
    if names is None:
        names = MONTH_ABBREVIATIONS[DEFAULT_LOCALE]
    return names[value.month - 1]


def resolve_range(period: ReportingPeriod, today: date) -> DateRange:
    """Resolve a reporting period into an inclusive date range ending today."""
    if period in _ROLLING_DAYS:
        return DateRange(today - timedelta(days=_ROLLING_DAYS[period]), today)
    if period is ReportingPeriod.LAST_MONTH:
        start = add_months(first_of_month(today), -1)
        return DateRange(start, last_of_month(start))
    if period is ReportingPeriod.CURRENT_YEAR:
        return DateRange(date(today.year, 1, 1), today)
    return DateRange(first_of_month(today), today)


def previous_range(period: ReportingPeriod, today: date) -> DateRange:
    """
    Comparison window for a reporting period.

    Rolling windows compare against the window of equal length just before
    them. Calendar windows compare against the full previous month or year,
    so a partial current month is measured against a whole one.
    """
    current = resolve_range(period, today)
    if period in _ROLLING_DAYS:
        end = current.start - timedelta(days=1)
        return DateRange(end - timedelta(days=current.days - 1), end)
    if period is ReportingPeriod.CURRENT_YEAR:
        return DateRange(date(today.year - 1, 1, 1), date(today.year - 1, 12, 31))
    start = add_months(current.start, -1)
    return DateRange(start, last_of_month(start))


def resolve_buckets(period: BucketPeriod, today: date, locale: str = DEFAULT_LOCALE) -> List[MonthBucket]:
    """Ordered month buckets, oldest first, ending with the current month."""
    current = first_of_month(today)
    buckets = []
    for offset in range(period.months - 1, -1, -1):
        start = add_months(current, -offset)
        buckets.append(MonthBucket(label=month_label(start, locale), start=start, end=last_of_month(start)))
    return buckets
