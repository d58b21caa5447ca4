"""Tests for period token parsing and resolution."""

import pytest
from datetime import date

from agencyhub.domain.periods import (
    BucketPeriod,
    DateRange,
    PipelinePeriod,
    ReportingPeriod,
    add_months,
    last_of_month,
    month_label,
    previous_range,
    quarter_bounds,
    resolve_buckets,
    resolve_range,
)

TODAY = date(2025, 3, 15)


class TestPeriodParsing:
    """Tests for explicit token fallbacks."""

    def test_parse_known_tokens(self):
        assert ReportingPeriod.parse("7d") is ReportingPeriod.LAST_7_DAYS
        assert ReportingPeriod.parse("last_month") is ReportingPeriod.LAST_MONTH
        assert BucketPeriod.parse("12months") is BucketPeriod.TWELVE_MONTHS
        assert PipelinePeriod.parse("this_quarter") is PipelinePeriod.THIS_QUARTER

    @pytest.mark.parametrize("token", [None, "", "yesterday", "6months"])
    def test_unknown_reporting_token_falls_back_to_current_month(self, token):
        assert ReportingPeriod.parse(token) is ReportingPeriod.CURRENT_MONTH

    @pytest.mark.parametrize("token", [None, "", "24months", "current_month"])
    def test_unknown_bucket_token_falls_back_to_six_months(self, token):
        assert BucketPeriod.parse(token) is BucketPeriod.SIX_MONTHS

    def test_unknown_pipeline_token_falls_back_to_all(self):
        assert PipelinePeriod.parse("someday") is PipelinePeriod.ALL


class TestResolveRange:
    """Tests for scalar date windows."""

    @pytest.mark.parametrize(
        "period, start, end",
        [
            (ReportingPeriod.LAST_7_DAYS, date(2025, 3, 8), TODAY),
            (ReportingPeriod.LAST_30_DAYS, date(2025, 2, 13), TODAY),
            (ReportingPeriod.LAST_90_DAYS, date(2024, 12, 15), TODAY),
            (ReportingPeriod.CURRENT_MONTH, date(2025, 3, 1), TODAY),
            (ReportingPeriod.LAST_MONTH, date(2025, 2, 1), date(2025, 2, 28)),
            (ReportingPeriod.CURRENT_YEAR, date(2025, 1, 1), TODAY),
        ],
    )
    def test_ranges(self, period, start, end):
        assert resolve_range(period, TODAY) == DateRange(start, end)

    def test_last_month_across_year_boundary(self):
        window = resolve_range(ReportingPeriod.LAST_MONTH, date(2025, 1, 10))
        assert window == DateRange(date(2024, 12, 1), date(2024, 12, 31))

    def test_range_is_inclusive(self):
        window = DateRange(date(2025, 3, 1), date(2025, 3, 31))
        assert window.contains(date(2025, 3, 1))
        assert window.contains(date(2025, 3, 31))
        assert not window.contains(date(2025, 4, 1))
        assert not window.contains(None)
        assert window.days == 31


class TestPreviousRange:
    """Tests for comparison windows."""

    def test_rolling_window_has_equal_length(self):
        current = resolve_range(ReportingPeriod.LAST_7_DAYS, TODAY)
        previous = previous_range(ReportingPeriod.LAST_7_DAYS, TODAY)

        assert previous == DateRange(date(2025, 2, 28), date(2025, 3, 7))
        assert previous.days == current.days

    def test_current_month_compares_to_previous_full_month(self):
        previous = previous_range(ReportingPeriod.CURRENT_MONTH, TODAY)
        assert previous == DateRange(date(2025, 2, 1), date(2025, 2, 28))

    def test_last_month_compares_to_month_before(self):
        previous = previous_range(ReportingPeriod.LAST_MONTH, TODAY)
        assert previous == DateRange(date(2025, 1, 1), date(2025, 1, 31))

    def test_current_year_compares_to_previous_year(self):
        previous = previous_range(ReportingPeriod.CURRENT_YEAR, TODAY)
        assert previous == DateRange(date(2024, 1, 1), date(2024, 12, 31))


class TestResolveBuckets:
    """Tests for month buckets."""

    def test_six_months_end_at_current_month(self):
        buckets = resolve_buckets(BucketPeriod.SIX_MONTHS, TODAY)

        assert [b.label for b in buckets] == ["Out", "Nov", "Dez", "Jan", "Fev", "Mar"]
        assert buckets[0].start == date(2024, 10, 1)
        assert buckets[-1].start == date(2025, 3, 1)
        assert buckets[-1].end == date(2025, 3, 31)
        assert buckets[-2].end == date(2025, 2, 28)

    def test_twelve_months(self):
        buckets = resolve_buckets(BucketPeriod.TWELVE_MONTHS, TODAY, locale="en-US")

        assert len(buckets) == 12
        assert buckets[0].label == "Apr"
        assert buckets[0].start == date(2024, 4, 1)
        assert [b.start for b in buckets] == sorted(b.start for b in buckets)

    def test_unknown_locale_uses_default_labels(self):
        assert month_label(date(2025, 2, 1), "xx-XX") == "Fev"

    def test_leap_february(self):
        assert last_of_month(date(2024, 2, 10)) == date(2024, 2, 29)


class TestCalendarHelpers:

    def test_add_months_wraps_years(self):
        assert add_months(date(2025, 1, 1), -1) == date(2024, 12, 1)
        assert add_months(date(2024, 11, 1), 3) == date(2025, 2, 1)

    def test_quarter_bounds(self):
        assert quarter_bounds(TODAY) == (date(2025, 1, 1), date(2025, 3, 31))
        assert quarter_bounds(date(2025, 11, 2)) == (date(2025, 10, 1), date(2025, 12, 31))
