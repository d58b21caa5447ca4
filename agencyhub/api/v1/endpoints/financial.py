"""Financial API endpoints."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from agencyhub.api.dependencies import get_today, get_upstream_client
from agencyhub.api.helpers import fetch_collections
from agencyhub.domain.periods import ReportingPeriod, resolve_range
from agencyhub.services.revenue_service import financial_summary, total_revenue
from agencyhub.services.upstream import AgencyHubClient
from agencyhub.schemas.dashboard import FinancialSummaryResponse

router = APIRouter()


@router.get("/summary", response_model=FinancialSummaryResponse)
def get_financial_summary(
    period: Optional[str] = Query(None, description="Reporting period (default: current_month)"),
    client: AgencyHubClient = Depends(get_upstream_client),
    today: date = Depends(get_today),
):
    """
    Get financial header figures.

    Status totals cover every record; period revenue covers the selected window.
    """
    reporting_period = ReportingPeriod.parse(period)
    records = fetch_collections(client, ["financial_records"]).financial_records

    return FinancialSummaryResponse(
        period=reporting_period.value,
        period_revenue=total_revenue(records, resolve_range(reporting_period, today)),
        summary=financial_summary(records),
    )
