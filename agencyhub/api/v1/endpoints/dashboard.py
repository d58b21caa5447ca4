"""Dashboard API endpoints."""

from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query

from agencyhub.api.dependencies import get_today, get_upstream_client
from agencyhub.api.helpers import fetch_collections
from agencyhub.core.config import get_settings
from agencyhub.domain.periods import (
    BucketPeriod,
    PipelinePeriod,
    ReportingPeriod,
    resolve_buckets,
)
from agencyhub.services.dashboard_service import (
    DASHBOARD_RESOURCES,
    build_kpi_cards,
    compute_dashboard_metrics,
)
from agencyhub.services.distribution_service import (
    client_growth,
    client_status_distribution,
    in_pipeline_period,
    pipeline_stage_distribution,
    pipeline_stage_values,
)
from agencyhub.services.revenue_service import revenue_by_bucket, to_cents
from agencyhub.services.task_service import all_urgent_tasks, urgent_tasks
from agencyhub.services.upstream import AgencyHubClient
from agencyhub.schemas.dashboard import (
    ClientGrowthResponse,
    DashboardMetricsResponse,
    DistributionResponse,
    PipelineResponse,
    RevenueBucket,
    RevenueSeriesResponse,
    UrgentTasksResponse,
)

router = APIRouter()


@router.get("/metrics", response_model=DashboardMetricsResponse)
def get_dashboard_metrics(
    period: Optional[str] = Query(None, description="Reporting period (default: current_month)"),
    client: AgencyHubClient = Depends(get_upstream_client),
    today: date = Depends(get_today),
):
    """
    Get period KPIs and their display cards.

    Unknown period tokens fall back to current_month.
    """
    reporting_period = ReportingPeriod.parse(period)
    collections = fetch_collections(client, DASHBOARD_RESOURCES)
    metrics = compute_dashboard_metrics(collections, reporting_period, today)
    return DashboardMetricsResponse(metrics=metrics, kpis=build_kpi_cards(metrics))


@router.get("/revenue", response_model=RevenueSeriesResponse)
def get_revenue_series(
    period: Optional[str] = Query(None, description="6months or 12months (default: 6months)"),
    client: AgencyHubClient = Depends(get_upstream_client),
    today: date = Depends(get_today),
):
    """Get monthly revenue for the revenue chart."""
    bucket_period = BucketPeriod.parse(period)
    buckets = resolve_buckets(bucket_period, today, get_settings().month_label_locale)
    records = fetch_collections(client, ["financial_records"]).financial_records
    totals = revenue_by_bucket(records, buckets)

    return RevenueSeriesResponse(
        period=bucket_period.value,
        labels=[bucket.label for bucket in buckets],
        buckets=[
            RevenueBucket(label=bucket.label, start=bucket.start, end=bucket.end, total=total)
            for bucket, total in zip(buckets, totals)
        ],
        total=to_cents(sum(totals, Decimal("0"))),
    )


@router.get("/client-status", response_model=DistributionResponse)
def get_client_status(
    client: AgencyHubClient = Depends(get_upstream_client),
):
    """Get the client status distribution."""
    clients = fetch_collections(client, ["clients"]).clients
    return DistributionResponse(total=len(clients), slices=client_status_distribution(clients))


@router.get("/client-growth", response_model=ClientGrowthResponse)
def get_client_growth(
    period: Optional[str] = Query(None, description="6months or 12months (default: 6months)"),
    client: AgencyHubClient = Depends(get_upstream_client),
    today: date = Depends(get_today),
):
    """Get the cumulative client count per month."""
    bucket_period = BucketPeriod.parse(period)
    buckets = resolve_buckets(bucket_period, today, get_settings().month_label_locale)
    clients = fetch_collections(client, ["clients"]).clients

    return ClientGrowthResponse(
        period=bucket_period.value,
        labels=[bucket.label for bucket in buckets],
        counts=client_growth(clients, buckets),
    )


@router.get("/pipeline", response_model=PipelineResponse)
def get_pipeline(
    period: Optional[str] = Query(None, description="Expected close window (default: all)"),
    client: AgencyHubClient = Depends(get_upstream_client),
    today: date = Depends(get_today),
):
    """Get pipeline stage counts and stage values within a close-date window."""
    pipeline_period = PipelinePeriod.parse(period)
    opportunities = fetch_collections(client, ["opportunities"]).opportunities
    in_window = [o for o in opportunities if in_pipeline_period(o, pipeline_period, today)]
    values = pipeline_stage_values(opportunities, pipeline_period, today)

    return PipelineResponse(
        period=pipeline_period.value,
        stages=pipeline_stage_distribution(in_window),
        values=values,
        total_value=to_cents(sum((v.value for v in values), Decimal("0"))),
    )


@router.get("/urgent-tasks", response_model=UrgentTasksResponse)
def get_urgent_tasks(
    limit: Optional[int] = Query(None, ge=0, le=50, description="Max tasks to return"),
    client: AgencyHubClient = Depends(get_upstream_client),
    today: date = Depends(get_today),
):
    """Get overdue and due-today tasks for the sidebar."""
    if limit is None:
        limit = get_settings().urgent_task_limit
    tasks = fetch_collections(client, ["tasks"]).tasks

    return UrgentTasksResponse(
        tasks=urgent_tasks(tasks, today, limit),
        total_urgent=len(all_urgent_tasks(tasks, today)),
    )
