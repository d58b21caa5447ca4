"""Dashboard schemas for derived metrics."""

from datetime import date
from decimal import Decimal
from typing import Optional, List

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Response model serialized with camelCase keys."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class DashboardMetrics(CamelModel):
    """Period-scoped KPIs."""
    period: str
    date_from: date
    date_to: date
    monthly_revenue: Decimal = Decimal("0.00")
    previous_month_revenue: Optional[Decimal] = None
    revenue_change: Optional[Decimal] = None
    active_clients: int = 0
    new_clients_this_month: int = 0
    pending_tasks: int = 0
    pipeline_value: Decimal = Decimal("0.00")
    weighted_pipeline_value: Decimal = Decimal("0.00")
    total_opportunities: int = 0
    overdue_payments: int = 0


class KpiCard(CamelModel):
    """Display-ready KPI card."""
    key: str
    title: str
    value: str
    change: str
    change_label: str = ""
    alert: bool = False


class DashboardMetricsResponse(CamelModel):
    metrics: DashboardMetrics
    kpis: List[KpiCard] = []


class RevenueBucket(CamelModel):
    label: str
    start: date
    end: date
    total: Decimal


class RevenueSeriesResponse(CamelModel):
    """Month-over-month revenue."""
    period: str
    labels: List[str]
    buckets: List[RevenueBucket]
    total: Decimal


class DistributionSlice(CamelModel):
    """One category of a status or stage distribution."""
    key: str
    label: str
    color: str
    count: int
    placeholder: bool = False


class DistributionResponse(CamelModel):
    total: int
    slices: List[DistributionSlice]


class ClientGrowthResponse(CamelModel):
    period: str
    labels: List[str]
    counts: List[int]


class StageValue(CamelModel):
    """Summed opportunity value for one pipeline stage."""
    key: str
    label: str
    color: str
    value: Decimal


class PipelineResponse(CamelModel):
    period: str
    stages: List[DistributionSlice]
    values: List[StageValue]
    total_value: Decimal


class UrgentTask(CamelModel):
    id: int
    title: str
    due_date: Optional[date] = None
    urgency: str
    label: str


class UrgentTasksResponse(CamelModel):
    tasks: List[UrgentTask]
    total_urgent: int


class FinancialSummary(CamelModel):
    """Financial page header figures."""
    paid_total: Decimal = Decimal("0.00")
    pending_total: Decimal = Decimal("0.00")
    overdue_total: Decimal = Decimal("0.00")
    pending_count: int = 0
    overdue_count: int = 0


class FinancialSummaryResponse(CamelModel):
    period: str
    period_revenue: Decimal
    summary: FinancialSummary


class HeatMapCell(CamelModel):
    """Per-product heat-map entry."""
    product_id: int
    product_name: str
    sales_count: int
    revenue: Decimal
    intensity: float
    performance_band: str
    heat_level: str


class HeatMapResponse(CamelModel):
    cells: List[HeatMapCell]
