"""Pydantic schemas for upstream records and API responses."""

from .records import (
    FinancialRecord,
    Client,
    Opportunity,
    Task,
    Product,
    ProductSale,
)
from .dashboard import (
    DashboardMetrics,
    DashboardMetricsResponse,
    KpiCard,
    RevenueSeriesResponse,
    DistributionSlice,
    DistributionResponse,
    PipelineResponse,
    UrgentTasksResponse,
    FinancialSummary,
    HeatMapCell,
    HeatMapResponse,
)

__all__ = [
    "FinancialRecord",
    "Client",
    "Opportunity",
    "Task",
    "Product",
    "ProductSale",
    "DashboardMetrics",
    "DashboardMetricsResponse",
    "KpiCard",
    "RevenueSeriesResponse",
    "DistributionSlice",
    "DistributionResponse",
    "PipelineResponse",
    "UrgentTasksResponse",
    "FinancialSummary",
    "HeatMapCell",
    "HeatMapResponse",
]
