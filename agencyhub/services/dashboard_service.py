"""Dashboard KPI computation."""

from datetime import date
from decimal import Decimal
from typing import Iterable, List

import structlog

from ..domain.enums import CLOSED_STAGES, ClientStatus, FinancialStatus
from ..domain.periods import ReportingPeriod, previous_range, resolve_range
from ..schemas.dashboard import DashboardMetrics, KpiCard
from ..schemas.records import FinancialRecord, Opportunity
from .revenue_service import format_change, percent_change, to_cents, total_revenue
from .task_service import pending_task_count
from .upstream import MetricsCollections

logger = structlog.get_logger()

DASHBOARD_RESOURCES = ("financial_records", "clients", "opportunities", "tasks")

_SETTLED = frozenset({FinancialStatus.PAID.value, FinancialStatus.CANCELLED.value})


def is_overdue_payment(record: FinancialRecord, today: date) -> bool:
    """Flagged overdue upstream, or still open past its due date."""
    if record.status == FinancialStatus.OVERDUE.value:
        return True
    if record.status in _SETTLED or record.due_date is None:
        return False
    return record.due_date < today


def open_opportunities(opportunities: Iterable[Opportunity]) -> List[Opportunity]:
    return [opportunity for opportunity in opportunities if opportunity.stage not in CLOSED_STAGES]


def weighted_value(opportunity: Opportunity) -> Decimal:
    probability = opportunity.probability or 0
    probability = min(max(probability, 0), 100)
    return opportunity.value * probability / 100


def compute_dashboard_metrics(
    collections: MetricsCollections,
    period: ReportingPeriod,
    today: date,
) -> DashboardMetrics:
    """
    Compute the dashboard KPIs for a reporting period.

    Args:
        collections: Financial records, clients, opportunities and tasks
        period: Reporting period
        today: Reference date

    Returns:
        DashboardMetrics, recomputed from scratch
    """
    window = resolve_range(period, today)
    baseline = previous_range(period, today)

    revenue = total_revenue(collections.financial_records, window)
    previous_revenue = total_revenue(collections.financial_records, baseline)

    pipeline = open_opportunities(collections.opportunities)
    pipeline_value = sum((opportunity.value for opportunity in pipeline), Decimal("0"))
    weighted_pipeline = sum((weighted_value(opportunity) for opportunity in pipeline), Decimal("0"))

    metrics = DashboardMetrics(
        period=period.value,
        date_from=window.start,
        date_to=window.end,
        monthly_revenue=revenue,
        previous_month_revenue=previous_revenue,
        revenue_change=percent_change(revenue, previous_revenue),
        active_clients=sum(1 for client in collections.clients if client.status == ClientStatus.ACTIVE.value),
        new_clients_this_month=sum(1 for client in collections.clients if window.contains(client.created_at)),
        pending_tasks=pending_task_count(collections.tasks),
        pipeline_value=to_cents(pipeline_value),
        weighted_pipeline_value=to_cents(weighted_pipeline),
        total_opportunities=len(collections.opportunities),
        overdue_payments=sum(1 for record in collections.financial_records if is_overdue_payment(record, today)),
    )
    logger.info(
        "Computed dashboard metrics",
        period=period.value,
        date_from=str(window.start),
        date_to=str(window.end),
    )
    return metrics


def format_currency(amount: Decimal) -> str:
    """Format an amount as Brazilian reais, e.g. R$ 1.234,56."""
    text = f"{to_cents(amount):,.2f}"
    return "R$ " + text.replace(",", "_").replace(".", ",").replace("_", ".")


def build_kpi_cards(metrics: DashboardMetrics) -> List[KpiCard]:
    """Display-ready cards for the KPI strip."""
    return [
        KpiCard(
            key="revenue",
            title="Faturamento do Período",
            value=format_currency(metrics.monthly_revenue),
            change=format_change(metrics.revenue_change),
            change_label="vs. período anterior",
            alert=metrics.revenue_change is not None and metrics.revenue_change < 0,
        ),
        KpiCard(
            key="active_clients",
            title="Clientes Ativos",
            value=str(metrics.active_clients),
            change=f"+{metrics.new_clients_this_month}" if metrics.new_clients_this_month else "0",
            change_label="novos no período",
        ),
        KpiCard(
            key="pending_tasks",
            title="Tarefas Pendentes",
            value=str(metrics.pending_tasks),
            change=str(metrics.overdue_payments),
            change_label="pagamentos em atraso",
            alert=metrics.overdue_payments > 0,
        ),
        KpiCard(
            key="pipeline",
            title="Pipeline Valor",
            value=format_currency(metrics.pipeline_value),
            change=f"{metrics.total_opportunities} oportunidades",
        ),
    ]
