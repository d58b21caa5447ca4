"""Category distributions for client status and the sales pipeline."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar

from ..domain.enums import ClientStatus, OpportunityStage
from ..domain.periods import (
    MonthBucket,
    PipelinePeriod,
    add_months,
    first_of_month,
    quarter_bounds,
)
from ..schemas.dashboard import DistributionSlice, StageValue
from ..schemas.records import Client, Opportunity
from .revenue_service import to_cents

T = TypeVar("T")


@dataclass(frozen=True)
class CategoryStyle:
    """Display attributes for one category."""
    label: str
    color: str


class CategoryTable:
    """
    Ordered category -> style table with a fallback for unknown values.

    Colors are bound to keys, not positions, so a category keeps its color
    whichever other categories happen to be empty.
    """

    def __init__(self, entries: Sequence[Tuple[str, CategoryStyle]], fallback: str):
        self._styles: Dict[str, CategoryStyle] = dict(entries)
        if fallback not in self._styles:
            raise ValueError(f"Fallback category not in table: {fallback}")
        self.fallback = fallback

    def keys(self) -> List[str]:
        return list(self._styles)

    def style(self, key: str) -> CategoryStyle:
        return self._styles[key]

    def resolve(self, value: Optional[str]) -> str:
        """Map a raw field value to its category key."""
        if value in self._styles:
            return value
        return self.fallback


NO_DATA_KEY = "no_data"
NO_DATA_STYLE = CategoryStyle(label="Sem dados", color="hsl(213, 94%, 68%)")

CLIENT_STATUS_TABLE = CategoryTable(
    [
        (ClientStatus.ACTIVE.value, CategoryStyle("Ativos", "hsl(158, 64%, 52%)")),
        (ClientStatus.PROSPECT.value, CategoryStyle("Prospects", "hsl(43, 96%, 56%)")),
        (ClientStatus.INACTIVE.value, CategoryStyle("Inativos", "hsl(0, 84%, 60%)")),
    ],
    fallback=ClientStatus.INACTIVE.value,
)

PIPELINE_STAGE_TABLE = CategoryTable(
    [
        (OpportunityStage.PROSPECTING.value, CategoryStyle("Prospecção", "hsl(210, 40%, 65%)")),
        (OpportunityStage.QUALIFICATION.value, CategoryStyle("Qualificação", "hsl(213, 94%, 48%)")),
        (OpportunityStage.PROPOSAL.value, CategoryStyle("Proposta", "hsl(45, 93%, 47%)")),
        (OpportunityStage.NEGOTIATION.value, CategoryStyle("Negociação", "hsl(262, 83%, 58%)")),
        (OpportunityStage.CLOSED_WON.value, CategoryStyle("Fechado", "hsl(142, 76%, 36%)")),
        (OpportunityStage.CLOSED_LOST.value, CategoryStyle("Perdido", "hsl(0, 84%, 60%)")),
        ("other", CategoryStyle("Outros", "hsl(215, 16%, 47%)")),
    ],
    fallback="other",
)

# Stages drawn on the pipeline value chart, in funnel order.
FUNNEL_STAGES = (
    OpportunityStage.PROSPECTING.value,
    OpportunityStage.QUALIFICATION.value,
    OpportunityStage.PROPOSAL.value,
    OpportunityStage.NEGOTIATION.value,
    OpportunityStage.CLOSED_WON.value,
)


def distribute(
    items: Iterable[T],
    accessor: Callable[[T], Optional[str]],
    table: CategoryTable,
) -> List[DistributionSlice]:
    """
    Count items per category.

    Zero-count categories are left out. If nothing was counted at all, a
    single placeholder slice is returned so charts always have something to
    draw; its count is 0, so emitted counts always sum to the input size.
    """
    counts = {key: 0 for key in table.keys()}
    for item in items:
        counts[table.resolve(accessor(item))] += 1

    slices = [
        DistributionSlice(
            key=key,
            label=table.style(key).label,
            color=table.style(key).color,
            count=count,
        )
        for key, count in counts.items()
        if count > 0
    ]
    if not slices:
        return [
            DistributionSlice(
                key=NO_DATA_KEY,
                label=NO_DATA_STYLE.label,
                color=NO_DATA_STYLE.color,
                count=0,
                placeholder=True,
            )
        ]
    return slices


def client_status_distribution(clients: Iterable[Client]) -> List[DistributionSlice]:
    return distribute(clients, lambda client: client.status, CLIENT_STATUS_TABLE)


def pipeline_stage_distribution(opportunities: Iterable[Opportunity]) -> List[DistributionSlice]:
    return distribute(opportunities, lambda opportunity: opportunity.stage, PIPELINE_STAGE_TABLE)


def in_pipeline_period(opportunity: Opportunity, period: PipelinePeriod, today: date) -> bool:
    """Whether an opportunity's expected close date falls in the pipeline window."""
    if period is PipelinePeriod.ALL:
        return True

    close_date = opportunity.expected_close_date
    if close_date is None:
        return period is PipelinePeriod.NO_DUE_DATE

    if period is PipelinePeriod.CURRENT_MONTH:
        return first_of_month(close_date) == first_of_month(today)
    if period is PipelinePeriod.NEXT_MONTH:
        return first_of_month(close_date) == add_months(first_of_month(today), 1)
    if period is PipelinePeriod.THIS_QUARTER:
        start, end = quarter_bounds(today)
        return start <= close_date <= end
    if period is PipelinePeriod.OVERDUE:
        return close_date < today
    return False


def pipeline_stage_values(
    opportunities: Iterable[Opportunity],
    period: PipelinePeriod,
    today: date,
) -> List[StageValue]:
    """Summed opportunity value per funnel stage; empty stages are kept as zero."""
    totals = {stage: Decimal("0") for stage in FUNNEL_STAGES}
    for opportunity in opportunities:
        if opportunity.stage in totals and in_pipeline_period(opportunity, period, today):
            totals[opportunity.stage] += opportunity.value

    return [
        StageValue(
            key=stage,
            label=PIPELINE_STAGE_TABLE.style(stage).label,
            color=PIPELINE_STAGE_TABLE.style(stage).color,
            value=to_cents(total),
        )
        for stage, total in totals.items()
    ]


def client_growth(clients: Sequence[Client], buckets: Sequence[MonthBucket]) -> List[int]:
    """Cumulative client count as of each bucket's first day."""
    return [
        sum(1 for client in clients if client.created_at is not None and client.created_at <= bucket.start)
        for bucket in buckets
    ]
