"""AgencyHub domain enums."""

from enum import Enum as PyEnum


class FinancialStatus(str, PyEnum):
    """Financial record status."""
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class FinancialRecordType(str, PyEnum):
    """Financial record type."""
    INVOICE = "invoice"
    PAYMENT = "payment"
    CONTRACT = "contract"


class ClientStatus(str, PyEnum):
    """Client lifecycle status."""
    ACTIVE = "active"
    PROSPECT = "prospect"
    INACTIVE = "inactive"


class OpportunityStage(str, PyEnum):
    """Sales pipeline stage."""
    PROSPECTING = "prospecting"
    QUALIFICATION = "qualification"
    PROPOSAL = "proposal"
    NEGOTIATION = "negotiation"
    CLOSED_WON = "closed_won"
    CLOSED_LOST = "closed_lost"


CLOSED_STAGES = frozenset({OpportunityStage.CLOSED_WON.value, OpportunityStage.CLOSED_LOST.value})


class TaskStatus(str, PyEnum):
    """Task status."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskUrgency(str, PyEnum):
    """Due-date proximity of an open task relative to today."""
    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    DUE_SOON = "due_soon"
    NO_DEADLINE = "no_deadline"


class PerformanceBand(str, PyEnum):
    """
    Static bucket on a product's heat-map intensity.

    This is not a trend: it compares a product against the best seller
    right now, never against its own past sales.
    """
    UP = "up"
    STABLE = "stable"
    DOWN = "down"


class HeatLevel(str, PyEnum):
    """Heat-map legend bucket."""
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"

