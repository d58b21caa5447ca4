"""AgencyHub domain module."""

from .enums import (
    FinancialStatus,
    FinancialRecordType,
    ClientStatus,
    OpportunityStage,
    TaskStatus,
    TaskUrgency,
    PerformanceBand,
    HeatLevel,
)
from .periods import (
    ReportingPeriod,
    BucketPeriod,
    PipelinePeriod,
    DateRange,
    MonthBucket,
)

__all__ = [
    "FinancialStatus",
    "FinancialRecordType",
    "ClientStatus",
    "OpportunityStage",
    "TaskStatus",
    "TaskUrgency",
    "PerformanceBand",
    "HeatLevel",
    "ReportingPeriod",
    "BucketPeriod",
    "PipelinePeriod",
    "DateRange",
    "MonthBucket",
]
