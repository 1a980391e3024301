# Domain Analytics Package
from .models import (
    NO_DATA,
    AnalyticsSnapshot,
    Bucketing,
    GroupSummary,
    NoData,
    Overview,
    ProgressBucket,
)

__all__ = [
    "NO_DATA",
    "NoData",
    "Bucketing",
    "Overview",
    "GroupSummary",
    "ProgressBucket",
    "AnalyticsSnapshot",
]
