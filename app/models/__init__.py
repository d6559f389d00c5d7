# models/__init__.py
"""
Pydantic models for daily records and monthly summaries
"""

from .daily_record import (
    Prayer,
    PrayerFlags,
    DailyRecord,
    DailyRecordView,
    UniquenessResult,
    MonthlySummary,
    UniquenessCheckRequest,
    MonthlySummaryRequest
)

__all__ = [
    # Records
    "Prayer",
    "PrayerFlags",
    "DailyRecord",
    "DailyRecordView",

    # Validation
    "UniquenessResult",
    "UniquenessCheckRequest",

    # Analytics
    "MonthlySummary",
    "MonthlySummaryRequest"
]
