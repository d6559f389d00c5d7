# app/api/daily_records.py
from fastapi import APIRouter, Query
from typing import Optional
import logging

from app.core.exceptions import DuplicateDateConflict
from app.models.daily_record import (
    DailyRecord,
    DailyRecordView,
    MonthlySummary,
    MonthlySummaryRequest,
    UniquenessCheckRequest,
    UniquenessResult,
)
from app.services.monthly_analyzer import (
    record_view,
    sleep_duration,
    summarize,
    to_12_hour,
)
from app.services.record_validator import check_uniqueness

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/daily_records", tags=["Daily Records"])


@router.post("/check", response_model=UniquenessResult)
def check_record_date(
    body: UniquenessCheckRequest,
    strict: bool = False,
):
    """
    Check a candidate date against the caller's record collection.

    With strict=true a conflict is reported as 409 instead of a result body.
    """
    result = check_uniqueness(body.date, body.records, exclude_id=body.exclude_id)
    if strict and not result.accepted:
        raise DuplicateDateConflict(result.conflict_date, result.conflict_id)
    return result


@router.post("/summary", response_model=MonthlySummary)
def get_monthly_summary(body: MonthlySummaryRequest):
    """Summarise the supplied records for one YYYY-MM month."""
    logger.info(f"Summarising {len(body.records)} records for {body.month}")
    return summarize(body.records, body.month)


@router.post("/view", response_model=DailyRecordView)
def get_record_view(record: DailyRecord):
    return record_view(record)


@router.get("/time")
def format_time(value: Optional[str] = Query(None)):
    return {"value": value, "display": to_12_hour(value)}


@router.get("/sleep")
def get_sleep_duration(
    sleep: Optional[str] = Query(None),
    rise: Optional[str] = Query(None),
):
    return {"sleep": sleep, "rise": rise, "hours": sleep_duration(sleep, rise)}
