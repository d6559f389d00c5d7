# app/services/record_validator.py
import logging
from typing import Iterable, Optional

from app.core.exceptions import DuplicateDateConflict
from app.models.daily_record import DailyRecord, UniquenessResult, normalize_date

logger = logging.getLogger(__name__)


def check_uniqueness(
    candidate_date: str,
    existing_records: Iterable[DailyRecord],
    exclude_id: Optional[str] = None,
) -> UniquenessResult:
    """
    Decide whether a record for candidate_date may be added to the collection.

    exclude_id skips the record being edited, so an update can keep its own date.
    Records held locally but not yet confirmed by the store still count.
    """
    wanted = normalize_date(candidate_date)

    for record in existing_records:
        if exclude_id is not None and record.id == exclude_id:
            continue
        if normalize_date(record.date) == wanted:
            conflict = DuplicateDateConflict(wanted, record.id)
            logger.info(f"Date conflict for {wanted} (existing record {record.id})")
            return UniquenessResult(
                accepted=False,
                date=wanted,
                conflict_date=wanted,
                conflict_id=record.id,
                message=conflict.message,
            )

    return UniquenessResult(accepted=True, date=wanted)


def ensure_unique_date(
    candidate_date: str,
    existing_records: Iterable[DailyRecord],
    exclude_id: Optional[str] = None,
) -> str:
    """Return the normalised date, or raise DuplicateDateConflict."""
    result = check_uniqueness(candidate_date, existing_records, exclude_id)
    if not result.accepted:
        raise DuplicateDateConflict(result.conflict_date, result.conflict_id)
    return result.date
