# app/services/monthly_analyzer.py
from __future__ import annotations

import calendar
import logging
import math
import re
from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, List, Optional, Tuple

from app.core import config
from app.models.daily_record import (
    DailyRecord,
    DailyRecordView,
    MonthlySummary,
    Prayer,
    normalize_date,
)

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60
PRAYERS_PER_DAY = len(Prayer)


# ------------------------------ helpers: numbers ----------------------------

def _round(value: float, places: int) -> float:
    """Round half-up, so 6.25 h shows as 6.3 rather than banker's 6.2."""
    if not math.isfinite(value):
        logger.warning(f"Total {value!r} overflowed; reporting 0")
        return 0.0
    quantum = Decimal(1).scaleb(-places)
    try:
        return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        # more digits than the decimal context holds; precision is lost anyway
        return float(round(value, places))


# Leading number, read the way a browser's parseFloat reads "150 tk"
AMOUNT_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_amount(value) -> float:
    """
    Parse a user-entered quantity (pages, money) or return 0.

    Every aggregate goes through here. Blank, unparsable, negative and
    non-finite values all count as zero; they never raise.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            logger.debug(f"Ignoring out-of-range amount {value!r}")
            return 0.0
    elif isinstance(value, str):
        match = AMOUNT_RE.match(value.strip())
        if not match:
            if value.strip():
                logger.debug(f"Ignoring unparsable amount {value!r}")
            return 0.0
        number = float(match.group(0))
    else:
        return 0.0

    if not math.isfinite(number) or number < 0:
        logger.debug(f"Ignoring out-of-range amount {value!r}")
        return 0.0
    return number


# ------------------------------ helpers: clock ------------------------------

def _parse_clock(value) -> Optional[Tuple[int, int]]:
    """'HH:MM' (seconds tolerated) -> (hour, minute), or None if malformed."""
    if not isinstance(value, str):
        return None
    parts = value.strip().split(":")
    if len(parts) not in (2, 3):
        return None
    try:
        hour, minute = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return hour, minute


def to_12_hour(time: Optional[str]) -> str:
    """
    Render a 24-hour 'HH:MM' string as 'H:MM AM/PM'.

    Missing input gives "", malformed input comes back unchanged.
    """
    if not time or not isinstance(time, str):
        return ""
    parsed = _parse_clock(time)
    if parsed is None:
        return time

    hour, minute = parsed
    suffix = "PM" if hour >= 12 else "AM"
    hour12 = hour % 12 or 12
    return f"{hour12}:{minute:02d} {suffix}"


def sleep_duration(sleep_time: Optional[str], rise_time: Optional[str]) -> float:
    """
    Hours slept between sleep_time and rise_time, to one decimal place.

    When rise is not strictly after sleep the rise is taken to be on the
    next day, so equal times give a full 24.0 hours.
    """
    if not sleep_time or not rise_time:
        return 0.0

    sleep = _parse_clock(sleep_time)
    rise = _parse_clock(rise_time)
    if sleep is None or rise is None:
        logger.debug(f"Malformed sleep/rise times {sleep_time!r}/{rise_time!r}")
        return 0.0

    sleep_minutes = sleep[0] * 60 + sleep[1]
    rise_minutes = rise[0] * 60 + rise[1]
    if rise_minutes <= sleep_minutes:
        rise_minutes += MINUTES_PER_DAY

    return _round((rise_minutes - sleep_minutes) / 60, 1)


# ------------------------------ helpers: calendar ---------------------------

def month_of(date_label: Optional[str]) -> str:
    """The YYYY-MM month a record date belongs to."""
    return (date_label or "").strip()[:7]


def days_in_month(month_label: Optional[str]) -> int:
    """28-31 for a valid YYYY-MM label, 0 otherwise."""
    try:
        parsed = datetime.strptime((month_label or "").strip(), "%Y-%m")
    except ValueError:
        return 0
    return calendar.monthrange(parsed.year, parsed.month)[1]


def filter_month(records: Iterable[DailyRecord], month_label: str) -> List[DailyRecord]:
    return [r for r in records if r.date and normalize_date(r.date).startswith(month_label)]


# ------------------------------ views & summary -----------------------------

def record_view(record: DailyRecord) -> DailyRecordView:
    """Display projection of a single record."""
    expense = _round(parse_amount(record.expense), 2)
    return DailyRecordView(
        id=record.id,
        date=record.date,
        rise=to_12_hour(record.rise_time),
        sleep=to_12_hour(record.sleep_time),
        prayers_completed=record.prayers.completed(),
        sleep_hours=sleep_duration(record.sleep_time, record.rise_time),
        scripture_pages=int(_round(parse_amount(record.scripture_pages), 0)),
        expense=expense,
        expense_display=f"{expense:.2f} {config.CURRENCY_LABEL}",
        note=record.note or "None",
    )


def summarize(
    records: Iterable[DailyRecord],
    selected_month: str,
    recent_limit: Optional[int] = None,
) -> MonthlySummary:
    """
    Aggregate the records of one YYYY-MM month.

    Prayer adherence is measured against every day of the month, not only the
    days that have a record. The input collection is never modified.
    """
    if recent_limit is None:
        recent_limit = config.RECENT_ACTIVITY_LIMIT

    month = selected_month or ""
    matching = filter_month(records, month)

    total_expense = sum(parse_amount(r.expense) for r in matching)
    total_pages = sum(parse_amount(r.scripture_pages) for r in matching)

    timed = [r for r in matching if r.sleep_time or r.rise_time]
    if timed:
        average_sleep = _round(
            sum(sleep_duration(r.sleep_time, r.rise_time) for r in timed) / len(timed), 1
        )
    else:
        average_sleep = 0.0

    prayer_totals = {
        p: sum(1 for r in matching if r.prayers.is_done(p)) for p in Prayer
    }
    days = days_in_month(month)
    if days:
        possible = PRAYERS_PER_DAY * days
        adherence = _round(sum(prayer_totals.values()) / possible * 100, 1)
    else:
        if matching:
            logger.warning(f"Cannot compute days in month {month!r}; adherence set to 0")
        adherence = 0.0

    recent = sorted(matching, key=lambda r: normalize_date(r.date), reverse=True)[:recent_limit]

    logger.debug(f"Summarised {len(matching)} records for {month!r}")
    return MonthlySummary(
        month=month,
        entry_count=len(matching),
        total_expense=_round(total_expense, 2),
        total_scripture_pages=int(_round(total_pages, 0)),
        average_sleep_hours=average_sleep,
        prayer_adherence_percent=adherence,
        prayer_totals=prayer_totals,
        recent_activity=recent,
    )
