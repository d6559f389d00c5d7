import pytest

from app.core.exceptions import DuplicateDateConflict
from app.models.daily_record import DailyRecord
from app.services.record_validator import (
    check_uniqueness,
    ensure_unique_date,
    normalize_date,
)


@pytest.fixture
def records():
    return [
        DailyRecord(id="a1", date="2024-03-01"),
        DailyRecord(id="a2", date="2024-03-02"),
        DailyRecord(id=None, date="2024-03-05"),  # created locally, not yet stored
    ]


def test_empty_collection_accepts():
    result = check_uniqueness("2024-07-01", [])
    assert result.accepted is True
    assert result.date == "2024-07-01"
    assert result.conflict_date is None


def test_present_date_conflicts(records):
    for r in records:
        result = check_uniqueness(r.date, records)
        assert result.accepted is False
        assert result.conflict_date == r.date


def test_absent_date_accepts(records):
    assert check_uniqueness("2024-03-03", records).accepted is True
    assert check_uniqueness("2023-03-01", records).accepted is True


def test_conflict_carries_message_and_id(records):
    result = check_uniqueness("2024-03-02", records)
    assert result.conflict_id == "a2"
    assert "2024-03-02" in result.message
    assert "already exists" in result.message


def test_unconfirmed_local_record_still_conflicts(records):
    result = check_uniqueness("2024-03-05", records)
    assert result.accepted is False
    assert result.conflict_id is None


def test_candidate_date_is_normalised(records):
    assert check_uniqueness(" 2024-3-1 ", records).accepted is False
    assert normalize_date("2024-3-5") == "2024-03-05"
    assert normalize_date("  not a date ") == "not a date"
    assert normalize_date(None) == ""


def test_exclude_id_lets_an_update_keep_its_date(records):
    assert check_uniqueness("2024-03-01", records, exclude_id="a1").accepted is True
    # but moving it onto another record's date still conflicts
    assert check_uniqueness("2024-03-02", records, exclude_id="a1").accepted is False


def test_check_does_not_touch_collection(records):
    before = [r.model_dump() for r in records]
    check_uniqueness("2024-03-01", records)
    assert [r.model_dump() for r in records] == before


def test_ensure_unique_date_raises(records):
    with pytest.raises(DuplicateDateConflict) as excinfo:
        ensure_unique_date("2024-03-01", records)
    assert excinfo.value.date == "2024-03-01"
    assert excinfo.value.record_id == "a1"


def test_ensure_unique_date_returns_normalised(records):
    assert ensure_unique_date("2024-4-9", records) == "2024-04-09"
