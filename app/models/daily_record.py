# app/models/daily_record.py
from datetime import datetime
from enum     import Enum
from typing   import Dict, List, Optional, Union
from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class Prayer(str, Enum):
    """The five daily prayers, in the order they fall during the day."""
    FAJR    = "fajr"
    DHUHR   = "dhuhr"
    ASR     = "asr"
    MAGHRIB = "maghrib"
    ISHA    = "isha"


class PrayerFlags(BaseModel):
    fajr:    bool = False
    dhuhr:   bool = False
    asr:     bool = False
    maghrib: bool = False
    isha:    bool = False

    @field_validator("fajr", "dhuhr", "asr", "maghrib", "isha", mode="before")
    @classmethod
    def none_is_false(cls, v):
        return False if v is None else v

    def is_done(self, prayer: Prayer) -> bool:
        return getattr(self, prayer.value)

    def completed(self) -> List[Prayer]:
        return [p for p in Prayer if self.is_done(p)]

    def count(self) -> int:
        return len(self.completed())

    class Config:
        extra = "forbid"


def normalize_date(value: Optional[str]) -> str:
    """
    Normalise a calendar label to YYYY-MM-DD.

    Dates are opaque labels, not instants: there is no timezone handling.
    A label that cannot be parsed is only stripped of whitespace.
    """
    text = (value or "").strip()
    try:
        return datetime.strptime(text, "%Y-%m-%d").date().isoformat()
    except ValueError:
        return text


# Free-text numeric input as typed by the user, e.g. "12", "150.50" or ""
NumericText = Optional[Union[float, str]]


def _field(*names: str, default=None, **kwargs):
    # Accept both snake_case and the front end's wire names, emit camelCase
    return Field(
        default,
        validation_alias=AliasChoices(*names),
        serialization_alias=to_camel(names[0]),
        **kwargs,
    )


class DailyRecord(BaseModel):
    id:              Optional[str]      = _field("id", "_id")
    date:            str
    rise_time:       Optional[str]      = _field("rise_time", "riseTime", "rise")
    sleep_time:      Optional[str]      = _field("sleep_time", "sleepTime", "sleep")
    prayers:         PrayerFlags        = Field(
        default_factory=PrayerFlags,
        validation_alias=AliasChoices("prayers", "salat"),
    )
    scripture_pages: NumericText        = _field("scripture_pages", "scripturePages", "quran")
    expense:         NumericText        = None
    note:            Optional[str]      = _field("note", "badwork")
    created_at:      Optional[datetime] = _field("created_at", "createdAt")

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v):
        # Store ids (e.g. ObjectId, UUID) are opaque; compare them as text
        return None if v is None else str(v)

    @field_validator("prayers", mode="before")
    @classmethod
    def default_prayers(cls, v):
        return {} if v is None else v

    class Config:
        from_attributes = True


class UniquenessResult(BaseModel):
    accepted:      bool
    date:          str
    conflict_date: Optional[str] = None
    conflict_id:   Optional[str] = None
    message:       Optional[str] = None

    class Config:
        alias_generator  = to_camel
        populate_by_name = True


class DailyRecordView(BaseModel):
    id:                Optional[str] = None
    date:              str
    rise:              str
    sleep:             str
    prayers_completed: List[Prayer]
    sleep_hours:       float
    scripture_pages:   int
    expense:           float
    expense_display:   str
    note:              str

    class Config:
        alias_generator  = to_camel
        populate_by_name = True


class MonthlySummary(BaseModel):
    month:                    str
    entry_count:              int
    total_expense:            float
    total_scripture_pages:    int
    average_sleep_hours:      float
    prayer_adherence_percent: float
    prayer_totals:            Dict[Prayer, int]
    recent_activity:          List[DailyRecord]

    class Config:
        alias_generator  = to_camel
        populate_by_name = True


# --- request bodies for the HTTP adapter ---

class UniquenessCheckRequest(BaseModel):
    date:       str
    records:    List[DailyRecord] = Field(default_factory=list)
    exclude_id: Optional[str]     = Field(None, validation_alias=AliasChoices("exclude_id", "excludeId"))


class MonthlySummaryRequest(BaseModel):
    month:   str
    records: List[DailyRecord] = Field(default_factory=list)
