# core/exceptions.py
from typing import Optional


class TrackerError(Exception):
    """Base class for errors raised by the tracker core."""


class DuplicateDateConflict(TrackerError):
    """A record for the candidate date already exists in the collection."""

    def __init__(self, date: str, record_id: Optional[str] = None):
        self.date = date
        self.record_id = record_id
        super().__init__(
            f"An entry for {date} already exists. "
            "Please edit the existing entry or choose a different date."
        )

    @property
    def message(self) -> str:
        return self.args[0]
