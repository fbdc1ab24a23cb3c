"""
Pydantic schemas shared by the availability engine and the API
"""
from datetime import date as Date, datetime
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .services.timeutils import WEEKDAYS, parse_time, InvalidTimeError


def to_calendar_date(value) -> Date:
    """Truncate a date, datetime or ISO string ("2026-03-02T15:00:00Z") to its calendar date"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, Date):
        return value
    if isinstance(value, str):
        return Date.fromisoformat(value.strip()[:10])
    raise TypeError(f"Cannot convert {type(value).__name__} to a date")


class BreakTime(BaseModel):
    start_time: str
    end_time: str


class DaySchedule(BaseModel):
    is_working: bool = False
    start_time: str = "9:00 AM"
    end_time: str = "5:00 PM"


class StaffScheduleData(BaseModel):
    """One stylist's schedule as read by the availability engine"""

    model_config = ConfigDict(from_attributes=True)

    stylist_name: str
    working_hours: Dict[str, DaySchedule] = Field(default_factory=dict)
    blocked_dates: List[str] = Field(default_factory=list)
    break_times: List[BreakTime] = Field(default_factory=list)


class BookedSlot(BaseModel):
    """The engine's view of an appointment: who, which day, which slot"""

    stylist: str
    date: Date
    time: str

    @field_validator("date", mode="before")
    @classmethod
    def _truncate_to_date(cls, value):
        return to_calendar_date(value)


class StaffScheduleIn(StaffScheduleData):
    """Schedule submitted by an admin; times and ranges are checked before saving"""

    stylist_name: str = Field(..., min_length=1, max_length=100)

    @field_validator("blocked_dates")
    @classmethod
    def _canonical_dates(cls, value: List[str]) -> List[str]:
        # stored as "YYYY-MM-DD"; the engine matches on date.isoformat()
        dates = []
        for blocked in value:
            try:
                dates.append(Date.fromisoformat(blocked.strip()).isoformat())
            except ValueError:
                raise ValueError(f"Blocked date '{blocked}' is not YYYY-MM-DD")
        return dates

    @model_validator(mode="after")
    def _check_ranges(self):
        for day, hours in self.working_hours.items():
            if day not in WEEKDAYS:
                raise ValueError(f"Unknown weekday '{day}'")
            if hours.is_working:
                _check_range(hours.start_time, hours.end_time, f"{day} working hours")

        for index, break_time in enumerate(self.break_times):
            _check_range(break_time.start_time, break_time.end_time, f"break #{index + 1}")

        return self


def _check_range(start_time: str, end_time: str, label: str) -> None:
    try:
        start = parse_time(start_time)
        end = parse_time(end_time)
    except InvalidTimeError as e:
        raise ValueError(f"{label}: {e}")
    if start >= end:
        raise ValueError(f"{label}: start time {start_time} must be before end time {end_time}")
