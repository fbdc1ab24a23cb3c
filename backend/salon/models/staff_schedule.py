"""
Stylist weekly schedule model
"""
from sqlalchemy import Column, Integer, String, JSON, TIMESTAMP
from sqlalchemy.sql import func
from ..database import Base


class StaffSchedule(Base):
    """Working hours, breaks and days off of one stylist"""

    __tablename__ = "staff_schedules"

    id = Column(Integer, primary_key=True, index=True)
    stylist_name = Column(String(100), nullable=False, unique=True, index=True)
    # {"Monday": {"is_working": true, "start_time": "9:00 AM", "end_time": "6:00 PM"}, ...}
    working_hours = Column(JSON, nullable=False, default=dict)
    # ["2026-12-24", ...]
    blocked_dates = Column(JSON, nullable=False, default=list)
    # [{"start_time": "12:00 PM", "end_time": "1:00 PM"}, ...]
    break_times = Column(JSON, nullable=False, default=list)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<StaffSchedule {self.stylist_name} (blocked: {len(self.blocked_dates or [])})>"


# Default schedule used when the salon opens with an empty database
DEFAULT_WORKING_HOURS = {
    "Monday": {"is_working": True, "start_time": "9:00 AM", "end_time": "6:00 PM"},
    "Tuesday": {"is_working": True, "start_time": "9:00 AM", "end_time": "6:00 PM"},
    "Wednesday": {"is_working": True, "start_time": "9:00 AM", "end_time": "6:00 PM"},
    "Thursday": {"is_working": True, "start_time": "9:00 AM", "end_time": "6:00 PM"},
    "Friday": {"is_working": True, "start_time": "9:00 AM", "end_time": "6:00 PM"},
    "Saturday": {"is_working": True, "start_time": "9:00 AM", "end_time": "5:00 PM"},
    "Sunday": {"is_working": False, "start_time": "9:00 AM", "end_time": "5:00 PM"},
}

DEFAULT_BREAK_TIMES = [{"start_time": "12:00 PM", "end_time": "1:00 PM"}]

DEFAULT_SCHEDULES = [
    {
        "stylist_name": "Maria",
        "working_hours": DEFAULT_WORKING_HOURS,
        "blocked_dates": [],
        "break_times": DEFAULT_BREAK_TIMES,
    },
    {
        "stylist_name": "Paula",
        "working_hours": DEFAULT_WORKING_HOURS,
        "blocked_dates": [],
        "break_times": DEFAULT_BREAK_TIMES,
    },
]
