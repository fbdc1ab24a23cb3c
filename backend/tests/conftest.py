import os

# must be set before the salon package reads its settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from salon.database import Base, SessionLocal, engine
from salon.main import app
from salon.schemas import StaffScheduleData
from salon.seed import init_default_services
from salon.services.schedule import ScheduleService

WEEKDAY_HOURS = {"is_working": True, "start_time": "9:00 AM", "end_time": "6:00 PM"}

# 2026-03-02 is a Monday
MONDAY = "2026-03-02"
SATURDAY = "2026-03-07"
SUNDAY = "2026-03-08"


def make_schedule(name, working_hours=None, blocked_dates=None, break_times=None):
    if working_hours is None:
        working_hours = {
            "Monday": WEEKDAY_HOURS,
            "Tuesday": WEEKDAY_HOURS,
            "Wednesday": WEEKDAY_HOURS,
            "Thursday": WEEKDAY_HOURS,
            "Friday": WEEKDAY_HOURS,
            "Saturday": {"is_working": True, "start_time": "9:00 AM", "end_time": "5:00 PM"},
            "Sunday": {"is_working": False, "start_time": "9:00 AM", "end_time": "5:00 PM"},
        }
    return StaffScheduleData(
        stylist_name=name,
        working_hours=working_hours,
        blocked_dates=blocked_dates or [],
        break_times=break_times or [],
    )


@pytest.fixture
def db():
    """Fresh empty tables for every test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded_db(db):
    """Default menu plus Maria and Paula on the default schedule"""
    init_default_services(db)
    ScheduleService(db).init_default_schedules()
    return db


@pytest.fixture
def client(seeded_db):
    return TestClient(app)
