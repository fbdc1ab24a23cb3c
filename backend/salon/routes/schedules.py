"""
API router for stylist schedules (admin side)
"""
from datetime import datetime
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas import BreakTime, DaySchedule, StaffScheduleIn
from ..services.schedule import ScheduleService, ScheduleNotFoundError

router = APIRouter(prefix="/api/staff-schedules", tags=["schedules"])


class StaffScheduleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    stylist_name: str
    working_hours: Dict[str, DaySchedule]
    blocked_dates: List[str]
    break_times: List[BreakTime]


@router.get("", response_model=List[StaffScheduleResponse])
def list_schedules(db: Session = Depends(get_db)):
    return ScheduleService(db).get_schedules()


@router.get("/{stylist_name}", response_model=StaffScheduleResponse)
def get_schedule(stylist_name: str, db: Session = Depends(get_db)):
    try:
        return ScheduleService(db).get_schedule(stylist_name)
    except ScheduleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=StaffScheduleResponse)
def save_schedule(data: StaffScheduleIn, db: Session = Depends(get_db)):
    """Create or replace a stylist's schedule"""
    return ScheduleService(db).upsert_schedule(data)


@router.delete("/{stylist_name}", status_code=204)
def delete_schedule(stylist_name: str, db: Session = Depends(get_db)):
    try:
        ScheduleService(db).delete_schedule(stylist_name)
    except ScheduleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{stylist_name}/blocked-dates/{date_str}", response_model=StaffScheduleResponse)
def block_date(stylist_name: str, date_str: str, db: Session = Depends(get_db)):
    """Take a whole day off"""
    target_date = _parse_date(date_str)
    try:
        return ScheduleService(db).block_date(stylist_name, target_date)
    except ScheduleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{stylist_name}/blocked-dates/{date_str}", response_model=StaffScheduleResponse)
def unblock_date(stylist_name: str, date_str: str, db: Session = Depends(get_db)):
    target_date = _parse_date(date_str)
    try:
        return ScheduleService(db).unblock_date(stylist_name, target_date)
    except ScheduleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _parse_date(date_str: str):
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format, use YYYY-MM-DD")
