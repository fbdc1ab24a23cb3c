"""
API router for services, availability and appointments
"""
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.orm import Session

from ..config import get_settings
from ..database import get_db
from ..models.service import SalonService
from ..schemas import to_calendar_date
from ..services.booking import (
    BookingService,
    AppointmentNotFoundError,
    InvalidStylistError,
    ServiceNotFoundError,
)
from ..services.schedule import ScheduleService, SlotUnavailableError
from ..services.timeutils import InvalidTimeError, normalize_time

settings = get_settings()
router = APIRouter(prefix="/api", tags=["appointments"])


# ==================== Pydantic Schemas ====================

class ServiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    duration_minutes: int
    category: Optional[str]
    price: str


class AvailabilityResponse(BaseModel):
    date: str  # "YYYY-MM-DD"
    stylist: str
    slots: List[str]  # ["9:00 AM", ...]


class AvailableStylistsResponse(BaseModel):
    date: str
    time: str
    stylists: List[str]


class AppointmentCreate(BaseModel):
    customer_name: str = Field(..., min_length=2, max_length=100)
    customer_phone: str = Field(..., min_length=7, max_length=30)
    customer_email: Optional[str] = None
    service: str
    stylist: str
    appointment_date: date
    appointment_time: str  # "2:30 PM"
    notes: Optional[str] = None

    @field_validator("appointment_date", mode="before")
    @classmethod
    def _calendar_date(cls, value):
        # "2026-03-02T15:00:00.000Z" keeps only its calendar date
        if isinstance(value, (str, datetime)):
            return to_calendar_date(value)
        return value


class AppointmentUpdate(BaseModel):
    customer_name: Optional[str] = Field(None, min_length=2, max_length=100)
    customer_phone: Optional[str] = Field(None, min_length=7, max_length=30)
    customer_email: Optional[str] = None
    service: Optional[str] = None
    stylist: Optional[str] = None
    appointment_date: Optional[date] = None
    appointment_time: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[str] = Field(None, pattern=r"^(pending|confirmed|completed|cancelled)$")

    @field_validator("appointment_date", mode="before")
    @classmethod
    def _calendar_date(cls, value):
        # "2026-03-02T15:00:00.000Z" keeps only its calendar date
        if isinstance(value, (str, datetime)):
            return to_calendar_date(value)
        return value


class AppointmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    customer_name: str
    customer_email: Optional[str]
    customer_phone: str
    service: str
    stylist: str
    appointment_date: date
    appointment_time: str
    status: str
    notes: Optional[str]
    created_at: Optional[datetime]


def parse_date(date_str: str) -> date:
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format, use YYYY-MM-DD")


# ==================== Services ====================

@router.get("/services", response_model=List[ServiceResponse])
def get_services(db: Session = Depends(get_db)):
    """Active services of the salon menu"""
    return db.query(SalonService).filter(SalonService.is_active == True).order_by(SalonService.id).all()


# ==================== Availability ====================

@router.get("/availability/dates", response_model=List[str])
def get_available_dates(
    stylist: str = Query(settings.ANY_AVAILABLE_LABEL, description="Stylist name or 'Any Available'"),
    days_ahead: int = Query(settings.BOOKING_DAYS_AHEAD, ge=1, le=180),
    db: Session = Depends(get_db)
):
    """Upcoming dates with at least one free slot"""
    schedule_service = ScheduleService(db)
    return [d.isoformat() for d in schedule_service.get_available_dates(stylist, days_ahead)]


@router.get("/availability/{date_str}", response_model=AvailabilityResponse)
def get_available_slots(
    date_str: str,
    stylist: str = Query(settings.ANY_AVAILABLE_LABEL, description="Stylist name or 'Any Available'"),
    db: Session = Depends(get_db)
):
    """Free slots for a stylist on a date; an empty list means nothing is bookable"""
    target_date = parse_date(date_str)
    schedule_service = ScheduleService(db)
    return AvailabilityResponse(
        date=target_date.isoformat(),
        stylist=stylist,
        slots=schedule_service.get_available_slots(target_date, stylist)
    )


@router.get("/availability/{date_str}/stylists", response_model=AvailableStylistsResponse)
def get_available_stylists(
    date_str: str,
    time: str = Query(..., description="Slot time, e.g. '2:00 PM'"),
    db: Session = Depends(get_db)
):
    """Stylists free at the given date and time"""
    target_date = parse_date(date_str)
    try:
        time = normalize_time(time)
    except InvalidTimeError as e:
        raise HTTPException(status_code=400, detail=str(e))

    schedule_service = ScheduleService(db)
    return AvailableStylistsResponse(
        date=target_date.isoformat(),
        time=time,
        stylists=schedule_service.get_available_stylists(target_date, time)
    )


# ==================== Appointments ====================

@router.get("/appointments", response_model=List[AppointmentResponse])
def list_appointments(
    stylist: Optional[str] = Query(None),
    date_str: Optional[str] = Query(None, alias="date"),
    db: Session = Depends(get_db)
):
    target_date = parse_date(date_str) if date_str else None
    return BookingService(db).list_appointments(stylist=stylist, target_date=target_date)


@router.get("/appointments/{appointment_id}", response_model=AppointmentResponse)
def get_appointment(appointment_id: int, db: Session = Depends(get_db)):
    try:
        return BookingService(db).get_appointment(appointment_id)
    except AppointmentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/appointments", response_model=AppointmentResponse, status_code=201)
def create_appointment(data: AppointmentCreate, db: Session = Depends(get_db)):
    """Book an appointment; the slot is re-checked before saving"""
    try:
        return BookingService(db).create_appointment(**data.model_dump())
    except InvalidTimeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ServiceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SlotUnavailableError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.put("/appointments/{appointment_id}", response_model=AppointmentResponse)
def update_appointment(appointment_id: int, data: AppointmentUpdate, db: Session = Depends(get_db)):
    """Edit or reschedule an appointment"""
    try:
        return BookingService(db).update_appointment(appointment_id, **data.model_dump(exclude_unset=True))
    except (InvalidTimeError, InvalidStylistError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (AppointmentNotFoundError, ServiceNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SlotUnavailableError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/appointments/{appointment_id}/cancel", response_model=AppointmentResponse)
def cancel_appointment(appointment_id: int, db: Session = Depends(get_db)):
    try:
        return BookingService(db).cancel_appointment(appointment_id)
    except AppointmentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/appointments/{appointment_id}", status_code=204)
def delete_appointment(appointment_id: int, db: Session = Depends(get_db)):
    try:
        BookingService(db).delete_appointment(appointment_id)
    except AppointmentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
