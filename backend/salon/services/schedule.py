"""
Stylist schedules and slot lookups backed by the database
"""
import logging
from datetime import date, timedelta
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from ..config import get_settings
from ..models.appointment import Appointment, ACTIVE_STATUSES
from ..models.staff_schedule import StaffSchedule, DEFAULT_SCHEDULES
from ..schemas import BookedSlot, StaffScheduleData, StaffScheduleIn, to_calendar_date
from . import availability
from .timeutils import parse_time

settings = get_settings()
logger = logging.getLogger(__name__)


class SchedulingError(Exception):
    """Base error for booking and schedule operations"""


class ScheduleNotFoundError(SchedulingError):
    pass


class SlotUnavailableError(SchedulingError):
    pass


class ScheduleService:
    """Loads schedules and bookings and feeds them to the availability engine"""

    def __init__(self, db: Session):
        self.db = db
        self.any_available = settings.ANY_AVAILABLE_LABEL
        self.slot_step = settings.SLOT_STEP_MINUTES

    # ==================== Schedules ====================

    def get_schedules(self) -> List[StaffScheduleData]:
        """
        Every stylist schedule in engine form.
        A row whose JSON cannot be read is kept with no working hours,
        so that stylist simply shows no availability.
        """
        rows = self.db.query(StaffSchedule).order_by(StaffSchedule.stylist_name).all()

        schedules = []
        for row in rows:
            try:
                schedules.append(StaffScheduleData.model_validate(row))
            except ValidationError as e:
                logger.warning(f"Unreadable schedule for {row.stylist_name}, treating as unavailable: {e}")
                schedules.append(StaffScheduleData(stylist_name=row.stylist_name))
        return schedules

    def get_schedule(self, stylist_name: str) -> StaffSchedule:
        schedule = self.db.query(StaffSchedule).filter(
            StaffSchedule.stylist_name == stylist_name
        ).first()
        if not schedule:
            raise ScheduleNotFoundError(f"No schedule for {stylist_name}")
        return schedule

    def upsert_schedule(self, data: StaffScheduleIn) -> StaffSchedule:
        """Create or replace a stylist's schedule"""
        payload = data.model_dump()

        schedule = self.db.query(StaffSchedule).filter(
            StaffSchedule.stylist_name == data.stylist_name
        ).first()

        if schedule:
            schedule.working_hours = payload["working_hours"]
            schedule.blocked_dates = sorted(set(payload["blocked_dates"]))
            schedule.break_times = payload["break_times"]
            logger.info(f"Schedule updated for {data.stylist_name}")
        else:
            schedule = StaffSchedule(
                stylist_name=data.stylist_name,
                working_hours=payload["working_hours"],
                blocked_dates=sorted(set(payload["blocked_dates"])),
                break_times=payload["break_times"]
            )
            self.db.add(schedule)
            logger.info(f"Schedule created for {data.stylist_name}")

        self.db.commit()
        self.db.refresh(schedule)
        return schedule

    def delete_schedule(self, stylist_name: str) -> None:
        schedule = self.get_schedule(stylist_name)
        self.db.delete(schedule)
        self.db.commit()
        logger.info(f"Schedule deleted for {stylist_name}")

    def block_date(self, stylist_name: str, target_date: date) -> StaffSchedule:
        """Mark a whole day as unavailable (vacation, time off)"""
        schedule = self.get_schedule(stylist_name)
        blocked = set(schedule.blocked_dates or [])
        blocked.add(target_date.isoformat())
        # JSON columns only notice reassignment
        schedule.blocked_dates = sorted(blocked)
        self.db.commit()
        self.db.refresh(schedule)
        return schedule

    def unblock_date(self, stylist_name: str, target_date: date) -> StaffSchedule:
        schedule = self.get_schedule(stylist_name)
        blocked = set(schedule.blocked_dates or [])
        blocked.discard(target_date.isoformat())
        schedule.blocked_dates = sorted(blocked)
        self.db.commit()
        self.db.refresh(schedule)
        return schedule

    # ==================== Bookings ====================

    def get_booked_slots(
        self,
        target_date: Optional[date] = None,
        exclude_appointment_id: Optional[int] = None
    ) -> List[BookedSlot]:
        """Active (pending/confirmed) appointments as engine input"""
        query = self.db.query(Appointment).filter(Appointment.status.in_(ACTIVE_STATUSES))
        if target_date is not None:
            query = query.filter(Appointment.appointment_date == target_date)
        if exclude_appointment_id is not None:
            query = query.filter(Appointment.id != exclude_appointment_id)

        return [
            BookedSlot(stylist=apt.stylist, date=apt.appointment_date, time=apt.appointment_time)
            for apt in query.all()
        ]

    # ==================== Availability ====================

    def get_available_slots(self, target_date, stylist: str) -> List[str]:
        """
        Free slots for a stylist on a date.
        "Any Available" returns the union over every stylist.
        """
        target_date = to_calendar_date(target_date)
        schedules = self.get_schedules()
        booked = self.get_booked_slots(target_date)

        if stylist != self.any_available:
            return availability.available_time_slots(
                target_date, stylist, schedules, booked, step=self.slot_step
            )

        slots = set()
        for schedule in schedules:
            slots.update(availability.available_time_slots(
                target_date, schedule.stylist_name, schedules, booked, step=self.slot_step
            ))
        return sorted(slots, key=parse_time)

    def get_available_stylists(
        self,
        target_date,
        time_str: str,
        exclude_appointment_id: Optional[int] = None
    ) -> List[str]:
        target_date = to_calendar_date(target_date)
        stylists = availability.available_stylists(
            target_date,
            time_str,
            self.get_schedules(),
            self.get_booked_slots(target_date, exclude_appointment_id)
        )
        return sorted(stylists)

    def is_slot_available(
        self,
        target_date,
        time_str: str,
        stylist: str,
        exclude_appointment_id: Optional[int] = None
    ) -> bool:
        """Write-time re-check before a booking is committed"""
        if stylist == self.any_available:
            return bool(self.get_available_stylists(target_date, time_str, exclude_appointment_id))

        target_date = to_calendar_date(target_date)
        return availability.is_stylist_available(
            target_date,
            time_str,
            stylist,
            self.get_schedules(),
            self.get_booked_slots(target_date, exclude_appointment_id)
        )

    def resolve_stylist(
        self,
        target_date,
        time_str: str,
        stylist: str,
        exclude_appointment_id: Optional[int] = None
    ) -> str:
        """
        Concrete stylist for a booking.
        "Any Available" picks the first free stylist by name.
        Raises SlotUnavailableError when nobody (or not this stylist) is free.
        """
        if stylist == self.any_available:
            stylists = self.get_available_stylists(target_date, time_str, exclude_appointment_id)
            if not stylists:
                raise SlotUnavailableError(f"No stylist is available on {target_date} at {time_str}")
            return stylists[0]

        if not self.is_slot_available(target_date, time_str, stylist, exclude_appointment_id):
            raise SlotUnavailableError(f"{stylist} is not available on {target_date} at {time_str}")
        return stylist

    def get_available_dates(
        self,
        stylist: str,
        days_ahead: Optional[int] = None,
        start: Optional[date] = None
    ) -> List[date]:
        """Dates with at least one free slot, starting today"""
        if days_ahead is None:
            days_ahead = settings.BOOKING_DAYS_AHEAD
        if start is None:
            start = date.today()

        available_dates = []
        for i in range(days_ahead):
            check_date = start + timedelta(days=i)
            if self.get_available_slots(check_date, stylist):
                available_dates.append(check_date)

        return available_dates

    def init_default_schedules(self):
        """Seed the default stylists when no schedule exists yet"""
        existing = self.db.query(StaffSchedule).count()
        if existing > 0:
            return

        for schedule_data in DEFAULT_SCHEDULES:
            self.db.add(StaffSchedule(**schedule_data))

        self.db.commit()
        logger.info(f"Seeded {len(DEFAULT_SCHEDULES)} default stylist schedules")
