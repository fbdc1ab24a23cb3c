"""
Appointment booking, rescheduling and cancellation
"""
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from ..models.appointment import Appointment, ACTIVE_STATUSES
from ..models.service import SalonService
from .schedule import ScheduleService, SchedulingError
from .timeutils import normalize_time

logger = logging.getLogger(__name__)

# Fields that move an appointment to another slot
_SLOT_FIELDS = ("stylist", "appointment_date", "appointment_time")


class AppointmentNotFoundError(SchedulingError):
    pass


class ServiceNotFoundError(SchedulingError):
    pass


class InvalidStylistError(SchedulingError):
    pass


class BookingService:
    """Appointment writes, each re-checked against current availability"""

    def __init__(self, db: Session):
        self.db = db
        self.schedule = ScheduleService(db)

    def list_appointments(
        self,
        stylist: Optional[str] = None,
        target_date: Optional[date] = None
    ) -> List[Appointment]:
        query = self.db.query(Appointment)
        if stylist:
            query = query.filter(Appointment.stylist == stylist)
        if target_date:
            query = query.filter(Appointment.appointment_date == target_date)
        return query.order_by(Appointment.appointment_date.desc(), Appointment.id.desc()).all()

    def get_appointment(self, appointment_id: int) -> Appointment:
        appointment = self.db.query(Appointment).filter(Appointment.id == appointment_id).first()
        if not appointment:
            raise AppointmentNotFoundError(f"Appointment #{appointment_id} not found")
        return appointment

    def _check_service(self, service_name: str) -> None:
        service = self.db.query(SalonService).filter(
            SalonService.name == service_name,
            SalonService.is_active == True
        ).first()
        if not service:
            raise ServiceNotFoundError(f"Service '{service_name}' not found")

    def create_appointment(
        self,
        customer_name: str,
        customer_phone: str,
        service: str,
        stylist: str,
        appointment_date: date,
        appointment_time: str,
        customer_email: Optional[str] = None,
        notes: Optional[str] = None,
        status: str = "confirmed"
    ) -> Appointment:
        """
        Book a slot.

        The slot is checked again right before the insert; two customers
        racing for the same slot can still both pass this check, the window
        is only narrowed.
        """
        self._check_service(service)
        appointment_time = normalize_time(appointment_time)

        # "Any Available" becomes a concrete stylist here
        stylist = self.schedule.resolve_stylist(appointment_date, appointment_time, stylist)

        appointment = Appointment(
            customer_name=customer_name,
            customer_email=customer_email,
            customer_phone=customer_phone,
            service=service,
            stylist=stylist,
            appointment_date=appointment_date,
            appointment_time=appointment_time,
            notes=notes,
            status=status
        )
        self.db.add(appointment)
        self.db.commit()
        self.db.refresh(appointment)

        logger.info(
            f"Appointment #{appointment.id} booked: {service} with {stylist} "
            f"on {appointment_date} at {appointment_time}"
        )
        return appointment

    def update_appointment(self, appointment_id: int, **changes) -> Appointment:
        """
        Partial update. Moving to another stylist, date or time (or
        re-activating a cancelled booking) re-checks the target slot,
        ignoring the appointment itself.
        """
        appointment = self.get_appointment(appointment_id)
        changes = {key: value for key, value in changes.items() if value is not None}

        if "appointment_time" in changes:
            changes["appointment_time"] = normalize_time(changes["appointment_time"])
        if "service" in changes:
            self._check_service(changes["service"])

        was_active = appointment.status in ACTIVE_STATUSES
        new_status = changes.get("status", appointment.status)
        slot_changed = any(
            field in changes and changes[field] != getattr(appointment, field)
            for field in _SLOT_FIELDS
        )

        if changes.get("stylist") == self.schedule.any_available and new_status not in ACTIVE_STATUSES:
            # only an active booking can be given a concrete stylist
            raise InvalidStylistError(
                f"'{self.schedule.any_available}' cannot be stored on a {new_status} appointment"
            )

        if new_status in ACTIVE_STATUSES and (slot_changed or not was_active):
            new_date = changes.get("appointment_date", appointment.appointment_date)
            new_time = changes.get("appointment_time", appointment.appointment_time)
            new_stylist = changes.get("stylist", appointment.stylist)
            changes["stylist"] = self.schedule.resolve_stylist(
                new_date, new_time, new_stylist, exclude_appointment_id=appointment.id
            )

        for field, value in changes.items():
            setattr(appointment, field, value)

        self.db.commit()
        self.db.refresh(appointment)

        if slot_changed:
            logger.info(
                f"Appointment #{appointment.id} rescheduled to {appointment.appointment_date} "
                f"{appointment.appointment_time} with {appointment.stylist}"
            )
        return appointment

    def cancel_appointment(self, appointment_id: int) -> Appointment:
        """Mark cancelled; the slot becomes free again"""
        appointment = self.get_appointment(appointment_id)
        appointment.status = "cancelled"
        self.db.commit()
        self.db.refresh(appointment)
        logger.info(f"Appointment #{appointment.id} cancelled")
        return appointment

    def delete_appointment(self, appointment_id: int) -> None:
        appointment = self.get_appointment(appointment_id)
        self.db.delete(appointment)
        self.db.commit()
        logger.info(f"Appointment #{appointment_id} deleted")
