"""
SQLAlchemy models
"""
from .service import SalonService
from .appointment import Appointment
from .staff_schedule import StaffSchedule

__all__ = [
    "SalonService",
    "Appointment",
    "StaffSchedule"
]
