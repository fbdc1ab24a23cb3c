"""
Appointment model
"""
from sqlalchemy import Column, Integer, Date, String, Text, TIMESTAMP
from sqlalchemy.sql import func
from ..database import Base


ACTIVE_STATUSES = ("pending", "confirmed")


class Appointment(Base):
    """A booked salon visit"""

    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    customer_name = Column(String(100), nullable=False)
    customer_email = Column(String(255), nullable=True)
    customer_phone = Column(String(30), nullable=False)
    service = Column(String(100), nullable=False)
    stylist = Column(String(100), nullable=False, index=True)
    appointment_date = Column(Date, nullable=False, index=True)
    appointment_time = Column(String(8), nullable=False)  # "2:30 PM"
    status = Column(String(20), default="confirmed")  # pending, confirmed, completed, cancelled
    notes = Column(Text, nullable=True)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Appointment {self.appointment_date} {self.appointment_time} {self.stylist} (Status: {self.status})>"
