"""
Salon service model
"""
from sqlalchemy import Column, Integer, String, Boolean, TIMESTAMP
from sqlalchemy.sql import func
from ..database import Base


class SalonService(Base):
    """A service on the salon menu"""

    __tablename__ = "salon_services"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)
    duration_minutes = Column(Integer, nullable=False)
    category = Column(String(50), nullable=True)
    price = Column(String(30), nullable=False)  # "from $1,000"
    is_active = Column(Boolean, default=True)
    created_at = Column(TIMESTAMP, server_default=func.now())

    def __repr__(self):
        return f"<SalonService {self.name} ({self.price})>"


# Salon menu seeded into an empty database
DEFAULT_SERVICES = [
    {"name": "Retoque de Raiz", "duration_minutes": 90, "category": "Tinte", "price": "$1,150"},
    {"name": "Full Head Tint", "duration_minutes": 120, "category": "Tinte", "price": "$1,500"},
    {"name": "0% AMONIACO", "duration_minutes": 90, "category": "Tinte", "price": "from $1,000"},
    {"name": "Toner/Gloss", "duration_minutes": 60, "category": "Tinte", "price": "$450"},
    {"name": "Corte & Secado", "duration_minutes": 60, "category": "Corte & Styling", "price": "$900"},
    {"name": "Secado (short)", "duration_minutes": 30, "category": "Corte & Styling", "price": "$350"},
    {"name": "Secado (mm)", "duration_minutes": 45, "category": "Corte & Styling", "price": "$500"},
    {"name": "Secado (long)", "duration_minutes": 60, "category": "Corte & Styling", "price": "$700"},
    {"name": "Waves/peinado", "duration_minutes": 45, "category": "Corte & Styling", "price": "from $350"},
    {"name": "Balayage", "duration_minutes": 180, "category": "Bespoke Color", "price": "from $2,500"},
    {"name": "Baby Lights", "duration_minutes": 150, "category": "Bespoke Color", "price": "from $3,500"},
    {"name": "Selfie Contour", "duration_minutes": 120, "category": "Bespoke Color", "price": "$1,800"},
    {"name": "Posion Nº17", "duration_minutes": 90, "category": "Treatments", "price": "$300"},
    {"name": "Posion Nº 8", "duration_minutes": 60, "category": "Treatments", "price": "$900"},
]
