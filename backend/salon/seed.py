"""
Table creation and default data
"""
import logging

from .database import SessionLocal, init_db
from .models.service import SalonService, DEFAULT_SERVICES
from .services.schedule import ScheduleService

logger = logging.getLogger(__name__)


def init_default_services(db) -> int:
    """Add the salon menu if there are no services yet"""
    existing = db.query(SalonService).count()
    if existing > 0:
        return 0

    for service_data in DEFAULT_SERVICES:
        db.add(SalonService(**service_data))

    db.commit()
    logger.info(f"Seeded {len(DEFAULT_SERVICES)} default services")
    return len(DEFAULT_SERVICES)


def seed_defaults():
    """Create tables, then seed services and stylist schedules into empty tables"""
    init_db()

    db = SessionLocal()
    try:
        init_default_services(db)
        ScheduleService(db).init_default_schedules()
    finally:
        db.close()
