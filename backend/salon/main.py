"""
FastAPI application
Ocho Hair Lab - salon booking API
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from .admin import setup_admin
from .config import get_settings
from .database import engine
from .routes.appointments import router as appointments_router
from .routes.schedules import router as schedules_router
from .seed import seed_defaults

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)

# Tables and default data
seed_defaults()

app = FastAPI(
    title=f"{settings.SALON_NAME} - Booking API",
    description="Salon booking: stylist schedules, availability and appointments",
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.DEBUG else [settings.SITE_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Sessions (admin panel login)
app.add_middleware(SessionMiddleware, secret_key=settings.SECRET_KEY)

app.include_router(appointments_router)
app.include_router(schedules_router)

setup_admin(app, engine)
logger.info("Admin panel mounted at /admin")


@app.get("/health")
def health_check():
    return {"status": "ok", "environment": settings.ENVIRONMENT}
