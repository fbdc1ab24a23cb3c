"""
Staff admin panel
Access: http://localhost:8000/admin
Login: ADMIN_USERNAME / ADMIN_PASSWORD from .env
"""
from sqladmin import Admin, ModelView
from sqladmin.authentication import AuthenticationBackend
from starlette.requests import Request
from .config import get_settings
from .models.appointment import Appointment
from .models.service import SalonService
from .models.staff_schedule import StaffSchedule

settings = get_settings()


class AdminAuth(AuthenticationBackend):
    """Single shared admin login"""

    async def login(self, request: Request) -> bool:
        form = await request.form()
        username = form.get("username")
        password = form.get("password")

        if username == settings.ADMIN_USERNAME and password == settings.ADMIN_PASSWORD:
            request.session.update({"authenticated": True})
            return True
        return False

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        return request.session.get("authenticated", False)


# ==================== ADMIN VIEWS ====================

class AppointmentAdmin(ModelView, model=Appointment):
    name = "Appointment"
    name_plural = "Appointments"
    icon = "fa-solid fa-calendar-check"

    column_list = [
        Appointment.id,
        Appointment.appointment_date,
        Appointment.appointment_time,
        Appointment.stylist,
        Appointment.service,
        Appointment.customer_name,
        Appointment.status,
        Appointment.created_at
    ]
    column_searchable_list = [Appointment.customer_name, Appointment.customer_phone, Appointment.stylist]
    column_sortable_list = [Appointment.appointment_date, Appointment.stylist, Appointment.status]
    column_default_sort = [(Appointment.appointment_date, True)]


class StaffScheduleAdmin(ModelView, model=StaffSchedule):
    name = "Staff schedule"
    name_plural = "Staff schedules"
    icon = "fa-solid fa-clock"

    column_list = [
        StaffSchedule.stylist_name,
        StaffSchedule.blocked_dates,
        StaffSchedule.break_times,
        StaffSchedule.updated_at
    ]
    column_searchable_list = [StaffSchedule.stylist_name]
    column_sortable_list = [StaffSchedule.stylist_name]


class SalonServiceAdmin(ModelView, model=SalonService):
    name = "Service"
    name_plural = "Services"
    icon = "fa-solid fa-scissors"

    column_list = [
        SalonService.id,
        SalonService.name,
        SalonService.category,
        SalonService.price,
        SalonService.duration_minutes,
        SalonService.is_active
    ]
    column_searchable_list = [SalonService.name, SalonService.category]
    column_sortable_list = [SalonService.name, SalonService.category]

    column_labels = {
        "duration_minutes": "Duration (min)",
        "is_active": "Active"
    }


def setup_admin(app, engine):
    """Mount the admin panel on the app"""
    authentication_backend = AdminAuth(secret_key=settings.SECRET_KEY)

    admin = Admin(
        app,
        engine,
        authentication_backend=authentication_backend,
        title=f"{settings.SALON_NAME} Admin",
        base_url="/admin"
    )

    admin.add_view(AppointmentAdmin)
    admin.add_view(StaffScheduleAdmin)
    admin.add_view(SalonServiceAdmin)

    return admin
