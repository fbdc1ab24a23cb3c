"""
Availability engine

Pure functions that answer two questions for the booking screens:
which slots are free for a stylist on a date, and which stylists are free
at a given date and time. Schedules and appointments are passed in on
every call; nothing is cached and nothing is mutated.

Working hours are half-open ([start, end)), breaks are closed
([start, end]), so a slot starting exactly when a break ends is still
blocked.
"""
import logging
from datetime import date
from typing import Iterable, List, Optional, Sequence, Set

from ..schemas import DaySchedule, StaffScheduleData, to_calendar_date
from .timeutils import (
    SLOT_STEP_MINUTES,
    WEEKDAYS,
    generate_time_slots,
    is_time_in_range,
    parse_time,
    InvalidTimeError,
)

logger = logging.getLogger(__name__)


def weekday_name(target_date: date) -> str:
    """'Monday'..'Sunday' regardless of the process locale"""
    return WEEKDAYS[target_date.weekday()]


def find_schedule(schedules: Iterable[StaffScheduleData], stylist_name: str) -> Optional[StaffScheduleData]:
    for schedule in schedules:
        if schedule.stylist_name == stylist_name:
            return schedule
    return None


def _working_day(schedule: StaffScheduleData, target_date: date) -> Optional[DaySchedule]:
    """Hours for the date, or None when the date is blocked or a day off"""
    if target_date.isoformat() in schedule.blocked_dates:
        return None

    day = schedule.working_hours.get(weekday_name(target_date))
    if day is None or not day.is_working:
        return None
    return day


def _booked_minutes(stylist_name: str, target_date: date, appointments: Iterable) -> Set[int]:
    """Start times (minutes) already taken by the stylist on that calendar date"""
    booked = set()
    for appointment in appointments:
        if appointment.stylist != stylist_name:
            continue
        try:
            if to_calendar_date(appointment.date) != target_date:
                continue
            booked.add(parse_time(appointment.time))
        except (ValueError, TypeError) as e:
            # an unreadable record cannot occupy any slot
            logger.debug(f"Skipping appointment for {stylist_name} with bad date/time: {e}")
    return booked


def available_time_slots(
    target_date,
    stylist_name: str,
    schedules: Sequence[StaffScheduleData],
    appointments: Iterable,
    step: int = SLOT_STEP_MINUTES
) -> List[str]:
    """
    Bookable slots for one stylist on one date, in chronological order.

    Args:
        target_date: date, datetime or ISO string (time part is ignored)
        stylist_name: schedule key
        schedules: every known StaffScheduleData
        appointments: active bookings (anything with stylist/date/time)
        step: minutes between slot starts, also used to lay out breaks

    Returns:
        ["9:00 AM", "9:30 AM", ...]; empty when the stylist has no
        schedule, the date is blocked, it is a day off, or the schedule
        holds an unreadable time.
    """
    target_date = to_calendar_date(target_date)

    schedule = find_schedule(schedules, stylist_name)
    if schedule is None:
        return []

    day = _working_day(schedule, target_date)
    if day is None:
        return []

    try:
        all_slots = generate_time_slots(day.start_time, day.end_time, step=step)
        break_blocked = set()
        for break_time in schedule.break_times:
            break_slots = generate_time_slots(
                break_time.start_time, break_time.end_time, include_end=True, step=step
            )
            break_blocked.update(parse_time(slot) for slot in break_slots)
    except InvalidTimeError as e:
        logger.warning(f"Schedule of {stylist_name} has a malformed time, no availability on {target_date}: {e}")
        return []

    booked = _booked_minutes(stylist_name, target_date, appointments)
    taken = break_blocked | booked

    return [slot for slot in all_slots if parse_time(slot) not in taken]


def available_stylists(
    target_date,
    time_str: str,
    schedules: Sequence[StaffScheduleData],
    appointments: Iterable
) -> List[str]:
    """
    Stylists who can take a booking at `time_str` on `target_date`.

    Order follows `schedules`. Raises InvalidTimeError when `time_str`
    itself is not a valid time; broken schedules are skipped.
    """
    target_date = to_calendar_date(target_date)
    query_minutes = parse_time(time_str)
    appointments = list(appointments)

    result = []
    for schedule in schedules:
        day = _working_day(schedule, target_date)
        if day is None:
            continue

        try:
            if not is_time_in_range(time_str, day.start_time, day.end_time):
                continue
            on_break = any(
                is_time_in_range(time_str, break_time.start_time, break_time.end_time, include_end=True)
                for break_time in schedule.break_times
            )
        except InvalidTimeError as e:
            logger.warning(f"Schedule of {schedule.stylist_name} has a malformed time, skipping: {e}")
            continue

        if on_break:
            continue

        if query_minutes in _booked_minutes(schedule.stylist_name, target_date, appointments):
            continue

        result.append(schedule.stylist_name)

    return result


def is_stylist_available(
    target_date,
    time_str: str,
    stylist_name: str,
    schedules: Sequence[StaffScheduleData],
    appointments: Iterable
) -> bool:
    """Whether one stylist can take a booking at that date and time"""
    return stylist_name in available_stylists(target_date, time_str, schedules, appointments)
