"""
Pure admission rules for reservation requests.

Each check raises `InvalidRequest` on failure and returns nothing otherwise,
so the engine can run them in order and stop at the first rejection.
"""
import math
from datetime import date, datetime, time, timedelta
from typing import Iterable

from ..config import RestaurantSettings
from ..errors import InvalidRequest
from ..utils.time import shift_time

INVALID_TIME_MESSAGE = "Invalid reservation time. Please choose a future time within operating hours."
NO_TABLES_MESSAGE = "No available tables for the selected time."


def is_in_past(day: date, at: time, now: datetime) -> bool:
    today = now.date()
    return day < today or (day == today and at < now.time())


def is_within_operating_hours(at: time, settings: RestaurantSettings) -> bool:
    # Both sides wrap at midnight: with the default hours only 23:00 fails the
    # second clause (23:00 + 1h == 00:00, closing + 1min == 00:00).
    last_minute = shift_time(settings.closing_time, timedelta(minutes=1))
    return at >= settings.opening_time and shift_time(at, settings.occupancy) > last_minute


def check_timing(day: date, at: time, now: datetime, settings: RestaurantSettings) -> None:
    if is_in_past(day, at, now) or not is_within_operating_hours(at, settings):
        raise InvalidRequest(INVALID_TIME_MESSAGE)


def required_tables(guests: int, settings: RestaurantSettings) -> int:
    return math.ceil(guests / settings.seats_per_table)


def check_party_ratio(guests: int, tables: int, settings: RestaurantSettings) -> None:
    if required_tables(guests, settings) != tables:
        raise InvalidRequest(
            f"Each table only has {settings.seats_per_table} seats, "
            "please adapt your reservation accordingly."
        )


def overlaps(existing: time, requested: time, settings: RestaurantSettings) -> bool:
    """Inclusive overlap of two occupancy windows: touching at the boundary counts."""
    return (
        existing <= shift_time(requested, settings.occupancy)
        and shift_time(existing, settings.occupancy) >= requested
    )


def tables_in_use(bookings: Iterable[tuple[time, int]], at: time, settings: RestaurantSettings) -> int:
    """Sums the tables of same-day bookings, given as (time, tables), whose window overlaps `at`."""
    return sum(tables for booked_at, tables in bookings if overlaps(booked_at, at, settings))


def check_availability(
    tables: int,
    at: time,
    bookings: Iterable[tuple[time, int]],
    settings: RestaurantSettings,
) -> None:
    if tables > settings.max_tables:
        raise InvalidRequest(NO_TABLES_MESSAGE)
    if settings.max_tables - tables_in_use(bookings, at, settings) < tables:
        raise InvalidRequest(NO_TABLES_MESSAGE)
