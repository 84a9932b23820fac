import logging
from datetime import date, datetime, time
from typing import Callable

import sqlalchemy as sa
from sqlalchemy import or_
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError

from ..config import RestaurantSettings
from ..errors import Conflict, NotFound, ReservationError
from ..extensions import db
from ..models import Reservation, ReservationDayLock, User
from ..utils.pagination import Page, paginate
from . import admission
from .users import UserDirectory, contains_ci

logger = logging.getLogger("reservation_api.reservations")

_UPSERTS = {"postgresql": pg_insert, "sqlite": sqlite_insert}


class ReservationEngine:
    """
    Admits, updates and cancels reservations.

    Every mutation runs in a single transaction that first locks the target
    date, so the one-per-date check, the availability sum and the commit see
    a consistent view of that day's bookings.
    """

    def __init__(
        self,
        settings: RestaurantSettings | None = None,
        users: UserDirectory | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.settings = settings or RestaurantSettings()
        self.users = users or UserDirectory()
        self.clock = clock or datetime.now

    def create(self, email: str, guests: int, tables: int, day: date, at: time) -> Reservation:
        user = self.users.check_exists(email)

        self._lock_day(day)
        try:
            if self._owner_has_booking(user.id, day):
                raise Conflict("User can only have one reservation per date.")
            self._admit(guests, tables, day, at)
        except ReservationError as e:
            db.session.rollback()
            logger.info("Rejected reservation for %s on %s %s: %s", email, day, at, e.message)
            raise

        reservation = Reservation(
            user=user,
            number_of_guests=guests,
            tables_reserved=tables,
            reservation_date=day,
            reservation_time=at,
        )
        db.session.add(reservation)
        self._commit()
        logger.info("Admitted reservation %s for %s on %s %s (%d tables)", reservation.id, email, day, at, tables)
        return reservation

    def update(self, reservation_id: int, guests: int, tables: int, day: date, at: time) -> Reservation:
        reservation = self.find_by_id(reservation_id)

        self._lock_day(day)
        try:
            # The reservation's own current footprint stays in the availability sum.
            self._admit(guests, tables, day, at)
        except ReservationError as e:
            db.session.rollback()
            logger.info("Rejected update of reservation %s: %s", reservation_id, e.message)
            raise

        reservation.number_of_guests = guests
        reservation.tables_reserved = tables
        reservation.reservation_date = day
        reservation.reservation_time = at
        self._commit()
        logger.info("Updated reservation %s to %s %s (%d tables)", reservation_id, day, at, tables)
        return reservation

    def delete(self, reservation_id: int) -> None:
        reservation = self.find_by_id(reservation_id)
        db.session.delete(reservation)
        db.session.commit()
        logger.info("Deleted reservation %s", reservation_id)

    def find_by_id(self, reservation_id: int) -> Reservation:
        reservation = db.session.get(Reservation, reservation_id)
        if reservation is None:
            raise NotFound(f"Reservation not found with ID: {reservation_id}")
        return reservation

    def list_by_optional_date_range(
        self,
        start: date | None = None,
        end: date | None = None,
        page: int | None = None,
        page_size: int | None = None,
        search: str | None = None,
    ) -> Page:
        """
        Lists reservations with `start <= date <= end`, each bound optional.
        `search` narrows to owners whose name, surname or email contains it.
        """
        q = Reservation.query
        if start is not None:
            q = q.filter(Reservation.reservation_date >= start)
        if end is not None:
            q = q.filter(Reservation.reservation_date <= end)
        if search and search.strip():
            term = search.strip()
            q = q.join(User, Reservation.user_id == User.id).filter(or_(
                contains_ci(User.name, term),
                contains_ci(User.surname, term),
                contains_ci(User.email, term),
            ))
        q = q.order_by(
            Reservation.reservation_date.asc(),
            Reservation.reservation_time.asc(),
            Reservation.id.asc(),
        )
        return paginate(q, page, page_size)

    def prune_day_locks(self, before: date | None = None) -> int:
        """Deletes lock rows for dates before `before` (default: today); returns how many."""
        before = before or self.clock().date()
        removed = ReservationDayLock.query.filter(ReservationDayLock.day < before).delete()
        db.session.commit()
        logger.info("Pruned %d day locks before %s", removed, before)
        return removed

    def _admit(self, guests: int, tables: int, day: date, at: time) -> None:
        admission.check_timing(day, at, self.clock(), self.settings)
        admission.check_party_ratio(guests, tables, self.settings)
        bookings = (
            db.session.query(Reservation.reservation_time, Reservation.tables_reserved)
            .filter(Reservation.reservation_date == day)
            .all()
        )
        admission.check_availability(tables, at, bookings, self.settings)

    def _owner_has_booking(self, user_id: int, day: date) -> bool:
        q = Reservation.query.filter_by(user_id=user_id, reservation_date=day)
        return db.session.query(q.exists()).scalar()

    def _lock_day(self, day: date) -> None:
        """Takes the per-date write lock for the current transaction."""
        t = ReservationDayLock.__table__
        upsert = _UPSERTS.get(db.session.get_bind().dialect.name)
        if upsert is not None:
            db.session.execute(
                upsert(t).values(day=day, version=0).on_conflict_do_nothing(index_elements=[t.c.day])
            )
        elif db.session.get(ReservationDayLock, day, with_for_update=True) is None:
            db.session.add(ReservationDayLock(day=day, version=0))
            self._commit_or_conflict(db.session.flush, "Another booking for this date is in progress, please retry.")

        db.session.execute(
            sa.update(t).where(t.c.day == day).values(version=t.c.version + 1)
        )

    def _commit(self) -> None:
        self._commit_or_conflict(db.session.commit, "User can only have one reservation per date.")

    @staticmethod
    def _commit_or_conflict(write, message: str) -> None:
        try:
            write()
        except IntegrityError:
            db.session.rollback()
            logger.warning("Unique constraint rejected reservation write")
            raise Conflict(message)
