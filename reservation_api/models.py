
from sqlalchemy import UniqueConstraint
from .extensions import db

class User(db.Model):
    __tablename__ = "users"
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    name = db.Column(db.String(50), nullable=False)
    surname = db.Column(db.String(50), nullable=False)

    reservations = db.relationship("Reservation", back_populates="user", cascade="all, delete-orphan")

class Reservation(db.Model):
    __tablename__ = "reservations"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    number_of_guests = db.Column(db.Integer, nullable=False)
    tables_reserved = db.Column(db.Integer, nullable=False)
    reservation_date = db.Column(db.Date, nullable=False, index=True)
    reservation_time = db.Column(db.Time, nullable=False)

    user = db.relationship("User", back_populates="reservations")

    __table_args__ = (
        UniqueConstraint("user_id", "reservation_date", name="uq_reservation_user_date"),
    )

class ReservationDayLock(db.Model):
    """One row per booked date; writers bump `version` to serialize admissions for that date."""
    __tablename__ = "reservation_day_locks"
    day = db.Column(db.Date, primary_key=True)
    version = db.Column(db.Integer, nullable=False, default=0)
