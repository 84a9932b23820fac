from datetime import date, datetime, time, timedelta

import pytest

from reservation_api.app import create_app
from reservation_api.config import RestaurantSettings, TestConfig
from reservation_api.extensions import db
from reservation_api.services.reservations import ReservationEngine
from reservation_api.services.users import UserDirectory

NOW = datetime(2030, 5, 10, 20, 15)
TODAY = NOW.date()
TOMORROW = TODAY + timedelta(days=1)
YESTERDAY = TODAY - timedelta(days=1)


@pytest.fixture()
def app():
    app = create_app(TestConfig)
    app.config["CLOCK"] = lambda: NOW
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def directory(app) -> UserDirectory:
    return UserDirectory()


@pytest.fixture()
def engine(app, directory) -> ReservationEngine:
    return ReservationEngine(RestaurantSettings(), users=directory, clock=lambda: NOW)


@pytest.fixture()
def make_user(directory):
    counter = iter(range(1, 1000))

    def _make_user(email: str | None = None, name: str = "Ada", surname: str = "Lovelace"):
        email = email or f"guest{next(counter)}@example.com"
        return directory.create(email=email, name=name, surname=surname)

    return _make_user


@pytest.fixture()
def book(engine):
    def _book(email: str, guests: int = 4, tables: int = 1, day: date = TOMORROW, at: time = time(20, 0)):
        return engine.create(email=email, guests=guests, tables=tables, day=day, at=at)

    return _book
