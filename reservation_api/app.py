import logging
import random
from datetime import datetime, time, timedelta
import click
from flask import Flask, jsonify, current_app
from flask.cli import with_appcontext
from flask_cors import CORS
from .extensions import db, migrate
from .config import Config
from .errors import ReservationError
from .http import register_error_handlers
from .blueprints.reservations import bp as reservations_bp, get_engine
from .blueprints.users import bp as users_bp
from .models import User, Reservation, ReservationDayLock
from .services.admission import required_tables
from .services.users import UserDirectory

def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    logging.basicConfig(format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    logging.getLogger("reservation_api").setLevel(app.config["LOG_LEVEL"])
    app.logger.setLevel(app.config["LOG_LEVEL"])

    CORS(app)

    db.init_app(app)
    migrate.init_app(app, db)

    app.register_blueprint(users_bp, url_prefix="/api/users")
    app.register_blueprint(reservations_bp, url_prefix="/api/reservations")
    register_error_handlers(app)

    @app.get("/health")
    def health():
        return jsonify(status="ok")

    app.cli.add_command(seed_command)
    app.cli.add_command(prune_locks_command)

    return app


@click.command("seed")
@click.option("--users", "user_count", default=10, show_default=True, help="Number of users to create.")
@click.option("--days", default=3, show_default=True, help="Book across this many days starting tomorrow.")
@with_appcontext
def seed_command(user_count, days):
    """Creates sample users and admits reservations for them."""
    db.session.query(Reservation).delete()
    db.session.query(ReservationDayLock).delete()
    db.session.query(User).delete()
    db.session.commit()
    current_app.logger.info("Cleared existing data.")

    directory = UserDirectory()
    users = [
        directory.create(email=f"user{i+1}@example.com", name=f"User{i+1}", surname="Sample")
        for i in range(user_count)
    ]
    click.echo(f"Created {len(users)} users.")

    engine = get_engine()
    tomorrow = datetime.now().date() + timedelta(days=1)
    admitted = rejected = 0
    for user in users:
        for offset in range(days):
            guests = random.randint(1, 8)
            at = time(random.randint(19, 22), random.choice([0, 30]))
            try:
                engine.create(
                    email=user.email,
                    guests=guests,
                    tables=required_tables(guests, engine.settings),
                    day=tomorrow + timedelta(days=offset),
                    at=at,
                )
                admitted += 1
            except ReservationError:
                rejected += 1

    click.echo(f"Created {admitted} reservations ({rejected} rejected by admission checks).")
    click.echo("Database seeded!")


@click.command("prune-locks")
@with_appcontext
def prune_locks_command():
    """Deletes per-date lock rows for dates that can no longer be booked."""
    removed = get_engine().prune_day_locks()
    click.echo(f"Removed {removed} day locks.")
