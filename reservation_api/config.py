
import os
from dataclasses import dataclass
from datetime import time, timedelta
from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///local.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    RESTAURANT_OPENING_TIME = os.getenv("RESTAURANT_OPENING_TIME", "19:00")
    RESTAURANT_CLOSING_TIME = os.getenv("RESTAURANT_CLOSING_TIME", "23:59")
    RESTAURANT_MAX_TABLES = int(os.getenv("RESTAURANT_MAX_TABLES", "5"))
    RESTAURANT_SEATS_PER_TABLE = int(os.getenv("RESTAURANT_SEATS_PER_TABLE", "4"))
    RESTAURANT_OCCUPANCY_MINUTES = int(os.getenv("RESTAURANT_OCCUPANCY_MINUTES", "60"))

    # Callable returning the current local datetime; None means datetime.now.
    CLOCK = None


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class RestaurantSettings:
    """Opening hours and capacity the admission checks run against."""

    opening_time: time = time(19, 0)
    closing_time: time = time(23, 59)
    max_tables: int = 5
    seats_per_table: int = 4
    occupancy: timedelta = timedelta(hours=1)

    @classmethod
    def from_config(cls, config) -> "RestaurantSettings":
        return cls(
            opening_time=time.fromisoformat(config["RESTAURANT_OPENING_TIME"]),
            closing_time=time.fromisoformat(config["RESTAURANT_CLOSING_TIME"]),
            max_tables=int(config["RESTAURANT_MAX_TABLES"]),
            seats_per_table=int(config["RESTAURANT_SEATS_PER_TABLE"]),
            occupancy=timedelta(minutes=int(config["RESTAURANT_OCCUPANCY_MINUTES"])),
        )
