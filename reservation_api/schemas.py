from datetime import date, time
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from .models import Reservation, User
from .utils.time import api_date, api_time


class UserRequest(BaseModel):
    name: str = Field(..., max_length=50)
    surname: str = Field(..., max_length=50)
    email: EmailStr

    @field_validator("name", "surname")
    @classmethod
    def not_blank(cls, v: str):
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

class ReservationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_email: EmailStr | None = Field(None, alias="userEmail")
    number_of_guests: int = Field(..., alias="numberOfGuests", ge=1)
    tables_reserved: int = Field(..., alias="tablesReserved", ge=1, le=5)
    reservation_date: date = Field(..., alias="reservationDate")
    reservation_time: time = Field(..., alias="reservationTime")

    @field_validator("reservation_time")
    @classmethod
    def local_time_only(cls, v: time):
        if v.tzinfo is not None:
            raise ValueError("must be a local time without UTC offset")
        return v

class CreateReservationRequest(ReservationRequest):
    user_email: EmailStr = Field(..., alias="userEmail")


def field_errors(errors: list[dict]) -> dict[str, str]:
    """Flattens pydantic errors into a field -> message mapping."""
    details = {}
    for err in errors:
        field = ".".join(str(part) for part in err["loc"]) or "__root__"
        details.setdefault(field, err["msg"])
    return details


def user_to_dict(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "surname": user.surname,
        "email": user.email,
    }

def reservation_to_dict(reservation: Reservation) -> dict:
    return {
        "id": reservation.id,
        "userEmail": reservation.user.email,
        "numberOfGuests": reservation.number_of_guests,
        "tablesReserved": reservation.tables_reserved,
        "reservationDate": api_date(reservation.reservation_date),
        "reservationTime": api_time(reservation.reservation_time),
    }
