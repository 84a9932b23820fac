from flask import Blueprint, request, jsonify, current_app
from ..config import RestaurantSettings
from ..http import jerror, query_date, query_int
from ..schemas import CreateReservationRequest, ReservationRequest, reservation_to_dict
from ..services.reservations import ReservationEngine

bp = Blueprint("reservations", __name__)


def get_engine() -> ReservationEngine:
    return ReservationEngine(
        settings=RestaurantSettings.from_config(current_app.config),
        clock=current_app.config.get("CLOCK"),
    )


@bp.post("")
def create_reservation():
    payload = request.get_json(silent=True)
    if not payload:
        return jerror(400, "INVALID_PAYLOAD", "Missing or invalid JSON payload.")

    data = CreateReservationRequest.model_validate(payload)
    reservation = get_engine().create(
        email=data.user_email,
        guests=data.number_of_guests,
        tables=data.tables_reserved,
        day=data.reservation_date,
        at=data.reservation_time,
    )
    return jsonify(reservation_to_dict(reservation)), 201

@bp.get("")
def list_reservations():
    """
    Paginated list, optionally bounded by date and filtered by owner details.
    Query: ?start=YYYY-MM-DD&end=YYYY-MM-DD&search=term&page=1&page_size=10
    """
    page = get_engine().list_by_optional_date_range(
        start=query_date("start"),
        end=query_date("end"),
        page=query_int("page"),
        page_size=query_int("page_size"),
        search=request.args.get("search"),
    )
    return jsonify(page.to_dict(reservation_to_dict))

@bp.get("/<int:reservation_id>")
def get_reservation(reservation_id: int):
    return jsonify(reservation_to_dict(get_engine().find_by_id(reservation_id)))

@bp.put("/<int:reservation_id>")
def update_reservation(reservation_id: int):
    payload = request.get_json(silent=True)
    if not payload:
        return jerror(400, "INVALID_PAYLOAD", "Missing or invalid JSON payload.")

    data = ReservationRequest.model_validate(payload)
    reservation = get_engine().update(
        reservation_id,
        guests=data.number_of_guests,
        tables=data.tables_reserved,
        day=data.reservation_date,
        at=data.reservation_time,
    )
    return jsonify(reservation_to_dict(reservation))

@bp.delete("/<int:reservation_id>")
def delete_reservation(reservation_id: int):
    get_engine().delete(reservation_id)
    return "", 204
