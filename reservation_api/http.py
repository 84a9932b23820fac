from flask import jsonify, current_app, request
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException
from .errors import ReservationError
from .schemas import field_errors
from .utils.time import parse_date

class BadParameter(ValueError):
    """A query-string value that could not be parsed."""

def jerror(status: int, code: str, message: str, details=None):
    payload = {"code": code, "message": message}
    if details:
        payload["details"] = details
    return jsonify(payload), status

def query_date(name: str):
    raw = request.args.get(name)
    if not raw:
        return None
    try:
        return parse_date(raw)
    except ValueError:
        raise BadParameter(f"Invalid '{name}' date, expected YYYY-MM-DD.")

def query_int(name: str):
    raw = request.args.get(name)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise BadParameter(f"Invalid '{name}', expected an integer.")

def register_error_handlers(app):
    @app.errorhandler(ReservationError)
    def handle_reservation_error(e: ReservationError):
        return jerror(e.status, e.code, e.message)

    @app.errorhandler(ValidationError)
    def handle_validation_error(e: ValidationError):
        return jerror(400, "VALIDATION_ERROR", "Invalid input.", details=field_errors(e.errors()))

    @app.errorhandler(BadParameter)
    def handle_bad_parameter(e: BadParameter):
        return jerror(400, "BAD_PARAMETER", str(e))

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        return jerror(e.code or 500, e.name.upper().replace(" ", "_"), e.description or e.name)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        current_app.logger.exception("Unhandled error")
        return jerror(500, "INTERNAL_ERROR", "Internal server error occurred")
