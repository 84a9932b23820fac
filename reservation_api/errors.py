
class ReservationError(Exception):
    """Base class for failures reported back to the caller."""

    code = "RESERVATION_ERROR"
    status = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(ReservationError):
    code = "NOT_FOUND"
    status = 404


class Conflict(ReservationError):
    code = "CONFLICT"
    status = 400


class InvalidRequest(ReservationError):
    code = "INVALID_REQUEST"
    status = 400
