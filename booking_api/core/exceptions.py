"""Errors raised by the booking service and rendered by the HTTP layer."""


class BookingError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookingError):
    """A mandatory booking field is missing or blank."""
    status_code = 400


class PersistenceError(BookingError):
    """The store could not be reached or a statement failed."""
    status_code = 500


class SlotUpdateFailed(PersistenceError):
    """The booking was recorded but no slot row could be marked as booked."""


class SlotUnavailable(BookingError):
    """The slot was already booked when the booking tried to claim it."""
    status_code = 409
