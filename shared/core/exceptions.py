from shared.utils.app_status_code import AppStatusCode


class AppException(Exception):
    """Base error for every failure the booking core reports to callers."""

    http_status = 400
    status_code = AppStatusCode.OPERATION_FAILED

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(AppException):
    """A referenced customer, user, hotel, service, booking or rate is missing."""

    http_status = 404
    status_code = AppStatusCode.NOT_FOUND


class RateNotFoundError(NotFoundError):
    """No exchange rate row exists for the exact ordered currency pair."""

    status_code = AppStatusCode.EXCHANGE_RATE_NOT_FOUND

    def __init__(self, from_currency: str, to_currency: str):
        super().__init__(
            f"Exchange rate not found for {from_currency} to {to_currency}")
        self.from_currency = from_currency
        self.to_currency = to_currency


class InvalidInputError(AppException):
    """Bad date ranges, non-positive quantities or amounts, illegal transitions."""

    http_status = 400
    status_code = AppStatusCode.INVALID_INPUT


class ConflictError(AppException):
    """Duplicate booking number or duplicate exchange-rate pair."""

    http_status = 409
    status_code = AppStatusCode.DUPLICATE_ADD_ERROR


class ReferentialIntegrityError(AppException):
    """Deleting a record that bookings still reference."""

    http_status = 409
    status_code = AppStatusCode.REFERENTIAL_INTEGRITY_ERROR
