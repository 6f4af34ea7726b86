from enum import Enum


class ErrorKind(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    INTERNAL_ERROR = "internal_error"


class GradingError(Exception):
    """
    A failure of the grading flow that maps to exactly one response.

    `message` is shown to the caller as-is, so it must never carry
    internal details.
    """

    kind = ErrorKind.INTERNAL_ERROR
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthenticated(GradingError):
    kind = ErrorKind.UNAUTHENTICATED
    status_code = 401


class Forbidden(GradingError):
    kind = ErrorKind.FORBIDDEN
    status_code = 403


class InvalidInput(GradingError):
    kind = ErrorKind.INVALID_INPUT
    status_code = 400


class NotFound(GradingError):
    kind = ErrorKind.NOT_FOUND
    status_code = 404


class InternalError(GradingError):
    kind = ErrorKind.INTERNAL_ERROR
    status_code = 500
