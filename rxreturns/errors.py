"""Service-level exceptions. Routes translate them to HTTP responses."""


class RxReturnsError(Exception):
    """Base class for expected, client-visible failures."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RxReturnsError):
    """Request is well-formed JSON but semantically invalid."""

    status_code = 400


class AuthenticationError(RxReturnsError):
    status_code = 401


class AccessDeniedError(RxReturnsError):
    status_code = 403


class NotFoundError(RxReturnsError):
    status_code = 404
