"""
Error taxonomy for the API.

Every error leaves the service as a JSON object with a single "message" field.
"""


class AllyError(Exception):
    """Base error carrying an HTTP status code and a client-facing message."""

    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(AllyError):
    status_code = 400


class UnauthorizedError(AllyError):
    status_code = 401


class NotFoundError(AllyError):
    status_code = 404


class ConflictError(AllyError):
    status_code = 409


class InternalError(AllyError):
    status_code = 500
