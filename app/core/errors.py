"""
Application error types.

Repository and dependency code raises these; the handlers registered in
main.py turn them into the JSON error envelope:

    {"error": {"message": ..., "status": ...}}
"""

from typing import Any


class ApiError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: Any = "Internal Server Error", status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidInput(ApiError):
    """Malformed or contradictory input (400)."""

    status_code = 400

    def __init__(self, message: Any = "Bad Request"):
        super().__init__(message)


class Unauthorized(ApiError):
    """Missing or invalid credentials (401)."""

    status_code = 401

    def __init__(self, message: Any = "Unauthorized"):
        super().__init__(message)


class Forbidden(ApiError):
    """Authenticated but lacking the required role (403)."""

    status_code = 403

    def __init__(self, message: Any = "Forbidden"):
        super().__init__(message)


class NotFound(ApiError):
    status_code = 404

    def __init__(self, message: Any = "Not Found"):
        super().__init__(message)


class Conflict(ApiError):
    """Duplicate unique key on create (409)."""

    status_code = 409

    def __init__(self, message: Any = "Conflict"):
        super().__init__(message)


def error_body(message: Any, status_code: int) -> dict:
    return {"error": {"message": message, "status": status_code}}
