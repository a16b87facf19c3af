"""Domain errors raised by services and rendered by the HTTP layer"""

from typing import Optional


class SalonError(Exception):
    """Base class for caller-facing errors"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SalonError):
    """Missing or invalid input field"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFound(SalonError):
    status_code = 404


class Conflict(SalonError):
    status_code = 409


class PersistenceError(SalonError):
    """I/O or lock failure on a backing document"""

    status_code = 500
