"""Domain errors raised by the service layer.

Each error carries the HTTP status it maps to; ``main.py`` registers a single
handler that renders them as ``{"detail": message}``.
"""

from fastapi import status


class ArenaError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_body(self) -> dict:
        return {"detail": self.message}


class AuthenticationRequired(ArenaError):
    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionDenied(ArenaError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(ArenaError):
    status_code = status.HTTP_404_NOT_FOUND


class InvalidRequest(ArenaError):
    status_code = status.HTTP_400_BAD_REQUEST


class BookingViolation(InvalidRequest):
    """Raised when a booking admission rule is violated."""

    def __init__(self, rule: str, message: str):
        self.rule = rule
        super().__init__(message)

    def to_body(self) -> dict:
        return {"detail": self.message, "rule": self.rule}
