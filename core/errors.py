"""
Error taxonomy shared by services and routes.

Skip conditions in the reminder engine ("not due", "already reminded",
"free plan") are not errors and never raise.
"""
from __future__ import annotations


class TrackerError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotAuthenticated(TrackerError):
    status_code = 401

    def __init__(self, message: str = "Not signed in"):
        super().__init__(message)


class Forbidden(TrackerError):
    status_code = 403

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class InvalidInput(TrackerError):
    status_code = 400

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field


class NotFound(TrackerError):
    status_code = 404

    def __init__(self, kind: str):
        super().__init__(f"{kind} not found")
        self.kind = kind


class ResumeInUse(TrackerError):
    status_code = 409

    def __init__(self, message: str = "Cannot delete resume version that is used by job applications"):
        super().__init__(message)


class UpgradeRequired(TrackerError):
    status_code = 402


__all__ = [
    "TrackerError",
    "NotAuthenticated",
    "Forbidden",
    "InvalidInput",
    "NotFound",
    "ResumeInUse",
    "UpgradeRequired",
]
