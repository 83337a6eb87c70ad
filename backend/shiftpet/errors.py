# Overview: Error kinds raised by services and translated to JSON by routes.

from __future__ import annotations


class ShiftPetError(Exception):
    """Base for every failure that is reported to the caller as {success: false}."""

    status_code = 500

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}

    def to_dict(self) -> dict:
        body = {"success": False, "error": str(self)}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(ShiftPetError, ValueError):
    """400-level input problem. Raised before any store access."""

    status_code = 400


class NotFoundError(ShiftPetError):
    """Unknown employee, missing stats or no work session for today."""

    status_code = 404


class AuthorizationError(ShiftPetError):
    """Non-admin caller on an admin operation."""

    status_code = 403


class StoreError(ShiftPetError):
    """Persistence failure; the surrounding transaction has been rolled back."""

    status_code = 500
