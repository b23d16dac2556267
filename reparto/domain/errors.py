"""Errors raised by the storage contract and mapped to HTTP responses."""
from __future__ import annotations


class RepartoError(Exception):
    """Base exception carrying the response code/status for the API layer."""

    default_message = "Error interno"
    default_code = "error"
    default_status = 500

    def __init__(self, message: str | None = None, code: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.code = code or self.default_code
        self.status_code = status_code or self.default_status


class ValidationError(RepartoError):
    """Raised when a required field is missing."""

    default_message = "Datos invalidos"
    default_code = "invalid"
    default_status = 400


class NotFoundError(RepartoError):
    """Raised when a client or visit id does not resolve."""

    default_message = "No encontrado"
    default_code = "not_found"
    default_status = 404


class StorageError(RepartoError):
    """Raised when the underlying store fails; the message stays generic."""

    default_message = "Error DB"
    default_code = "storage"
    default_status = 500
