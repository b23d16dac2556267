"""Domain records, errors and rules (pricing, visit dates)."""

from .errors import NotFoundError, RepartoError, StorageError, ValidationError
from .models import Client, Visit, VisitRow

__all__ = [
    "Client",
    "Visit",
    "VisitRow",
    "RepartoError",
    "ValidationError",
    "NotFoundError",
    "StorageError",
]
