"""Reparto: client visits and per-client delivery pricing API."""

__version__ = "0.1.0"
