"""Request bodies accepted by the API.

Every field is optional so that missing name/client_id is reported by the
storage layer as a 400 instead of a framework 422.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class ClientCreateIn(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    price_fardo: Optional[float] = None
    price_botellon: Optional[float] = None


class VisitCreateIn(BaseModel):
    client_id: Optional[str] = None
    # shape-checked later; anything else falls back to today
    date: Any = None
    qty_fardo: Optional[int] = None
    qty_botellon: Optional[int] = None
    vacios_recogidos: Optional[int] = None
    note: Optional[str] = None
