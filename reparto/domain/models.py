"""Plain records shared by both storage variants."""
from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Client:
    id: str
    name: str
    phone: str
    address: str
    price_fardo: float
    price_botellon: float
    created_at: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Visit:
    """A delivery visit; unit prices are a snapshot taken at creation."""

    id: str
    client_id: str
    date: str
    qty_fardo: int
    qty_botellon: int
    unit_price_fardo: float
    unit_price_botellon: float
    subtotal: float
    vacios_recogidos: int
    note: str
    created_at: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class VisitRow:
    """Visit joined with the owning client's name, as returned by listings."""

    visit: Visit
    client_name: str

    def to_dict(self) -> dict:
        data = self.visit.to_dict()
        data["client_name"] = self.client_name
        return data
