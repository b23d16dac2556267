"""Storage contract shared by the SQL and in-memory repositories."""
from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any, Optional

from reparto.domain.dates import Clock, resolve_visit_date, timestamp, today, utc_now
from reparto.domain.errors import NotFoundError, ValidationError
from reparto.domain.models import Client, Visit, VisitRow
from reparto.domain.pricing import visit_subtotal

logger = logging.getLogger(__name__)


class Repository(ABC):
    """
    Clients/visits store.

    Validation, visit dates and price snapshots are decided here, so every
    backend only has to persist and query records.
    """

    backend = "abstract"

    def __init__(self, clock: Clock = utc_now) -> None:
        self.clock = clock

    # -------------------------- clients --------------------------
    def list_clients(self, q: Optional[str] = None) -> list[Client]:
        """Newest first; q matches name or phone, ignoring case."""
        needle = (q or "").casefold()
        return self._find_clients(needle or None)

    def create_client(
        self,
        name: Optional[str],
        phone: Optional[str] = None,
        address: Optional[str] = None,
        price_fardo: Optional[float] = None,
        price_botellon: Optional[float] = None,
    ) -> Client:
        clean_name = (name or "").strip()
        if not clean_name:
            raise ValidationError("Nombre obligatorio")
        client = Client(
            id=str(uuid.uuid4()),
            name=clean_name,
            phone=phone or "",
            address=address or "",
            price_fardo=float(price_fardo or 0),
            price_botellon=float(price_botellon or 0),
            created_at=timestamp(self.clock),
        )
        self._add_client(client)
        logger.info("Client %s created (%s)", client.id, client.name)
        return client

    @abstractmethod
    def get_client(self, client_id: str) -> Optional[Client]:
        ...

    # -------------------------- visits --------------------------
    def create_visit(
        self,
        client_id: Optional[str],
        date: Any = None,
        qty_fardo: Optional[int] = None,
        qty_botellon: Optional[int] = None,
        vacios_recogidos: Optional[int] = None,
        note: Optional[str] = None,
    ) -> Visit:
        if not client_id:
            raise ValidationError("client_id requerido")
        client = self.get_client(client_id)
        if client is None:
            raise NotFoundError("Cliente no existe")
        qty_fardo = qty_fardo or 0
        qty_botellon = qty_botellon or 0
        visit = Visit(
            id=str(uuid.uuid4()),
            client_id=client.id,
            date=resolve_visit_date(date, self.clock),
            qty_fardo=qty_fardo,
            qty_botellon=qty_botellon,
            unit_price_fardo=client.price_fardo,
            unit_price_botellon=client.price_botellon,
            subtotal=visit_subtotal(client.price_fardo, client.price_botellon, qty_fardo, qty_botellon),
            vacios_recogidos=vacios_recogidos or 0,
            note=note or "",
            created_at=timestamp(self.clock),
        )
        self._add_visit(visit)
        logger.info("Visit %s created for client %s on %s (subtotal=%s)", visit.id, client.id, visit.date, visit.subtotal)
        return visit

    def listing_date(self, date: Optional[str] = None) -> str:
        """Day a visit listing covers: the given date, or today when absent."""
        return date or today(self.clock)

    def list_visits_by_date(self, date: Optional[str] = None, client_id: Optional[str] = None) -> tuple[float, list[VisitRow]]:
        """Return (total, rows) for one calendar day, newest first."""
        day = self.listing_date(date)
        rows = self._find_visits(day, client_id or None)
        total = sum(row.visit.subtotal for row in rows)
        return total, rows

    def delete_visit(self, visit_id: str) -> None:
        if not self._remove_visit(visit_id):
            raise NotFoundError("No encontrada")
        logger.info("Visit %s deleted", visit_id)

    # -------------------------- backend primitives --------------------------
    @abstractmethod
    def _find_clients(self, needle: Optional[str]) -> list[Client]:
        """needle is already casefolded; None means no filter."""

    @abstractmethod
    def _add_client(self, client: Client) -> None:
        ...

    @abstractmethod
    def _add_visit(self, visit: Visit) -> None:
        ...

    @abstractmethod
    def _find_visits(self, date: str, client_id: Optional[str]) -> list[VisitRow]:
        ...

    @abstractmethod
    def _remove_visit(self, visit_id: str) -> bool:
        """Return False when nothing was deleted."""
