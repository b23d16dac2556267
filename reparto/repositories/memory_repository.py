"""
Transient persistence adapter.

Used when the sqlite3 driver cannot be loaded. Records live in a MemoryStore
owned by the repository instance and are lost on restart.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from reparto.domain.dates import Clock, utc_now
from reparto.domain.models import Client, Visit, VisitRow

from .base import Repository


@dataclass
class MemoryStore:
    """Insertion-ordered collections; not synchronized."""

    clients: list[Client] = field(default_factory=list)
    visits: list[Visit] = field(default_factory=list)


def _newest_first(items):
    # reversed() first so records sharing a timestamp keep newest-inserted first
    return sorted(reversed(items), key=lambda item: item.created_at, reverse=True)


class MemoryRepository(Repository):
    backend = "memory"

    def __init__(self, store: MemoryStore | None = None, clock: Clock = utc_now) -> None:
        super().__init__(clock)
        self.store = store if store is not None else MemoryStore()

    def get_client(self, client_id: str) -> Optional[Client]:
        for client in self.store.clients:
            if client.id == client_id:
                return client
        return None

    def _find_clients(self, needle: Optional[str]) -> list[Client]:
        clients = self.store.clients
        if needle:
            clients = [
                c for c in clients
                if needle in c.name.casefold() or needle in (c.phone or "").casefold()
            ]
        return _newest_first(clients)

    def _add_client(self, client: Client) -> None:
        self.store.clients.append(client)

    def _add_visit(self, visit: Visit) -> None:
        self.store.visits.append(visit)

    def _find_visits(self, date: str, client_id: Optional[str]) -> list[VisitRow]:
        names = {c.id: c.name for c in self.store.clients}
        rows = []
        for visit in _newest_first(self.store.visits):
            if visit.date != date or visit.client_id not in names:
                continue
            if client_id and visit.client_id != client_id:
                continue
            rows.append(VisitRow(visit=visit, client_name=names[visit.client_id]))
        return rows

    def _remove_visit(self, visit_id: str) -> bool:
        for index, visit in enumerate(self.store.visits):
            if visit.id == visit_id:
                del self.store.visits[index]
                return True
        return False
