"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import Text, delete, func, or_, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from reparto.db.create_tables import create_all
from reparto.db.models import ClientRecord, VisitRecord
from reparto.db.session import get_engine, make_sessionmaker
from reparto.domain.dates import Clock, utc_now
from reparto.domain.errors import StorageError
from reparto.domain.models import Client, Visit, VisitRow

from .base import Repository

logger = logging.getLogger(__name__)


def _record_to_client(record: ClientRecord) -> Client:
    return Client(
        id=record.id,
        name=record.name,
        phone=record.phone or "",
        address=record.address or "",
        price_fardo=float(record.price_fardo or 0),
        price_botellon=float(record.price_botellon or 0),
        created_at=record.created_at,
    )


def _record_to_visit(record: VisitRecord) -> Visit:
    return Visit(
        id=record.id,
        client_id=record.client_id,
        date=record.date,
        qty_fardo=int(record.qty_fardo or 0),
        qty_botellon=int(record.qty_botellon or 0),
        unit_price_fardo=float(record.unit_price_fardo or 0),
        unit_price_botellon=float(record.unit_price_botellon or 0),
        subtotal=float(record.subtotal or 0),
        vacios_recogidos=int(record.vacios_recogidos or 0),
        note=record.note or "",
        created_at=record.created_at,
    )


class SQLRepository(Repository):
    """CRUD helpers wrapping the SQLAlchemy session."""

    backend = "sql"

    def __init__(self, engine: Engine | None = None, clock: Clock = utc_now, *, create_schema: bool = True) -> None:
        super().__init__(clock)
        self.engine = engine if engine is not None else get_engine()
        if create_schema:
            create_all(self.engine)
        self._sessionmaker = make_sessionmaker(self.engine)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        session: Session = self._sessionmaker()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception("SQL storage failure")
            raise StorageError() from exc
        finally:
            session.close()

    def dispose(self) -> None:
        self.engine.dispose()

    # -------------------------- clients --------------------------
    def get_client(self, client_id: str) -> Optional[Client]:
        with self._session() as session:
            record = session.get(ClientRecord, client_id)
            return _record_to_client(record) if record else None

    def _find_clients(self, needle: Optional[str]) -> list[Client]:
        stmt = select(ClientRecord)
        if needle:
            stmt = stmt.where(
                or_(
                    func.casefold(ClientRecord.name, type_=Text).contains(needle, autoescape=True),
                    func.casefold(ClientRecord.phone, type_=Text).contains(needle, autoescape=True),
                )
            )
        stmt = stmt.order_by(ClientRecord.created_at.desc())
        with self._session() as session:
            return [_record_to_client(r) for r in session.execute(stmt).scalars().all()]

    def _add_client(self, client: Client) -> None:
        with self._session() as session:
            session.add(ClientRecord(**client.to_dict()))

    # -------------------------- visits --------------------------
    def _add_visit(self, visit: Visit) -> None:
        with self._session() as session:
            session.add(VisitRecord(**visit.to_dict()))

    def _find_visits(self, date: str, client_id: Optional[str]) -> list[VisitRow]:
        stmt = (
            select(VisitRecord, ClientRecord.name)
            .join(ClientRecord, ClientRecord.id == VisitRecord.client_id)
            .where(VisitRecord.date == date)
        )
        if client_id:
            stmt = stmt.where(VisitRecord.client_id == client_id)
        stmt = stmt.order_by(VisitRecord.created_at.desc())
        with self._session() as session:
            return [
                VisitRow(visit=_record_to_visit(record), client_name=name)
                for record, name in session.execute(stmt).all()
            ]

    def _remove_visit(self, visit_id: str) -> bool:
        with self._session() as session:
            result = session.execute(delete(VisitRecord).where(VisitRecord.id == visit_id))
            return result.rowcount > 0
