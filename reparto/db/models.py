"""SQLAlchemy tables for clients and visits."""
from __future__ import annotations

from sqlalchemy import Column, Float, Integer, String, Text

from .session import Base


class ClientRecord(Base):
    __tablename__ = "clients"

    id = Column(String(36), primary_key=True)
    name = Column(Text, nullable=False)
    phone = Column(Text, nullable=True)
    address = Column(Text, nullable=True)
    price_fardo = Column(Float, default=0)
    price_botellon = Column(Float, default=0)
    created_at = Column(String(40), nullable=False)


class VisitRecord(Base):
    __tablename__ = "visits"

    # no ForeignKey on client_id; listings inner-join so orphans are hidden
    id = Column(String(36), primary_key=True)
    client_id = Column(String(36), nullable=False, index=True)
    date = Column(String(10), nullable=False, index=True)
    qty_fardo = Column(Integer, default=0)
    qty_botellon = Column(Integer, default=0)
    unit_price_fardo = Column(Float, default=0)
    unit_price_botellon = Column(Float, default=0)
    subtotal = Column(Float, default=0)
    vacios_recogidos = Column(Integer, default=0)
    note = Column(Text, nullable=True)
    created_at = Column(String(40), nullable=False)
