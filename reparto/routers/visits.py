from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, status

from reparto.repositories import Repository
from reparto.schemas import VisitCreateIn

from . import get_repository

router = APIRouter(prefix="/visits", tags=["visits"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_visit(payload: Optional[VisitCreateIn] = Body(None), repo: Repository = Depends(get_repository)):
    payload = payload or VisitCreateIn()
    visit = repo.create_visit(
        payload.client_id,
        date=payload.date,
        qty_fardo=payload.qty_fardo,
        qty_botellon=payload.qty_botellon,
        vacios_recogidos=payload.vacios_recogidos,
        note=payload.note,
    )
    return {"ok": True, "id": visit.id}


@router.get("")
def list_visits(
    date: Optional[str] = None,
    client_id: Optional[str] = Query(None, alias="clientId"),
    repo: Repository = Depends(get_repository),
):
    day = repo.listing_date(date)
    total, rows = repo.list_visits_by_date(day, client_id)
    return {"date": day, "total": total, "visits": [row.to_dict() for row in rows]}


@router.delete("/{visit_id}")
def delete_visit(visit_id: str, repo: Repository = Depends(get_repository)):
    repo.delete_visit(visit_id)
    return {"ok": True}
