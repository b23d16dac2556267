from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends

from reparto.domain.errors import NotFoundError
from reparto.repositories import Repository
from reparto.schemas import ClientCreateIn

from . import get_repository

router = APIRouter(prefix="/clients", tags=["clients"])


@router.get("")
def list_clients(q: Optional[str] = None, repo: Repository = Depends(get_repository)):
    return [client.to_dict() for client in repo.list_clients(q)]


@router.post("")
def create_client(payload: Optional[ClientCreateIn] = Body(None), repo: Repository = Depends(get_repository)):
    payload = payload or ClientCreateIn()
    client = repo.create_client(
        payload.name,
        phone=payload.phone,
        address=payload.address,
        price_fardo=payload.price_fardo,
        price_botellon=payload.price_botellon,
    )
    return client.to_dict()


@router.get("/{client_id}")
def get_client(client_id: str, repo: Repository = Depends(get_repository)):
    client = repo.get_client(client_id)
    if client is None:
        raise NotFoundError("Cliente no existe")
    return client.to_dict()
