"""
FastAPI routers grouped by resource (health, clients, visits).

Each module exposes an APIRouter included by reparto.app.create_app(). The
repository chosen at startup is read from request.app.state.
"""

from fastapi import Request

from reparto.repositories import Repository


def get_repository(request: Request) -> Repository:
    repo = getattr(getattr(request.app, "state", None), "repository", None)
    if repo is None:
        raise RuntimeError("Repositorio no configurado")
    return repo
