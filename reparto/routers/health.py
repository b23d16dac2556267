from fastapi import APIRouter, Depends

from reparto.repositories import Repository

from . import get_repository

router = APIRouter(tags=["health"])


@router.get("/health")
def health(repo: Repository = Depends(get_repository)):
    return {"ok": True, "backend": repo.backend, "sqlite": repo.backend == "sql"}
