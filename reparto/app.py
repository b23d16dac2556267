from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from reparto.core.config import Settings, get_settings
from reparto.domain.errors import RepartoError, StorageError, ValidationError
from reparto.repositories import Repository, build_repository
from reparto.routers import clients as clients_router
from reparto.routers import health as health_router
from reparto.routers import visits as visits_router

logger = logging.getLogger(__name__)


def _error_response(err: RepartoError) -> JSONResponse:
    return JSONResponse(
        {"ok": False, "error": err.code, "message": err.message},
        status_code=err.status_code,
    )


def _describe_invalid_fields(exc: RequestValidationError) -> str:
    fields = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        fields.append(".".join(loc) or "body")
    return "Campo invalido: " + ", ".join(dict.fromkeys(fields))


def create_app(settings: Settings | None = None, repository: Repository | None = None) -> FastAPI:
    """Factory compatible with uvicorn; the repository is fixed for the app's lifetime."""
    settings = settings or get_settings()
    app = FastAPI(title="Reparto API")
    app.state.settings = settings
    app.state.repository = repository if repository is not None else build_repository(settings)

    origins = list(settings.cors_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.exception_handler(RepartoError)
    async def reparto_error_handler(request: Request, exc: RepartoError):
        if isinstance(exc, StorageError):
            logger.error("%s %s failed: storage error", request.method, request.url.path)
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error_response(ValidationError(_describe_invalid_fields(exc)))

    app.include_router(health_router.router)
    app.include_router(clients_router.router)
    app.include_router(visits_router.router)
    return app
