from __future__ import annotations

from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tagvocab.common.logging import get_logger
from tagvocab.common.settings import get_settings
from tagvocab.domain.errors import DuplicateTagCreationFailed, StoreUnavailable, ValidationError
from tagvocab.services.api.routers import health, tags

cfg = get_settings()
dev = cfg.app_env.lower() == "development"
logger = get_logger(__name__)


def _echo_name(name) -> str | None:
    if not isinstance(name, str):
        return None
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return None
    return name


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    def _validation(_: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            content={"detail": str(exc), "name": _echo_name(exc.name)},
        )

    @app.exception_handler(DuplicateTagCreationFailed)
    def _duplicate(_: Request, exc: DuplicateTagCreationFailed) -> JSONResponse:
        return JSONResponse(
            status_code=HTTPStatus.CONFLICT,
            content={"detail": str(exc), "name": exc.name},
        )

    @app.exception_handler(StoreUnavailable)
    def _unavailable(_: Request, exc: StoreUnavailable) -> JSONResponse:
        logger.error("tag store unavailable: %s", exc)
        return JSONResponse(status_code=HTTPStatus.SERVICE_UNAVAILABLE, content={"detail": "Tag store unavailable"})


def create_app() -> FastAPI:
    app = FastAPI(
        title="Tagvocab API",
        version="0.1.0",
        docs_url=f"{cfg.api.prefix}/docs",
        openapi_url=f"{cfg.api.prefix}/openapi.json",
    )

    allow_origins = ["*"] if dev else cfg.api.cors_allow_origins
    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_methods=cfg.api.cors_allow_methods,
        allow_headers=cfg.api.cors_allow_headers,
        allow_credentials=cfg.api.cors_allow_credentials,
    )

    _register_error_handlers(app)

    # Routers
    app.include_router(health.router)
    app.include_router(tags.router)
    return app


app = create_app()
