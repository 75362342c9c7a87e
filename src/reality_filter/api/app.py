"""FastAPI application factory."""

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from reality_filter.api.routes import router
from reality_filter.config import RealityFilterConfig, Services, create_from_config
from reality_filter.errors import AnalysisError, ArticleNotFoundError, InvalidRequestError

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "invalid request"


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ArticleNotFoundError)
    async def not_found(request: Request, exc: ArticleNotFoundError) -> JSONResponse:
        return _error(404, str(exc))

    @app.exception_handler(AnalysisError)
    async def analysis_failed(request: Request, exc: AnalysisError) -> JSONResponse:
        logger.error(f"{request.method} {request.url.path}: {exc}")
        return _error(500, str(exc))

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(400, _validation_message(exc))

    @app.exception_handler(InvalidRequestError)
    async def rejected(request: Request, exc: InvalidRequestError) -> JSONResponse:
        return _error(400, str(exc))

    @app.exception_handler(Exception)
    async def unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _error(500, "internal server error")


def create_app(
    config: RealityFilterConfig | None = None,
    *,
    services: Services | None = None,
    run_log_override: bool | None = None,
) -> FastAPI:
    """Create the HTTP application.

    Either ``services`` (already built, e.g. in tests) or ``config`` is used;
    with neither, the default configuration is built. Services are started
    when the app starts and closed when it shuts down.

    Args:
        config: Root configuration to build services from.
        services: Prebuilt services; takes precedence over ``config``.
        run_log_override: Passed through to ``create_from_config``.
    """
    if services is None:
        services = create_from_config(
            config or RealityFilterConfig(), run_log_override=run_log_override
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await services.startup()
        logger.info("Reality Filter started")
        yield
        await services.aclose()
        logger.info("Reality Filter stopped")

    app = FastAPI(
        title="Reality Filter",
        description="Credibility scoring and flagging for news articles",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        t0 = time.monotonic()
        response = await call_next(request)
        elapsed_ms = (time.monotonic() - t0) * 1000
        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        client = request.client.host if request.client else "-"
        logger.info(
            f"{request.method} {path} -> {response.status_code} "
            f"({elapsed_ms:.1f}ms) client={client}"
        )
        return response

    _install_error_handlers(app)
    app.include_router(router, prefix=API_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
