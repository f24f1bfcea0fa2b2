from __future__ import annotations

import logging
import os
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import Counter, Histogram
from sqlalchemy.engine import Engine
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from rpos.api.error_handling import register_exception_handlers
from rpos.api.middleware.request_id import RequestIDMiddleware
from rpos.api.routes.admin import router as admin_router
from rpos.api.routes.health import router as health_router
from rpos.api.routes.menu import router as menu_router
from rpos.api.routes.metrics import router as metrics_router
from rpos.api.routes.orders import router as orders_router
from rpos.api.routes.users import router as users_router
from rpos.application.use_cases.seed_menu import SeedMenu
from rpos.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository
from rpos.infrastructure.db.schema import create_schema
from rpos.infrastructure.db.session import build_engine
from rpos.infrastructure.observability.logging_config import configure_logging
from rpos.infrastructure.observability.otel import configure_otel

logger = logging.getLogger("rpos.api.access")

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "path", "status_code"],
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
)


def _env_flag(name: str, default: bool) -> bool:
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _cors_allow_origins() -> list[str]:
    env = os.getenv("APP_ENV", "dev").lower()

    # Dev/test: unblock everything (no credentials allowed)
    if env in {"dev", "test"}:
        return ["*"]

    default_value = "http://localhost:3000"
    raw_value = os.getenv("CORS_ALLOW_ORIGINS", default_value)
    return [origin.strip() for origin in raw_value.split(",") if origin.strip()]


def _route_template(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        method = request.method
        try:
            response = await call_next(request)
        except Exception:
            path = _route_template(request)
            duration_ms = (time.perf_counter() - started) * 1000
            REQUEST_COUNT.labels(method=method, path=path, status_code="500").inc()
            REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000)
            logger.exception(
                "request_error",
                extra={
                    "method": method,
                    "path": path,
                    "status_code": 500,
                    "duration_ms": round(duration_ms, 2),
                },
            )
            raise

        path = _route_template(request)
        duration_ms = (time.perf_counter() - started) * 1000
        REQUEST_COUNT.labels(method=method, path=path, status_code=str(response.status_code)).inc()
        REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000)
        logger.info(
            "request_complete",
            extra={
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response


def _build_lifespan(engine: Engine | None):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_engine = engine is None
        app.state.engine = engine if engine is not None else build_engine()
        if _env_flag("AUTO_CREATE_SCHEMA", True):
            create_schema(app.state.engine)
        if _env_flag("SEED_MENU_ON_STARTUP", False):
            SeedMenu(SqlAlchemyMenuRepository(app.state.engine)).seed_if_empty()
        try:
            yield
        finally:
            if owns_engine:
                app.state.engine.dispose()

    return lifespan


def create_app(engine: Engine | None = None) -> FastAPI:
    """Build the application; without ``engine`` one is created from the environment at startup."""
    configure_logging()

    app = FastAPI(title="RPOS Backend", version="0.1.0", lifespan=_build_lifespan(engine))
    register_exception_handlers(app)
    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(menu_router)
    app.include_router(orders_router)
    app.include_router(users_router)
    app.include_router(admin_router)

    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_allow_origins(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-Id"],
    )

    configure_otel(app)
    return app


app = create_app()
