import logging
import time
import uuid
from contextlib import asynccontextmanager

import structlog
from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.middleware.base import BaseHTTPMiddleware

from drivelog_api import __VERSION__
from drivelog_api.api.v1 import api_router
from drivelog_api.core.config import settings
from drivelog_api.db.session import dispose_engine, get_db

# Only reachable from inside the cluster
INTERNAL_PATHS = {"/metrics"}

OPENAPI_TAGS = [
    {"name": "Authentication", "description": "Sign up, login and session cookies"},
    {"name": "Users", "description": "Profile of the caller"},
    {"name": "Companies", "description": "Company of the caller"},
    {"name": "Drivers", "description": "Members of the company, admin only"},
    {"name": "Vehicles", "description": "Company fleet and vehicle assignments"},
    {"name": "Fahrtenbuch", "description": "Trip logbook and receipts"},
    {"name": "Dashboard", "description": "Figures for the admin and driver views"},
]


def configure_logging() -> None:
    """Console output while developing, one JSON object per line elsewhere"""
    renderer = (
        structlog.dev.ConsoleRenderer()
        if settings.ENVIRONMENT == "local"
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(settings.LOG_LEVEL)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


configure_logging()
logger = structlog.get_logger()


class MetricsProtectionMiddleware(BaseHTTPMiddleware):
    """Hide internal endpoints from requests that came through the ingress"""

    async def dispatch(self, request: Request, call_next):
        # The ingress always sets X-Forwarded-For, pod-to-pod scrapes do not
        if request.url.path in INTERNAL_PATHS and request.headers.get(
            "X-Forwarded-For"
        ):
            return JSONResponse(status_code=404, content={"detail": "Not Found"})
        return await call_next(request)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with an id and its duration"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        structlog.contextvars.bind_contextvars(
            request_id=request_id, method=request.method, path=request.url.path
        )
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error("Unhandled error", error=str(e), exc_info=True)
            response = JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"detail": "Internal server error"},
            )
        else:
            logger.info(
                "Request handled",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
                client=request.client.host if request.client else None,
            )
        finally:
            structlog.contextvars.clear_contextvars()
        response.headers["X-Request-ID"] = request_id
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting API", version=__VERSION__, environment=settings.ENVIRONMENT)
    instrumentator.expose(app, include_in_schema=False)

    yield

    await dispose_engine()
    logger.info("API stopped")


# Prefix of the OpenAPI URLs behind the proxy
root_path = "/api" if settings.ENVIRONMENT == "proxy" else ""

app = FastAPI(
    title=f"{settings.PROJECT_NAME} API",
    description="DriveLog API: company fleets, drivers and their trip logbook.",
    version=__VERSION__,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url=f"{settings.API_V1_STR}/docs",
    redoc_url=f"{settings.API_V1_STR}/redoc",
    lifespan=lifespan,
    root_path=root_path,
    openapi_tags=OPENAPI_TAGS,
    swagger_ui_parameters={"defaultModelsExpandDepth": -1},
)
app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_V1_STR)

app.add_middleware(RequestLoggingMiddleware)  # type: ignore[arg-type]
app.add_middleware(MetricsProtectionMiddleware)  # type: ignore[arg-type]

instrumentator: Instrumentator = Instrumentator(
    should_group_status_codes=False,
    excluded_handlers=["/redoc", "/docs", "/openapi.json", "/metrics", "/health"],
).instrument(
    app,
    metric_namespace="drivelog",
)


@app.get("/", include_in_schema=False)
async def root():
    return {
        "message": f"Welcome to the {settings.PROJECT_NAME} API",
        "version": __VERSION__,
        "documentation": f"{settings.API_V1_STR}/docs",
    }


@app.get("/health", include_in_schema=False)
async def health_check(db: AsyncSession = Depends(get_db)):
    """
    Liveness and database reachability.
    """
    await db.execute(text("SELECT 1"))
    return {"status": "healthy", "database": "ok"}
