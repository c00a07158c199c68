"""
Vangmaya FastAPI Application

Digital scripture library API, chiefly for the Bhagavad Gita.
Provides REST endpoints for:
- Admin-gated ingestion of scripture JSON (validate, normalize, persist)
- Chapter and verse reading with previous/next navigation
- Per-verse commentary access by author

Storage:
    Artifacts live on the local filesystem under SCRIPTURE_DATA_DIR:
    a timestamped raw copy per ingestion and one normalized document that
    every reading endpoint loads.

Environment Configuration:
    All settings loaded from .env file via pydantic-settings.
    See vangmaya/app/config.py for available configuration options.

API Endpoints:
    - /v1/healthz: Health check
    - /v1/scripture/ingest: Ingestion (POST)
    - /v1/scripture/chapters/*: Chapters, verses and commentaries
    - /metrics: Prometheus metrics

Interactive Documentation:
    - Swagger UI: http://localhost:8000/docs
    - ReDoc: http://localhost:8000/redoc
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .middleware.request_logging import RequestLoggingMiddleware
from .routers import health, monitoring, scripture
from .utils.logging import configure_logging

configure_logging(settings.LOG_LEVEL, service_name=settings.SERVICE_NAME)

app = FastAPI(
    title="Vangmaya API",
    description="Scripture ingestion and reading for the Vedic Vangmaya library",
    version="0.1.0",
    default_response_class=JSONResponse,
)

# CORS middleware configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers with API prefix
app.include_router(health.router, prefix=settings.API_PREFIX)
app.include_router(scripture.router, prefix=settings.API_PREFIX)
app.include_router(monitoring.router)  # No prefix - uses /metrics directly

exempt_paths = {
    "/",
    "/healthz",
    "/docs",
    "/openapi.json",
    "/redoc",
    "/metrics",
    f"{settings.API_PREFIX}/healthz",
}

app.add_middleware(
    RequestLoggingMiddleware,
    exempt_paths=exempt_paths,
    metrics_enabled=settings.METRICS_ENABLED,
)
