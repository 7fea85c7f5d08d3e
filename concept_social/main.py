"""
Concept Social API — entry point.

Startup sequence:
  1. Configure OTel tracing (→ Jaeger via OTLP)
  2. Initialise the database engine and create tables if not present
  3. Mount the concept routes, session middleware and /metrics
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import make_asgi_app
from starlette.middleware.sessions import SessionMiddleware

from concept_social.config import settings
from concept_social.database import close_db, init_db
from concept_social.router import build_router
from concept_social.routes import ROUTES
from concept_social.telemetry import instrument_app, setup_tracing

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
)
logger = logging.getLogger(__name__)

# Set up tracing before the app is created so all imports are instrumented
setup_tracing()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage startup and shutdown of the database connection."""
    logger.info("Starting Concept Social API (env=%s)", settings.environment)

    await init_db()

    logger.info("Database connected. API ready.")
    yield

    logger.info("Shutting down...")
    await close_db()


app = FastAPI(
    title="Concept Social API",
    description=(
        "Social backend built from independent concepts: authenticating, "
        "friending, posting, labelling, sorting, sourcing and templating."
    ),
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret_key,
    session_cookie=settings.session_cookie,
    max_age=settings.session_max_age,
)

# ── Routes ─────────────────────────────────────────────────────────────────
app.include_router(build_router(ROUTES), prefix="/api")

# ── Prometheus metrics endpoint ────────────────────────────────────────────
metrics_app = make_asgi_app()
app.mount("/metrics", metrics_app)

# ── OTel FastAPI instrumentation ──────────────────────────────────────────
instrument_app(app)


@app.get("/health", tags=["Health"])
async def health():
    return {"status": "ok", "service": settings.service_name}
