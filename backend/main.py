"""DividerForge Backend: FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend import config
from backend.routes import divider, ohm, history
from backend.middleware.rate_limit import RateLimitMiddleware

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    from backend.database import init_db
    init_db()
    logger.info("DividerForge backend started")
    yield


app = FastAPI(
    title="DividerForge API",
    description="Resistor voltage divider search over standard E-series values",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS: allow frontend origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=[config.FRONTEND_URL] if config.FRONTEND_URL else [],
    allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Rate limiting: general budget plus a tighter one for divider search
app.add_middleware(
    RateLimitMiddleware,
    requests_per_minute=config.RATE_LIMIT_PER_MINUTE,
    search_requests_per_minute=config.SEARCH_RATE_LIMIT_PER_MINUTE,
)

# Register route modules
app.include_router(divider.router, prefix="/api", tags=["Divider"])
app.include_router(ohm.router, prefix="/api", tags=["Ohm's Law"])
app.include_router(history.router, prefix="/api", tags=["History"])


@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "service": "dividerforge-backend"}
