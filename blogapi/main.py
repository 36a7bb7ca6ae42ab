"""
LSAT Blog API - FastAPI application entry point.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from .config import get_settings
from .database import engine, Base
from .limiter import limiter
from .logging_config import api_logger, log_request
from .middleware import SecurityHeadersMiddleware
from .responses import register_exception_handlers
from .services.providers import CONTENT_SOURCES
from . import models  # noqa: F401  (registers tables on Base.metadata)
from .routes import (
    auth_router,
    posts_router,
    comments_router,
    admin_posts_router,
    health_router,
    sitemap_router,
)

settings = get_settings()

if settings.content_source not in CONTENT_SOURCES:
    raise ValueError(
        f"CONTENT_SOURCE must be one of {', '.join(CONTENT_SOURCES)}, got '{settings.content_source}'"
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle - startup and shutdown"""
    # Create tables (in production, use Alembic migrations instead)
    Base.metadata.create_all(bind=engine)
    api_logger.info(
        "API started",
        environment=settings.environment,
        content_source=settings.content_source,
    )

    yield

    api_logger.info("API stopped")


app = FastAPI(
    title=settings.app_name,
    description="Blog posts, publication workflow and reader comments",
    version=settings.version,
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
register_exception_handlers(app)

# Security headers middleware
app.add_middleware(SecurityHeadersMiddleware)

# Request logging middleware (only in debug mode)
if settings.debug:
    app.add_middleware(log_request(api_logger))

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=[
        "Authorization",
        "Content-Type",
        "Accept",
        "Origin",
        "X-Requested-With",
    ],
    max_age=3600,  # Cache preflight requests for 1 hour
)

# Routes
app.include_router(auth_router)
app.include_router(posts_router)
app.include_router(comments_router)
app.include_router(admin_posts_router)
app.include_router(health_router)
app.include_router(sitemap_router)


@app.get("/")
def root():
    """API banner."""
    return {
        "message": settings.app_name,
        "docs": "/api/docs" if settings.debug else "Disabled in production",
    }
