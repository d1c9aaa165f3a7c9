"""Kasupe Car Rental: FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from kasupe.api.v1.admin_overview import router as admin_overview_router
from kasupe.api.v1.admin_users import router as admin_users_router
from kasupe.api.v1.auth import router as auth_router
from kasupe.api.v1.blogs import admin_router as admin_blogs_router
from kasupe.api.v1.blogs import router as blogs_router
from kasupe.api.v1.bookings import admin_router as admin_bookings_router
from kasupe.api.v1.bookings import router as bookings_router
from kasupe.api.v1.cars import admin_router as admin_cars_router
from kasupe.api.v1.cars import router as cars_router
from kasupe.api.v1.customers import router as customers_router
from kasupe.api.v1.newsletter import admin_router as admin_newsletter_router
from kasupe.api.v1.newsletter import router as newsletter_router
from kasupe.api.v1.testimonials import admin_router as admin_testimonials_router
from kasupe.api.v1.testimonials import router as testimonials_router
from kasupe.api.v1.uploads import router as uploads_router
from kasupe.config import settings
from kasupe.exceptions.handlers import register_exception_handlers
from kasupe.services.storage_service import upload_root

# Configure root logger so all kasupe.* loggers output to stderr.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    from kasupe.database import engine, init_models

    if settings.create_tables_on_startup:
        logger.info("Creating database tables")
        await init_models()
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Backend for the Kasupe car rental site and its admin dashboard.",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Public
app.include_router(auth_router)
app.include_router(customers_router)
app.include_router(cars_router)
app.include_router(bookings_router)
app.include_router(blogs_router)
app.include_router(testimonials_router)
app.include_router(newsletter_router)

# Admin dashboard
app.include_router(admin_overview_router)
app.include_router(admin_users_router)
app.include_router(admin_cars_router)
app.include_router(admin_bookings_router)
app.include_router(admin_blogs_router)
app.include_router(admin_testimonials_router)
app.include_router(admin_newsletter_router)
app.include_router(uploads_router)

app.mount("/uploads", StaticFiles(directory=upload_root()), name="uploads")


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.app_name}


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
