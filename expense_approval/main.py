# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from expense_approval import __version__
from expense_approval.config import configure_logging, settings
from expense_approval.database import SessionLocal, engine
from expense_approval.events import subscribe_event_logging
from expense_approval.exceptions import ExpenseApprovalError, ValidationFailed
from expense_approval.models import Base
from expense_approval.services import identity_service, seed_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    configure_logging()
    subscribe_event_logging()

    if settings.auto_create_tables:
        Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        expired = identity_service.cleanup_expired_sessions(db)
        if expired:
            logger.info(f"Removed {expired} expired sessions")
        if settings.seed_demo_data:
            logger.info("Seeding demo data...")
            seed_service.seed_demo_data(db)
    finally:
        db.close()

    yield

    logger.info("Shutting down...")

app = FastAPI(
    title="Expense Approval",
    description="Role-based expense submission and approval workflow",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ExpenseApprovalError)
async def handle_service_error(
    request: Request, exc: ExpenseApprovalError
) -> JSONResponse:
    """Translate typed service failures into JSON error responses."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(
            f"{request.method} {request.url.path} rejected "
            f"({exc.code}): {exc.message}"
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request data with the same error code as the services."""
    logger.info(f"{request.method} {request.url.path} rejected (validation_failed)")
    return JSONResponse(
        status_code=ValidationFailed.status_code,
        content={
            "detail": jsonable_encoder(exc.errors()),
            "code": ValidationFailed.code,
        },
    )


@app.get("/health")
def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "healthy"}


# Import and include API router after it's created
from expense_approval.api.v1.router import api_router  # noqa: E402

app.include_router(api_router, prefix="/api/v1")
