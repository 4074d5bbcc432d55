"""
FastAPI application entry point.

Assembles the FastAPI app with the booking, advisor, flight and payment
routers.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from nomad.advisor.advisor_api import router as advisor_router
from nomad.booking.booking_api import router as booking_router
from nomad.flights.flights_api import router as flights_router
from nomad.payments.payments_api import router as payments_router
from nomad.shared.config import get_settings
from nomad.shared.logging.config import setup_logging


# ============================================================================
# Logging configuration (single source of truth for all components)
# ============================================================================
_settings = get_settings()
setup_logging(level=_settings.log_level, log_format=_settings.log_format)

logger = logging.getLogger(__name__)


# Create FastAPI app
app = FastAPI(
    title="Nomad",
    description="Travel assistance backend for digital nomads",
    version="0.1.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def jsonable_errors(exc: RequestValidationError):
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors: answer 400, not 422."""
    logger.warning(f"[api={request.url.path}] Invalid request: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request body", "errors": jsonable_errors(exc)},
    )


# Include routers
app.include_router(booking_router)
app.include_router(advisor_router)
app.include_router(flights_router)
app.include_router(payments_router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Nomad",
        "version": "0.1.0",
        "services": {
            "booking": {"status": "active (mock workers)", "endpoints": "/api/accommodation"},
            "advisor": {"status": "active", "endpoints": "/api/agent"},
            "flights": {"status": "active", "endpoints": "/api/flights"},
            "payments": {"status": "active", "endpoints": "/api/stripe"},
        },
    }


@app.get("/health")
async def health():
    """Global health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
