"""
FastAPI endpoints for the booking orchestrator.

A fresh orchestrator is built per request; runs are not stored anywhere
after the response is sent.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from nomad.booking.orchestrator import BookingOrchestrator
from nomad.booking.schemas import BookingRequest, RunResult
from nomad.shared.config import Settings, get_settings
from nomad.shared.cors import cors_preflight


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/accommodation", tags=["booking"])


@router.post(
    "",
    response_model=RunResult,
    response_model_exclude_none=True,
)
def create_booking(
    request: BookingRequest, settings: Settings = Depends(get_settings)
) -> RunResult:
    """
    Run the booking pipeline for one request.

    A failed run is still a 200; callers must read the body's status.
    """
    if not request.destination or not request.check_in or not request.check_out:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Destination, check-in, and check-out dates are required",
        )

    try:
        orchestrator = BookingOrchestrator(
            include_flights=request.wants_flights, settings=settings
        )
        result = orchestrator.run(request)
    except Exception as e:
        logger.exception(f"[api=accommodation] Booking request failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process accommodation booking request. Please try again.",
        )

    logger.info(
        f"[orch={result.orchestration_id}] [api=accommodation] Responding | "
        f"status={result.status}, steps={len(result.steps)}"
    )
    return result


@router.options("")
async def accommodation_options() -> Response:
    return cors_preflight("POST, OPTIONS")
