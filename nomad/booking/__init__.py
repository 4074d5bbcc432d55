"""
Booking orchestrator.

Runs the accommodation (and optional flight) booking pipeline through a
fixed sequence of workers, each backed by the hosted model or by canned
data when no model key is configured.
"""

from nomad.booking.orchestrator import BookingOrchestrator, UnknownStepError
from nomad.booking.schemas import BookingRequest, OrchestrationStep, RunResult
from nomad.booking.mock_data import generate_mock_result

__all__ = [
    "BookingOrchestrator",
    "UnknownStepError",
    "BookingRequest",
    "OrchestrationStep",
    "RunResult",
    "generate_mock_result",
]
