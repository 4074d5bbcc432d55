"""
Pipeline stage descriptors.

The booking pipeline is data: an ordered tuple of stages, each naming its
step, worker, action and how to build its parameters from the request and
the results of earlier steps. The flight stage is spliced in after the
accommodation search when flights are requested.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from nomad.booking.schemas import BookingRequest


Results = Dict[str, Dict[str, Any]]

FALLBACK_ACCOMMODATION_ID = "hotel_001"
FALLBACK_BOOKING_ID = "booking_001"
NOTIFICATION_RECIPIENT = "user@example.com"
COMPARISON_CRITERIA = ["price", "location", "amenities", "reviews"]


@dataclass(frozen=True)
class Stage:
    """
    One pipeline stage.

    Attributes:
        step: Step name recorded in the step list
        worker: Name of the worker executing the stage
        action: Tool/action name passed to the worker
        build_params: Maps (request, earlier results) to the task params
        when: Optional predicate; the stage is skipped when it returns False
        final: Whether this stage's result is the run's final result
    """

    step: str
    worker: str
    action: str
    build_params: Callable[[BookingRequest, Results], Dict[str, Any]]
    when: Optional[Callable[[BookingRequest], bool]] = None
    final: bool = False

    def build_task(self, request: BookingRequest, results: Results) -> Dict[str, Any]:
        return {"action": self.action, "params": self.build_params(request, results)}


def _search_params(request: BookingRequest, results: Results) -> Dict[str, Any]:
    return request.model_dump(by_alias=True, exclude_none=True)


def _flight_params(request: BookingRequest, results: Results) -> Dict[str, Any]:
    return {
        "origin": request.flight_origin,
        "destination": request.destination,
        "departureDate": request.check_in,
        "returnDate": request.check_out,
        "passengers": {"adults": request.guests, "children": 0, "infants": 0},
        "cabinClass": request.flight_class or "economy",
        "budget": request.flight_budget,
    }


def _compare_params(request: BookingRequest, results: Results) -> Dict[str, Any]:
    search = results.get("search") or {}
    return {
        "accommodations": search.get("accommodations") or [],
        "criteria": list(COMPARISON_CRITERIA),
    }


def _validate_params(request: BookingRequest, results: Results) -> Dict[str, Any]:
    recommended = (results.get("compare") or {}).get("recommended") or {}
    return {
        "accommodationId": recommended.get("id") or FALLBACK_ACCOMMODATION_ID,
        "dates": {"checkIn": request.check_in, "checkOut": request.check_out},
        "guests": request.guests,
    }


def _booking_params(request: BookingRequest, results: Results) -> Dict[str, Any]:
    validated = results.get("validate") or {}
    flight_result = results.get("searchFlights")

    flight_booking = None
    if flight_result:
        flights = flight_result.get("flights") or []
        flight_booking = {
            "selectedFlight": flights[0] if flights else None,
            "budget": request.flight_budget,
        }

    return {
        "accommodationId": validated.get("accommodationId") or FALLBACK_ACCOMMODATION_ID,
        "guestDetails": {"guests": request.guests, "destination": request.destination},
        "paymentInfo": {"budget": request.budget},
        "flightBooking": flight_booking,
    }


def _tracking_params(request: BookingRequest, results: Results) -> Dict[str, Any]:
    booking = results.get("book") or {}
    return {"bookingId": booking.get("bookingId") or FALLBACK_BOOKING_ID}


def _notification_params(request: BookingRequest, results: Results) -> Dict[str, Any]:
    return {
        "type": "booking_confirmation",
        "recipient": NOTIFICATION_RECIPIENT,
        "content": results.get("book") or {},
    }


ACCOMMODATION_STAGES: Tuple[Stage, ...] = (
    Stage("search", "SearchWorker", "search_accommodations", _search_params),
    Stage("compare", "CompareWorker", "compare_options", _compare_params),
    Stage("validate", "ValidateWorker", "validate_booking", _validate_params),
    Stage("book", "BookingWorker", "create_booking", _booking_params, final=True),
    Stage("track", "TrackingWorker", "track_booking", _tracking_params),
    Stage("notify", "NotificationWorker", "send_notification", _notification_params),
)

FLIGHT_STAGE = Stage(
    "searchFlights",
    "SearchWorker",
    "search_flights",
    _flight_params,
    when=lambda request: request.wants_flights,
)


def build_stages(include_flights: bool = False) -> Tuple[Stage, ...]:
    """
    Build the ordered stage list for a run.

    Args:
        include_flights: Insert the flight search right after the
            accommodation search

    Returns:
        Six stages, or seven with the flight search
    """
    stages = list(ACCOMMODATION_STAGES)
    if include_flights:
        stages.insert(1, FLIGHT_STAGE)
    return tuple(stages)
