"""
Canned results for the booking workers.

Every stage's downstream data comes from here, keyed by the task's
action name. Structure is deterministic for a given (action, params);
only identifiers and timestamps are derived from the clock or randomness.
"""

import random
import string
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from nomad.shared.contracts.booking_output import (
    AccommodationOption,
    AccommodationSearchOutput,
    BookingConfirmation,
    ComparisonEntry,
    ComparisonOutput,
    FlightBookingConfirmation,
    FlightEndpoint,
    FlightOption,
    FlightSearchOutput,
    NotificationOutput,
    Recommendation,
    TrackingOutput,
    ValidationOutput,
)


BASE_BOOKING_AMOUNT = 450
DEFAULT_FLIGHT_PRICE = 299

_BASE36 = string.digits + string.ascii_lowercase


def random_base36(length: int) -> str:
    """Random lowercase base-36 string."""
    return "".join(random.choices(_BASE36, k=length))


def _now_ms() -> int:
    return int(time.time() * 1000)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _share(amount: Optional[float], ratio: float, fallback: float) -> float:
    return amount * ratio if amount else fallback


def _search_flights(params: Dict[str, Any]) -> Dict[str, Any]:
    origin = params.get("origin")
    destination = params.get("destination")
    date = params.get("departureDate")
    budget = params.get("budget")
    cabin_class = params.get("cabinClass") or "economy"

    flights = [
        FlightOption(
            id="flight_001",
            airline="British Airways",
            flight_number="BA178",
            departure=FlightEndpoint(airport=f"{origin} Airport", time="08:00", date=date),
            arrival=FlightEndpoint(airport=f"{destination} Airport", time="14:30", date=date),
            duration="6h 30m",
            price=_share(budget, 0.8, DEFAULT_FLIGHT_PRICE),
            stops=0,
            cabin_class=cabin_class,
            booking_url="https://skyscanner.com/book/flight_001",
        ),
        FlightOption(
            id="flight_002",
            airline="Virgin Atlantic",
            flight_number="VS123",
            departure=FlightEndpoint(airport=f"{origin} Airport", time="10:30", date=date),
            arrival=FlightEndpoint(airport=f"{destination} Airport", time="18:45", date=date),
            duration="8h 15m",
            price=_share(budget, 0.6, 259),
            stops=1,
            cabin_class=cabin_class,
            booking_url="https://skyscanner.com/book/flight_002",
        ),
    ]
    return FlightSearchOutput(
        flights=flights, search_criteria=params, total_results=len(flights)
    ).to_payload()


def _search_accommodations(params: Dict[str, Any]) -> Dict[str, Any]:
    destination = params.get("destination")
    budget = params.get("budget") or 0
    kind = params.get("accommodationType")

    return AccommodationSearchOutput(
        accommodations=[
            AccommodationOption(
                id="hotel_001",
                name=f"Luxury Hotel {destination}",
                type=kind,
                price=budget * 0.9,
                rating=4.5,
                amenities=["WiFi", "Pool", "Gym"],
                location=f"Central {destination}",
            ),
            AccommodationOption(
                id="hotel_002",
                name=f"Budget Inn {destination}",
                type=kind,
                price=budget * 0.7,
                rating=4.0,
                amenities=["WiFi", "Breakfast"],
                location=f"Near city center {destination}",
            ),
        ],
        search_criteria=params,
    ).to_payload()


def _compare_options(params: Dict[str, Any]) -> Dict[str, Any]:
    return ComparisonOutput(
        recommended=Recommendation(
            id="hotel_001",
            reason="Best value for money with excellent amenities and location",
            score=9.2,
        ),
        comparison=[
            ComparisonEntry(id="hotel_001", score=9.2, strengths=["Location", "Amenities"]),
            ComparisonEntry(id="hotel_002", score=7.8, strengths=["Price", "Breakfast"]),
        ],
    ).to_payload()


def _validate_booking(params: Dict[str, Any]) -> Dict[str, Any]:
    return ValidationOutput(
        accommodation_id=params.get("accommodationId"),
        available=True,
        total_cost=BASE_BOOKING_AMOUNT,
        terms="Free cancellation up to 24 hours before check-in",
    ).to_payload()


def _create_booking(params: Dict[str, Any]) -> Dict[str, Any]:
    booking = BookingConfirmation(
        booking_id=f"BK{_now_ms()}",
        accommodation_id=params.get("accommodationId"),
        confirmation_code="ZN" + random_base36(8).upper(),
        total_amount=BASE_BOOKING_AMOUNT,
    )

    flight_booking = params.get("flightBooking")
    if flight_booking:
        selected = flight_booking.get("selectedFlight") or {}
        flight_price = _share(flight_booking.get("budget"), 0.8, DEFAULT_FLIGHT_PRICE)
        booking.flight_booking = FlightBookingConfirmation(
            flight_id="FL" + random_base36(8).upper(),
            airline=selected.get("airline", "British Airways"),
            flight_number=selected.get("flightNumber", "BA178"),
            departure=selected.get("departure", "08:00"),
            arrival=selected.get("arrival", "14:30"),
            price=flight_price,
        )
        booking.total_amount = BASE_BOOKING_AMOUNT + flight_price

    return booking.to_payload()


def _track_booking(params: Dict[str, Any]) -> Dict[str, Any]:
    return TrackingOutput(
        booking_id=params.get("bookingId"),
        status="confirmed",
        last_updated=_now_iso(),
        next_action="Check-in available 24 hours before arrival",
    ).to_payload()


def _send_notification(params: Dict[str, Any]) -> Dict[str, Any]:
    return NotificationOutput(
        notification_id=f"NT{_now_ms()}",
        type=params.get("type"),
        status="sent",
        timestamp=_now_iso(),
    ).to_payload()


_GENERATORS: Dict[str, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    "search_flights": _search_flights,
    "search_accommodations": _search_accommodations,
    "compare_options": _compare_options,
    "validate_booking": _validate_booking,
    "create_booking": _create_booking,
    "track_booking": _track_booking,
    "send_notification": _send_notification,
}


def generate_mock_result(action: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Generate the canned result for a worker action.

    Args:
        action: Tool/action name (e.g. "create_booking")
        params: Task parameters as built by the pipeline stage

    Returns:
        A camelCase payload; unknown actions yield {"action", "completed"}
    """
    generator = _GENERATORS.get(action)
    if generator is None:
        return {"action": action, "completed": True}
    return generator(params or {})
