"""
Booking worker output contracts.

Defines the payload each booking worker hands to the next stage.
Field names are dumped in camelCase to match what the frontend reads.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field

from nomad.shared.schemas.base import CamelModel


class FlightEndpoint(CamelModel):
    """Departure or arrival point of a candidate flight."""

    airport: str
    time: str
    date: Optional[str] = None


class FlightOption(CamelModel):
    """A single flight returned by the search worker."""

    id: str
    airline: str
    flight_number: str
    departure: FlightEndpoint
    arrival: FlightEndpoint
    duration: str
    price: float
    stops: int = Field(ge=0)
    cabin_class: str
    booking_url: str


class FlightSearchOutput(CamelModel):
    flights: List[FlightOption]
    search_criteria: Dict[str, Any]
    total_results: int


class AccommodationOption(CamelModel):
    """A single accommodation returned by the search worker."""

    id: str
    name: str
    type: Optional[str] = None
    price: float
    rating: float = Field(ge=0, le=5)
    amenities: List[str] = Field(default_factory=list)
    location: str
    availability: bool = True


class AccommodationSearchOutput(CamelModel):
    accommodations: List[AccommodationOption]
    search_criteria: Dict[str, Any]


class Recommendation(CamelModel):
    id: str
    reason: str
    score: float


class ComparisonEntry(CamelModel):
    id: str
    score: float
    strengths: List[str] = Field(default_factory=list)


class ComparisonOutput(CamelModel):
    """Ranking produced by the compare worker."""

    recommended: Recommendation
    comparison: List[ComparisonEntry]


class ValidationOutput(CamelModel):
    accommodation_id: Optional[str] = None
    available: bool
    total_cost: float
    terms: str


class FlightBookingConfirmation(CamelModel):
    """Flight leg attached to a booking."""

    flight_id: str
    airline: str
    flight_number: str
    # Either a FlightEndpoint-shaped dict or a bare time string
    departure: Any
    arrival: Any
    price: float
    booking_status: str = "confirmed"


class BookingConfirmation(CamelModel):
    """Reservation created by the booking worker."""

    booking_id: str
    accommodation_id: Optional[str] = None
    status: str = "confirmed"
    confirmation_code: str
    total_amount: float
    payment_status: str = "completed"
    flight_booking: Optional[FlightBookingConfirmation] = None


class TrackingOutput(CamelModel):
    booking_id: Optional[str] = None
    status: str
    last_updated: str
    next_action: str


class NotificationOutput(CamelModel):
    notification_id: str
    type: Optional[str] = None
    status: str
    timestamp: str
