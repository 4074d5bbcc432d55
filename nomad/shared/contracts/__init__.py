"""Worker output contracts for stage handoffs."""

from nomad.shared.contracts.booking_output import (
    AccommodationSearchOutput,
    BookingConfirmation,
    ComparisonOutput,
    FlightSearchOutput,
    NotificationOutput,
    TrackingOutput,
    ValidationOutput,
)

__all__ = [
    "AccommodationSearchOutput",
    "BookingConfirmation",
    "ComparisonOutput",
    "FlightSearchOutput",
    "NotificationOutput",
    "TrackingOutput",
    "ValidationOutput",
]
