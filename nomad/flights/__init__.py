"""
Flight search.

Live pricing and airport autocomplete against the Skyscanner partner
API, with static results whenever the API is unavailable.
"""

from nomad.flights.client import FlightSearchClient, FlightSearchConfig, FlightSearchError
from nomad.flights.schemas import FlightSearchParams, FlightSearchResponse

__all__ = [
    "FlightSearchClient",
    "FlightSearchConfig",
    "FlightSearchError",
    "FlightSearchParams",
    "FlightSearchResponse",
]
