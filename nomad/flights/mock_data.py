"""
Static flight data used when the upstream API is unavailable.
"""

import time
from datetime import datetime, timedelta, timezone
from typing import List

from nomad.flights.schemas import (
    Airline,
    Airport,
    FlightItinerary,
    FlightSearchParams,
    FlightSearchResponse,
    FlightSegment,
    Price,
)


MOCK_AIRPORTS: List[Airport] = [
    Airport(iata="JFK", name="John F. Kennedy International Airport", city="New York", country="United States"),
    Airport(iata="LHR", name="London Heathrow Airport", city="London", country="United Kingdom"),
    Airport(iata="CDG", name="Charles de Gaulle Airport", city="Paris", country="France"),
    Airport(iata="NRT", name="Narita International Airport", city="Tokyo", country="Japan"),
    Airport(iata="LAX", name="Los Angeles International Airport", city="Los Angeles", country="United States"),
    Airport(iata="FRA", name="Frankfurt Airport", city="Frankfurt", country="Germany"),
    Airport(iata="SIN", name="Singapore Changi Airport", city="Singapore", country="Singapore"),
    Airport(iata="DXB", name="Dubai International Airport", city="Dubai", country="United Arab Emirates"),
]

_JFK = Airport(iata="JFK", name="JFK Airport", city="New York", country="US")
_LHR = Airport(iata="LHR", name="Heathrow Airport", city="London", country="UK")


def valid_until() -> str:
    """Quotes are valid for 24 hours."""
    return (datetime.now(timezone.utc) + timedelta(hours=24)).isoformat()


def mock_airport_suggestions(query: str) -> List[Airport]:
    """Static airports whose name, city or IATA code contains the query."""
    needle = query.lower()
    return [
        airport
        for airport in MOCK_AIRPORTS
        if needle in airport.name.lower()
        or needle in airport.city.lower()
        or needle in airport.iata.lower()
    ]


def mock_flight_results(params: FlightSearchParams) -> FlightSearchResponse:
    """Two fixed itineraries priced in the requested currency."""
    direct = FlightItinerary(
        id="flight_1",
        price=Price(amount=299, currency=params.currency),
        outbound=[
            FlightSegment(
                departure_date_time="2024-01-15T08:00:00Z",
                arrival_date_time="2024-01-15T14:30:00Z",
                departure_airport=_JFK,
                arrival_airport=_LHR,
                airline=Airline(iata="BA", name="British Airways"),
                flight_number="BA178",
                duration=390,
                stops=0,
            )
        ],
        total_duration=390,
        stops=0,
        is_direct_flight=True,
        booking_url="https://skyscanner.com/book/flight_1",
        valid_until=valid_until(),
        score=85,
    )
    one_stop = FlightItinerary(
        id="flight_2",
        price=Price(amount=259, currency=params.currency),
        outbound=[
            FlightSegment(
                departure_date_time="2024-01-15T10:30:00Z",
                arrival_date_time="2024-01-15T18:45:00Z",
                departure_airport=_JFK,
                arrival_airport=_LHR,
                airline=Airline(iata="VS", name="Virgin Atlantic"),
                flight_number="VS123",
                duration=495,
                stops=1,
            )
        ],
        total_duration=495,
        stops=1,
        is_direct_flight=False,
        booking_url="https://skyscanner.com/book/flight_2",
        valid_until=valid_until(),
        score=78,
    )

    return FlightSearchResponse(
        search_id=f"mock_search_{int(time.time() * 1000)}",
        results=[direct, one_stop],
        total_results=2,
        search_params=params,
        currency=params.currency,
        timestamp=datetime.now(timezone.utc).isoformat(),
        cheapest=one_stop,
        fastest=direct,
        best=direct,
    )
