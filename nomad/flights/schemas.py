"""
Flight search schemas.

Request parameters and the normalized itinerary format returned to the
frontend, whether the data came from the upstream API or the mock set.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from nomad.shared.schemas.base import CamelModel


CabinClass = Literal["economy", "premium_economy", "business", "first"]
StopsFilter = Literal["direct", "one_stop", "any"]


class Passengers(CamelModel):
    adults: int = 1
    children: int = 0
    infants: int = 0


class FlightSearchParams(CamelModel):
    """Validated search parameters handed to the flight search client."""

    origin: str
    destination: str
    departure_date: str
    return_date: Optional[str] = None
    passengers: Passengers = Field(default_factory=Passengers)
    cabin_class: CabinClass = "economy"
    currency: str = "USD"
    locale: str = "en-US"
    max_price: Optional[float] = None
    stops: Optional[StopsFilter] = None


class FlightSearchBody(CamelModel):
    """
    Raw POST body; required fields are checked by the endpoint so it can
    answer 400 with a single message.
    """

    origin: Optional[str] = None
    destination: Optional[str] = None
    departure_date: Optional[str] = None
    return_date: Optional[str] = None
    passengers: Optional[Dict[str, Any]] = None
    cabin_class: Optional[CabinClass] = None
    currency: Optional[str] = None
    locale: Optional[str] = None
    max_price: Optional[float] = None
    stops: Optional[StopsFilter] = None


class Airport(CamelModel):
    iata: str
    name: str
    city: str
    country: str


class Airline(CamelModel):
    iata: str
    name: str
    logo: Optional[str] = None


class FlightSegment(CamelModel):
    departure_date_time: str
    arrival_date_time: str
    departure_airport: Airport
    arrival_airport: Airport
    airline: Airline
    flight_number: str
    duration: int = Field(description="Minutes")
    stops: int = 0
    aircraft: Optional[str] = None


class Price(CamelModel):
    amount: float
    currency: str


class FlightItinerary(CamelModel):
    id: str
    price: Price
    outbound: List[FlightSegment]
    inbound: Optional[List[FlightSegment]] = None
    total_duration: int
    stops: int
    is_direct_flight: bool
    booking_url: str
    valid_until: str
    price_change: Optional[Literal["increased", "decreased", "stable"]] = None
    score: int = Field(ge=0, le=100, description="Quality score")


class FlightSearchResponse(CamelModel):
    search_id: str
    results: List[FlightItinerary]
    total_results: int
    search_params: FlightSearchParams
    currency: str
    timestamp: str
    cheapest: Optional[FlightItinerary] = None
    fastest: Optional[FlightItinerary] = None
    best: Optional[FlightItinerary] = None


class AirportSuggestions(CamelModel):
    airports: List[Airport]
