"""
FastAPI endpoints for flight search and airport autocomplete.
"""

import logging
from typing import Iterator, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from nomad.flights.client import FlightSearchClient
from nomad.flights.schemas import (
    AirportSuggestions,
    FlightSearchBody,
    FlightSearchParams,
    FlightSearchResponse,
    Passengers,
)
from nomad.shared.config import Settings, get_settings
from nomad.shared.cors import cors_preflight


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/flights", tags=["flights"])


def get_flight_client(settings: Settings = Depends(get_settings)) -> Iterator[FlightSearchClient]:
    """Per-request client; its HTTP session is closed once the response is sent."""
    client = FlightSearchClient(api_key=settings.skyscanner_api_key)
    try:
        yield client
    finally:
        client.close()


def build_search_params(body: FlightSearchBody) -> FlightSearchParams:
    """Fill passenger, cabin, currency and locale defaults."""
    passengers = body.passengers or {}
    return FlightSearchParams(
        origin=body.origin,
        destination=body.destination,
        departure_date=body.departure_date,
        return_date=body.return_date,
        passengers=Passengers(
            adults=passengers.get("adults") or 1,
            children=passengers.get("children") or 0,
            infants=passengers.get("infants") or 0,
        ),
        cabin_class=body.cabin_class or "economy",
        currency=body.currency or "USD",
        locale=body.locale or "en-US",
        max_price=body.max_price,
        stops=body.stops,
    )


@router.post(
    "",
    response_model=FlightSearchResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
def search_flights(
    body: FlightSearchBody, client: FlightSearchClient = Depends(get_flight_client)
) -> FlightSearchResponse:
    """Search flights; upstream failures return mock results, not errors."""
    if not body.origin or not body.destination or not body.departure_date or not body.passengers:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required fields: origin, destination, departureDate, passengers",
        )

    try:
        return client.search_flights(build_search_params(body))
    except Exception as e:
        logger.exception(f"[api=flights] Flight search API error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to search flights: {e}",
        )


@router.get("", response_model=AirportSuggestions)
def search_airports(
    q: Optional[str] = Query(default=None, description="Airport, city or IATA code"),
    locale: str = Query(default="en-US"),
    client: FlightSearchClient = Depends(get_flight_client),
) -> AirportSuggestions:
    if not q:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Query parameter "q" is required',
        )

    try:
        return AirportSuggestions(airports=client.get_airport_suggestions(q, locale))
    except Exception as e:
        logger.exception(f"[api=flights] Airport search API error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to search airports: {e}",
        )


@router.options("")
async def flights_options() -> Response:
    return cors_preflight("GET, POST, OPTIONS")
