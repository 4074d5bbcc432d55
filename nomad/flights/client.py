"""
Flight search client.

Wraps the Skyscanner partner API (live pricing sessions and place
autosuggest). Every failure, including a missing API key, degrades to
the static results in mock_data rather than surfacing an error.
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from nomad.flights.mock_data import (
    mock_airport_suggestions,
    mock_flight_results,
    valid_until,
)
from nomad.flights.schemas import (
    Airline,
    Airport,
    FlightItinerary,
    FlightSearchParams,
    FlightSearchResponse,
    FlightSegment,
    Price,
)


logger = logging.getLogger(__name__)


class FlightSearchError(Exception):
    """Invalid search parameters or an unusable upstream response."""


class SearchPendingError(FlightSearchError):
    """The pricing session has not produced results yet."""


@dataclass
class FlightSearchConfig:
    """
    Configuration for the flight search client.

    Attributes:
        base_url: Partner API root
        country: Market country sent with pricing sessions
        request_timeout: Per-request timeout in seconds
        poll_attempts: Maximum polls of a pricing session
        poll_wait_seconds: Wait between polls
        suggestion_limit: Maximum airport suggestions returned
    """

    base_url: str = "https://partners.api.skyscanner.net/apiservices"
    country: str = "US"
    request_timeout: float = 10.0
    poll_attempts: int = 10
    poll_wait_seconds: float = 2.0
    suggestion_limit: int = 10


DEFAULT_CONFIG = FlightSearchConfig()


def validate_search_params(params: FlightSearchParams) -> None:
    """Raise FlightSearchError if the search cannot be run."""
    if not params.origin or not params.destination:
        raise FlightSearchError("Origin and destination are required")
    if not params.departure_date:
        raise FlightSearchError("Departure date is required")
    if params.passengers.adults < 1:
        raise FlightSearchError("At least one adult passenger is required")


class FlightSearchClient:
    """Flight search and airport suggestions with mock fallback."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        config: Optional[FlightSearchConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key or ""
        self.config = config or DEFAULT_CONFIG
        self.session = session or requests.Session()

    def close(self) -> None:
        self.session.close()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def search_flights(self, params: FlightSearchParams) -> FlightSearchResponse:
        """
        Search for flights.

        Returns:
            Live results sorted by price, or the mock results when the key
            is missing or anything goes wrong upstream.
        """
        _log = f"[flights={params.origin}->{params.destination}] "
        try:
            validate_search_params(params)

            if not self.api_key:
                logger.warning(f"{_log}Flight search API key not configured, using mock data")
                return mock_flight_results(params)

            session_key = self._create_search_session(params)
            logger.info(f"{_log}Pricing session created | session={session_key}")
            data = self._poll_search_results(session_key)
            return self._process_flight_results(data, params)

        except Exception as e:
            logger.error(f"{_log}Flight search error, falling back to mock data: {e}")
            return mock_flight_results(params)

    def get_airport_suggestions(self, query: str, locale: str = "en-US") -> List[Airport]:
        """Airports matching a free-text query, for autocomplete."""
        try:
            if not self.api_key:
                logger.warning("Flight search API key not configured, using mock airport data")
                return mock_airport_suggestions(query)

            response = self.session.get(
                f"{self.config.base_url}/autosuggest/v1.0/{locale}/{quote(query, safe='')}",
                params={"apikey": self.api_key},
                headers=self._headers(),
                timeout=self.config.request_timeout,
            )
            response.raise_for_status()
            return self._format_airport_suggestions(response.json().get("Places") or [])

        except Exception as e:
            logger.error(f"Airport search error, falling back to mock data: {e}")
            return mock_airport_suggestions(query)

    # ------------------------------------------------------------------
    # Upstream calls
    # ------------------------------------------------------------------

    def _headers(self) -> Dict[str, str]:
        return {"Accept": "application/json", "X-RapidAPI-Key": self.api_key}

    def _create_search_session(self, params: FlightSearchParams) -> str:
        form = {
            "country": self.config.country,
            "currency": params.currency,
            "locale": params.locale,
            "originPlace": params.origin,
            "destinationPlace": params.destination,
            "outboundDate": params.departure_date,
            "adults": str(params.passengers.adults),
            "children": str(params.passengers.children),
            "infants": str(params.passengers.infants),
            "cabinClass": params.cabin_class,
            "apikey": self.api_key,
        }
        if params.return_date:
            form["inboundDate"] = params.return_date

        response = self.session.post(
            f"{self.config.base_url}/pricing/v1.0",
            data=form,
            headers=self._headers(),
            timeout=self.config.request_timeout,
        )
        if not response.ok:
            raise FlightSearchError(f"Failed to create search session: {response.status_code}")

        location = response.headers.get("Location")
        if not location:
            raise FlightSearchError("No session location returned")

        return location.rstrip("/").split("/")[-1]

    def _fetch_session(self, session_key: str) -> Dict[str, Any]:
        response = self.session.get(
            f"{self.config.base_url}/pricing/uk2/v1.0/{session_key}",
            params={"apikey": self.api_key},
            headers=self._headers(),
            timeout=self.config.request_timeout,
        )
        if not response.ok:
            raise SearchPendingError(f"Failed to get search results: {response.status_code}")

        data = response.json()
        if data.get("Status") == "UpdatesComplete" or data.get("Itineraries"):
            return data
        raise SearchPendingError("Search not complete")

    def _poll_search_results(self, session_key: str) -> Dict[str, Any]:
        """Poll the pricing session until it completes or attempts run out."""
        for attempt in Retrying(
            stop=stop_after_attempt(self.config.poll_attempts),
            wait=wait_fixed(self.config.poll_wait_seconds),
            retry=retry_if_exception_type((SearchPendingError, requests.RequestException)),
            reraise=True,
        ):
            with attempt:
                data = self._fetch_session(session_key)
        return data

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def _process_flight_results(
        self, data: Dict[str, Any], params: FlightSearchParams
    ) -> FlightSearchResponse:
        itineraries = data.get("Itineraries") or []
        if not itineraries:
            logger.info("Upstream returned no itineraries, using mock data")
            return mock_flight_results(params)

        lookup = {
            "legs": {leg.get("Id"): leg for leg in data.get("Legs") or []},
            "segments": {seg.get("Id"): seg for seg in data.get("Segments") or []},
            "carriers": {c.get("Id"): c for c in data.get("Carriers") or []},
            "places": {p.get("Id"): p for p in data.get("Places") or []},
        }

        results = []
        for itinerary in itineraries:
            outbound_id = itinerary.get("OutboundLegId")
            inbound_id = itinerary.get("InboundLegId")
            pricing = self._find_pricing(itinerary, data)

            outbound = self._format_segments(outbound_id, lookup)
            inbound = self._format_segments(inbound_id, lookup) if inbound_id else None
            segments = outbound + (inbound or [])
            stops = sum(s.stops for s in segments) + max(len(outbound) - 1, 0)
            if inbound:
                stops += max(len(inbound) - 1, 0)

            results.append(
                FlightItinerary(
                    id=f"{outbound_id}{inbound_id or ''}",
                    price=Price(amount=pricing.get("Price") or 0, currency=params.currency),
                    outbound=outbound,
                    inbound=inbound,
                    total_duration=sum(s.duration for s in segments),
                    stops=stops,
                    is_direct_flight=stops == 0,
                    booking_url=pricing.get("DeeplinkUrl") or "",
                    valid_until=valid_until(),
                    score=0,
                )
            )

        results.sort(key=lambda it: it.price.amount)
        cheapest_price = results[0].price.amount
        for itinerary in results:
            itinerary.score = _score(itinerary, cheapest_price)

        return FlightSearchResponse(
            search_id=f"search_{int(time.time() * 1000)}",
            results=results,
            total_results=len(results),
            search_params=params,
            currency=params.currency,
            timestamp=_utc_now(),
            cheapest=results[0],
            fastest=min(results, key=lambda it: it.total_duration),
            best=max(results, key=lambda it: it.score),
        )

    @staticmethod
    def _find_pricing(itinerary: Dict[str, Any], data: Dict[str, Any]) -> Dict[str, Any]:
        options = itinerary.get("PricingOptions")
        if options:
            return options[0]
        for option in data.get("PricingOptions") or []:
            if option.get("OutboundLegId") == itinerary.get("OutboundLegId") and option.get(
                "InboundLegId"
            ) == itinerary.get("InboundLegId"):
                return option
        return {}

    def _format_segments(self, leg_id: str, lookup: Dict[str, Dict]) -> List[FlightSegment]:
        leg = lookup["legs"].get(leg_id)
        if not leg:
            return []

        segments = []
        for segment_id in leg.get("SegmentIds") or []:
            segment = lookup["segments"].get(segment_id) or {}
            carrier = lookup["carriers"].get(segment.get("Carrier")) or {}
            segments.append(
                FlightSegment(
                    departure_date_time=segment.get("DepartureDateTime") or "",
                    arrival_date_time=segment.get("ArrivalDateTime") or "",
                    departure_airport=self._format_airport(segment.get("OriginStation"), lookup),
                    arrival_airport=self._format_airport(segment.get("DestinationStation"), lookup),
                    airline=Airline(
                        iata=carrier.get("Code") or "",
                        name=carrier.get("Name") or "",
                        logo=carrier.get("ImageUrl") or None,
                    ),
                    flight_number=f"{carrier.get('Code') or ''}{segment.get('FlightNumber') or ''}",
                    duration=segment.get("Duration") or 0,
                    stops=len(segment.get("Stops") or []),
                    aircraft=segment.get("Aircraft") or None,
                )
            )
        return segments

    @staticmethod
    def _format_airport(station_id: Any, lookup: Dict[str, Dict]) -> Airport:
        station = lookup["places"].get(station_id) or {}
        return Airport(
            iata=station.get("Code") or "",
            name=station.get("Name") or "",
            city=station.get("CityName") or "",
            country=station.get("CountryName") or "",
        )

    def _format_airport_suggestions(self, places: List[Dict[str, Any]]) -> List[Airport]:
        airports = [
            Airport(
                iata=place["PlaceId"],
                name=place["PlaceName"],
                city=place.get("CityName") or place["PlaceName"],
                country=place.get("CountryName") or "",
            )
            for place in places
            if place.get("PlaceId") and place.get("PlaceName")
        ]
        return airports[: self.config.suggestion_limit]


def _score(itinerary: FlightItinerary, cheapest_price: float) -> int:
    """0-100 quality score: penalize stops and price above the cheapest."""
    score = 100 - 10 * itinerary.stops
    if cheapest_price > 0:
        score -= int(30 * (itinerary.price.amount - cheapest_price) / cheapest_price)
    return max(0, min(100, score))


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()
