"""
Unit tests for the canned worker results and stage parameter builders.
"""

import pytest

from nomad.booking.mock_data import generate_mock_result
from nomad.booking.schemas import BookingRequest
from nomad.booking.stages import build_stages


def _strip_volatile(payload, keys=("bookingId", "confirmationCode", "flightId")):
    return {k: v for k, v in payload.items() if k not in keys}


class TestGenerateMockResult:
    """Tests for generate_mock_result."""

    def test_unknown_action(self):
        assert generate_mock_result("cancel_booking", {}) == {
            "action": "cancel_booking",
            "completed": True,
        }

    def test_accommodation_prices_follow_budget(self):
        result = generate_mock_result(
            "search_accommodations",
            {"destination": "Bali", "budget": 1000, "accommodationType": "hostel"},
        )

        first, second = result["accommodations"]
        assert first["price"] == pytest.approx(900)
        assert second["price"] == pytest.approx(700)
        assert (first["rating"], second["rating"]) == (4.5, 4.0)
        assert first["amenities"] == ["WiFi", "Pool", "Gym"]
        assert first["type"] == "hostel"
        assert result["searchCriteria"]["destination"] == "Bali"

    def test_flight_prices(self):
        with_budget = generate_mock_result("search_flights", {"origin": "BER", "budget": 200})
        without_budget = generate_mock_result("search_flights", {"origin": "BER"})

        assert [f["price"] for f in with_budget["flights"]] == pytest.approx([160, 120])
        assert [f["price"] for f in without_budget["flights"]] == [299, 259]
        assert without_budget["flights"][0]["cabinClass"] == "economy"
        assert with_budget["totalResults"] == 2

    def test_compare_recommends_hotel_001(self):
        result = generate_mock_result("compare_options", {"accommodations": []})

        assert result["recommended"]["id"] == "hotel_001"
        assert [c["id"] for c in result["comparison"]] == ["hotel_001", "hotel_002"]

    def test_validate_echoes_accommodation(self):
        result = generate_mock_result("validate_booking", {"accommodationId": "hotel_002"})

        assert result["accommodationId"] == "hotel_002"
        assert result["available"] is True
        assert result["totalCost"] == 450

    def test_booking_without_flight(self):
        result = generate_mock_result("create_booking", {"accommodationId": "hotel_001"})

        assert result["bookingId"].startswith("BK")
        assert result["confirmationCode"].startswith("ZN")
        assert len(result["confirmationCode"]) == 10
        assert result["confirmationCode"] == result["confirmationCode"].upper()
        assert result["totalAmount"] == 450
        assert result["paymentStatus"] == "completed"

    def test_booking_with_flight(self):
        result = generate_mock_result(
            "create_booking",
            {
                "accommodationId": "hotel_001",
                "flightBooking": {
                    "selectedFlight": {"airline": "Virgin Atlantic", "flightNumber": "VS123"},
                    "budget": 1000,
                },
            },
        )

        assert result["totalAmount"] == pytest.approx(1250)
        assert result["flightBooking"]["airline"] == "Virgin Atlantic"
        assert result["flightBooking"]["flightNumber"] == "VS123"
        assert result["flightBooking"]["flightId"].startswith("FL")

    def test_booking_with_flight_but_no_budget(self):
        result = generate_mock_result(
            "create_booking", {"flightBooking": {"selectedFlight": None, "budget": None}}
        )

        assert result["totalAmount"] == 450 + 299
        assert result["flightBooking"]["airline"] == "British Airways"

    def test_track_and_notify(self):
        tracked = generate_mock_result("track_booking", {"bookingId": "BK1"})
        sent = generate_mock_result("send_notification", {"type": "booking_confirmation"})

        assert tracked["bookingId"] == "BK1"
        assert tracked["status"] == "confirmed"
        assert sent["notificationId"].startswith("NT")
        assert sent["status"] == "sent"

    @pytest.mark.parametrize(
        "action, params",
        [
            ("search_accommodations", {"destination": "Lisbon", "budget": 500}),
            ("search_flights", {"origin": "LIS", "destination": "BER", "budget": 300}),
            ("compare_options", {}),
            ("validate_booking", {"accommodationId": "hotel_001"}),
            ("create_booking", {"accommodationId": "hotel_001", "flightBooking": {"budget": 100}}),
        ],
    )
    def test_repeatable_apart_from_identifiers(self, action, params):
        first = generate_mock_result(action, params)
        second = generate_mock_result(action, params)

        assert _strip_volatile(first).keys() == _strip_volatile(second).keys()
        if action != "create_booking":
            assert first == second


class TestStageParams:
    """Stage input mapping and fallbacks."""

    def _request(self):
        return BookingRequest(
            destination="Lisbon", check_in="2024-03-01", check_out="2024-03-08", guests=3
        )

    def test_fallback_ids_when_results_are_empty(self):
        stages = {s.step: s for s in build_stages()}
        request = self._request()

        assert stages["compare"].build_params(request, {})["accommodations"] == []
        assert stages["validate"].build_params(request, {})["accommodationId"] == "hotel_001"
        assert stages["book"].build_params(request, {})["accommodationId"] == "hotel_001"
        assert stages["track"].build_params(request, {})["bookingId"] == "booking_001"
        assert stages["notify"].build_params(request, {})["content"] == {}
        assert stages["notify"].build_params(request, {})["recipient"] == "user@example.com"

    def test_flight_params(self):
        request = BookingRequest(
            destination="Lisbon",
            check_in="2024-03-01",
            check_out="2024-03-08",
            guests=3,
            include_flights=True,
            flight_origin="Berlin",
        )
        stage = build_stages(include_flights=True)[1]

        params = stage.build_params(request, {})

        assert params["passengers"] == {"adults": 3, "children": 0, "infants": 0}
        assert params["cabinClass"] == "economy"
        assert params["departureDate"] == "2024-03-01"
        assert params["returnDate"] == "2024-03-08"

    def test_only_booking_stage_is_final(self):
        assert [s.step for s in build_stages(True) if s.final] == ["book"]
