"""Typed generators backed by the language model."""

from datetime import date

import pytest
from pydantic import ValidationError

from fundtheworld.services import ai_actions
from fundtheworld.services.openai_service import openai_service


def charity(n):
    return {
        "id": f"ch-{n}", "name": f"Charity {n}", "category": "Health",
        "description": "Care", "location": {"city": "Lima", "country": "Peru"},
        "impactMetric": "1 checkup per $10", "matchingDonation": False, "minimumDonationInUSD": 10,
    }


def endpoint(city, code):
    return {"cityName": city, "airportCode": code, "timestamp": "2026-10-19T08:00:00Z"}


@pytest.mark.asyncio
async def test_find_charities_caps_results(fake_openai):
    fake_openai.completions.queue({"charities": [charity(n) for n in range(6)]})
    result = await ai_actions.find_charities("Health", "clinics")
    assert [c["id"] for c in result["charities"]] == ["ch-0", "ch-1", "ch-2", "ch-3"]
    assert result["charities"][0]["minimumDonationInUSD"] == 10

    call = fake_openai.completions.calls[0]
    assert call["response_format"]["json_schema"]["name"] == "CharitySearchResults"
    assert "Health" in call["messages"][-1]["content"]


@pytest.mark.asyncio
async def test_malformed_model_output_raises(fake_openai):
    fake_openai.completions.queue({"charities": [{"id": "ch-1"}]})
    with pytest.raises(ValidationError):
        await ai_actions.find_charities("Health", "clinics")


@pytest.mark.asyncio
async def test_provider_errors_propagate(fake_openai):
    fake_openai.completions.queue(RuntimeError("timeout"))
    with pytest.raises(RuntimeError):
        await ai_actions.get_charity_details("ch-1")


@pytest.mark.asyncio
async def test_flight_search_and_seats(fake_openai):
    flight = {
        "id": "BA123", "departure": endpoint("London", "LHR"), "arrival": endpoint("New York", "JFK"),
        "airlines": ["British Airways"], "priceInUSD": 540, "numberOfStops": 0,
    }
    fake_openai.completions.queue(
        {"flights": [flight] * 5},
        {"seats": [{"seatNumber": "1A", "priceInUSD": 45, "isAvailable": True}]},
    )
    flights = await ai_actions.generate_sample_flight_search_results("London", "New York")
    assert len(flights["flights"]) == 4
    assert flights["flights"][0]["priceInUSD"] == 540

    seats = await ai_actions.generate_sample_seat_selection("BA123")
    assert seats == {"seats": [{"seatNumber": "1A", "priceInUSD": 45.0, "isAvailable": True}]}


@pytest.mark.asyncio
async def test_flight_status_and_price(fake_openai):
    details = dict(endpoint("London", "LHR"), airportName="Heathrow", terminal="5", gate="A10")
    fake_openai.completions.queue(
        {"flightNumber": "BA123", "departure": details, "arrival": details, "totalDistanceInMiles": 3451},
        {"totalPriceInUSD": 612.5},
    )
    status = await ai_actions.generate_sample_flight_status("BA123", "2026-10-19")
    assert status["departure"]["airportName"] == "Heathrow"

    price = await ai_actions.generate_reservation_price({"flightNumber": "BA123", "seats": ["1A"]})
    assert price == {"totalPriceInUSD": 612.5}
    assert '"flightNumber": "BA123"' in fake_openai.completions.calls[-1]["messages"][-1]["content"]


def test_system_prompt_carries_date():
    prompt = openai_service.get_system_prompt(date(2026, 10, 19))
    assert "10/19/2026" in prompt
    assert "{today}" not in prompt
