import json
from typing import Any, Dict
from fundtheworld.schemas.charity import CharityDetails, CharitySearchResults
from fundtheworld.schemas.flight import FlightSearchResults, FlightStatus, ReservationPrice, SeatMap
from fundtheworld.services.openai_service import openai_service


MAX_SEARCH_RESULTS = 4


async def find_charities(category: str, keywords: str) -> Dict[str, Any]:
    result = await openai_service.generate_object(
        f"Generate search results for charities in the {category} category "
        f"with focus on {keywords}, limit to {MAX_SEARCH_RESULTS} results",
        CharitySearchResults,
    )
    charities = result.charities[:MAX_SEARCH_RESULTS]
    return {"charities": [c.model_dump(by_alias=True) for c in charities]}


async def get_charity_details(charity_id: str) -> Dict[str, Any]:
    details = await openai_service.generate_object(
        f"Detailed information for charity with ID {charity_id}",
        CharityDetails,
    )
    return details.model_dump(by_alias=True)


async def generate_sample_flight_status(flight_number: str, date: str) -> Dict[str, Any]:
    status = await openai_service.generate_object(
        f"Flight status for flight number {flight_number} on {date}",
        FlightStatus,
    )
    return status.model_dump(by_alias=True)


async def generate_sample_flight_search_results(origin: str, destination: str) -> Dict[str, Any]:
    results = await openai_service.generate_object(
        f"Generate search results for flights from {origin} to {destination}, "
        f"limit to {MAX_SEARCH_RESULTS} results",
        FlightSearchResults,
    )
    return {"flights": [f.model_dump(by_alias=True) for f in results.flights[:MAX_SEARCH_RESULTS]]}


async def generate_sample_seat_selection(flight_number: str) -> Dict[str, Any]:
    seat_map = await openai_service.generate_object(
        f"Simulate available seats for flight number {flight_number}, 6 seats on each row "
        "and 5 rows in total, adjust pricing based on location of seat",
        SeatMap,
    )
    return {"seats": [s.model_dump(by_alias=True) for s in seat_map.seats]}


async def generate_reservation_price(details: Dict[str, Any]) -> Dict[str, Any]:
    price = await openai_service.generate_object(
        f"Generate price for the following reservation \n\n {json.dumps(details, indent=2)}",
        ReservationPrice,
    )
    return price.model_dump(by_alias=True)
