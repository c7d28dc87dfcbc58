from typing import List
from pydantic import Field
from .base import CamelSchema

# Mock travel data generated by the model

class FlightEndpoint(CamelSchema):
    city_name: str = Field(..., description="Name of the city")
    airport_code: str = Field(..., description="IATA code of the airport")
    timestamp: str = Field(..., description="ISO 8601 date and time")

class FlightEndpointDetails(FlightEndpoint):
    airport_name: str = Field(..., description="Full name of the airport")
    terminal: str = Field(..., description="Terminal")
    gate: str = Field(..., description="Gate")

class FlightStatus(CamelSchema):
    flight_number: str = Field(..., description="Flight number, e.g., BA123, AA31")
    departure: FlightEndpointDetails
    arrival: FlightEndpointDetails
    total_distance_in_miles: float = Field(..., description="Total flight distance in miles")

class FlightOffer(CamelSchema):
    id: str = Field(..., description="Unique identifier for the flight, like BA123, AA31, etc.")
    departure: FlightEndpoint
    arrival: FlightEndpoint
    airlines: List[str] = Field(..., description="Airline names, e.g., American Airlines, Emirates")
    price_in_usd: float = Field(..., alias="priceInUSD", description="Flight price in US dollars")
    number_of_stops: int = Field(..., description="Number of stops during the flight")

class FlightSearchResults(CamelSchema):
    flights: List[FlightOffer] = Field(..., description="At most 4 flights")

class Seat(CamelSchema):
    seat_number: str = Field(..., description="Seat identifier, e.g., 12A, 15C")
    price_in_usd: float = Field(..., alias="priceInUSD", description="Seat price in US dollars, less than $99")
    is_available: bool = Field(..., description="Whether the seat is available for booking")

class SeatMap(CamelSchema):
    seats: List[Seat] = Field(..., description="6 seats on each of 5 rows")

class ReservationPrice(CamelSchema):
    total_price_in_usd: float = Field(..., alias="totalPriceInUSD", description="Total reservation price in US dollars")
