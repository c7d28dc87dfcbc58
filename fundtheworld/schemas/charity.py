from typing import List
from pydantic import Field
from .base import CamelSchema

# Typed outputs requested from the model for charity lookups

class CharityLocation(CamelSchema):
    city: str = Field(..., description="City where the charity is based")
    country: str = Field(..., description="Country where the charity is based")

class CharitySearchResult(CamelSchema):
    id: str = Field(..., description="Unique identifier for the charity")
    name: str = Field(..., description="Name of the charity organization")
    category: str = Field(..., description="Primary category of the charity (e.g., Education, Health, Environment)")
    description: str = Field(..., description="Brief description of the charity's mission")
    location: CharityLocation
    impact_metric: str = Field(..., description="Primary impact metric (e.g., '100 meals per $50', '10 trees planted per $20')")
    matching_donation: bool = Field(..., description="Whether this charity has matching donations available")
    minimum_donation_in_usd: float = Field(..., alias="minimumDonationInUSD", description="Minimum suggested donation in US dollars")

class CharitySearchResults(CamelSchema):
    charities: List[CharitySearchResult] = Field(..., description="At most 4 charities")

class CharityHeadquarters(CamelSchema):
    headquarters: str = Field(..., description="City and country of headquarters")
    operating_regions: List[str] = Field(..., description="Regions where the charity operates")

class CharityFinancials(CamelSchema):
    total_annual_budget: float = Field(..., description="Annual operating budget in USD")
    program_expense_percentage: float = Field(..., description="Percentage of funds that go to programs")
    admin_expense_percentage: float = Field(..., description="Percentage of funds that go to administration")
    fundraising_expense_percentage: float = Field(..., description="Percentage of funds that go to fundraising")

class ImpactMetric(CamelSchema):
    description: str = Field(..., description="Description of impact metric")
    value: str = Field(..., description="Quantified impact per dollar amount")

class CharityDetails(CamelSchema):
    id: str = Field(..., description="Unique identifier for the charity")
    name: str = Field(..., description="Name of the charity organization")
    founded: int = Field(..., description="Year the charity was founded")
    mission: str = Field(..., description="The charity's mission statement")
    category: str = Field(..., description="Primary category of charity")
    subcategories: List[str] = Field(..., description="List of subcategories/focus areas")
    location: CharityHeadquarters
    financials: CharityFinancials
    impact_metrics: List[ImpactMetric]
    website_url: str = Field(..., description="URL to the charity's website")
    tax_deductible: bool = Field(..., description="Whether donations are tax-deductible")
