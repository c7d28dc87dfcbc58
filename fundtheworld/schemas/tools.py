from typing import Optional
from pydantic import Field
from .base import CamelSchema
from .donation import DonationRequest

# Parameter models for the assistant's tools; their JSON schema is what the model sees

class SearchCharitiesParams(CamelSchema):
    category: str = Field(..., description="Category of charity (e.g., Education, Health, Environment)")
    keywords: str = Field("", description="Keywords to narrow down charity search")

class GetCharityInfoParams(CamelSchema):
    charity_id: str = Field(..., description="Unique identifier for the charity")

class GetOrganizationsParams(CamelSchema):
    pass

class GetOrganizationInfoParams(CamelSchema):
    org_id: Optional[str] = Field(None, description="Organization ID")
    nickname: Optional[str] = Field(None, description="Organization nickname")

class ProcessDonationParams(DonationRequest):
    pass

class CreateDonationParams(CamelSchema):
    charity_id: str = Field(..., description="Unique identifier for the charity")
    charity_name: str = Field(..., description="Name of the charity")
    donation_amount_in_usd: float = Field(..., alias="donationAmountInUSD", gt=0, description="Donation amount in USD")
    donation_amount_in_btc: Optional[float] = Field(None, alias="donationAmountInBTC", description="Donation amount in BTC")
    bitcoin_address: Optional[str] = Field(None, description="Bitcoin address for donation")
    is_recurring: bool = Field(False, description="Whether this is a recurring donation")
    recurring_frequency: Optional[str] = Field(
        None, description="Frequency of recurring donation (e.g., monthly, quarterly, yearly)"
    )
    donor_name: str = Field(..., description="Name of the donor")
    donor_email: Optional[str] = Field(None, description="Email of the donor for receipt")

class AuthorizePaymentParams(CamelSchema):
    donation_id: str = Field(..., description="Unique identifier for the donation")
    charity_name: str = Field(..., description="Name of the charity receiving the donation")
    bitcoin_address: str = Field(..., description="Bitcoin address for donation")
    donation_amount: float = Field(..., gt=0, description="Amount of BTC to donate")
    donation_purpose: str = Field("", description="Purpose of the donation for QR code message")

class VerifyPaymentParams(CamelSchema):
    donation_id: str = Field(..., description="Unique identifier for the donation")

class GenerateDonationReceiptParams(CamelSchema):
    donation_id: str = Field(..., description="Unique identifier for the donation")
    donor_name: str = Field(..., description="Name of the donor, in title case")
    charity_name: str = Field(..., description="Name of the charity")
    donation_amount_in_usd: float = Field(..., alias="donationAmountInUSD", description="Donation amount in USD")
    donation_amount_in_btc: Optional[float] = Field(
        None, alias="donationAmountInBTC", description="Donation amount in BTC if applicable"
    )
    donation_date: str = Field(..., description="ISO 8601 date of donation")
    is_recurring: bool = Field(False, description="Whether this is a recurring donation")
    estimated_impact: str = Field("", description="Estimated impact of the donation")
    bitcoin_tx_id: Optional[str] = Field(None, alias="bitcoinTxId", description="Bitcoin transaction ID if paid via Bitcoin")
