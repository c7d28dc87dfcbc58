from typing import Optional
from pydantic import Field
from .base import CamelSchema

class DonationRequest(CamelSchema):
    charity_id: str = Field(..., description="Unique identifier for the charity")
    charity_name: str = Field(..., description="Name of the charity")
    donation_amount_in_usd: float = Field(..., alias="donationAmountInUSD", gt=0, description="Donation amount in USD")
    is_recurring: bool = Field(False, description="Whether this is a recurring donation")
    recurring_frequency: Optional[str] = Field(
        None, description="Frequency of recurring donation (e.g., monthly, quarterly, yearly)"
    )
    donor_name: str = Field(..., description="Name of the donor")
    matching_enabled: bool = Field(False, description="Whether to enable donation matching if available")
    bitcoin_preferred: Optional[bool] = Field(None, description="Whether the user prefers to donate with Bitcoin")

class DonationCalculation(CamelSchema):
    charity_id: str
    charity_name: str
    donor_name: str
    donation_amount_in_usd: float = Field(..., alias="donationAmountInUSD")
    total_donation_in_usd: float = Field(..., alias="totalDonationInUSD")
    total_donation_in_btc: float = Field(..., alias="totalDonationInBTC")
    transaction_fee_in_usd: float = Field(..., alias="transactionFeeInUSD")
    tax_deduction_estimate_in_usd: float = Field(..., alias="taxDeductionEstimateInUSD")
    matching_amount_in_usd: float = Field(..., alias="matchingAmountInUSD")
    annual_donation_in_usd: Optional[float] = Field(None, alias="annualDonationInUSD")
    is_recurring: bool = False
    recurring_frequency: Optional[str] = None
    estimated_impact: str
    receipt_id: str
    btc_price_in_usd: float = Field(..., alias="btcPriceInUSD")
    bitcoin_address: Optional[str] = None
    donation_purpose: Optional[str] = None
