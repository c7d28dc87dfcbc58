import uuid
from typing import Optional
from fundtheworld.core.config import settings
from fundtheworld.schemas.donation import DonationCalculation, DonationRequest

MATCHING_RATE = 0.20
TRANSACTION_FEE_RATE = 0.01
TRANSACTION_FEE_CAP_USD = 10.0
TAX_DEDUCTION_RATE = 0.25
USD_PER_MEAL = 2.0
# Quoted by the fallback when the configured price is unusable
FALLBACK_BTC_PRICE_USD = 65000.0

PAYMENTS_PER_YEAR = {
    "weekly": 52,
    "monthly": 12,
    "quarterly": 4,
    "yearly": 1,
    "annually": 1,
}


def round_usd(value: float) -> float:
    return round(value, 2)


def usd_to_btc(amount_usd: float, btc_price_usd: Optional[float] = None) -> float:
    price = btc_price_usd or settings.btc_price_usd
    if price <= 0:
        raise ValueError("BTC price must be positive")
    return round(amount_usd / price, 8)


def new_receipt_id() -> str:
    return f"rcpt_{uuid.uuid4().hex[:12]}"


class DonationService:
    def __init__(self, btc_price_usd: Optional[float] = None):
        self.btc_price_usd = btc_price_usd

    @property
    def price(self) -> float:
        return self.btc_price_usd or settings.btc_price_usd

    def annual_amount(self, amount_usd: float, is_recurring: bool, frequency: Optional[str]) -> Optional[float]:
        if not is_recurring:
            return None
        per_year = PAYMENTS_PER_YEAR.get((frequency or "monthly").strip().lower())
        if per_year is None:
            return None
        return round_usd(amount_usd * per_year)

    def estimate_impact(self, total_usd: float, is_recurring: bool, frequency: Optional[str]) -> str:
        meals = int(total_usd // USD_PER_MEAL)
        text = f"Your ${total_usd:,.2f} donation could provide approximately {meals} meals (estimate)"
        if is_recurring:
            text += f", repeated {(frequency or 'monthly').lower()}"
        return text + "."

    def calculate(self, request: DonationRequest) -> DonationCalculation:
        amount = request.donation_amount_in_usd
        if amount <= 0:
            raise ValueError("Donation amount must be positive")

        matching = round_usd(amount * MATCHING_RATE) if request.matching_enabled else 0.0
        total_usd = round_usd(amount + matching)
        fee = round_usd(min(amount * TRANSACTION_FEE_RATE, TRANSACTION_FEE_CAP_USD))
        tax = round_usd(amount * TAX_DEDUCTION_RATE)

        return DonationCalculation(
            charity_id=request.charity_id,
            charity_name=request.charity_name,
            donor_name=request.donor_name,
            donation_amount_in_usd=round_usd(amount),
            total_donation_in_usd=total_usd,
            total_donation_in_btc=usd_to_btc(total_usd, self.price),
            transaction_fee_in_usd=fee,
            tax_deduction_estimate_in_usd=tax,
            matching_amount_in_usd=matching,
            annual_donation_in_usd=self.annual_amount(total_usd, request.is_recurring, request.recurring_frequency),
            is_recurring=request.is_recurring,
            recurring_frequency=request.recurring_frequency if request.is_recurring else None,
            estimated_impact=self.estimate_impact(total_usd, request.is_recurring, request.recurring_frequency),
            receipt_id=new_receipt_id(),
            btc_price_in_usd=self.price,
            donation_purpose=f"Donation to {request.charity_name}",
        )

    def fallback(self, charity_id: str, charity_name: str, donor_name: str, amount_usd: float) -> DonationCalculation:
        """Bare figures used when the full calculation cannot run; no matching, fee or deduction"""
        amount = max(amount_usd or 0.0, 0.0)
        price = self.price if self.price > 0 else FALLBACK_BTC_PRICE_USD
        return DonationCalculation(
            charity_id=charity_id,
            charity_name=charity_name,
            donor_name=donor_name,
            donation_amount_in_usd=round_usd(amount),
            total_donation_in_usd=round_usd(amount),
            total_donation_in_btc=usd_to_btc(amount, price),
            transaction_fee_in_usd=0.0,
            tax_deduction_estimate_in_usd=0.0,
            matching_amount_in_usd=0.0,
            estimated_impact="Your donation will help support this organization's mission",
            receipt_id="receipt_placeholder",
            btc_price_in_usd=price,
            donation_purpose=f"Donation to {charity_name}",
        )

donation_service = DonationService()
