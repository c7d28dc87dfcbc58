import json
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type, Union
from urllib.parse import quote
from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from fundtheworld.models.user import User
from fundtheworld.repositories.reservation_repository import reservation_repository
from fundtheworld.schemas.organization import OrganizationResponse, is_valid_bitcoin_address
from fundtheworld.schemas.tools import (
    AuthorizePaymentParams, CreateDonationParams, GenerateDonationReceiptParams,
    GetCharityInfoParams, GetOrganizationInfoParams, GetOrganizationsParams,
    ProcessDonationParams, SearchCharitiesParams, VerifyPaymentParams,
)
from fundtheworld.services import ai_actions
from fundtheworld.services.donation_service import donation_service
from fundtheworld.services.organization_service import OrganizationNotFoundError, organization_service

logger = logging.getLogger("chat_tools")


@dataclass
class ToolContext:
    db: Session
    user: Optional[User] = None


Handler = Callable[[Any, ToolContext], Awaitable[Dict[str, Any]]]


@dataclass
class Tool:
    name: str
    description: str
    params_model: Type[BaseModel]
    handler: Handler

    def openai_schema(self) -> Dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.params_model.model_json_schema(),
            },
        }


class ToolRegistry:
    def __init__(self):
        self.tools: Dict[str, Tool] = {}

    def register(self, name: str, description: str, params_model: Type[BaseModel]):
        def decorator(handler: Handler) -> Handler:
            self.tools[name] = Tool(name, description, params_model, handler)
            return handler
        return decorator

    def openai_tools(self) -> List[Dict[str, Any]]:
        return [tool.openai_schema() for tool in self.tools.values()]

    async def dispatch(self, name: str, arguments: Union[str, Dict[str, Any], None], ctx: ToolContext) -> Dict[str, Any]:
        """Run a tool call from the model; bad calls come back as an ``error`` result the model can read"""
        tool = self.tools.get(name)
        if tool is None:
            return {"error": f"Unknown tool: {name}"}
        try:
            if isinstance(arguments, str):
                arguments = json.loads(arguments) if arguments.strip() else {}
            params = tool.params_model.model_validate(arguments or {})
        except (ValueError, ValidationError) as e:
            logger.warning(f"Invalid arguments for tool {name}: {e}")
            return {"error": f"Invalid arguments for {name}: {e}"}
        try:
            return await tool.handler(params, ctx)
        except Exception as e:
            logger.error(f"Tool {name} failed: {e}")
            return {"error": f"{name} failed, please try again"}


chat_tools = ToolRegistry()


def charity_from_organization(org: OrganizationResponse) -> Dict[str, Any]:
    return {
        "id": org.id,
        "nickname": org.nickname,
        "name": org.title,
        "category": org.tags[0] if org.tags else "",
        "description": org.mission,
        "location": org.location,
        "verified": org.verified,
        "bitcoinAddress": org.bitcoin_address,
    }


def organization_placeholder(org_id: Optional[str], nickname: Optional[str]) -> Dict[str, Any]:
    return {
        "id": str(org_id or nickname or "unknown"),
        "nickname": str(nickname or "unknown"),
        "title": "Organization not found",
        "mission": "Information unavailable",
        "image": "",
        "tags": [],
    }


@chat_tools.register(
    "searchCharities",
    "Search for charities based on category and keywords",
    SearchCharitiesParams,
)
async def search_charities(params: SearchCharitiesParams, ctx: ToolContext) -> Dict[str, Any]:
    matches = organization_service.search_by_category(ctx.db, params.category, params.keywords)
    if matches:
        return {"source": "directory", "charities": [charity_from_organization(org) for org in matches]}
    try:
        result = await ai_actions.find_charities(params.category, params.keywords)
    except Exception as e:
        logger.error(f"Charity search generation failed: {e}")
        return {"charities": []}
    result["source"] = "generated"
    return result


@chat_tools.register(
    "getCharityInfo",
    "Get detailed information about a specific charity",
    GetCharityInfoParams,
)
async def get_charity_info(params: GetCharityInfoParams, ctx: ToolContext) -> Dict[str, Any]:
    try:
        org = organization_service.find(ctx.db, org_id=params.charity_id)
        return org.model_dump(mode="json", by_alias=True)
    except OrganizationNotFoundError:
        pass
    try:
        return await ai_actions.get_charity_details(params.charity_id)
    except Exception as e:
        logger.error(f"Charity details generation failed for {params.charity_id}: {e}")
        return {"error": "Charity details unavailable", "charityId": params.charity_id}


@chat_tools.register(
    "getOrganizations",
    "Get list of all available charity organizations",
    GetOrganizationsParams,
)
async def get_organizations(params: GetOrganizationsParams, ctx: ToolContext) -> Dict[str, Any]:
    try:
        organizations = organization_service.list_organizations(ctx.db)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching organizations: {e}")
        return {"organizations": []}
    return {"organizations": [organization_service.summarize(org) for org in organizations]}


@chat_tools.register(
    "getOrganizationInfo",
    "Get detailed information about a specific organization",
    GetOrganizationInfoParams,
)
async def get_organization_info(params: GetOrganizationInfoParams, ctx: ToolContext) -> Dict[str, Any]:
    try:
        org = organization_service.find(ctx.db, org_id=params.org_id, nickname=params.nickname)
    except OrganizationNotFoundError:
        return organization_placeholder(params.org_id, params.nickname)
    details = org.model_dump(mode="json", by_alias=True)
    details["fullContext"] = details.get("fullContext") or org.mission
    return details


@chat_tools.register(
    "processDonation",
    "Calculate donation details including impact and receipt",
    ProcessDonationParams,
)
async def process_donation(params: ProcessDonationParams, ctx: ToolContext) -> Dict[str, Any]:
    try:
        calculation = donation_service.calculate(params)
    except ValueError as e:
        logger.warning(f"Falling back to bare donation figures: {e}")
        calculation = donation_service.fallback(
            params.charity_id, params.charity_name, params.donor_name, params.donation_amount_in_usd
        )
    try:
        org = organization_service.find(ctx.db, org_id=params.charity_id)
        calculation.bitcoin_address = org.bitcoin_address
    except OrganizationNotFoundError:
        pass
    return calculation.model_dump(mode="json", by_alias=True)


@chat_tools.register(
    "createDonation",
    "Create a donation record in the database",
    CreateDonationParams,
)
async def create_donation(params: CreateDonationParams, ctx: ToolContext) -> Dict[str, Any]:
    if ctx.user is None:
        return {"error": "User is not signed in to perform this action!"}
    donation_id = str(uuid.uuid4())
    details = params.model_dump(mode="json", by_alias=True, exclude_none=True)
    reservation_repository.create_reservation(ctx.db, donation_id, ctx.user.id, details)
    logger.info(f"Created donation {donation_id} for user {ctx.user.id}")
    return {"id": donation_id, **details, "success": True}


@chat_tools.register(
    "authorizePayment",
    "User will enter credentials to authorize donation payment, wait for user to respond when they are done",
    AuthorizePaymentParams,
)
async def authorize_payment(params: AuthorizePaymentParams, ctx: ToolContext) -> Dict[str, Any]:
    if not is_valid_bitcoin_address(params.bitcoin_address):
        return {"error": "Invalid Bitcoin address format", "donationId": params.donation_id}
    payment = params.model_dump(mode="json", by_alias=True)
    payment["paymentUri"] = (
        f"bitcoin:{params.bitcoin_address}?amount={params.donation_amount:.8f}"
        f"&message={quote(params.donation_purpose)}"
    )
    return payment


@chat_tools.register(
    "verifyPayment",
    "Verify donation payment status",
    VerifyPaymentParams,
)
async def verify_payment(params: VerifyPaymentParams, ctx: ToolContext) -> Dict[str, Any]:
    reservation = reservation_repository.get_by_id(ctx.db, params.donation_id)
    completed = bool(reservation and reservation.has_completed_payment)
    # Another user's donation reads as unpaid
    if reservation and (ctx.user is None or reservation.user_id != ctx.user.id):
        completed = False
    return {"donationId": params.donation_id, "hasCompletedPayment": completed}


@chat_tools.register(
    "generateDonationReceipt",
    "Generate a receipt for a completed donation",
    GenerateDonationReceiptParams,
)
async def generate_donation_receipt(params: GenerateDonationReceiptParams, ctx: ToolContext) -> Dict[str, Any]:
    return params.model_dump(mode="json", by_alias=True, exclude_none=True)
