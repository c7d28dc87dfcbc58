import json
import re
from datetime import date, datetime
from typing import List, Optional, Any
from pydantic import AliasChoices, EmailStr, Field, field_validator
from .base import CamelSchema

# Legacy/P2SH base58 or lowercase bech32
BITCOIN_ADDRESS_PATTERN = re.compile(
    r"^(?:[13][a-km-zA-HJ-NP-Z1-9]{25,34}|bc1[ac-hj-np-z02-9]{11,71})$"
)


def parse_tags(value: Any) -> List[str]:
    """Normalize tags stored as a list, a JSON-encoded list or a comma separated string"""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return []
        if value.startswith("["):
            try:
                value = json.loads(value)
            except ValueError:
                value = value.strip("[]").split(",")
        else:
            value = value.split(",")
    if not isinstance(value, (list, tuple)):
        return [str(value)]
    return [str(tag).strip().strip('"') for tag in value if str(tag).strip()]


def is_valid_bitcoin_address(address: Optional[str]) -> bool:
    return bool(address) and bool(BITCOIN_ADDRESS_PATTERN.match(address))


class OrganizationCreate(CamelSchema):
    nickname: Optional[str] = Field(None, max_length=100)
    title: str = Field(..., max_length=500)
    email: EmailStr
    bitcoin_address: str
    image: str = ""
    banner: Optional[str] = None
    mission: str = ""
    tags: List[str] = Field(default_factory=list)
    verified: bool = False
    premium: bool = False
    bg_gradient: Optional[str] = Field(
        None,
        max_length=100,
        validation_alias=AliasChoices("bgGradient", "bggradient", "bg_gradient"),
    )
    location: Optional[str] = Field(None, max_length=100)
    full_context: Optional[str] = None
    website: Optional[str] = None
    origin_date: Optional[date] = Field(
        None,
        validation_alias=AliasChoices("originDate", "startDate", "origin_date"),
    )
    registration_number: Optional[str] = Field(None, max_length=100)
    president: Optional[str] = None
    founder: Optional[str] = None
    custom_message: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Missing required fields")
        return v

    @field_validator("bitcoin_address")
    @classmethod
    def check_bitcoin_address(cls, v: str) -> str:
        v = v.strip()
        if not is_valid_bitcoin_address(v):
            raise ValueError("Invalid Bitcoin address format")
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v):
        return parse_tags(v)

    @field_validator("origin_date", mode="before")
    @classmethod
    def empty_date_is_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return None
            # Accept full ISO timestamps from date pickers
            if "T" in v:
                return v.split("T", 1)[0]
        return v

    @field_validator("nickname", mode="before")
    @classmethod
    def empty_nickname_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class OrganizationUpdate(CamelSchema):
    title: Optional[str] = None
    mission: Optional[str] = None
    image: Optional[str] = None
    banner: Optional[str] = None
    tags: Optional[List[str]] = None
    verified: Optional[bool] = None
    premium: Optional[bool] = None
    bg_gradient: Optional[str] = None
    bitcoin_address: Optional[str] = None
    location: Optional[str] = None
    full_context: Optional[str] = None
    website: Optional[str] = None
    custom_message: Optional[str] = None

    @field_validator("bitcoin_address")
    @classmethod
    def check_bitcoin_address(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_valid_bitcoin_address(v):
            raise ValueError("Invalid Bitcoin address format")
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v):
        return None if v is None else parse_tags(v)


class OrganizationResponse(CamelSchema):
    id: str
    nickname: str
    image: str = ""
    title: str
    mission: str = ""
    tags: List[str] = Field(default_factory=list)
    verified: bool = False
    premium: bool = False
    bg_gradient: Optional[str] = None
    bitcoin_address: Optional[str] = None
    location: Optional[str] = None
    full_context: Optional[str] = None
    website: Optional[str] = None
    email: Optional[str] = None
    origin_date: Optional[date] = None
    registration_number: Optional[str] = None
    president: Optional[str] = None
    founder: Optional[str] = None
    banner: Optional[str] = None
    custom_message: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v):
        return parse_tags(v)

    @field_validator("image", "mission", mode="before")
    @classmethod
    def none_is_empty(cls, v):
        return "" if v is None else v


class OrganizationSummary(CamelSchema):
    """Compact view handed to the assistant"""
    id: str
    nickname: str
    title: str
    mission: str = ""
    tags: List[str] = Field(default_factory=list)
    verified: bool = False
    premium: bool = False
    location: Optional[str] = None
    bitcoin_address: Optional[str] = None
