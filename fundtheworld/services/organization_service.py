import logging
import re
from typing import Any, Dict, List, Optional
from rapidfuzz import fuzz
from sqlalchemy.orm import Session
from fundtheworld.core.config import settings
from fundtheworld.models.organization import Organization
from fundtheworld.repositories.organization_repository import organization_repository
from fundtheworld.schemas.organization import (
    OrganizationCreate, OrganizationResponse, OrganizationSummary, OrganizationUpdate
)
from fundtheworld.services.cache import TTLCache

logger = logging.getLogger("organization_service")

ALL_KEY = "__all__"
FUZZY_THRESHOLD = 80


class OrganizationNotFoundError(Exception):
    pass


class NicknameTakenError(Exception):
    pass


def slugify(value: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
    return slug[:100] or "organization"


def searchable_fields(org: OrganizationResponse) -> List[str]:
    fields = [
        org.title, org.mission, org.location, org.full_context, org.president,
        org.founder, org.email, org.registration_number,
    ]
    return [f for f in fields if f] + list(org.tags)


class OrganizationService:
    def __init__(self, ttl: Optional[float] = None):
        self.list_cache = TTLCache(ttl if ttl is not None else settings.cache_ttl_seconds)
        self.detail_cache = TTLCache(ttl if ttl is not None else settings.cache_ttl_seconds)

    def invalidate_cache(self) -> None:
        self.list_cache.clear()
        self.detail_cache.clear()

    def list_organizations(self, db: Session) -> List[OrganizationResponse]:
        cached = self.list_cache.get(ALL_KEY)
        if cached is not None:
            return cached
        organizations = [
            OrganizationResponse.model_validate(org)
            for org in organization_repository.get_all(db)
        ]
        self.list_cache.set(ALL_KEY, organizations)
        return organizations

    def get_by_nickname(self, db: Session, nickname: str) -> OrganizationResponse:
        cached = self.detail_cache.get(nickname)
        if cached is not None:
            return cached
        org = organization_repository.get_by_nickname(db, nickname)
        if not org:
            raise OrganizationNotFoundError(f"Organization '{nickname}' not found")
        result = OrganizationResponse.model_validate(org)
        self.detail_cache.set(nickname, result)
        return result

    def get_by_id(self, db: Session, org_id: str) -> OrganizationResponse:
        org = organization_repository.get_by_id(db, org_id)
        if not org:
            raise OrganizationNotFoundError(f"Organization '{org_id}' not found")
        return OrganizationResponse.model_validate(org)

    def find(self, db: Session, org_id: Optional[str] = None, nickname: Optional[str] = None) -> OrganizationResponse:
        """Look up by id first, then by nickname; an id that looks like a slug is tried as a nickname"""
        if org_id:
            try:
                return self.get_by_id(db, org_id)
            except OrganizationNotFoundError:
                if not nickname:
                    nickname = org_id
        if nickname:
            return self.get_by_nickname(db, nickname)
        raise OrganizationNotFoundError("Organization id or nickname is required")

    def _unique_nickname(self, db: Session, submission: OrganizationCreate) -> str:
        if submission.nickname:
            nickname = slugify(submission.nickname)
            if organization_repository.nickname_exists(db, nickname):
                raise NicknameTakenError(f"Nickname '{nickname}' is already taken")
            return nickname
        base = slugify(submission.title)
        nickname, suffix = base, 2
        while organization_repository.nickname_exists(db, nickname):
            nickname = f"{base}-{suffix}"
            suffix += 1
        return nickname

    def create_organization(self, db: Session, submission: OrganizationCreate) -> OrganizationResponse:
        values = submission.model_dump(by_alias=False)
        values["nickname"] = self._unique_nickname(db, submission)
        values["email"] = str(submission.email)
        # Verification and premium status are granted by staff, never by the submitter
        values["verified"] = False
        values["premium"] = False
        org = organization_repository.create(db, values)
        self.invalidate_cache()
        logger.info(f"Created organization {org.id} ({org.nickname})")
        return OrganizationResponse.model_validate(org)

    def update_organization(self, db: Session, org_id: str, changes: OrganizationUpdate) -> OrganizationResponse:
        org = organization_repository.get_by_id(db, org_id)
        if not org:
            raise OrganizationNotFoundError(f"Organization '{org_id}' not found")
        values = changes.model_dump(by_alias=False, exclude_unset=True)
        org = organization_repository.update(db, org, values)
        self.invalidate_cache()
        return OrganizationResponse.model_validate(org)

    def search(self, db: Session, query: Optional[str], limit: Optional[int] = None) -> List[OrganizationResponse]:
        organizations = self.list_organizations(db)
        query = (query or "").strip().lower()
        if not query:
            return organizations[:limit] if limit else organizations

        matches = [
            org for org in organizations
            if any(query in field.lower() for field in searchable_fields(org))
        ]
        if not matches:
            # Tolerate typos once exact substrings give nothing
            scored = []
            for org in organizations:
                candidates = [c for c in [org.title, org.mission] + list(org.tags) if c]
                score = max((fuzz.partial_ratio(query, c.lower()) for c in candidates), default=0)
                if score >= FUZZY_THRESHOLD:
                    scored.append((score, org))
            scored.sort(key=lambda x: -x[0])
            matches = [org for _, org in scored]
        return matches[:limit] if limit else matches

    def search_by_category(self, db: Session, category: str, keywords: str = "", limit: int = 4) -> List[OrganizationResponse]:
        terms = [t for t in re.split(r"[\s,]+", f"{category} {keywords}".lower()) if len(t) >= 3]
        if not terms:
            return []
        scored = []
        for org in self.list_organizations(db):
            haystack = [f.lower() for f in searchable_fields(org)]
            score = 0
            for term in terms:
                if any(term in field for field in haystack):
                    score += 2
                elif any(fuzz.partial_ratio(term, tag.lower()) >= FUZZY_THRESHOLD for tag in org.tags):
                    score += 1
            if score > 0:
                scored.append((score, org))
        scored.sort(key=lambda x: -x[0])
        return [org for _, org in scored[:limit]]

    def summarize(self, org: OrganizationResponse) -> Dict[str, Any]:
        return OrganizationSummary(
            id=org.id,
            nickname=org.nickname,
            title=org.title,
            mission=org.mission,
            tags=org.tags,
            verified=org.verified,
            premium=org.premium,
            location=org.location,
            bitcoin_address=org.bitcoin_address,
        ).model_dump(by_alias=True)

organization_service = OrganizationService()
