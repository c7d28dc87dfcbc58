import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from fundtheworld.core.database import get_db
from fundtheworld.schemas.organization import OrganizationCreate
from fundtheworld.services.organization_service import (
    NicknameTakenError, OrganizationNotFoundError, organization_service
)
from fundtheworld.utils.response import success_response

logger = logging.getLogger("organization_controller")

router = APIRouter(tags=["organizations"])

@router.get("/organization/all")
async def get_all_organizations(db: Session = Depends(get_db)):
    try:
        organizations = organization_service.list_organizations(db)
        return success_response(data=organizations)
    except Exception as e:
        logger.error(f"Failed to fetch organizations: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

@router.get("/organization/search")
async def search_organizations(
    q: Optional[str] = Query(None, description="Matches name, mission, location, people, tags..."),
    limit: Optional[int] = Query(None, ge=1, le=100),
    db: Session = Depends(get_db),
):
    try:
        organizations = organization_service.search(db, q, limit=limit)
        return success_response(data=organizations)
    except Exception as e:
        logger.error(f"Failed to search organizations: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

@router.get("/organization/id/{org_id}")
async def get_organization_by_id(org_id: str, db: Session = Depends(get_db)):
    try:
        return success_response(data=organization_service.get_by_id(db, org_id))
    except OrganizationNotFoundError:
        raise HTTPException(status_code=404, detail="Organization not found")
    except Exception as e:
        logger.error(f"Failed to fetch organization {org_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

@router.get("/organization/{nickname}")
async def get_organization(nickname: str, db: Session = Depends(get_db)):
    try:
        return success_response(data=organization_service.get_by_nickname(db, nickname))
    except OrganizationNotFoundError:
        raise HTTPException(status_code=404, detail="Organization not found")
    except Exception as e:
        logger.error(f"Failed to fetch organization {nickname}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

@router.post("/submit", status_code=201)
async def submit_organization(submission: OrganizationCreate, db: Session = Depends(get_db)):
    try:
        organization = organization_service.create_organization(db, submission)
        return success_response(data=organization, message="Organization created successfully")
    except NicknameTakenError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create organization: {e}")
        raise HTTPException(status_code=500, detail="Failed to create organization")
