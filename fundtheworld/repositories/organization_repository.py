from typing import Optional
from sqlalchemy.orm import Session
from .base import BaseRepository
from fundtheworld.models.organization import Organization

class OrganizationRepository(BaseRepository[Organization]):
    def __init__(self):
        super().__init__(Organization)

    def get_by_nickname(self, db: Session, nickname: str) -> Optional[Organization]:
        return db.query(Organization).filter(Organization.nickname == nickname).first()

    def nickname_exists(self, db: Session, nickname: str) -> bool:
        return db.query(Organization.id).filter(Organization.nickname == nickname).first() is not None

organization_repository = OrganizationRepository()
