from sqlalchemy.orm import Session
from typing import Optional
from .base import BaseRepository
from fundtheworld.models.user import User

class UserRepository(BaseRepository[User]):
    def __init__(self):
        super().__init__(User)

    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email.lower()).first()

user_repository = UserRepository()
