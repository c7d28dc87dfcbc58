from sqlalchemy.orm import Session
from typing import Optional
from fundtheworld.core.security import create_access_token, hash_password, verify_password
from fundtheworld.repositories.user_repository import user_repository
from fundtheworld.schemas.user import TokenResponse, UserCreate, UserResponse
from fundtheworld.models.user import User

class EmailTakenError(Exception):
    pass

class InvalidCredentialsError(Exception):
    pass

class UserService:
    def create_user(self, db: Session, user_data: UserCreate) -> UserResponse:
        email = str(user_data.email).lower()
        if user_repository.get_by_email(db, email):
            raise EmailTakenError(f"User {email} already exists")
        db_user = user_repository.create(db, {"email": email, "password": hash_password(user_data.password)})
        return UserResponse.model_validate(db_user)

    def authenticate(self, db: Session, email: str, password: str) -> TokenResponse:
        db_user: Optional[User] = user_repository.get_by_email(db, email)
        if not db_user or not verify_password(password, db_user.password):
            raise InvalidCredentialsError("Invalid email or password")
        return TokenResponse(access_token=create_access_token(db_user.id))

user_service = UserService()
