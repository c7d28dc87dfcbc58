from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from fundtheworld.core.database import get_db
from fundtheworld.core.security import get_current_user
from fundtheworld.models.user import User
from fundtheworld.services.user_service import EmailTakenError, InvalidCredentialsError, user_service
from fundtheworld.schemas.user import UserCreate, UserLogin, UserResponse
from fundtheworld.utils.response import success_response

router = APIRouter(prefix="/users", tags=["users"])

@router.post("/register", status_code=201)
async def register(user_data: UserCreate, db: Session = Depends(get_db)):
    try:
        user = user_service.create_user(db, user_data)
        return success_response(data=user, message="User created successfully")
    except EmailTakenError as e:
        raise HTTPException(status_code=409, detail=str(e))

@router.post("/login")
async def login(credentials: UserLogin, db: Session = Depends(get_db)):
    try:
        token = user_service.authenticate(db, str(credentials.email).lower(), credentials.password)
        return success_response(data=token, message="Logged in")
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=401, detail=str(e))

@router.get("/me")
async def get_me(current_user: User = Depends(get_current_user)):
    return success_response(data=UserResponse.model_validate(current_user))
