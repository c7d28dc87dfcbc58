from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from fundtheworld.core.database import get_db
from fundtheworld.core.security import get_current_user
from fundtheworld.models.reservation import Reservation
from fundtheworld.models.user import User
from fundtheworld.repositories.reservation_repository import reservation_repository
from fundtheworld.schemas.reservation import ReservationResponse
from fundtheworld.utils.response import success_response

router = APIRouter(prefix="/reservation", tags=["reservation"])

def get_owned_reservation(reservation_id: str, user: User, db: Session) -> Reservation:
    reservation = reservation_repository.get_by_id(db, reservation_id)
    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")
    if reservation.user_id != user.id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return reservation

@router.get("/{reservation_id}")
async def get_reservation(reservation_id: str, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    reservation = get_owned_reservation(reservation_id, current_user, db)
    return success_response(data=ReservationResponse.model_validate(reservation))

@router.post("/{reservation_id}/complete")
async def complete_payment(reservation_id: str, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    get_owned_reservation(reservation_id, current_user, db)
    reservation = reservation_repository.update_payment(db, reservation_id, True)
    return success_response(data=ReservationResponse.model_validate(reservation), message="Payment recorded")
