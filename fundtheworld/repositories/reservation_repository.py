from typing import Any, Dict, Optional
from sqlalchemy.orm import Session
from .base import BaseRepository
from fundtheworld.models.reservation import Reservation

class ReservationRepository(BaseRepository[Reservation]):
    def __init__(self):
        super().__init__(Reservation)

    def create_reservation(self, db: Session, reservation_id: str, user_id: str, details: Dict[str, Any]) -> Reservation:
        return self.create(db, {
            "id": reservation_id,
            "user_id": user_id,
            "details": details,
            "has_completed_payment": False,
        })

    def update_payment(self, db: Session, reservation_id: str, has_completed_payment: bool) -> Optional[Reservation]:
        reservation = self.get_by_id(db, reservation_id)
        if not reservation:
            return None
        return self.update(db, reservation, {"has_completed_payment": has_completed_payment})

reservation_repository = ReservationRepository()
