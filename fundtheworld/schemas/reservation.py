from datetime import datetime
from typing import Any, Dict, Optional
from .base import CamelSchema

class ReservationResponse(CamelSchema):
    id: str
    user_id: str
    details: Dict[str, Any]
    has_completed_payment: bool
    created_at: Optional[datetime] = None
