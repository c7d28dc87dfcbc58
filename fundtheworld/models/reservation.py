from sqlalchemy import Column, String, JSON, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from .base import BaseModel

class Reservation(BaseModel):
    """Donation intent pending payment confirmation"""
    __tablename__ = "reservations"

    details = Column(JSON, nullable=False)
    has_completed_payment = Column(Boolean, nullable=False, default=False)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    user = relationship("User", back_populates="reservations")
