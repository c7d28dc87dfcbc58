from sqlalchemy import Column, String, JSON, ForeignKey
from sqlalchemy.orm import relationship
from .base import BaseModel

class Chat(BaseModel):
    """A conversation with the assistant, stored wholesale after every turn"""
    __tablename__ = "chats"

    messages = Column(JSON, nullable=False, default=list)  # [{"role": ..., "content": ...}]
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    user = relationship("User", back_populates="chats")
