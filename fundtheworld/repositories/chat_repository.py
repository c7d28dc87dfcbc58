from typing import Any, Dict, List
from sqlalchemy.orm import Session
from .base import BaseRepository
from fundtheworld.models.chat import Chat

class ChatRepository(BaseRepository[Chat]):
    def __init__(self):
        super().__init__(Chat)

    def save_chat(self, db: Session, chat_id: str, messages: List[Dict[str, Any]], user_id: str) -> Chat:
        """Insert the chat, or replace its messages when it already exists"""
        existing = self.get_by_id(db, chat_id)
        if existing:
            existing.messages = messages
            db.commit()
            db.refresh(existing)
            return existing
        return self.create(db, {"id": chat_id, "messages": messages, "user_id": user_id})

    def get_by_user_id(self, db: Session, user_id: str) -> List[Chat]:
        return db.query(Chat).filter(
            Chat.user_id == user_id
        ).order_by(Chat.created_at.desc()).all()

chat_repository = ChatRepository()
