from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field
from .base import CamelSchema

class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str = ""

class ChatRequest(BaseModel):
    id: str = Field(..., min_length=1, max_length=36, description="Conversation id")
    messages: List[ChatMessage] = Field(..., min_length=1)

class ChatResponse(CamelSchema):
    id: str
    user_id: str
    messages: List[ChatMessage] = Field(default_factory=list)
    created_at: Optional[datetime] = None
