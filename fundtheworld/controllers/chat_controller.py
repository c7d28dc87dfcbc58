import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse, StreamingResponse
from sqlalchemy.orm import Session
from fundtheworld.core.database import SessionLocal, get_db
from fundtheworld.core.security import get_current_user
from fundtheworld.models.user import User
from fundtheworld.repositories.user_repository import user_repository
from fundtheworld.schemas.chat import ChatRequest, ChatResponse
from fundtheworld.services.chat_service import ChatAccessError, ChatNotFoundError, chat_service
from fundtheworld.utils.response import success_response

logger = logging.getLogger("chat_controller")

router = APIRouter(prefix="/chat", tags=["chat"])

STREAM_HEADERS = {
    "Cache-Control": "no-cache, no-transform",
    "X-Content-Type-Options": "nosniff",
    "X-Vercel-AI-Data-Stream": "v1",
}

@router.post("")
async def send_message(
    chat_request: ChatRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        chat_service.ensure_can_write(db, current_user, chat_request.id)
    except ChatAccessError:
        raise HTTPException(status_code=401, detail="Unauthorized")
    user_id = current_user.id

    async def event_stream():
        # The stream outlives the request-scoped session
        stream_db = SessionLocal()
        try:
            user = user_repository.get_by_id(stream_db, user_id)
            async for part in chat_service.stream_chat(
                stream_db, user, chat_request.id, chat_request.messages
            ):
                yield part
        finally:
            stream_db.close()

    return StreamingResponse(event_stream(), media_type="text/plain; charset=utf-8", headers=STREAM_HEADERS)

@router.delete("")
async def delete_chat(
    id: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not id:
        raise HTTPException(status_code=404, detail="Not Found")
    try:
        chat_service.delete_chat(db, current_user, id)
        return PlainTextResponse("Chat deleted", status_code=200)
    except ChatNotFoundError:
        raise HTTPException(status_code=404, detail="Not Found")
    except ChatAccessError:
        raise HTTPException(status_code=401, detail="Unauthorized")
    except Exception as e:
        logger.error(f"Failed to delete chat {id}: {e}")
        raise HTTPException(status_code=500, detail="An error occurred while processing your request")

@router.get("/history")
async def get_chat_history(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    chats = chat_service.list_chats(db, current_user)
    return success_response(data=[ChatResponse.model_validate(chat) for chat in chats])

@router.get("/{chat_id}")
async def get_chat(chat_id: str, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        chat = chat_service.get_chat(db, current_user, chat_id)
        return success_response(data=ChatResponse.model_validate(chat))
    except ChatNotFoundError:
        raise HTTPException(status_code=404, detail="Not Found")
    except ChatAccessError:
        raise HTTPException(status_code=401, detail="Unauthorized")
