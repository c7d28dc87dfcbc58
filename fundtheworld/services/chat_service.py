from typing import Any, AsyncIterator, Dict, List, Optional
import uuid
import logging
import json
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from fundtheworld.core.config import settings
from fundtheworld.models.chat import Chat
from fundtheworld.models.user import User
from fundtheworld.repositories.chat_repository import chat_repository
from fundtheworld.schemas.chat import ChatMessage
from fundtheworld.services.chat_tools import ToolContext, chat_tools
from fundtheworld.services.openai_service import openai_service

logger = logging.getLogger("chat_service")

FINISH_REASONS = {
    "stop": "stop",
    "tool_calls": "tool-calls",
    "length": "length",
    "content_filter": "content-filter",
}


class ChatNotFoundError(Exception):
    pass


class ChatAccessError(Exception):
    pass


def encode_part(code: str, value: Any) -> str:
    """One line of the data stream: ``<code>:<json>``"""
    return f"{code}:{json.dumps(value, separators=(',', ':'))}\n"


class ChatService:
    def __init__(self, registry=chat_tools):
        self.registry = registry

    def _get_owned_chat(self, db: Session, user: User, chat_id: str) -> Chat:
        chat = chat_repository.get_by_id(db, chat_id)
        if not chat:
            raise ChatNotFoundError(f"Chat {chat_id} not found")
        if chat.user_id != user.id:
            raise ChatAccessError("Unauthorized")
        return chat

    def get_chat(self, db: Session, user: User, chat_id: str) -> Chat:
        return self._get_owned_chat(db, user, chat_id)

    def list_chats(self, db: Session, user: User) -> List[Chat]:
        return chat_repository.get_by_user_id(db, user.id)

    def delete_chat(self, db: Session, user: User, chat_id: str) -> None:
        chat = self._get_owned_chat(db, user, chat_id)
        chat_repository.delete(db, chat)
        logger.info(f"Deleted chat {chat_id}")

    def ensure_can_write(self, db: Session, user: User, chat_id: str) -> None:
        """A new id is free to claim; an existing chat must belong to the user"""
        chat = chat_repository.get_by_id(db, chat_id)
        if chat and chat.user_id != user.id:
            raise ChatAccessError("Unauthorized")

    def build_llm_messages(self, messages: List[ChatMessage]) -> List[Dict[str, Any]]:
        llm_messages = [{"role": "system", "content": openai_service.get_system_prompt()}]
        for message in messages:
            # Only the server decides the system prompt
            if message.role == "system" or not message.content:
                continue
            llm_messages.append({"role": message.role, "content": message.content})
        return llm_messages

    def save_conversation(self, db: Session, user: User, chat_id: str,
                          messages: List[ChatMessage], assistant_text: str) -> Optional[Chat]:
        history = [
            {"role": m.role, "content": m.content}
            for m in messages if m.role != "system" and m.content
        ]
        if assistant_text:
            history.append({"role": "assistant", "content": assistant_text})
        try:
            return chat_repository.save_chat(db, chat_id, history, user.id)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to save chat {chat_id}: {e}")
            return None

    async def _run_step(self, llm_messages: List[Dict[str, Any]], state: Dict[str, Any]) -> AsyncIterator[str]:
        """Stream one completion; collects text, tool calls and finish reason into ``state``"""
        stream = await openai_service.stream_completion(llm_messages, self.registry.openai_tools())
        async for chunk in stream:
            if not chunk.choices:
                continue
            choice = chunk.choices[0]
            delta = choice.delta
            if delta is not None:
                if delta.content:
                    state["text"] += delta.content
                    yield encode_part("0", delta.content)
                for call in delta.tool_calls or []:
                    entry = state["tool_calls"].setdefault(call.index, {"id": None, "name": "", "arguments": ""})
                    if call.id:
                        entry["id"] = call.id
                    if call.function is not None:
                        if call.function.name:
                            entry["name"] += call.function.name
                        if call.function.arguments:
                            entry["arguments"] += call.function.arguments
            if choice.finish_reason:
                state["finish_reason"] = choice.finish_reason

    async def stream_chat(self, db: Session, user: User, chat_id: str,
                          messages: List[ChatMessage]) -> AsyncIterator[str]:
        """
        Run the conversation through the model, executing tool calls between steps,
        and yield data stream lines. The chat is saved once the model has finished.
        """
        ctx = ToolContext(db=db, user=user)
        llm_messages = self.build_llm_messages(messages)
        assistant_text: List[str] = []
        finish_reason = "stop"

        try:
            for step in range(settings.chat_max_steps):
                state = {"text": "", "tool_calls": {}, "finish_reason": None}
                async for part in self._run_step(llm_messages, state):
                    yield part
                if state["text"]:
                    assistant_text.append(state["text"])
                finish_reason = FINISH_REASONS.get(state["finish_reason"] or "stop", "other")

                if not state["tool_calls"]:
                    break

                # 1. Record the assistant turn that requested the tools
                calls = []
                for index in sorted(state["tool_calls"]):
                    call = state["tool_calls"][index]
                    call["id"] = call["id"] or f"call_{uuid.uuid4().hex[:24]}"
                    calls.append(call)
                llm_messages.append({
                    "role": "assistant",
                    "content": state["text"] or None,
                    "tool_calls": [
                        {
                            "id": call["id"],
                            "type": "function",
                            "function": {"name": call["name"], "arguments": call["arguments"] or "{}"},
                        }
                        for call in calls
                    ],
                })

                # 2. Execute each tool and feed the results back
                for call in calls:
                    try:
                        args = json.loads(call["arguments"]) if call["arguments"] else {}
                    except ValueError:
                        args = {}
                    yield encode_part("9", {"toolCallId": call["id"], "toolName": call["name"], "args": args})
                    result = await self.registry.dispatch(call["name"], call["arguments"], ctx)
                    yield encode_part("a", {"toolCallId": call["id"], "result": result})
                    llm_messages.append({
                        "role": "tool",
                        "tool_call_id": call["id"],
                        "content": json.dumps(result),
                    })
                logger.info(f"Chat {chat_id}: step {step + 1} ran tools {[c['name'] for c in calls]}")
        except Exception as e:
            logger.error(f"Error generating response stream for chat {chat_id}: {e}")
            yield encode_part("3", "An error occurred while processing your request. Please try again.")
            yield encode_part("d", {"finishReason": "error"})
            return

        self.save_conversation(db, user, chat_id, messages, "\n".join(assistant_text))
        yield encode_part("d", {"finishReason": finish_reason})

chat_service = ChatService()
