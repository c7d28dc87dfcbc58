import openai
from datetime import date
from typing import Any, Dict, List, Optional, Type, TypeVar
from pydantic import BaseModel
from fundtheworld.core.config import settings
import logging
import os

logger = logging.getLogger("openai_service")

T = TypeVar("T", bound=BaseModel)

DEFAULT_SYSTEM_PROMPT = """
- you are 'Fund The World', a platform that helps users discover and donate to charity organizations!
- use the tools to look up organizations and to calculate, create and verify donations
- keep your responses limited to a sentence, unless the user wants a good understanding of a specific charity
- today's date is {today}
- ask follow up questions to nudge user into the optimal flow: search, details, calculate, create, pay, verify, receipt
"""


class OpenAIService:
    def __init__(self):
        if not settings.openai_api_key:
            raise ValueError("OPENAI_API_KEY not found in environment variables")
        if not settings.openai_model:
            raise ValueError("OPENAI_MODEL not found in environment variables")

        self.client = openai.AsyncOpenAI(api_key=settings.openai_api_key)
        self.model = settings.openai_model

        # Load system prompt from file if present
        prompt_path = os.path.join(os.path.dirname(__file__), "../data/system_prompt.txt")
        if os.path.exists(prompt_path):
            with open(prompt_path, "r", encoding="utf-8") as f:
                self.system_prompt = f.read()
        else:
            self.system_prompt = DEFAULT_SYSTEM_PROMPT

    def get_system_prompt(self, today: Optional[date] = None) -> str:
        today = today or date.today()
        return self.system_prompt.replace("{today}", today.strftime("%m/%d/%Y")).strip()

    async def generate_object(self, prompt: str, schema: Type[T], temperature: float = 0.7) -> T:
        """
        Ask the model for a single JSON object matching ``schema`` and validate it.
        Raises the OpenAI error or a pydantic ValidationError; callers pick the fallback.
        """
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": "Respond only with a JSON object that matches the requested schema."},
                {"role": "user", "content": prompt},
            ],
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": schema.__name__,
                    "schema": schema.model_json_schema(),
                },
            },
            temperature=temperature,
        )
        content = response.choices[0].message.content or ""
        return schema.model_validate_json(content)

    async def stream_completion(
        self,
        messages: List[Dict[str, Any]],
        tools: Optional[List[Dict[str, Any]]] = None,
    ):
        """Start a streamed chat completion; returns the async chunk iterator"""
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": settings.openai_temperature,
            "stream": True,
        }
        if tools:
            kwargs["tools"] = tools
        return await self.client.chat.completions.create(**kwargs)

openai_service = OpenAIService()
