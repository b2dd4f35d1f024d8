from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from app.ai.chat_graph import generate_chat_reply
from app.ai.openai_client import LLMGateway
from app.api.models.schemas import ChatFailure, ChatRequest, ChatResponse
from app.core.config import Settings
from app.core.errors import describe_failure

logger = logging.getLogger(__name__)

APOLOGY_REPLY = "Sorry, I encountered an error. Please try again."


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a trailing Z."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ChatService:
    def __init__(self, gateway: LLMGateway, settings: Settings, clock: Callable[[], datetime] = utc_now):
        self.gateway = gateway
        self.settings = settings
        self.clock = clock

    async def reply(self, request: ChatRequest) -> ChatResponse:
        text = await generate_chat_reply(request, self.gateway, self.settings)
        return ChatResponse(reply=text, language=request.language, timestamp=iso_timestamp(self.clock()))

    def failure(self, exc: Exception) -> ChatFailure:
        stage, message = describe_failure(exc)
        message = self.gateway.scrub(message)
        logger.error("Error in multilingual-chatbot at stage %s: %s", stage, message)
        return ChatFailure(error=message, reply=APOLOGY_REPLY, timestamp=iso_timestamp(self.clock()))
