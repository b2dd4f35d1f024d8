from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, TypedDict

from langgraph.graph import END, StateGraph

from app.ai.openai_client import LLMGateway, Message
from app.ai.prompts import chat_system_prompt
from app.api.models.schemas import MAX_TURN_CHARS, ChatRequest, ChatTurn
from app.core.config import Settings

logger = logging.getLogger(__name__)


def bound_history(history: Sequence[ChatTurn], limit: int) -> Sequence[ChatTurn]:
    """Keep the most recent ``limit`` turns, oldest first."""
    if limit <= 0:
        return ()
    if len(history) > limit:
        logger.info("Dropping %d oldest chat turns (limit %d)", len(history) - limit, limit)
        return history[-limit:]
    return history


def build_message_sequence(request: ChatRequest, settings: Settings) -> List[Message]:
    messages: List[Message] = [{"role": "system", "content": chat_system_prompt(settings, request.language)}]
    for turn in bound_history(request.chatHistory, settings.chat_history_limit):
        content = turn.content
        if len(content) > MAX_TURN_CHARS:
            logger.info("Truncating %s turn from %d to %d chars", turn.role, len(content), MAX_TURN_CHARS)
            content = content[:MAX_TURN_CHARS]
        messages.append({"role": turn.role, "content": content})
    messages.append({"role": "user", "content": request.message})
    return messages


class ChatState(TypedDict):
    request: ChatRequest
    settings: Settings
    gateway: LLMGateway
    messages: List[Message]
    reply: Optional[str]


async def assemble_messages(state: ChatState) -> Dict[str, Any]:
    return {"messages": build_message_sequence(state["request"], state["settings"])}


async def call_gateway(state: ChatState) -> Dict[str, Any]:
    settings = state["settings"]
    logger.info("Processing chatbot message in language: %s", state["request"].language)
    reply = await state["gateway"].complete(
        state["messages"],
        max_tokens=settings.chat_max_tokens,
        temperature=settings.chat_temperature,
    )
    logger.info("Chatbot response generated successfully")
    return {"reply": reply}


def build_chat_graph():
    builder = StateGraph(ChatState)
    builder.add_node("assemble_messages", assemble_messages)
    builder.add_node("call_gateway", call_gateway)
    builder.set_entry_point("assemble_messages")
    builder.add_edge("assemble_messages", "call_gateway")
    builder.add_edge("call_gateway", END)
    return builder.compile()


_GRAPH = build_chat_graph()


async def generate_chat_reply(request: ChatRequest, gateway: LLMGateway, settings: Settings) -> str:
    state: ChatState = {
        "request": request,
        "settings": settings,
        "gateway": gateway,
        "messages": [],
        "reply": None,
    }
    result = await _GRAPH.ainvoke(state)
    return result["reply"] or ""
