from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, TypedDict, Union

from langgraph.graph import END, StateGraph
from pydantic import ValidationError as PydanticValidationError

from app.ai.openai_client import LLMGateway, Message
from app.ai.prompts import build_itinerary_prompt, default_itinerary_title, itinerary_system_prompt
from app.api.models.schemas import ItineraryPayload, ItineraryRequest, PlainTextItinerary, StructuredItinerary
from app.core.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Structured:
    itinerary: StructuredItinerary


@dataclass(frozen=True)
class PlainText:
    text: str


ParseOutcome = Union[Structured, PlainText]


def _strip_code_fence(text: str) -> str:
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.split("\n", 1)[1] if "\n" in cleaned else ""
        if cleaned.rstrip().endswith("```"):
            cleaned = cleaned.rstrip()[:-3]
    return cleaned.strip()


def parse_itinerary_output(raw: str) -> ParseOutcome:
    """
    Structured only when the model output is a JSON object of the expected
    shape; anything else (prose, arrays, partial objects) is plain text.
    """
    try:
        payload = json.loads(_strip_code_fence(raw))
    except ValueError:
        return PlainText(raw)
    if not isinstance(payload, dict):
        return PlainText(raw)
    try:
        return Structured(StructuredItinerary.model_validate(payload))
    except PydanticValidationError as exc:
        logger.info("Model returned JSON that is not an itinerary (%d errors)", exc.error_count())
        return PlainText(raw)


def render_outcome(outcome: ParseOutcome, settings: Settings) -> ItineraryPayload:
    if isinstance(outcome, Structured):
        return outcome.itinerary
    return PlainTextItinerary(title=default_itinerary_title(settings), content=outcome.text)


class ItineraryState(TypedDict):
    request: ItineraryRequest
    settings: Settings
    gateway: LLMGateway
    messages: List[Message]
    raw_output: Optional[str]
    outcome: Optional[ParseOutcome]


async def build_prompt(state: ItineraryState) -> Dict[str, Any]:
    req = state["request"]
    settings = state["settings"]
    prompt = build_itinerary_prompt(
        settings,
        duration=req.duration,
        budget=req.budget,
        interests=req.interests,
        preferences=req.preferences,
        language=req.language,
    )
    return {
        "messages": [
            {"role": "system", "content": itinerary_system_prompt(settings)},
            {"role": "user", "content": prompt},
        ]
    }


async def call_gateway(state: ItineraryState) -> Dict[str, Any]:
    settings = state["settings"]
    logger.info("Generating itinerary (%d days) with OpenAI...", state["request"].duration)
    raw = await state["gateway"].complete(
        state["messages"],
        max_tokens=settings.itinerary_max_tokens,
        temperature=settings.itinerary_temperature,
    )
    logger.info("Itinerary generated successfully")
    return {"raw_output": raw}


async def parse_result(state: ItineraryState) -> Dict[str, Any]:
    outcome = parse_itinerary_output(state["raw_output"] or "")
    if isinstance(outcome, PlainText):
        logger.info("Failed to parse itinerary as JSON, using plain text format")
    return {"outcome": outcome}


def build_itinerary_graph():
    builder = StateGraph(ItineraryState)
    builder.add_node("build_prompt", build_prompt)
    builder.add_node("call_gateway", call_gateway)
    builder.add_node("parse_result", parse_result)
    builder.set_entry_point("build_prompt")
    builder.add_edge("build_prompt", "call_gateway")
    builder.add_edge("call_gateway", "parse_result")
    builder.add_edge("parse_result", END)
    return builder.compile()


_GRAPH = build_itinerary_graph()


async def generate_itinerary(request: ItineraryRequest, gateway: LLMGateway, settings: Settings) -> ParseOutcome:
    initial_state: ItineraryState = {
        "request": request,
        "settings": settings,
        "gateway": gateway,
        "messages": [],
        "raw_output": None,
        "outcome": None,
    }
    result = await _GRAPH.ainvoke(initial_state)
    return result["outcome"]
