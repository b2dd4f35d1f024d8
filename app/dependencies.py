from functools import lru_cache

from fastapi import Depends

from app.ai.openai_client import LLMGateway
from app.core.config import Settings, get_settings
from app.domain.services.chat_service import ChatService
from app.domain.services.itinerary_service import ItineraryService


@lru_cache
def get_llm_gateway() -> LLMGateway:
    return LLMGateway.from_settings(get_settings())


def get_itinerary_service(
    gateway: LLMGateway = Depends(get_llm_gateway),
    settings: Settings = Depends(get_settings),
) -> ItineraryService:
    return ItineraryService(gateway=gateway, settings=settings)


def get_chat_service(
    gateway: LLMGateway = Depends(get_llm_gateway),
    settings: Settings = Depends(get_settings),
) -> ChatService:
    return ChatService(gateway=gateway, settings=settings)


__all__ = [
    "get_llm_gateway",
    "get_itinerary_service",
    "get_chat_service",
    "get_settings",
]
