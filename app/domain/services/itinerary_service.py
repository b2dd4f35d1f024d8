from __future__ import annotations

import logging

from app.ai.itinerary_graph import PlainText, generate_itinerary, render_outcome
from app.ai.openai_client import LLMGateway
from app.api.models.schemas import ItineraryEnvelope, ItineraryFailure, ItineraryRequest
from app.core.config import Settings
from app.core.errors import describe_failure

logger = logging.getLogger(__name__)

FAILURE_DETAILS = "Failed to generate itinerary. Please try again."


class ItineraryService:
    def __init__(self, gateway: LLMGateway, settings: Settings):
        self.gateway = gateway
        self.settings = settings

    async def plan(self, request: ItineraryRequest) -> ItineraryEnvelope:
        outcome = await generate_itinerary(request, self.gateway, self.settings)
        if isinstance(outcome, PlainText):
            logger.info("Returning plain-text itinerary (%d chars)", len(outcome.text))
        return ItineraryEnvelope(itinerary=render_outcome(outcome, self.settings))

    def failure(self, exc: Exception) -> ItineraryFailure:
        stage, message = describe_failure(exc)
        message = self.gateway.scrub(message)
        logger.error("Error in itinerary-planner at stage %s: %s", stage, message)
        return ItineraryFailure(error=message, details=FAILURE_DETAILS)
