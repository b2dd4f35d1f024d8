"""Prompt templates for the itinerary planner and the tourism chatbot."""

from typing import Sequence

from app.core.config import Settings
from app.domain.catalog import headline_destinations

ITINERARY_SYSTEM_PROMPT = (
    "You are an expert travel planner specializing in {region} tourism. "
    "Create detailed, culturally sensitive, and sustainable travel itineraries."
)

ITINERARY_PROMPT = """Create a personalized {duration}-day itinerary for {region_label} based on these preferences:
    - Budget: {budget}
    - Interests: {interests}
    - Additional preferences: {preferences}
    - Response language: {language}

    Include:
    - Day-by-day detailed schedule
    - Specific destinations in {region} (like {highlights})
    - Cultural experiences and eco-tourism activities
    - Local food recommendations
    - Transportation suggestions
    - Estimated costs for each activity
    - Cultural etiquette tips

    Format as a structured JSON with this format:
    {{
      "title": "{default_title}",
      "days": [
        {{
          "day": 1,
          "title": "Day title",
          "activities": [
            {{
              "time": "09:00 AM",
              "activity": "Activity name",
              "location": "Location",
              "description": "Detailed description",
              "cost": "{currency}500",
              "tips": "Helpful tips"
            }}
          ]
        }}
      ],
      "totalBudget": "{currency}15000",
      "tips": ["General travel tips for {region}"]
    }}"""

CHAT_SYSTEM_PROMPT = """You are a multilingual tourism assistant for {region_label}. You help tourists with:
        - Information about destinations, culture, and activities in {region}
        - Travel planning and recommendations
        - Cultural insights and local customs
        - Transportation and accommodation suggestions
        - Safety tips and practical advice

        Always respond in {language} unless specifically asked to use another language.
        Be friendly, informative, and culturally sensitive.
        Focus specifically on {region} tourism - destinations like {highlights}, cultural festivals, eco-tourism, etc.

        If asked about places outside {region}, politely redirect to {region} attractions."""


def default_itinerary_title(settings: Settings) -> str:
    return f"Your {settings.region_name} Adventure"


def _highlights() -> str:
    return ", ".join(headline_destinations())


def itinerary_system_prompt(settings: Settings) -> str:
    return ITINERARY_SYSTEM_PROMPT.format(region=settings.region_name)


def build_itinerary_prompt(
    settings: Settings,
    *,
    duration: int,
    budget: str,
    interests: Sequence[str],
    preferences: str,
    language: str,
) -> str:
    return ITINERARY_PROMPT.format(
        duration=duration,
        region=settings.region_name,
        region_label=settings.region_label,
        budget=budget,
        interests=", ".join(interests),
        preferences=preferences,
        language=language,
        highlights=_highlights(),
        default_title=default_itinerary_title(settings),
        currency=settings.currency_symbol,
    )


def chat_system_prompt(settings: Settings, language: str) -> str:
    return CHAT_SYSTEM_PROMPT.format(
        region=settings.region_name,
        region_label=settings.region_label,
        language=language,
        highlights=_highlights(),
    )
