from __future__ import annotations

from typing import List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

# ---------- Itinerary request ----------


class ItineraryRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    preferences: str
    duration: int = Field(gt=0)
    budget: str
    interests: List[str]
    language: str = "English"


# ---------- Structured itinerary ----------


class Activity(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    time: str
    activity: str
    location: str
    description: str
    cost: str
    tips: str


class DayPlan(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    day: int
    title: str
    activities: List[Activity]


class StructuredItinerary(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    title: str
    days: List[DayPlan]
    totalBudget: str
    tips: List[str]


class PlainTextItinerary(BaseModel):
    title: str
    content: str
    isPlainText: Literal[True] = True


ItineraryPayload = Union[StructuredItinerary, PlainTextItinerary]


class ItineraryEnvelope(BaseModel):
    itinerary: ItineraryPayload


class ItineraryFailure(BaseModel):
    error: str
    details: str


# ---------- Chat ----------


ChatRole = Literal["user", "assistant", "system"]

MAX_TURN_CHARS = 4000


class ChatTurn(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: ChatRole
    content: str


class ChatRequest(BaseModel):
    message: str = Field(min_length=1, max_length=MAX_TURN_CHARS)
    language: str = "English"
    # Oldest first. Supplied in full by the caller on every call.
    chatHistory: Tuple[ChatTurn, ...] = ()


class ChatResponse(BaseModel):
    reply: str
    language: str
    timestamp: str


class ChatFailure(BaseModel):
    error: str
    reply: str
    timestamp: str


# ---------- Meta ----------


DestinationCategory = Literal["Eco Tourism", "Cultural Tourism"]


class Destination(BaseModel):
    id: int
    name: str
    coordinates: Tuple[float, float] = Field(description="[lng, lat]")
    description: str
    category: DestinationCategory
    image: Optional[str] = None


class PreviewScene(BaseModel):
    id: str
    title: str
    description: str
