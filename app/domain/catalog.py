from typing import List, Optional, Tuple

from app.api.models.schemas import Destination, PreviewScene

DESTINATIONS: Tuple[Destination, ...] = (
    Destination(
        id=1,
        name="Betla National Park",
        coordinates=(84.1947, 23.8748),
        description="Home to elephants, tigers, and diverse flora in pristine sal forests",
        category="Eco Tourism",
    ),
    Destination(
        id=2,
        name="Hundru Falls",
        coordinates=(85.5947, 23.4236),
        description="Spectacular 320ft waterfall surrounded by dense forests",
        category="Eco Tourism",
    ),
    Destination(
        id=3,
        name="Tribal Cultural Village",
        coordinates=(85.3096, 23.3441),
        description="Experience authentic Santal and Munda tribal traditions",
        category="Cultural Tourism",
    ),
    Destination(
        id=4,
        name="Jagannath Temple Ranchi",
        coordinates=(85.3096, 23.3441),
        description="Historic temple with stunning architecture",
        category="Cultural Tourism",
    ),
    Destination(
        id=5,
        name="Netarhat",
        coordinates=(84.2642, 23.4672),
        description="Queen of Chotanagpur with breathtaking sunrises",
        category="Eco Tourism",
    ),
)

# Named in both prompts as examples of in-scope places.
HEADLINE_DESTINATIONS = ("Betla National Park", "Hundru Falls", "tribal villages")

PREVIEW_SCENES: Tuple[PreviewScene, ...] = (
    PreviewScene(
        id="forest",
        title="Betla National Park",
        description="Immerse yourself in the pristine forests of Jharkhand",
    ),
    PreviewScene(
        id="waterfall",
        title="Hundru Falls",
        description="Experience the majestic 320ft waterfall",
    ),
    PreviewScene(
        id="village",
        title="Tribal Village",
        description="Explore authentic tribal culture and traditions",
    ),
)


def headline_destinations() -> List[str]:
    return list(HEADLINE_DESTINATIONS)


def list_destinations(category: Optional[str] = None) -> List[Destination]:
    if category is None:
        return list(DESTINATIONS)
    return [d for d in DESTINATIONS if d.category == category]
