from typing import List, Optional

from fastapi import APIRouter

from app.api.models.schemas import Destination, DestinationCategory, PreviewScene
from app.domain.catalog import PREVIEW_SCENES, list_destinations

router = APIRouter(prefix="/meta", tags=["meta"])


@router.get("/destinations", response_model=List[Destination])
async def destinations(category: Optional[DestinationCategory] = None):
    return list_destinations(category)


@router.get("/preview-scenes", response_model=List[PreviewScene])
async def preview_scenes():
    return list(PREVIEW_SCENES)
