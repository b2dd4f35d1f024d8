from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.api.body import parse_body
from app.api.models.schemas import ItineraryEnvelope, ItineraryFailure, ItineraryRequest
from app.core.errors import ValidationError
from app.dependencies import get_itinerary_service
from app.domain.services.itinerary_service import ItineraryService

router = APIRouter(tags=["itinerary"])


@router.post(
    "/itinerary-planner",
    response_model=ItineraryEnvelope,
    responses={400: {"model": ItineraryFailure}, 500: {"model": ItineraryFailure}},
)
async def plan_itinerary(request: Request, svc: ItineraryService = Depends(get_itinerary_service)):
    try:
        body = await parse_body(request, ItineraryRequest)
        return await svc.plan(body)
    except ValidationError as exc:
        return JSONResponse(status_code=exc.status_code, content=svc.failure(exc).model_dump())
    except Exception as exc:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=svc.failure(exc).model_dump(),
        )
