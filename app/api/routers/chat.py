from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.api.body import parse_body
from app.api.models.schemas import ChatFailure, ChatRequest, ChatResponse
from app.core.errors import ValidationError
from app.dependencies import get_chat_service
from app.domain.services.chat_service import ChatService

router = APIRouter(tags=["chat"])


@router.post(
    "/multilingual-chatbot",
    response_model=ChatResponse,
    responses={400: {"model": ChatFailure}, 500: {"model": ChatFailure}},
)
async def chat(request: Request, svc: ChatService = Depends(get_chat_service)):
    try:
        body = await parse_body(request, ChatRequest)
        return await svc.reply(body)
    except ValidationError as exc:
        return JSONResponse(status_code=exc.status_code, content=svc.failure(exc).model_dump())
    except Exception as exc:
        # The chat UI always needs a renderable reply, even on failure.
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=svc.failure(exc).model_dump(),
        )
