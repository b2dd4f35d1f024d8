from typing import Type, TypeVar

from fastapi import Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.core.errors import MalformedBodyError, ValidationError

M = TypeVar("M", bound=BaseModel)


async def parse_body(request: Request, model: Type[M]) -> M:
    """
    Read the JSON body and validate it into ``model``.

    A body that is not JSON at all is a malformed request (MalformedBodyError);
    JSON that is missing or mistyping fields is a ValidationError (400).
    """
    try:
        payload = await request.json()
    except ValueError as exc:
        raise MalformedBodyError("Request body is not valid JSON") from exc

    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        path = ".".join(str(item) for item in first.get("loc", ()))
        reason = first.get("msg", "invalid value")
        message = f"Invalid field '{path}': {reason}" if path else f"Invalid request body: {reason}"
        raise ValidationError(message, {"field": path, "reason": reason}) from exc
