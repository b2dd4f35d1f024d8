from typing import Any, Dict, Optional, Tuple

from fastapi import HTTPException, status


class ServiceError(Exception):
    """Base for failures raised while a handler is producing its response."""

    stage = "unknown"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(ServiceError):
    stage = "configuration"


class GatewayError(ServiceError):
    stage = "call_gateway"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedBodyError(ServiceError):
    stage = "receive_request"


class APIError(HTTPException):
    def __init__(self, status_code: int, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(status_code=status_code, detail=message)
        self.details = details


class ValidationError(APIError):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(status.HTTP_400_BAD_REQUEST, message, details)


def error_content(message: str, details: Any = None) -> Dict[str, Any]:
    return {"error": message, "details": details}


def describe_failure(exc: Exception) -> Tuple[str, str]:
    """Return ``(stage, message)`` for logging and error envelopes."""
    if isinstance(exc, ServiceError):
        return exc.stage, exc.message
    if isinstance(exc, ValidationError):
        return "validate_fields", str(exc.detail)
    return "unexpected", str(exc) or exc.__class__.__name__
