import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from app.api.routers import chat, itineraries, meta
from app.core.config import settings
from app.core.cors import CORSPolicy
from app.core.errors import APIError, error_content
from app.core.logging import setup_logging
from app.dependencies import get_llm_gateway

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    logger.info("%s started", settings.project_name)
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set; AI endpoints will answer with configuration errors.")
    yield
    await get_llm_gateway().aclose()
    logger.info("%s shutting down", settings.project_name)


app = FastAPI(title=settings.project_name, lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    logger.info("%s %s completed %d in %.2fms", request.method, request.url.path, response.status_code, duration_ms)
    return response


# Registered last so it wraps the logging middleware and sees preflights first.
app.middleware("http")(CORSPolicy(settings))

app.include_router(itineraries.router)
app.include_router(chat.router)
app.include_router(meta.router)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    if isinstance(exc, APIError):
        return JSONResponse(status_code=exc.status_code, content=error_content(str(exc.detail), exc.details))
    return JSONResponse(status_code=exc.status_code, content=error_content(str(exc.detail)))


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    first_error = exc.errors()[0] if exc.errors() else {}
    path = ".".join(str(item) for item in first_error.get("loc", []))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_content("Invalid request", {"field": path, "reason": first_error.get("msg")}),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled server error: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_content("Internal server error"),
    )
