from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

import httpx
from openai import APIConnectionError, APIStatusError, AsyncOpenAI

from app.core.config import Settings
from app.core.errors import ConfigurationError, GatewayError
from app.core.logging import scrub_secret

logger = logging.getLogger(__name__)

Message = Dict[str, str]


def _upstream_message(body: Any) -> Optional[str]:
    # The SDK hands us either the full error body or its "error" member.
    if isinstance(body, dict):
        inner = body.get("error", body)
        if isinstance(inner, dict) and isinstance(inner.get("message"), str):
            return inner["message"]
    return None


class LLMGateway:
    """
    Single outbound chat-completion call. One request, one response: the SDK
    retry loop is disabled and the call is bounded by ``timeout``.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        *,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self._api_key = api_key
        self.model = model
        self._base_url = base_url
        self._timeout = timeout
        self._http_client = http_client
        self._client: Optional[AsyncOpenAI] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "LLMGateway":
        return cls(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url,
            timeout=settings.gateway_timeout_seconds,
        )

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def scrub(self, text: str) -> str:
        return scrub_secret(text, self._api_key)

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                timeout=self._timeout,
                max_retries=0,
                http_client=self._http_client,
            )
        return self._client

    async def complete(self, messages: Sequence[Message], *, max_tokens: int, temperature: float) -> str:
        if not self.configured:
            raise ConfigurationError("OpenAI API key not configured")

        client = self._get_client()
        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=list(messages),  # type: ignore[arg-type]
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except APIStatusError as exc:
            upstream = _upstream_message(exc.body) or "Unknown error"
            logger.error("OpenAI API error (status %s): %s", exc.status_code, self.scrub(upstream))
            raise GatewayError(self.scrub(f"OpenAI API error: {upstream}"), status_code=exc.status_code) from exc
        except APIConnectionError as exc:
            # Also covers APITimeoutError.
            logger.error("OpenAI request failed: %s", exc.message)
            raise GatewayError(f"OpenAI API error: {exc.message or 'Unknown error'}") from exc

        if not response.choices:
            raise GatewayError("OpenAI API error: response contained no choices")
        return response.choices[0].message.content or ""

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
