from typing import Dict

from fastapi import Request, Response

from app.core.config import Settings


def cors_headers(settings: Settings) -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": settings.cors_allow_origin,
        "Access-Control-Allow-Headers": ", ".join(settings.cors_allow_headers),
    }


class CORSPolicy:
    """
    Fixed, permissive cross-origin policy shared by every endpoint.

    Preflight requests are answered here with an empty body and never reach a
    route; every other response gets the same headers merged in.
    """

    def __init__(self, settings: Settings):
        self.headers = cors_headers(settings)

    async def __call__(self, request: Request, call_next) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=self.headers)
        response = await call_next(request)
        response.headers.update(self.headers)
        return response
