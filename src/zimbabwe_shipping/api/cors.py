"""CORS handling shared by every route."""

import logging
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": (
        "authorization, x-client-info, apikey, content-type"
    ),
}


def install_cors(app: FastAPI) -> None:
    """Answer preflight requests and stamp CORS headers on every response.

    Every ``OPTIONS`` request gets an empty 204, whether or not it carries
    preflight headers. Unhandled errors become a JSON 500 that still carries
    the CORS headers.
    """

    @app.middleware("http")
    async def cors_middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=CORS_HEADERS)
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled error",
                extra={"path": request.url.path, "method": request.method},
            )
            return JSONResponse(
                {"error": "Internal server error"},
                status_code=500,
                headers=CORS_HEADERS,
            )
        response.headers.update(CORS_HEADERS)
        return response
