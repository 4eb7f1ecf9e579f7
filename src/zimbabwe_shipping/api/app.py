"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from zimbabwe_shipping.api.account import router as account_router
from zimbabwe_shipping.api.catalog import router as catalog_router
from zimbabwe_shipping.api.cors import install_cors
from zimbabwe_shipping.api.functions import router as functions_router
from zimbabwe_shipping.app_logging import configure_logging
from zimbabwe_shipping.config import ConfigurationError
from zimbabwe_shipping.containers import AppContainer
from zimbabwe_shipping.services.validation import ValidationError, field_errors


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    install_cors(app)
    app.include_router(functions_router)
    app.include_router(account_router)
    app.include_router(catalog_router)

    @app.exception_handler(ValidationError)
    async def validation_error(_request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse({"errors": exc.errors}, status_code=422)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse({"errors": field_errors(exc.errors())}, status_code=422)

    @app.exception_handler(ConfigurationError)
    async def configuration_error(
        request: Request, exc: ConfigurationError
    ) -> JSONResponse:
        logger.error(
            "Handler is missing configuration",
            extra={"path": request.url.path, "error": str(exc)},
        )
        return JSONResponse({"error": str(exc)}, status_code=500)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
