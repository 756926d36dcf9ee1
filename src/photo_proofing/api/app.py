"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from photo_proofing.api.admin import router as admin_router
from photo_proofing.api.client import router as client_router
from photo_proofing.api.galleries import router as galleries_router
from photo_proofing.app_logging import configure_logging
from photo_proofing.containers import AppContainer
from photo_proofing.domain.errors import (
    AuthenticationError,
    CheckoutError,
    GalleryExpiredError,
    InvalidRequestError,
    NotFoundError,
    PermissionDeniedError,
    ProofingError,
)

_STATUS_BY_ERROR: tuple[tuple[type[ProofingError], int], ...] = (
    (InvalidRequestError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (GalleryExpiredError, status.HTTP_410_GONE),
    (CheckoutError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_for(exc: ProofingError) -> int:
    """Map a domain error to its HTTP status code."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    debug_errors = container.settings.debug_errors

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(client_router)
    app.include_router(galleries_router)
    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.exception_handler(ProofingError)
    async def proofing_error_handler(
        request: Request, exc: ProofingError
    ) -> JSONResponse:
        status_code = status_for(exc)
        body: dict[str, object] = {"error": exc.message}
        details = getattr(exc, "details", None)
        if details is not None:
            body["details"] = details
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "Request failed",
                extra={"path": request.url.path, "error": type(exc).__name__},
            )
        return JSONResponse(status_code=status_code, content=body)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Validation error",
                "details": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", extra={"path": request.url.path})
        body = {"error": "Internal server error"}
        if debug_errors:
            body["debug"] = f"{type(exc).__name__}: {exc}"
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body
        )

    return app
