"""FastAPI application factory."""

import logging
import re
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import (
    HTMLResponse,
    JSONResponse,
    PlainTextResponse,
    RedirectResponse,
    Response,
)

from djq.api.routes import router as api_router
from djq.app_logging import configure_logging
from djq.containers import AppContainer
from djq.domain.errors import DjqError
from djq.services.qr import render_qr_page

_SESSION_CODE = re.compile(r"^[A-Z0-9]{4}$")


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

    @app.exception_handler(DjqError)
    async def handle_djq_error(request: Request, exc: DjqError) -> JSONResponse:
        if exc.status_code >= 500:  # noqa: PLR2004
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_invalid_request(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.info("Rejected malformed request to %s", request.url.path)
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    app.include_router(api_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/qr/{session_id}", response_class=HTMLResponse)
    async def session_qr(session_id: str, request: Request) -> HTMLResponse:
        """Page with a QR code pointing at the session's short join URL."""
        state_container: AppContainer = request.app.state.container
        session = state_container.session_service.get(session_id)
        base_url = str(request.base_url)
        return HTMLResponse(render_qr_page(base_url, session.id))

    @app.get("/{code}")
    async def short_code_redirect(code: str) -> Response:
        """Redirect ``/ABCD`` to the session page."""
        if _SESSION_CODE.match(code):
            return RedirectResponse(url=f"/session/{code}", status_code=302)
        return PlainTextResponse("Session not found", status_code=404)

    return app
