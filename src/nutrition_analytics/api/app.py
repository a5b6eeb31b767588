"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from nutrition_analytics.api.routes import router as analytics_router
from nutrition_analytics.app_logging import configure_logging
from nutrition_analytics.containers import AppContainer
from nutrition_analytics.errors import AnalyticsError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(analytics_router)

    @app.exception_handler(AnalyticsError)
    async def analytics_error_handler(
        request: Request, exc: AnalyticsError
    ) -> JSONResponse:
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=400,
            content={"error": {"code": "VALIDATION_ERROR", "message": str(exc)}},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
