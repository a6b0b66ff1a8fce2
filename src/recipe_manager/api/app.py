"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from recipe_manager.api.categories import router as categories_router
from recipe_manager.api.foods import router as foods_router
from recipe_manager.api.recipes import router as recipes_router
from recipe_manager.app_logging import configure_logging
from recipe_manager.containers import AppContainer
from recipe_manager.domain.errors import RecipeManagerError, ValidationFailedError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Recipe Manager")
    app.state.container = container

    app.include_router(foods_router)
    app.include_router(recipes_router)
    app.include_router(categories_router)

    @app.exception_handler(RecipeManagerError)
    async def handle_domain_error(
        request: Request, exc: RecipeManagerError
    ) -> JSONResponse:
        logger.info(
            "%s %s failed with %s: %s",
            request.method,
            request.url.path,
            exc.kind,
            exc.message,
        )
        body: dict[str, object] = {"error": exc.kind, "message": exc.message}
        if isinstance(exc, ValidationFailedError) and exc.details:
            body["details"] = exc.details
        return JSONResponse(status_code=exc.http_status, content=body)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
