"""FastAPI app factory for the infofinder lookup API."""

from fastapi import FastAPI

from infofinder.api.lookup import router as lookup_router
from infofinder.observability import configure_logging


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance.
    """
    configure_logging()
    app = FastAPI(title="InfoFinder Lookup API", version="0.1")
    app.include_router(lookup_router)

    @app.get("/healthz", tags=["health"])
    def healthz():
        return {"status": "ok"}

    return app


# For uvicorn, expose `app` at module level
app = create_app()

__all__ = ["app", "create_app"]
