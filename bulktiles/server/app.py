"""
Main server app.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from bulktiles.errors import BulkRequestError

from ..settings import Settings, settings
from .bulk import bulk_router
from .health import health_router

tags_metadata = [
    {
        "name": "Health",
        "description": "Liveness checks for the server.",
    },
    {
        "name": "Bulk Tiles",
        "description": "Archives of a tile and all of its descendants, optionally compressed.",
    },
]


async def bulk_request_error_handler(request: Request, exc: BulkRequestError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def create_app(app_settings: Settings | None = None) -> FastAPI:
    app_settings = app_settings or settings

    async def lifespan(app: FastAPI):
        """
        Lifespan event handler for the FastAPI app. Every store is opened
        before the first request is accepted.
        """

        app_settings.setup_app(app=app)

        yield

        app.registry.close()

    app = FastAPI(lifespan=lifespan, openapi_tags=tags_metadata)
    app.add_exception_handler(BulkRequestError, bulk_request_error_handler)

    # The bulk route matches any single path segment as a source id, so the
    # fixed routes go first.
    app.include_router(health_router)
    app.include_router(bulk_router)

    return app


app = create_app()
