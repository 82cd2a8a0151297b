from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from ..core.config import Settings, get_settings
from ..core.errors import MethodNotAllowedError, install_error_handlers
from ..core.logger import get_logger
from ..routers.inventory import router as inventory_router
from ..routers.pages import router as pages_router
from ..routers.search import router as search_router
from ..services.photo_store import PhotoStore
from ..services.registry import InventoryRegistry

logger = get_logger(__name__)

_ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the photo cache directory before serving requests."""
    app.state.photo_store.ensure_directory()
    logger.info("Startup complete.", extra={"cache_dir": str(app.state.photo_store.root)})
    yield
    logger.info("Shutdown complete.", extra={"items": len(app.state.registry)})


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application with its own registry and photo store.

    Args:
        settings: Configuration to use; defaults to the cached environment settings.

    Returns:
        A FastAPI app serving the inventory routes, the form pages and a 405
        fallback for every other method/path.
    """
    settings = settings or get_settings()

    # The HTTP surface is exactly the inventory routes, so the generated docs are off.
    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        default_response_class=ORJSONResponse,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.registry = InventoryRegistry()
    app.state.photo_store = PhotoStore(settings.cache_path())

    origins = settings.cors_origins_list()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    install_error_handlers(app)

    app.include_router(inventory_router)
    app.include_router(search_router)
    app.include_router(pages_router)

    # Must stay last: routes are matched in order and this one matches everything.
    @app.api_route("/{path:path}", methods=_ALL_METHODS, include_in_schema=False)
    def method_not_allowed(request: Request, path: str):
        logger.info("Rejected request", extra={"method": request.method, "path": request.url.path})
        raise MethodNotAllowedError(f"Method {request.method} not allowed on /{path}")

    logger.info("FastAPI app initialized", extra={"app_name": settings.APP_NAME, "env": settings.APP_ENV})
    return app


app = create_app()
