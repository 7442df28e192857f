"""
Spherical GIS back office — main application.

create_app() builds every shared object (settings, database manager,
access policy, event channel, catalog cache), stores it on app.state and
mounts the routers.
"""

import time
import traceback
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from spherical.config import DatabaseManager, Settings
from spherical.catalog import CatalogCache
from spherical.events import EventChannel
from spherical.forms import FormRejected
from spherical.middleware import AuthPermissionMiddleware
from spherical.rbac import AccessPolicy
from spherical.utils import Logger, configure_logging, error_response

# ── Route imports ────────────────────────────────────────────────
from spherical.access import access_router
from spherical.auth import auth_router
from spherical.categories import categories_router
from spherical.content import content_router, public_content_router
from spherical.enquiries import enquiries_router, public_enquiries_router
from spherical.inventory import inventory_router
from spherical.products import ProductService, products_router, public_products_router
from spherical.reports import reports_router
from spherical.sales import sales_router
from spherical.users import users_router

logger = Logger("request")


# ── Request Logging Middleware ───────────────────────────────────
class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status code and duration of each request."""

    async def dispatch(self, request: Request, call_next):
        start = time.time()
        method = request.method
        path = request.url.path

        try:
            response = await call_next(request)
        except Exception:
            duration = round((time.time() - start) * 1000, 2)
            logger.error(f"<-- {method} {path} | 500 | {duration}ms")
            raise

        duration = round((time.time() - start) * 1000, 2)
        status = response.status_code

        if status >= 500:
            logger.error(f"<-- {method} {path} | {status} | {duration}ms")
        elif status >= 400:
            logger.warning(f"<-- {method} {path} | {status} | {duration}ms")
        else:
            logger.info(f"<-- {method} {path} | {status} | {duration}ms")

        return response


# ── Lifespan ─────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    state = app.state
    await state.db_manager.connect()
    if state.settings.create_indexes:
        await state.db_manager.ensure_indexes()
    if state.settings.catalog_cache_warm:
        products = await ProductService(state.db_manager.database).all_products()
        state.catalog_cache.load(products)
    yield
    state.catalog_cache.detach(state.channel)
    state.db_manager.close()


# ── App factory ──────────────────────────────────────────────────
def create_app(
    settings: Optional[Settings] = None,
    access_policy: Optional[AccessPolicy] = None,
    channel: Optional[EventChannel] = None,
) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.log_level)
    if access_policy is None and settings.access_policy_file:
        access_policy = AccessPolicy.from_json_file(settings.access_policy_file)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Back office for the Spherical GIS website and shop",
        docs_url="/api/docs",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.db_manager = DatabaseManager(settings)
    app.state.access_policy = access_policy or AccessPolicy.default()
    app.state.channel = channel or EventChannel()
    app.state.catalog_cache = CatalogCache()
    app.state.catalog_cache.attach(app.state.channel)

    # ── Middleware (last added runs first) ───────────────────
    app.add_middleware(AuthPermissionMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allowed_methods,
        allow_headers=settings.cors_allowed_headers,
    )

    # ── Exception handlers ───────────────────────────────────
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return error_response(str(exc.detail), exc.status_code, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return error_response(
            "Request validation failed",
            422,
            data={"errors": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(FormRejected)
    async def form_rejected_handler(request: Request, exc: FormRejected):
        return error_response(str(exc), 422, data={"errors": exc.errors})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.method} {request.url.path}:")
        logger.error(traceback.format_exc())
        message = str(exc) if settings.debug else "Internal server error"
        return error_response(message, 500)

    # ── Routes ───────────────────────────────────────────────
    v = settings.api_version

    app.include_router(auth_router, prefix=f"/api/{v}/auth", tags=["Authentication"])
    app.include_router(access_router, prefix=f"/api/{v}/access", tags=["Access"])
    app.include_router(users_router, prefix=f"/api/{v}/users", tags=["Users"])
    app.include_router(products_router, prefix=f"/api/{v}/products", tags=["Products"])
    app.include_router(categories_router, prefix=f"/api/{v}/categories", tags=["Categories"])
    app.include_router(inventory_router, prefix=f"/api/{v}/inventory", tags=["Inventory"])
    app.include_router(sales_router, prefix=f"/api/{v}/sales", tags=["Sales"])
    app.include_router(reports_router, prefix=f"/api/{v}/reports", tags=["Reports"])
    app.include_router(content_router, prefix=f"/api/{v}/content", tags=["Content"])
    app.include_router(enquiries_router, prefix=f"/api/{v}/enquiries", tags=["Enquiries"])

    app.include_router(public_products_router, prefix=f"/api/{v}/public", tags=["Public"])
    app.include_router(public_content_router, prefix=f"/api/{v}/public", tags=["Public"])
    app.include_router(public_enquiries_router, prefix=f"/api/{v}/public", tags=["Public"])

    # ── Health check ─────────────────────────────────────────
    @app.get("/health")
    async def health():
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.app_version,
            "database": app.state.db_manager.is_connected,
        }

    return app


# ── Create the app instance ──────────────────────────────────────
app = create_app()
