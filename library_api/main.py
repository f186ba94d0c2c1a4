"""
Library API Application

create_app() assembles the service:

- routers for the catalogue, readers, lending, book requests, trending,
  access control and site content, all under /api/<version>
- slowapi rate limiting and CORS middleware
- exception handlers that answer every failure with the response
  envelope {route, timestamp, success, data, message, status}

Run with: uvicorn library_api.main:app --port 8001
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from library_api.config import get_settings
from library_api.exceptions import ApiError
from library_api.responses import (
    allowed_methods,
    envelope_response,
    error_response,
    index_route_methods,
)
from library_api.routers import (
    auth_router,
    book_requests_router,
    books_router,
    faqs_router,
    lending_router,
    permissions_router,
    pronouns_router,
    publications_router,
    roles_router,
    site_router,
    status_router,
    subjects_router,
    translators_router,
    trending_router,
    users_router,
    writers_router,
)
from library_api.services.rate_limiter import limiter, rate_limit_exceeded_handler
from library_api.services.results import ServiceResult
from library_api.validation import format_validation_errors

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown logging. The schema is managed by Alembic."""
    logger.info(
        f"Starting {settings.app_name} {settings.api_version} "
        f"({settings.environment}, debug={settings.debug})"
    )
    yield
    logger.info(f"{settings.app_name} stopped")


# =============================================================================
# Exception Handlers
# =============================================================================
async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """Validation, authentication and permission failures."""
    return error_response(request, exc.message, exc.status_code, exc.headers)


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """FastAPI's own parameter validation (e.g. a missing upload) as a 400."""
    message = format_validation_errors(exc.errors())
    return error_response(request, message, status.HTTP_400_BAD_REQUEST)


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Routing errors: unknown path (404), unsupported method (405)."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return error_response(request, f"Route {request.url.path} not found.", exc.status_code)

    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        methods = allowed_methods(request, (exc.headers or {}).get("Allow"))
        message = (
            f'Method "{request.method}" is not allowed for the requested route. '
            f"Allowed methods: {', '.join(methods)}."
        )
        return error_response(request, message, exc.status_code, {"Allow": ", ".join(methods)})

    return error_response(request, str(exc.detail), exc.status_code, exc.headers)


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Database errors that escaped a service. Details stay in the log."""
    logger.error(f"Database error: {exc}", exc_info=True)
    return error_response(
        request,
        "A database error occurred. Please try again later.",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all. Internal errors are only described in debug mode."""
    logger.error(f"Unhandled error: {exc}", exc_info=True)

    message = "An internal error occurred."
    if settings.debug:
        message = f"{message} {exc}"
    return error_response(request, message, status.HTTP_500_INTERNAL_SERVER_ERROR)


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """Build the application: middleware, exception handlers, routers."""
    app = FastAPI(
        title=settings.app_name,
        description="""
## Library API

A RESTful API for running a library.

### Features
- **Catalogue**: books, writers, translators, publications, subjects
- **Readers**: favourites, recently visited books, book requests
- **Circulation**: lending, returns and lending history
- **Insights**: desired and trending books
- **Administration**: permissions, roles and site content

### Responses
Every response uses the same envelope:
`{route, timestamp, success, data, message, status}`.

### Authentication
Bearer JWT from `POST /api/v1/auth/login`.
        """,
        version=settings.api_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    api_prefix = f"/api/{settings.api_version}"

    # Lending and book request routers must come before the books router
    # so that /books/history and /books/desired match before /books/{id}
    api_routers = (
        lending_router,
        book_requests_router,
        books_router,
        writers_router,
        translators_router,
        publications_router,
        subjects_router,
        pronouns_router,
        permissions_router,
        roles_router,
        faqs_router,
        auth_router,
        users_router,
        trending_router,
        site_router,
        status_router,
    )
    for router in api_routers:
        app.include_router(router, prefix=api_prefix)

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
        description="Welcome message and API information.",
    )
    async def root(request: Request) -> JSONResponse:
        """Root endpoint with API information."""
        return envelope_response(
            request,
            ServiceResult.ok(
                {
                    "name": settings.app_name,
                    "version": settings.api_version,
                    "docs": "/docs",
                    "statusRoute": f"{api_prefix}/status",
                },
                f"Welcome to {settings.app_name}",
            ),
        )

    # Methods per path, for the Allow header of 405 responses
    app.state.route_methods = [
        *index_route_methods(api_routers, api_prefix),
        *index_route_methods([app.router]),
    ]

    return app


app = create_app()
