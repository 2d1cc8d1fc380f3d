import os
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Ensure local imports resolve
sys.path.append(os.path.dirname(__file__))

# Core
from core import notices
from core.config import settings
from core.errors import InputValidationError, PortalError
from core.logging_config import logger

# Routers
from routers.auth import router as auth_router
from routers.owner import router as owner_router
from routers.tenant import router as tenant_router
from routers.health import router as health_router


# -------------------------------------------------
# Startup / shutdown
# -------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.PROJECT_NAME} ({settings.ENV})")
    yield
    logger.info(f"Stopping {settings.PROJECT_NAME}")


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors or any(e.get("type") == "missing" for e in errors):
        return "Please fill in all fields"
    first = errors[0]
    field = first.get("loc", ["body"])[-1]
    return f"Invalid {field}: {first.get('msg', 'invalid value')}"


# -------------------------------------------------
# Create the Application
# -------------------------------------------------
def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="PG Manager API - Supabase-backed owner and tenant dashboards",
        lifespan=lifespan,
    )

    # -------------------------------------------------
    # CORS
    # -------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------
    # Error handling
    # -------------------------------------------------
    def portal_error_response(request: Request, exc: PortalError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{exc.kind} at {request.url.path} - {exc.message}")
        else:
            logger.info(f"{exc.kind} at {request.url.path} - {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.message,
                "kind": str(exc.kind),
                "notice": notices.error(exc.message).model_dump(mode="json"),
            },
        )

    @app.exception_handler(PortalError)
    async def handle_portal_error(request: Request, exc: PortalError):
        return portal_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return portal_error_response(request, InputValidationError(_validation_message(exc)))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (401, 403, 500):
            logger.warning(
                f"HTTP {exc.status_code} at {request.url} - {exc.detail}"
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unhandled(request: Request, exc: Exception):
        logger.error("Unhandled error at %s", request.url, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "notice": notices.error("An error occurred. Please try again.").model_dump(mode="json"),
            },
        )

    # -------------------------------------------------
    # Register Routers
    # -------------------------------------------------
    app.include_router(auth_router)
    app.include_router(owner_router)
    app.include_router(tenant_router)
    app.include_router(health_router)

    # -------------------------------------------------
    # Root Redirect (frontend login page, or API docs)
    # -------------------------------------------------
    @app.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse(settings.FRONTEND_LOGIN_URL or "/docs")

    return app


# Create the global FastAPI instance
app = create_app()
