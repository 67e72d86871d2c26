"""
User Service

FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.config import get_settings
from src.database import init_db, close_db
from src.api.v1 import router as api_router
from src.api.middleware.request_id import REQUEST_ID_HEADER, RequestIdMiddleware
from src.kernel.identity.exceptions import AuthenticationFailed, IdentityError, ValidationFailed
from src.schemas.common import ErrorEnvelope, HealthResponse
from src.logging_config import configure_logging, get_logger

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan handler.

    Runs startup and shutdown tasks.
    """
    configure_logging(
        log_level=settings.log_level,
        environment=settings.environment,
        debug=settings.debug,
    )

    logger.info("Starting %s v%s", settings.project_name, settings.version)
    await init_db()
    logger.info("Database initialized")

    yield

    logger.info("Shutting down...")
    await close_db()
    logger.info("Database connections closed")


app = FastAPI(
    title=settings.project_name,
    description="""
    User registration and bearer-token login.

    - **POST /sign-up**: register a user with optional phones, returns a session token
    - **GET /login**: exchange a valid `Authorization: Bearer <token>` for a fresh token
    """,
    version=settings.version,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

app.add_middleware(RequestIdMiddleware)


def _envelope_response(request: Request, code: int, detail: str) -> JSONResponse:
    headers = {}
    req_id = getattr(request.state, "request_id", None)
    if req_id:
        headers[REQUEST_ID_HEADER] = req_id
    return JSONResponse(
        status_code=code,
        content=ErrorEnvelope.of(code, detail).model_dump(mode="json"),
        headers=headers,
    )


@app.exception_handler(IdentityError)
async def identity_exception_handler(request: Request, exc: IdentityError):
    """Map identity errors to their status and the error envelope."""
    if isinstance(exc, AuthenticationFailed):
        logger.info("Authentication failed", extra={"reason": type(exc).__name__})
    elif exc.status_code >= 500:
        logger.error("%s: %s", type(exc).__name__, exc.detail)

    detail = exc.detail if exc.expose_detail else exc.public_detail
    response = _envelope_response(request, exc.status_code, detail)
    if isinstance(exc, AuthenticationFailed):
        response.headers["WWW-Authenticate"] = "Bearer"
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report the first validation error as a 400 envelope."""
    errors = exc.errors()
    detail = ValidationFailed.public_detail
    if errors:
        first = errors[0]
        field = ".".join(str(loc) for loc in first["loc"] if loc != "body")
        cause = first.get("ctx", {}).get("error")
        message = str(cause) if cause else first["msg"]
        detail = f"{field}: {message}" if field else message
    return await identity_exception_handler(request, ValidationFailed(detail))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Unknown routes, wrong methods and the like still use the envelope."""
    return _envelope_response(request, exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception("Unhandled exception: %s", exc)
    return _envelope_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        IdentityError.public_detail,
    )


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Check application health."""
    return HealthResponse(status="ok", version=settings.version)


app.include_router(api_router, prefix=settings.api_prefix)


# Main entry point for development
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
