"""Hoaxify - social posting backend."""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from hoaxify.config import get_settings
from hoaxify.database import SessionLocal
from hoaxify.dependencies import get_authenticated_user, get_language
from hoaxify.exceptions import FileSizeException, HoaxifyException, ValidationException
from hoaxify.i18n import translate
from hoaxify.rate_limit import limiter
from hoaxify.routers import attachments_router, auth_router, hoaxes_router, users_router
from hoaxify.scheduler import build_cleanup_tasks
from hoaxify.schemas.common import ErrorResponse
from hoaxify.services.file import get_file_service
from hoaxify.static_files import CachedStaticFiles

settings = get_settings()

# Logging
logger = logging.getLogger("hoaxify")
logging.basicConfig(level=settings.LOG_LEVEL.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

for warning in settings.validate():
    logger.warning(warning)

VERSION = "0.1.0"

cleanup_tasks = build_cleanup_tasks(SessionLocal)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.SCHEDULER_ENABLED:
        for task in cleanup_tasks:
            task.start()
    logger.info("Hoaxify %s started", VERSION)
    yield
    for task in cleanup_tasks:
        await task.stop()


app = FastAPI(title="Hoaxify", version=VERSION, lifespan=lifespan)
app.state.limiter = limiter


# --- Security headers middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


# --- Request size limit middleware ---
class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    MAX_BODY_SIZE = settings.MAX_REQUEST_BODY_MB * 1024 * 1024  # slightly above max attachment
    ATTACHMENT_UPLOAD_PATH = "/api/1.0/hoaxes/attachments"

    async def dispatch(self, request: Request, call_next) -> Response:
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.MAX_BODY_SIZE:
            language = get_language(request)
            # an oversize upload is reported like any other attachment above the cap
            if request.url.path.rstrip("/") == self.ATTACHMENT_UPLOAD_PATH:
                return error_response(request, 400, translate(FileSizeException.default_message_key, language))
            return error_response(request, 413, translate("request_too_large", language))
        return await call_next(request)


# --- Audit logging middleware ---
class AuditLogMiddleware(BaseHTTPMiddleware):
    AUDITED_METHODS = ("POST", "PUT", "DELETE")

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.time()
        response = await call_next(request)
        duration_ms = (time.time() - start) * 1000

        if request.method in self.AUDITED_METHODS and request.url.path.startswith("/api/1.0/"):
            logger.info(
                "AUDIT %s %s -> %d (%.0fms) from %s",
                request.method,
                request.url.path,
                response.status_code,
                duration_ms,
                request.client.host if request.client else "unknown",
            )
        return response


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestSizeLimitMiddleware)
app.add_middleware(AuditLogMiddleware)

# Upload folders must exist before they are mounted
get_file_service().create_folders()
app.mount("/images", CachedStaticFiles(directory=settings.profile_folder), name="images")
app.mount("/attachments", CachedStaticFiles(directory=settings.attachment_folder), name="attachments")

# API routers; every API request resolves (and refreshes) its credentials
for api_router in (auth_router, users_router, attachments_router, hoaxes_router):
    app.include_router(api_router, dependencies=[Depends(get_authenticated_user)])


# --- Error responses ---
def error_response(
    request: Request, status_code: int, message: str, validation_errors: dict[str, str] | None = None
) -> JSONResponse:
    """Uniform error body: message, timestamp (epoch millis), path and optional validationErrors."""
    body = ErrorResponse(
        message=message,
        timestamp=int(time.time() * 1000),
        path=request.url.path,
        validationErrors=validation_errors,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@app.exception_handler(HoaxifyException)
async def hoaxify_exception_handler(request: Request, exc: HoaxifyException) -> JSONResponse:
    language = get_language(request)
    validation_errors = None
    if isinstance(exc, ValidationException):
        validation_errors = {field: translate(key, language) for field, key in exc.errors.items()}
    return error_response(request, exc.status_code, translate(exc.message_key, language), validation_errors)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies, missing upload fields and non-numeric ids."""
    language = get_language(request)
    validation_errors = {}
    for error in exc.errors():
        field = str(error["loc"][-1]) if error.get("loc") else "body"
        validation_errors.setdefault(field, translate("field_invalid", language))
    return error_response(request, 400, translate("validation_failure", language), validation_errors)


HTTP_STATUS_MESSAGES = {404: "not_found", 405: "method_not_allowed"}


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes, missing static files and method mismatches."""
    message_key = HTTP_STATUS_MESSAGES.get(exc.status_code)
    if message_key is None:
        message_key = "internal_error" if exc.status_code >= 500 else "request_failed"
    response = error_response(request, exc.status_code, translate(message_key, get_language(request)))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return error_response(request, 429, translate("rate_limit_exceeded", get_language(request)))


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error on %s %s", request.method, request.url.path)
    return error_response(request, 500, translate("internal_error", get_language(request)))


# --- Health check ---
@app.get("/api/health")
def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok", "app": "hoaxify", "version": VERSION}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
