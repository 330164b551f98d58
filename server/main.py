"""Entry point for the SkyBox web service."""

import time
import uuid

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from common.logging_config import setup_logging
from server import config
from server.exceptions import (
    BackendUnavailableError,
    ConflictError,
    NotFoundError,
    OtpDeliveryError,
    QuotaExceededError,
    SkyBoxException,
    UnauthenticatedError,
    UnauthorizedError,
    UserNotFoundError,
    ValidationError,
)
from server.routes.auth_routes import router as auth_router
from server.routes.file_routes import router as file_router
from server.schemas.common import ErrorResponse

logger = setup_logging('server')

app = FastAPI(
    title="SkyBox",
    description="File storage service: upload, search, rename, share and delete files",
    version="1.0.0"
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and responses.
    """
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()

    logger.info(
        f"Request started: {request.method} {request.url.path} [request_id={request_id}]"
    )

    response = await call_next(request)

    duration = time.time() - start_time
    user_id = getattr(request.state, 'user_id', None)

    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.3f}s "
        f"[request_id={request_id}] [user_id={user_id or 'anonymous'}]"
    )

    response.headers["X-Request-ID"] = request_id

    return response


@app.on_event("startup")
async def startup_event():
    logger.info(
        f"SkyBox starting up [endpoint={config.APPWRITE_ENDPOINT}] "
        f"[project={config.APPWRITE_PROJECT or 'unset'}] [bucket={config.APPWRITE_BUCKET or 'unset'}]"
    )
    if not config.APPWRITE_SECRET_KEY:
        logger.warning("APPWRITE_SECRET_KEY is not set; admin calls will be rejected by the backend")


def _error_response(request: Request, exc: Exception, status_code: int, code: str) -> JSONResponse:
    request_id = getattr(request.state, 'request_id', 'unknown')
    message = f"{type(exc).__name__}: {exc} [request_id={request_id}] path={request.url.path}"
    if status_code >= 500:
        logger.error(message, exc_info=True)
    else:
        logger.warning(message)
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(detail=str(exc), code=code).model_dump()
    )


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return _error_response(request, exc, status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR")


@app.exception_handler(UserNotFoundError)
async def user_not_found_handler(request: Request, exc: UserNotFoundError):
    return _error_response(request, exc, status.HTTP_404_NOT_FOUND, "USER_NOT_FOUND")


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return _error_response(request, exc, status.HTTP_404_NOT_FOUND, "NOT_FOUND")


@app.exception_handler(UnauthenticatedError)
async def unauthenticated_handler(request: Request, exc: UnauthenticatedError):
    return _error_response(request, exc, status.HTTP_401_UNAUTHORIZED, "UNAUTHENTICATED")


@app.exception_handler(UnauthorizedError)
async def unauthorized_handler(request: Request, exc: UnauthorizedError):
    return _error_response(request, exc, status.HTTP_403_FORBIDDEN, "UNAUTHORIZED")


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError):
    return _error_response(request, exc, status.HTTP_409_CONFLICT, "CONFLICT")


@app.exception_handler(BackendUnavailableError)
async def backend_unavailable_handler(request: Request, exc: BackendUnavailableError):
    return _error_response(request, exc, status.HTTP_503_SERVICE_UNAVAILABLE, "BACKEND_UNAVAILABLE")


@app.exception_handler(QuotaExceededError)
async def quota_exceeded_handler(request: Request, exc: QuotaExceededError):
    return _error_response(request, exc, status.HTTP_507_INSUFFICIENT_STORAGE, "QUOTA_EXCEEDED")


@app.exception_handler(OtpDeliveryError)
async def otp_delivery_handler(request: Request, exc: OtpDeliveryError):
    return _error_response(request, exc, status.HTTP_502_BAD_GATEWAY, "OTP_DELIVERY_FAILED")


@app.exception_handler(SkyBoxException)
async def skybox_exception_handler(request: Request, exc: SkyBoxException):
    return _error_response(request, exc, status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR")


app.include_router(auth_router)
app.include_router(file_router)


@app.get("/")
async def root():
    """
    Root endpoint for health check.
    """
    return {"message": "SkyBox API", "status": "running"}


@app.get("/health")
async def health_check():
    """
    Health check endpoint for container healthchecks.
    """
    return {"status": "healthy", "service": "skybox"}


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "server.main:app",
        host=config.SKYBOX_HOST,
        port=config.SKYBOX_PORT,
    )


if __name__ == "__main__":
    main()
