"""Pydantic schemas for API requests and responses."""

from server.schemas.auth import (
    SignUpRequest,
    SignInRequest,
    AccountResponse,
    VerifyRequest,
    VerifyResponse,
    UserResponse,
)
from server.schemas.files import (
    FileResponse,
    ListFilesResponse,
    RenameFileRequest,
    ShareFileRequest,
    DeleteFileResponse,
    SpaceBucketResponse,
    SpaceUsageResponse,
)
from server.schemas.common import ErrorResponse, StatusResponse

__all__ = [
    "SignUpRequest",
    "SignInRequest",
    "AccountResponse",
    "VerifyRequest",
    "VerifyResponse",
    "UserResponse",
    "FileResponse",
    "ListFilesResponse",
    "RenameFileRequest",
    "ShareFileRequest",
    "DeleteFileResponse",
    "SpaceBucketResponse",
    "SpaceUsageResponse",
    "ErrorResponse",
    "StatusResponse",
]
