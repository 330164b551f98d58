"""Service layer for business logic."""

from server.services.auth_service import AuthService
from server.services.file_service import FileService
from server.services.usage_service import UsageService, aggregate_space_usage

__all__ = [
    "AuthService",
    "FileService",
    "UsageService",
    "aggregate_space_usage",
]
