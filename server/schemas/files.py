"""Pydantic schemas for file operation endpoints."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, EmailStr, Field

from common.types import FileRecord, SpaceUsageReport
from server.services.usage_service import usage_percentage
from server.utils import construct_download_url


class FileResponse(BaseModel):
    """Response model for one file record."""
    file_id: str
    name: str
    type: str
    extension: str
    url: str
    download_url: str
    size: int
    owner_id: str
    owner_email: Optional[str] = None
    account_id: str
    bucket_file_id: str
    users: List[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: FileRecord) -> "FileResponse":
        return cls(
            file_id=record.file_id,
            name=record.name,
            type=record.type,
            extension=record.extension,
            url=record.url,
            download_url=construct_download_url(record.bucket_file_id),
            size=record.size,
            owner_id=record.owner_id,
            owner_email=record.owner_email,
            account_id=record.account_id,
            bucket_file_id=record.bucket_file_id,
            users=list(record.shared_with),
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class ListFilesResponse(BaseModel):
    """Response model for file listing."""
    documents: List[FileResponse]
    total: int


class RenameFileRequest(BaseModel):
    """Request model for renaming a file."""
    name: str = Field(..., min_length=1)


class ShareFileRequest(BaseModel):
    """Request model for replacing a file's sharing list."""
    emails: List[EmailStr]


class DeleteFileResponse(BaseModel):
    """Response model for file deletion."""
    status: str = "success"
    action: str


class SpaceBucketResponse(BaseModel):
    """Usage of one file type."""
    size: int
    latest_date: Optional[datetime] = None


class SpaceUsageResponse(BaseModel):
    """Response model for storage usage."""
    per_type: Dict[str, SpaceBucketResponse]
    used: int
    all: int
    percentage: float

    @classmethod
    def from_report(cls, report: SpaceUsageReport) -> "SpaceUsageResponse":
        return cls(
            per_type={
                file_type: SpaceBucketResponse(size=bucket.size, latest_date=bucket.latest_date)
                for file_type, bucket in report.per_type.items()
            },
            used=report.used,
            all=report.all,
            percentage=usage_percentage(report.used, report.all),
        )
