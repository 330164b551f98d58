"""File operation API routes."""

from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status

from common.constants import DEFAULT_SORT, FILE_TYPES
from common.types import User
from server import config
from server.auth import get_admin_client, get_current_user, get_session_client
from server.backend import AdminClient, SessionClient
from server.exceptions import ValidationError
from server.schemas.files import (
    DeleteFileResponse,
    FileResponse,
    ListFilesResponse,
    RenameFileRequest,
    ShareFileRequest,
    SpaceUsageResponse,
)
from server.services.file_service import FileService
from server.services.usage_service import UsageService
from server.utils import parse_types

router = APIRouter(prefix="/files", tags=["Files"])


@router.get("", response_model=ListFilesResponse)
async def list_files(
    types: Optional[str] = Query(None, description="Comma-separated file types"),
    query: str = Query("", description="Substring the file name must contain"),
    sort: str = Query(DEFAULT_SORT, description="Sort spec, e.g. $createdAt-desc or size-asc"),
    limit: Optional[int] = Query(None, ge=1),
    current_user: User = Depends(get_current_user),
    admin: AdminClient = Depends(get_admin_client),
):
    """
    List files owned by or shared with the current user.

    Parameters:
        - types: Comma-separated list of document, image, video, audio, other
        - query: Name substring
        - sort: "<attribute>-<asc|desc>"
        - limit: Maximum number of files

    Raises:
        - 400: Unknown file type
        - 401: Not signed in
    """
    type_list = parse_types(types)
    unknown = [t for t in type_list if t not in FILE_TYPES]
    if unknown:
        raise ValidationError(f"Unknown file types: {', '.join(unknown)}")

    result = await FileService(admin).list_files(current_user, type_list, query, sort, limit)

    return ListFilesResponse(
        documents=[FileResponse.from_record(record) for record in result.documents],
        total=result.total,
    )


@router.post("", response_model=FileResponse, status_code=status.HTTP_201_CREATED)
async def upload_file(
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    admin: AdminClient = Depends(get_admin_client),
):
    """
    Upload a file owned by the current user.

    Raises:
        - 401: Not signed in
        - 413: File too large
        - 503: Backend unavailable
        - 507: Storage quota exceeded
    """
    file_content = await file.read()

    if not file.filename:
        raise ValidationError("Uploaded file has no name")

    if len(file_content) > config.MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds the {config.MAX_UPLOAD_BYTES} byte upload limit",
        )

    record = await FileService(admin).upload_file(
        file_name=file.filename,
        file_data=file_content,
        owner_id=current_user.user_id,
        account_id=current_user.account_id,
    )

    return FileResponse.from_record(record)


@router.get("/usage", response_model=SpaceUsageResponse)
async def get_usage(
    current_user: User = Depends(get_current_user),
    session: SessionClient = Depends(get_session_client),
):
    """
    Storage used by the current user's own files, per type.
    """
    report = await UsageService(session).get_total_space_used(current_user)
    return SpaceUsageResponse.from_report(report)


@router.patch("/{file_id}/name", response_model=FileResponse)
async def rename_file(
    file_id: str,
    request: RenameFileRequest,
    current_user: User = Depends(get_current_user),
    admin: AdminClient = Depends(get_admin_client),
):
    """
    Rename a file. The type and extension are left as uploaded.

    Raises:
        - 404: File not found
    """
    record = await FileService(admin).rename_file(file_id, request.name)
    return FileResponse.from_record(record)


@router.put("/{file_id}/users", response_model=FileResponse)
async def share_file(
    file_id: str,
    request: ShareFileRequest,
    current_user: User = Depends(get_current_user),
    admin: AdminClient = Depends(get_admin_client),
):
    """
    Replace the list of emails the file is shared with.

    Raises:
        - 404: File not found
    """
    record = await FileService(admin).update_file_users(file_id, [str(email) for email in request.emails])
    return FileResponse.from_record(record)


@router.delete("/{file_id}", response_model=DeleteFileResponse)
async def delete_file(
    file_id: str,
    bucket_file_id: Optional[str] = Query(None, description="Blob id of the file"),
    current_user: User = Depends(get_current_user),
    admin: AdminClient = Depends(get_admin_client),
):
    """
    Delete a file the current user owns, or stop sharing it with them.

    Returns:
        - action: "deleted" for the owner, "unshared" for anyone else

    Raises:
        - 404: File not found
    """
    outcome = await FileService(admin).delete_file(file_id, bucket_file_id, current_user.email)
    return DeleteFileResponse(action=outcome.value)
