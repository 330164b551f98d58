"""File service for business logic."""

import logging
from typing import List, Optional, Sequence

from common.constants import DEFAULT_SORT
from common.file_types import get_file_type
from common.types import FileRecord, User
from server import config
from server.backend import ID, AdminClient
from server.queries import build_file_queries
from server.types import DeleteOutcome, FileList
from server.utils import construct_file_url

logger = logging.getLogger(__name__)


class FileService:
    """
    Upload, list, rename, share and delete files.

    Every multi-step operation runs its backend calls one after another;
    upload compensates a failed metadata write by removing the blob it
    just stored.
    """

    def __init__(self, admin: AdminClient):
        self.databases = admin.databases
        self.storage = admin.storage

    async def upload_file(
        self,
        file_name: str,
        file_data: bytes,
        owner_id: str,
        account_id: str,
    ) -> FileRecord:
        kind = get_file_type(file_name)

        bucket_file = await self.storage.create_file(
            config.APPWRITE_BUCKET,
            ID.unique(),
            file_name,
            file_data,
        )
        bucket_file_id = bucket_file["$id"]
        logger.info(f"Stored blob {bucket_file_id} for {file_name} [owner={owner_id}]")

        file_document = {
            "type": kind.type,
            "name": bucket_file.get("name", file_name),
            "url": construct_file_url(bucket_file_id),
            "extension": kind.extension,
            "size": bucket_file.get("sizeOriginal", len(file_data)),
            "owner": owner_id,
            "accountId": account_id,
            "users": [],
            "bucketFileId": bucket_file_id,
        }

        try:
            document = await self.databases.create_document(
                config.APPWRITE_DATABASE,
                config.APPWRITE_FILES_COLLECTION,
                ID.unique(),
                file_document,
            )
        except BaseException as e:
            logger.error(f"Failed to create file document for blob {bucket_file_id}: {e!r}")
            await self._remove_orphaned_blob(bucket_file_id)
            raise

        record = FileRecord.from_document(document)
        logger.info(f"Uploaded file {record.file_id} ({record.type}, {record.size} bytes)")
        return record

    async def _remove_orphaned_blob(self, bucket_file_id: str) -> None:
        try:
            await self.storage.delete_file(config.APPWRITE_BUCKET, bucket_file_id)
            logger.info(f"Deleted orphaned blob {bucket_file_id}")
        except Exception as e:
            logger.error(f"Failed to delete orphaned blob {bucket_file_id}: {e}", exc_info=True)

    async def list_files(
        self,
        current_user: User,
        types: Sequence[str] = (),
        search_text: str = "",
        sort: str = DEFAULT_SORT,
        limit: Optional[int] = None,
    ) -> FileList:
        queries = build_file_queries(current_user, types, search_text, sort, limit)

        result = await self.databases.list_documents(
            config.APPWRITE_DATABASE,
            config.APPWRITE_FILES_COLLECTION,
            queries,
        )
        documents = [FileRecord.from_document(doc) for doc in result.get("documents", [])]
        logger.debug(f"Listed {len(documents)} of {result.get('total', 0)} files for user {current_user.user_id}")
        return FileList(documents=documents, total=result.get("total", len(documents)))

    async def get_file(self, file_id: str) -> FileRecord:
        document = await self.databases.get_document(
            config.APPWRITE_DATABASE,
            config.APPWRITE_FILES_COLLECTION,
            file_id,
        )
        return FileRecord.from_document(document)

    async def rename_file(self, file_id: str, name: str) -> FileRecord:
        """Change the display name only; type and extension stay as uploaded."""
        document = await self.databases.update_document(
            config.APPWRITE_DATABASE,
            config.APPWRITE_FILES_COLLECTION,
            file_id,
            {"name": name},
        )
        logger.info(f"Renamed file {file_id}")
        return FileRecord.from_document(document)

    async def update_file_users(self, file_id: str, emails: List[str]) -> FileRecord:
        """Replace the sharing list with exactly the given emails."""
        document = await self.databases.update_document(
            config.APPWRITE_DATABASE,
            config.APPWRITE_FILES_COLLECTION,
            file_id,
            {"users": list(emails)},
        )
        logger.info(f"Shared file {file_id} with {len(emails)} users")
        return FileRecord.from_document(document)

    async def delete_file(
        self,
        file_id: str,
        bucket_file_id: Optional[str],
        requester_email: str,
    ) -> DeleteOutcome:
        """
        Delete a file for its owner, or drop the requester from its sharing list.

        Args:
            file_id: Metadata document id
            bucket_file_id: Blob id; the document's own bucketFileId is used when omitted
            requester_email: Email of the signed-in user

        Returns:
            DeleteOutcome.DELETED or DeleteOutcome.UNSHARED
        """
        record = await self.get_file(file_id)
        owner_email = await self._owner_email(record)

        if owner_email != requester_email:
            remaining = [email for email in record.shared_with if email != requester_email]
            await self.databases.update_document(
                config.APPWRITE_DATABASE,
                config.APPWRITE_FILES_COLLECTION,
                file_id,
                {"users": remaining},
            )
            logger.info(f"Removed requester from sharing list of file {file_id}")
            return DeleteOutcome.UNSHARED

        await self.databases.delete_document(
            config.APPWRITE_DATABASE,
            config.APPWRITE_FILES_COLLECTION,
            file_id,
        )
        logger.info(f"Deleted file document {file_id}")

        blob_id = bucket_file_id or record.bucket_file_id
        try:
            await self.storage.delete_file(config.APPWRITE_BUCKET, blob_id)
            logger.info(f"Deleted blob {blob_id}")
        except Exception as e:
            # No compensation: the document stays deleted and the blob is
            # left unreferenced.
            logger.error(f"Failed to delete blob {blob_id} of deleted file {file_id}: {e}")
            raise

        return DeleteOutcome.DELETED

    async def _owner_email(self, record: FileRecord) -> Optional[str]:
        if record.owner_email is not None:
            return record.owner_email

        owner = await self.databases.get_document(
            config.APPWRITE_DATABASE,
            config.APPWRITE_USERS_COLLECTION,
            record.owner_id,
        )
        return owner.get("email")
