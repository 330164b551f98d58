"""Backend REST resources: account, document database and blob storage."""

import logging
import uuid
from typing import Any, Dict, List, Optional, Sequence

from server.backend.query import Query
from server.backend.transport import BackendTransport

logger = logging.getLogger(__name__)

# Uploads above this size are sent as sequential Content-Range chunks.
UPLOAD_CHUNK_SIZE = 5 * 1024 * 1024


class ID:
    """Document and file id generator."""

    @staticmethod
    def unique() -> str:
        return uuid.uuid4().hex[:20]


class Account:
    """Email one-time-code sign-in and session inspection."""

    def __init__(self, transport: BackendTransport):
        self._transport = transport

    async def create_email_token(self, user_id: str, email: str) -> Dict[str, Any]:
        """
        Email a one-time code to the address.

        Returns:
            Token document; its userId is the account id the code belongs to
        """
        return await self._transport.request(
            "POST",
            "/account/tokens/email",
            json={"userId": user_id, "email": email},
        )

    async def create_session(self, user_id: str, secret: str) -> Dict[str, Any]:
        """Exchange an account id and one-time code for a session."""
        return await self._transport.request(
            "POST",
            "/account/sessions/token",
            json={"userId": user_id, "secret": secret},
        )

    async def get(self) -> Dict[str, Any]:
        return await self._transport.request("GET", "/account")

    async def delete_session(self, session_id: str = "current") -> None:
        await self._transport.request("DELETE", f"/account/sessions/{session_id}")


class Databases:
    """Document CRUD within one database."""

    def __init__(self, transport: BackendTransport):
        self._transport = transport

    @staticmethod
    def _documents_path(database_id: str, collection_id: str) -> str:
        return f"/databases/{database_id}/collections/{collection_id}/documents"

    async def create_document(
        self,
        database_id: str,
        collection_id: str,
        document_id: str,
        data: Dict[str, Any],
    ) -> Dict[str, Any]:
        return await self._transport.request(
            "POST",
            self._documents_path(database_id, collection_id),
            json={"documentId": document_id, "data": data},
        )

    async def get_document(
        self,
        database_id: str,
        collection_id: str,
        document_id: str,
    ) -> Dict[str, Any]:
        return await self._transport.request(
            "GET",
            f"{self._documents_path(database_id, collection_id)}/{document_id}",
        )

    async def update_document(
        self,
        database_id: str,
        collection_id: str,
        document_id: str,
        data: Dict[str, Any],
    ) -> Dict[str, Any]:
        return await self._transport.request(
            "PATCH",
            f"{self._documents_path(database_id, collection_id)}/{document_id}",
            json={"data": data},
        )

    async def delete_document(
        self,
        database_id: str,
        collection_id: str,
        document_id: str,
    ) -> None:
        await self._transport.request(
            "DELETE",
            f"{self._documents_path(database_id, collection_id)}/{document_id}",
        )

    async def list_documents(
        self,
        database_id: str,
        collection_id: str,
        queries: Optional[Sequence[Query]] = None,
    ) -> Dict[str, Any]:
        """
        List documents matching every predicate.

        Returns:
            {"total": int, "documents": [...]}
        """
        params = {}
        if queries:
            params["queries[]"] = [query.to_json() for query in queries]

        return await self._transport.request(
            "GET",
            self._documents_path(database_id, collection_id),
            params=params,
        )

    async def list_all_documents(
        self,
        database_id: str,
        collection_id: str,
        queries: Sequence[Query],
        page_size: int = 100,
    ) -> List[Dict[str, Any]]:
        """Page through every document matching the predicates."""
        documents: List[Dict[str, Any]] = []
        while True:
            page = await self.list_documents(
                database_id,
                collection_id,
                [*queries, Query.limit(page_size), Query.offset(len(documents))],
            )
            batch = page.get("documents", [])
            documents.extend(batch)
            if not batch or len(documents) >= page.get("total", 0):
                return documents


class Storage:
    """Blob storage within buckets."""

    def __init__(self, transport: BackendTransport):
        self._transport = transport

    async def create_file(
        self,
        bucket_id: str,
        file_id: str,
        file_name: str,
        data: bytes,
    ) -> Dict[str, Any]:
        """
        Store a blob.

        Returns:
            File descriptor with $id, name, sizeOriginal and mimeType
        """
        path = f"/storage/buckets/{bucket_id}/files"
        size = len(data)

        if size <= UPLOAD_CHUNK_SIZE:
            return await self._transport.request(
                "POST",
                path,
                data={"fileId": file_id},
                files={"file": (file_name, data)},
            )

        result: Dict[str, Any] = {}
        try:
            for start in range(0, size, UPLOAD_CHUNK_SIZE):
                end = min(start + UPLOAD_CHUNK_SIZE, size)
                headers = {"Content-Range": f"bytes {start}-{end - 1}/{size}"}
                if result.get("$id"):
                    headers["X-Appwrite-ID"] = result["$id"]

                result = await self._transport.request(
                    "POST",
                    path,
                    data={"fileId": file_id},
                    files={"file": (file_name, data[start:end])},
                    headers=headers,
                )
                logger.debug(f"Uploaded bytes {start}-{end - 1}/{size} of blob {file_id}")
        except BaseException as e:
            if result.get("$id"):
                logger.error(f"Chunked upload of blob {file_id} failed after {result['$id']} was created: {e}")
                await self._discard_partial_file(bucket_id, result["$id"])
            raise

        return result

    async def _discard_partial_file(self, bucket_id: str, file_id: str) -> None:
        try:
            await self.delete_file(bucket_id, file_id)
            logger.info(f"Deleted partially uploaded blob {file_id}")
        except Exception as e:
            logger.error(f"Failed to delete partially uploaded blob {file_id}: {e}", exc_info=True)

    async def delete_file(self, bucket_id: str, file_id: str) -> None:
        await self._transport.request("DELETE", f"/storage/buckets/{bucket_id}/files/{file_id}")
