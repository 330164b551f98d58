"""HTTP transport for the backend REST API."""

import logging
from typing import Any, Dict, Optional

import httpx

from server.exceptions import (
    BackendUnavailableError,
    ConflictError,
    NotFoundError,
    QuotaExceededError,
    UnauthenticatedError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

QUOTA_ERROR_TYPES = frozenset({
    "storage_file_too_large",
    "storage_invalid_file_size",
    "project_storage_limit_exceeded",
})


class BackendTransport:
    """
    Async HTTP session bound to one project and one credential.

    The credential is either the project API key (admin) or a user session
    secret; it is fixed when the transport is created.
    """

    def __init__(
        self,
        endpoint: str,
        project: str,
        *,
        api_key: Optional[str] = None,
        session: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {
            "X-Appwrite-Project": project,
            "X-Appwrite-Response-Format": "1.5.0",
        }
        if api_key:
            headers["X-Appwrite-Key"] = api_key
        if session:
            headers["X-Appwrite-Session"] = session

        self._client = httpx.AsyncClient(
            base_url=endpoint.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Send one request and decode the JSON body.

        Returns:
            Decoded response body, or None for empty responses (204)

        Raises:
            One of the server.exceptions taxonomy errors on failure
        """
        try:
            response = await self._client.request(
                method,
                path,
                json=json,
                params=params,
                data=data,
                files=files,
                headers=headers,
            )
        except httpx.TransportError as e:
            logger.error(f"Backend unreachable: {method} {path} error={type(e).__name__}: {e}")
            raise BackendUnavailableError(f"Backend unreachable: {e}") from e

        logger.debug(f"Backend response: {method} {path} status={response.status_code}")

        if response.status_code >= 400:
            raise _error_from_response(response)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()


def _error_from_response(response: httpx.Response) -> Exception:
    try:
        body = response.json()
        message = body.get("message") or response.reason_phrase
        error_type = body.get("type", "")
    except ValueError:
        message = response.text or response.reason_phrase
        error_type = ""

    status_code = response.status_code

    if status_code in (413, 507) or error_type in QUOTA_ERROR_TYPES:
        return QuotaExceededError(message)
    if status_code == 400:
        return ValidationError(message)
    if status_code == 401:
        return UnauthenticatedError(message)
    if status_code == 403:
        return UnauthorizedError(message)
    if status_code == 404:
        return NotFoundError(message)
    if status_code == 409:
        return ConflictError(message)
    if status_code >= 500:
        return BackendUnavailableError(message)
    return ValidationError(message)
