"""Factories for backend clients scoped to admin or to a user session."""

from dataclasses import dataclass
from typing import Optional

import httpx

from server import config
from server.backend.services import Account, Databases, Storage
from server.backend.transport import BackendTransport


@dataclass(frozen=True)
class SessionClient:
    """
    Client acting as the signed-in user.

    Exposes no storage: blobs are only written and removed through the
    admin client.
    """
    account: Account
    databases: Databases
    transport: BackendTransport

    async def aclose(self) -> None:
        await self.transport.aclose()


@dataclass(frozen=True)
class AdminClient:
    """Client authenticated with the project API key."""
    account: Account
    databases: Databases
    storage: Storage
    transport: BackendTransport

    async def aclose(self) -> None:
        await self.transport.aclose()


def create_session_client(
    session_token: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> SessionClient:
    """
    Build a client bound to one user session.

    Args:
        session_token: Session secret issued at verification
        transport: Optional httpx transport (tests)
    """
    backend = BackendTransport(
        config.APPWRITE_ENDPOINT,
        config.APPWRITE_PROJECT,
        session=session_token,
        timeout=config.BACKEND_TIMEOUT_SECONDS,
        transport=transport,
    )
    return SessionClient(
        account=Account(backend),
        databases=Databases(backend),
        transport=backend,
    )


def create_admin_client(
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AdminClient:
    """
    Build a client authenticated with the configured API key.

    Args:
        transport: Optional httpx transport (tests)
    """
    backend = BackendTransport(
        config.APPWRITE_ENDPOINT,
        config.APPWRITE_PROJECT,
        api_key=config.APPWRITE_SECRET_KEY,
        timeout=config.BACKEND_TIMEOUT_SECONDS,
        transport=transport,
    )
    return AdminClient(
        account=Account(backend),
        databases=Databases(backend),
        storage=Storage(backend),
        transport=backend,
    )
