"""Request-scoped backend clients and session resolution."""

from typing import AsyncIterator, Optional

from fastapi import Cookie, Depends, Header, Request

from common.constants import SESSION_COOKIE_NAME
from common.types import User
from server.backend import AdminClient, SessionClient, create_admin_client, create_session_client
from server.exceptions import UnauthenticatedError
from server.services.auth_service import AuthService


async def get_admin_client() -> AsyncIterator[AdminClient]:
    """
    FastAPI dependency yielding an API-key client for one request.
    """
    client = create_admin_client()
    try:
        yield client
    finally:
        await client.aclose()


def get_session_token(
    authorization: Optional[str] = Header(None),
    session_cookie: Optional[str] = Cookie(None, alias=SESSION_COOKIE_NAME),
) -> str:
    """
    FastAPI dependency extracting the session secret.

    Accepts "Authorization: Bearer <secret>" (CLI) or the session cookie
    (browser).

    Raises:
        UnauthenticatedError: If neither is present
    """
    if authorization:
        if not authorization.startswith("Bearer "):
            raise UnauthenticatedError("Invalid authorization header format")
        return authorization[len("Bearer "):]

    if session_cookie:
        return session_cookie

    raise UnauthenticatedError("Not signed in")


async def get_session_client(
    session_token: str = Depends(get_session_token),
) -> AsyncIterator[SessionClient]:
    """
    FastAPI dependency yielding a client bound to the caller's session.
    """
    client = create_session_client(session_token)
    try:
        yield client
    finally:
        await client.aclose()


async def get_current_user(
    request: Request,
    session: SessionClient = Depends(get_session_client),
    admin: AdminClient = Depends(get_admin_client),
) -> User:
    """
    FastAPI dependency resolving the signed-in user.

    Returns:
        User document of the session's account

    Raises:
        UnauthenticatedError: 401 if the session is invalid
    """
    user = await AuthService(admin).get_current_user(session)
    request.state.user_id = user.user_id
    return user
