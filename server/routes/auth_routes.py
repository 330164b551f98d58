"""Authentication API routes."""

from fastapi import APIRouter, Depends, Response, status

from common.constants import SESSION_COOKIE_NAME
from common.types import User
from server import config
from server.auth import get_admin_client, get_current_user, get_session_client
from server.backend import AdminClient, SessionClient
from server.schemas.auth import (
    AccountResponse,
    SignInRequest,
    SignUpRequest,
    UserResponse,
    VerifyRequest,
    VerifyResponse,
)
from server.schemas.common import StatusResponse
from server.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/sign-up", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(request: SignUpRequest, admin: AdminClient = Depends(get_admin_client)):
    """
    Create a user and email a one-time code.

    Parameters:
        - full_name: Display name
        - email: Email address the code is sent to

    Returns:
        - account_id: Account the code belongs to (pass it to /auth/verify)

    Raises:
        - 422: Invalid email
        - 503: Backend unavailable
    """
    account_id = await AuthService(admin).create_account(request.full_name, request.email)
    return AccountResponse(account_id=account_id)


@router.post("/sign-in", response_model=AccountResponse)
async def sign_in(request: SignInRequest, admin: AdminClient = Depends(get_admin_client)):
    """
    Email a one-time code to an existing user.

    Raises:
        - 404: No user with this email
    """
    account_id = await AuthService(admin).sign_in(request.email)
    return AccountResponse(account_id=account_id)


@router.post("/verify", response_model=VerifyResponse)
async def verify(
    request: VerifyRequest,
    response: Response,
    admin: AdminClient = Depends(get_admin_client),
):
    """
    Exchange a one-time code for a session.

    The session secret is set as an http-only cookie and also returned in
    the body for API clients.

    Raises:
        - 401: Invalid or expired code
    """
    session = await AuthService(admin).verify_secret(request.account_id, request.password)

    response.set_cookie(
        SESSION_COOKIE_NAME,
        session.secret,
        path="/",
        httponly=True,
        samesite="strict",
        secure=config.COOKIE_SECURE,
    )

    return VerifyResponse(session_id=session.session_id, session_token=session.secret)


@router.post("/sign-out", response_model=StatusResponse)
async def sign_out(
    response: Response,
    session: SessionClient = Depends(get_session_client),
    admin: AdminClient = Depends(get_admin_client),
):
    """
    Delete the current session and its cookie.
    """
    await AuthService(admin).sign_out(session)
    response.delete_cookie(SESSION_COOKIE_NAME, path="/")
    return StatusResponse()


@router.get("/me", response_model=UserResponse)
async def me(current_user: User = Depends(get_current_user)):
    """
    Return the signed-in user.

    Raises:
        - 401: Not signed in
    """
    return UserResponse(
        user_id=current_user.user_id,
        account_id=current_user.account_id,
        full_name=current_user.full_name,
        email=current_user.email,
        avatar_url=current_user.avatar_url,
    )
