"""Authentication service: email one-time codes, sessions and user lookup."""

from typing import Optional

from common.logging_config import get_logger
from common.types import User
from server import config
from server.backend import ID, AdminClient, Query, SessionClient
from server.exceptions import (
    NotFoundError,
    OtpDeliveryError,
    UnauthenticatedError,
    UnauthorizedError,
    UserNotFoundError,
)
from server.types import VerifiedSession

logger = get_logger(__name__)


class AuthService:
    def __init__(self, admin: AdminClient):
        self.admin = admin

    async def get_user_by_email(self, email: str) -> Optional[User]:
        result = await self.admin.databases.list_documents(
            config.APPWRITE_DATABASE,
            config.APPWRITE_USERS_COLLECTION,
            [Query.equal("email", [email])],
        )
        if result.get("total", 0) > 0:
            return User.from_document(result["documents"][0])
        return None

    async def send_email_otp(self, email: str) -> str:
        """
        Email a one-time code.

        Returns:
            Account id the code was issued for
        """
        token = await self.admin.account.create_email_token(ID.unique(), email)
        account_id = token.get("userId") if token else None
        if not account_id:
            raise OtpDeliveryError(f"Failed to send an OTP to {email}")
        logger.info(f"Sent email OTP [account_id={account_id}]")
        return account_id

    async def create_account(self, full_name: str, email: str) -> str:
        logger.info(f"Attempting to create account for {email}")
        existing_user = await self.get_user_by_email(email)
        account_id = await self.send_email_otp(email)

        if existing_user is not None:
            logger.info(f"User already exists for {email}, sent a sign-in code instead")
            return existing_user.account_id

        await self.admin.databases.create_document(
            config.APPWRITE_DATABASE,
            config.APPWRITE_USERS_COLLECTION,
            ID.unique(),
            {
                "fullName": full_name,
                "email": email,
                "avatar": config.DEFAULT_AVATAR_URL,
                "accountId": account_id,
            },
        )
        logger.info(f"Created user document [account_id={account_id}]")
        return account_id

    async def sign_in(self, email: str) -> str:
        existing_user = await self.get_user_by_email(email)
        if existing_user is None:
            logger.warning(f"Sign-in failed: no user for {email}")
            raise UserNotFoundError("User not found")

        await self.send_email_otp(email)
        logger.info(f"Sign-in code sent [account_id={existing_user.account_id}]")
        return existing_user.account_id

    async def verify_secret(self, account_id: str, password: str) -> VerifiedSession:
        session = await self.admin.account.create_session(account_id, password)
        logger.info(f"Verified OTP [account_id={account_id}]")
        return VerifiedSession(
            session_id=session["$id"],
            secret=session["secret"],
            account_id=session.get("userId", account_id),
        )

    async def get_current_user(self, session: SessionClient) -> User:
        """
        Resolve the user behind a session.

        Raises:
            UnauthenticatedError: If the session is expired or has no user document
        """
        try:
            account = await session.account.get()
            result = await session.databases.list_documents(
                config.APPWRITE_DATABASE,
                config.APPWRITE_USERS_COLLECTION,
                [Query.equal("accountId", [account["$id"]])],
            )
        except (UnauthorizedError, NotFoundError) as e:
            logger.warning(f"Session lookup failed: {e}")
            raise UnauthenticatedError("Session not found") from e

        if result.get("total", 0) <= 0:
            raise UnauthenticatedError("No user for this session")

        return User.from_document(result["documents"][0])

    async def sign_out(self, session: SessionClient) -> None:
        await session.account.delete_session("current")
        logger.info("User signed out")
