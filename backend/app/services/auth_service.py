"""Account and session service."""

import logging
from datetime import UTC, timedelta
from typing import Optional

from pymongo.errors import DuplicateKeyError

from app.config import get_settings
from app.database.mongodb import mongodb
from app.errors import AuthenticationError, EmailAlreadyRegisteredError
from app.models.user import SessionInDB, SessionResponse, UserInDB, UserResponse
from app.utils.helpers import generate_session_token, hash_password, utcnow, verify_password

logger = logging.getLogger(__name__)
settings = get_settings()


class AuthService:
    """Sign-up, sign-in and bearer session lookup."""

    @staticmethod
    async def sign_up(email: str, password: str) -> UserResponse:
        """Create an account. Password confirmation is checked by SignUpRequest."""
        email = email.lower()
        user = UserInDB(
            email=email,
            password_hash=hash_password(password, settings.password_hash_iterations),
        )
        try:
            await mongodb.insert_user(user)
        except DuplicateKeyError:
            raise EmailAlreadyRegisteredError(email)
        logger.info("Created user %s", user.id)
        return UserResponse(**user.model_dump())

    @staticmethod
    async def sign_in(email: str, password: str) -> SessionResponse:
        user = await mongodb.get_user_by_email(email.lower())
        if not user or not verify_password(password, user.password_hash):
            logger.warning("Failed sign-in for %s", email)
            raise AuthenticationError()

        now = utcnow()
        session = SessionInDB(
            token=generate_session_token(),
            user_id=user.id,
            created_at=now,
            expires_at=now + timedelta(hours=settings.session_ttl_hours),
        )
        await mongodb.insert_session(session)
        logger.info("User %s signed in", user.id)
        return SessionResponse(
            access_token=session.token,
            expires_at=session.expires_at,
            user=UserResponse(**user.model_dump()),
        )

    @staticmethod
    async def sign_out(token: str) -> None:
        await mongodb.delete_session(token)

    @staticmethod
    async def resolve_session(token: str) -> Optional[UserInDB]:
        """User owning a live session token, or None if unknown or expired."""
        session = await mongodb.get_session(token)
        if not session:
            return None

        expires_at = session.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        if expires_at <= utcnow():
            await mongodb.delete_session(token)
            return None

        return await mongodb.get_user(session.user_id)


# Global auth service instance
auth_service = AuthService()
