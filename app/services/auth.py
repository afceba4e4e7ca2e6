"""
Authentication and authorization services.

Admin routes pass two checks in order:
1. IdentityVerifier - the bearer token is verified by the auth provider.
2. AdminAuthorizer - the verified identity is looked up in the admin-flag table.

Both are interfaces so that either check can be swapped or faked independently.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import logging

from supabase import AsyncClient, AuthError, AuthRetryableError

from app.repositories.admin_user import AdminUserRepository
from app.utils.exceptions import (
    ForbiddenError,
    InvalidCredentialsError,
    InvalidTokenError,
    RepositoryError,
    ServerError
)

logger = logging.getLogger(__name__)


@dataclass
class AuthIdentity:
    """Identity verified by the auth provider."""

    id: str
    email: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)


@dataclass
class AdminContext:
    """Admin privileges granted to a verified identity."""

    auth_user_id: str
    is_admin: bool
    identity: AuthIdentity

    def to_dict(self) -> Dict[str, Any]:
        return {"auth_user_id": self.auth_user_id, "is_admin": self.is_admin}


def _user_to_dict(user: Any) -> Dict[str, Any]:
    """Serialize a provider user object (a pydantic model) to plain JSON data."""
    if user is None:
        return {}
    if isinstance(user, dict):
        return user
    return user.model_dump(mode="json")


class IdentityVerifier(ABC):
    """Turns a bearer token into a verified identity."""

    @abstractmethod
    async def verify(self, token: str) -> AuthIdentity:
        """
        Raises:
            InvalidTokenError: If the token is rejected
            ServerError: If the provider cannot be reached
        """


class AdminAuthorizer(ABC):
    """Decides whether a verified identity holds admin privileges."""

    @abstractmethod
    async def authorize(self, identity: AuthIdentity) -> AdminContext:
        """
        Raises:
            ForbiddenError: If the identity is not an admin
            ServerError: If the lookup fails
        """


class SupabaseIdentityVerifier(IdentityVerifier):
    """Verifies access tokens against Supabase Auth on every call."""

    def __init__(self, client: AsyncClient):
        self.client = client

    async def verify(self, token: str) -> AuthIdentity:
        try:
            response = await self.client.auth.get_user(token)
        except AuthRetryableError as e:
            logger.error(f"Auth provider unavailable during token verification: {e}")
            raise ServerError("Server error", error=str(e)) from e
        except AuthError as e:
            logger.warning(f"Token rejected by auth provider: {e}")
            raise InvalidTokenError() from e
        except Exception as e:
            logger.error(f"Token verification failed: {e}")
            raise ServerError("Server error", error=str(e)) from e

        user = getattr(response, "user", None) if response is not None else None
        if user is None or not getattr(user, "id", None):
            logger.warning("Auth provider returned no user for token")
            raise InvalidTokenError()

        return AuthIdentity(id=str(user.id), email=getattr(user, "email", None), raw=_user_to_dict(user))


class AdminFlagAuthorizer(AdminAuthorizer):
    """Grants admin privileges from the admin_users flag table."""

    def __init__(self, admin_repo: AdminUserRepository):
        self.admin_repo = admin_repo

    async def authorize(self, identity: AuthIdentity) -> AdminContext:
        try:
            row = await self.admin_repo.get_by_auth_user_id(identity.id)
        except RepositoryError as e:
            raise ServerError("Server error", error=e.detail) from e

        if not row or not row.get("is_admin"):
            logger.warning(f"Admin privileges denied for identity {identity.id}")
            raise ForbiddenError("Admin privileges required")

        return AdminContext(auth_user_id=str(row["auth_user_id"]), is_admin=True, identity=identity)


class AuthService:
    """
    Admin sign-in through the auth provider.

    Tokens are only handed out to identities that pass the admin check.
    """

    def __init__(self, auth_client: AsyncClient, authorizer: AdminAuthorizer):
        """
        Args:
            auth_client: Supabase client reserved for password sign-in
            authorizer: Admin check applied to the signed-in identity
        """
        self.auth_client = auth_client
        self.authorizer = authorizer

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        """
        Sign in with email and password.

        Returns:
            Dict with access_token, refresh_token and user

        Raises:
            InvalidCredentialsError: If the provider rejects the credentials
            ForbiddenError: If the identity is not an admin
            ServerError: On unexpected provider or lookup failures
        """
        try:
            response = await self.auth_client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthRetryableError as e:
            logger.error(f"Auth provider unavailable during admin login for {email}: {e}")
            raise ServerError("Server error", error=str(e)) from e
        except AuthError as e:
            # Provider detail is not forwarded for credential failures
            logger.warning(f"Admin login rejected for {email}: {e}")
            raise InvalidCredentialsError() from e
        except Exception as e:
            logger.error(f"Error during admin login for {email}: {e}")
            raise ServerError("Server error", error=str(e)) from e

        user = getattr(response, "user", None)
        if user is None or not getattr(user, "id", None):
            raise ServerError("Unexpected auth response")

        identity = AuthIdentity(id=str(user.id), email=getattr(user, "email", None), raw=_user_to_dict(user))
        await self.authorizer.authorize(identity)

        session = getattr(response, "session", None)
        logger.info(f"Admin logged in: {email}")
        return {
            "access_token": getattr(session, "access_token", None),
            "refresh_token": getattr(session, "refresh_token", None),
            "user": identity.raw,
        }
