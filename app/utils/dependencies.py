"""
FastAPI dependency injection utilities for clients, services and route protection.
Clients are built once in the application lifespan and read from app.state.
"""

from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from supabase import AsyncClient

from app.config import Settings, get_settings
from app.repositories import AdminUserRepository, PropertyRepository, ReviewRepository
from app.services.auth import (
    AdminAuthorizer,
    AdminContext,
    AdminFlagAuthorizer,
    AuthIdentity,
    AuthService,
    IdentityVerifier,
    SupabaseIdentityVerifier
)
from app.services.notifier import ContactNotifier
from app.services.property import PropertyService
from app.services.review import ReviewService
from app.services.storage import ObjectStorage
from app.utils.exceptions import UnauthenticatedError


# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


def get_settings_dep() -> Settings:
    return get_settings()


def get_supabase(request: Request) -> AsyncClient:
    """Service-role client used for table and storage access."""
    return request.app.state.supabase


def get_auth_client(request: Request) -> AsyncClient:
    """Client reserved for password sign-in."""
    return request.app.state.auth_client


def get_contact_notifier(request: Request) -> ContactNotifier:
    return request.app.state.contact_notifier


def get_property_repository(client: AsyncClient = Depends(get_supabase)) -> PropertyRepository:
    return PropertyRepository(client)


def get_review_repository(client: AsyncClient = Depends(get_supabase)) -> ReviewRepository:
    return ReviewRepository(client)


def get_admin_user_repository(client: AsyncClient = Depends(get_supabase)) -> AdminUserRepository:
    return AdminUserRepository(client)


def get_object_storage(
    client: AsyncClient = Depends(get_supabase),
    settings: Settings = Depends(get_settings_dep)
) -> ObjectStorage:
    return ObjectStorage(client, settings.supabase_url)


def get_identity_verifier(client: AsyncClient = Depends(get_supabase)) -> IdentityVerifier:
    return SupabaseIdentityVerifier(client)


def get_admin_authorizer(
    admin_repo: AdminUserRepository = Depends(get_admin_user_repository)
) -> AdminAuthorizer:
    return AdminFlagAuthorizer(admin_repo)


def get_property_service(
    property_repo: PropertyRepository = Depends(get_property_repository),
    storage: ObjectStorage = Depends(get_object_storage),
    settings: Settings = Depends(get_settings_dep)
) -> PropertyService:
    """
    Get property service instance.

    Args:
        property_repo: Property table access
        storage: Object storage adapter
        settings: Application settings (bucket name)

    Returns:
        PropertyService instance
    """
    return PropertyService(property_repo, storage, settings.property_bucket)


def get_review_service(
    review_repo: ReviewRepository = Depends(get_review_repository),
    storage: ObjectStorage = Depends(get_object_storage),
    settings: Settings = Depends(get_settings_dep)
) -> ReviewService:
    return ReviewService(review_repo, storage, settings.review_bucket)


def get_auth_service(
    auth_client: AsyncClient = Depends(get_auth_client),
    authorizer: AdminAuthorizer = Depends(get_admin_authorizer)
) -> AuthService:
    return AuthService(auth_client, authorizer)


async def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    verifier: IdentityVerifier = Depends(get_identity_verifier)
) -> AuthIdentity:
    """
    Verify the bearer token and return the caller's identity.

    Raises:
        UnauthenticatedError: If no token was presented
        InvalidTokenError: If the auth provider rejects the token
    """
    if not credentials or not credentials.credentials:
        raise UnauthenticatedError()

    identity = await verifier.verify(credentials.credentials)
    request.state.identity = identity
    return identity


async def get_current_admin(
    request: Request,
    identity: AuthIdentity = Depends(get_current_identity),
    authorizer: AdminAuthorizer = Depends(get_admin_authorizer)
) -> AdminContext:
    """
    Require a verified identity that holds the admin flag.

    Raises:
        ForbiddenError: If the identity is not an admin
    """
    admin = await authorizer.authorize(identity)
    request.state.admin = admin
    return admin
