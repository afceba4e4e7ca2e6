"""
Property listing API endpoints.
Public read endpoints plus admin-gated CRUD and image attach/detach.
"""

from fastapi import APIRouter, Depends, File, UploadFile, status
from typing import List

from app.config import Settings
from app.services.auth import AdminContext
from app.services.property import PropertyService
from app.schemas.property import (
    ImageDetachRequest,
    PropertyCreate,
    PropertyImagesResponse,
    PropertyResponse,
    PropertyUpdate,
    PropertyUpdateResponse
)
from app.schemas.contact import MessageResponse
from app.schemas.error import (
    get_admin_error_responses,
    get_error_responses,
    get_public_error_responses,
    get_upload_error_responses
)
from app.utils.dependencies import get_current_admin, get_property_service, get_settings_dep
from app.utils.file_utils import FileValidator


router = APIRouter(prefix="/properties", tags=["Properties"])
admin_router = APIRouter(prefix="/admin/properties", tags=["Properties (admin)"])


@router.get(
    "",
    response_model=List[PropertyResponse],
    summary="List properties",
    description="Get every property listing (no filtering or pagination)",
    responses=get_error_responses(500)
)
async def list_properties(
    property_service: PropertyService = Depends(get_property_service)
):
    return await property_service.list_properties()


@router.get(
    "/{property_id}",
    response_model=PropertyResponse,
    summary="Get property by ID",
    responses=get_public_error_responses()
)
async def get_property(
    property_id: str,
    property_service: PropertyService = Depends(get_property_service)
):
    """
    Get a single property.

    Raises:
        PropertyNotFoundError: If the property doesn't exist
    """
    return await property_service.get_property(property_id)


@admin_router.post(
    "",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new property",
    description="Create a new property listing. Requires admin privileges.",
    responses=get_admin_error_responses()
)
async def create_property(
    property_data: PropertyCreate,
    admin: AdminContext = Depends(get_current_admin),
    property_service: PropertyService = Depends(get_property_service)
):
    """
    Create a new property listing.

    Args:
        property_data: Property creation data
        admin: Admin context of the caller (recorded as created_by)
        property_service: Property service instance

    Returns:
        Created property row
    """
    return await property_service.create_property(property_data, admin.identity)


@admin_router.put(
    "/{property_id}",
    response_model=PropertyUpdateResponse,
    summary="Update property",
    description="Update the supplied fields of a property. Requires admin privileges.",
    responses=get_admin_error_responses()
)
async def update_property(
    property_id: str,
    property_data: PropertyUpdate,
    admin: AdminContext = Depends(get_current_admin),
    property_service: PropertyService = Depends(get_property_service)
):
    updated = await property_service.update_property(property_id, property_data)
    return {"message": "Property updated successfully", "property": updated}


@admin_router.delete(
    "/{property_id}",
    response_model=MessageResponse,
    summary="Delete property",
    responses=get_admin_error_responses()
)
async def delete_property(
    property_id: str,
    admin: AdminContext = Depends(get_current_admin),
    property_service: PropertyService = Depends(get_property_service)
):
    await property_service.delete_property(property_id)
    return {"message": "Property deleted successfully"}


@admin_router.post(
    "/{property_id}/upload-images",
    response_model=PropertyImagesResponse,
    summary="Upload property images",
    description="Upload up to 10 images (multipart field `files`) and append their URLs to the property.",
    responses=get_upload_error_responses()
)
async def upload_property_images(
    property_id: str,
    files: List[UploadFile] = File(..., description="Image files to upload"),
    admin: AdminContext = Depends(get_current_admin),
    property_service: PropertyService = Depends(get_property_service),
    settings: Settings = Depends(get_settings_dep)
):
    """
    Attach images to a property.

    Every file is checked against the count and size limits before the
    first one is uploaded.
    """
    uploads = await FileValidator.read_uploads(
        files,
        max_files=settings.max_files_per_upload,
        max_size=settings.max_file_size
    )
    images = await property_service.attach_images(property_id, uploads)
    return {"message": "Uploaded", "images": images}


@admin_router.delete(
    "/{property_id}/images",
    response_model=PropertyImagesResponse,
    summary="Remove property image",
    description="Remove one image URL from a property and delete the stored object.",
    responses=get_admin_error_responses()
)
async def delete_property_image(
    property_id: str,
    body: ImageDetachRequest,
    admin: AdminContext = Depends(get_current_admin),
    property_service: PropertyService = Depends(get_property_service)
):
    images = await property_service.detach_image(property_id, body.url)
    return {"message": "Removed", "images": images}
